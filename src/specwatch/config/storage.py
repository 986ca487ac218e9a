"""Workspace and data storage configuration helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "specwatch"
DEFAULT_CATALOG_FILENAME: Final[str] = "catalog.json"
DEFAULT_SPECS_DIRNAME: Final[str] = "specs"
HTTP_CACHE_FILENAME: Final[str] = "http_cache.db"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Where the catalog and the published artifacts live.

    ``workspace_dir`` is the root of the checkout that receives the artifacts;
    catalog and specs paths are relative to it so they can be committed as-is.
    ``data_dir`` only holds local state such as the HTTP cache.
    """

    workspace_dir: Path
    data_dir: Path
    catalog_filename: str = DEFAULT_CATALOG_FILENAME
    specs_dirname: str = DEFAULT_SPECS_DIRNAME
    http_cache_filename: str = HTTP_CACHE_FILENAME

    def resolve_workspace_dir(self) -> Path:
        return self.workspace_dir.expanduser().resolve()

    def catalog_path(self) -> Path:
        return self.resolve_workspace_dir() / self.catalog_filename

    def specs_dir(self) -> Path:
        return self.resolve_workspace_dir() / self.specs_dirname

    def ensure_data_dir(self) -> Path:
        data_dir = self.data_dir.expanduser().resolve()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def http_cache_path(self, *, ensure: bool = True) -> Path:
        base = self.ensure_data_dir() if ensure else self.data_dir.expanduser().resolve()
        return base / self.http_cache_filename


def _default_data_dir() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        base_path = Path(base) if base else (Path.home() / "AppData" / "Local")
    else:
        base = os.getenv("XDG_DATA_HOME")
        base_path = Path(base) if base else (Path.home() / ".local" / "share")
    return (base_path / APP_DIR_NAME).expanduser().resolve()


def get_storage_config() -> StorageConfig:
    workspace = os.getenv("SPECWATCH_WORKSPACE")
    data_dir = os.getenv("SPECWATCH_DATA_DIR")
    return StorageConfig(
        workspace_dir=Path(workspace) if workspace else Path.cwd(),
        data_dir=Path(data_dir) if data_dir else _default_data_dir(),
        catalog_filename=os.getenv("SPECWATCH_CATALOG") or DEFAULT_CATALOG_FILENAME,
        specs_dirname=os.getenv("SPECWATCH_SPECS_DIR") or DEFAULT_SPECS_DIRNAME,
    )


def get_http_cache_path() -> Path:
    return get_storage_config().http_cache_path()
