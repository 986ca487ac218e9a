from __future__ import annotations

import os
from pathlib import Path  # noqa: TC003

import pytest

from specwatch.config import storage


def test_storage_config_reads_workspace_overrides(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("SPECWATCH_WORKSPACE", str(tmp_path / "checkout"))
    monkeypatch.setenv("SPECWATCH_CATALOG", "apis.json")
    monkeypatch.setenv("SPECWATCH_SPECS_DIR", "openapi")

    config = storage.get_storage_config()

    assert config.catalog_path() == (tmp_path / "checkout" / "apis.json").resolve()
    assert config.specs_dir() == (tmp_path / "checkout" / "openapi").resolve()


def test_storage_config_defaults_to_current_directory(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("SPECWATCH_WORKSPACE", raising=False)
    monkeypatch.delenv("SPECWATCH_CATALOG", raising=False)
    monkeypatch.delenv("SPECWATCH_SPECS_DIR", raising=False)
    monkeypatch.chdir(tmp_path)

    config = storage.get_storage_config()

    assert config.catalog_path() == tmp_path.resolve() / storage.DEFAULT_CATALOG_FILENAME
    assert config.specs_dirname == storage.DEFAULT_SPECS_DIRNAME


def test_http_cache_path_creates_data_dir(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("SPECWATCH_DATA_DIR", str(tmp_path / "data-dir"))

    path = storage.get_http_cache_path()

    assert path == (tmp_path / "data-dir" / storage.HTTP_CACHE_FILENAME).resolve()
    assert path.parent.exists()


@pytest.mark.skipif(os.name == "nt", reason="XDG layout only applies off Windows")
def test_default_data_dir_follows_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))

    assert storage._default_data_dir() == (tmp_path / "xdg" / "specwatch").resolve()  # noqa: SLF001  # type: ignore[reportPrivateUsage]
