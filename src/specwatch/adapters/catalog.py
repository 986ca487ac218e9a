"""JSON file catalog of tracked entries."""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from specwatch.domain.errors import PersistFailureError
from specwatch.domain.model import TrackedEntry, VersioningStrategy

if TYPE_CHECKING:
    from collections.abc import Sequence

log = getLogger(__name__)


class CatalogFormatError(ValueError):
    """Raised when the catalog file cannot be read or does not validate."""


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class CatalogEntryPayload(BaseModel):
    """On-disk shape of one catalog entry (camelCase keys)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, alias_generator=to_camel)

    vendor: str
    api: str
    owner: str
    repo: str
    spec_path: str
    versioning_strategy: VersioningStrategy
    name: str = ""
    last_version: str = ""
    release_asset_name: str = ""
    branch: str | None = None
    last_content_hash: str | None = None
    base_url: str | None = None
    docs_url: str | None = None
    description: str | None = None
    tags: list[str] = Field(default_factory=list)

    _normalize_optional = field_validator("branch", "last_content_hash", mode="before")(
        _blank_to_none
    )

    def to_domain(self) -> TrackedEntry:
        return TrackedEntry(
            vendor=self.vendor,
            api=self.api,
            owner=self.owner,
            repo=self.repo,
            spec_path=self.spec_path,
            versioning_strategy=self.versioning_strategy,
            name=self.name,
            last_version=self.last_version,
            release_asset_name=self.release_asset_name,
            branch=self.branch,
            last_content_hash=self.last_content_hash,
            base_url=self.base_url,
            docs_url=self.docs_url,
            description=self.description,
            tags=tuple(self.tags),
        )

    @classmethod
    def from_domain(cls, entry: TrackedEntry) -> CatalogEntryPayload:
        return cls(
            vendor=entry.vendor,
            api=entry.api,
            owner=entry.owner,
            repo=entry.repo,
            spec_path=entry.spec_path,
            versioning_strategy=entry.versioning_strategy,
            name=entry.name,
            last_version=entry.last_version,
            release_asset_name=entry.release_asset_name,
            branch=entry.branch,
            last_content_hash=entry.last_content_hash,
            base_url=entry.base_url,
            docs_url=entry.docs_url,
            description=entry.description,
            tags=list(entry.tags),
        )


_CATALOG_ADAPTER = TypeAdapter(list[CatalogEntryPayload])


@dataclass(slots=True)
class JsonCatalogStore:
    """Catalog stored as a JSON array inside the workspace."""

    path: Path
    workspace_dir: Path | None = None

    @property
    def location(self) -> str:
        if self.workspace_dir is not None:
            try:
                return self.path.resolve().relative_to(self.workspace_dir.resolve()).as_posix()
            except ValueError:
                pass
        return self.path.name

    def load(self) -> list[TrackedEntry]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise CatalogFormatError(f"Cannot read catalog {self.path}: {exc}") from exc
        try:
            payloads = _CATALOG_ADAPTER.validate_json(raw)
        except ValidationError as exc:
            raise CatalogFormatError(f"Invalid catalog {self.path}: {exc}") from exc
        entries = [payload.to_domain() for payload in payloads]
        log.debug("Loaded %s catalog entries from %s", len(entries), self.path)
        return entries

    def save(self, entries: Sequence[TrackedEntry]) -> None:
        document = [
            CatalogEntryPayload.from_domain(entry).model_dump(mode="json", by_alias=True)
            for entry in entries
        ]
        text = json.dumps(document, indent=2, ensure_ascii=False) + "\n"
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                handle.write(text)
                temp_path = Path(handle.name)
            os.replace(temp_path, self.path)
        except OSError as exc:
            raise PersistFailureError(f"Cannot save catalog {self.path}: {exc}") from exc
        log.info("Saved %s catalog entries to %s", len(entries), self.path)
