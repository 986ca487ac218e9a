"""Ephemeral values produced while talking to a remote source."""

from __future__ import annotations

from dataclasses import dataclass, field
from posixpath import basename


@dataclass(frozen=True, slots=True)
class FetchedArtifact:
    """Raw text of a remote artifact plus where it was resolved from."""

    content: str
    source_path: str
    download_url: str

    @property
    def filename(self) -> str:
        return basename(self.source_path.rstrip("/")) or "openapi"


@dataclass(frozen=True, slots=True)
class ReleaseInfo:
    tag: str
    is_draft: bool = False
    is_prerelease: bool = False
    asset_names: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_published(self) -> bool:
        return not (self.is_draft or self.is_prerelease)
