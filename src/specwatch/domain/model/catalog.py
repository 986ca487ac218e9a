"""Catalog records describing tracked API specifications."""

from __future__ import annotations

from dataclasses import dataclass, field

from .enums import VersioningStrategy


@dataclass(frozen=True, slots=True, kw_only=True)
class TrackedEntry:
    """One monitored API specification and its last observed state.

    ``last_version`` holds a release tag, an embedded API version or a rollout
    number depending on ``versioning_strategy``. ``last_content_hash`` is only
    ``None`` before the first successful reconciliation.
    """

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
    tags: tuple[str, ...] = field(default_factory=tuple)

    @property
    def key(self) -> str:
        return f"{self.vendor}/{self.api}"

    @property
    def display_name(self) -> str:
        return self.name or self.key

    @property
    def source_repository(self) -> str:
        return f"{self.owner}/{self.repo}"
