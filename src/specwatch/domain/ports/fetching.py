"""Ports for reading specifications from remote sources."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from specwatch.domain.model import FetchedArtifact, ReleaseInfo


@runtime_checkable
class SpecSource(Protocol):
    """Remote host of tracked specifications.

    Every method either returns its value or raises a
    :class:`~specwatch.domain.errors.TrackerError` subclass.
    """

    def latest_release(self, owner: str, repo: str) -> ReleaseInfo: ...

    def fetch_release_asset(
        self, owner: str, repo: str, tag: str, asset_name: str
    ) -> FetchedArtifact: ...

    def fetch_file(self, owner: str, repo: str, ref: str, path: str) -> FetchedArtifact: ...

    def list_directory(self, owner: str, repo: str, branch: str, path: str) -> Sequence[str]: ...


__all__ = ["SpecSource"]
