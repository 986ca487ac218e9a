"""Ports for persisting the catalog and published artifacts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from specwatch.domain.model import TrackedEntry


@runtime_checkable
class CatalogStore(Protocol):
    """Load and save the full set of tracked entries."""

    @property
    def location(self) -> str: ...  # workspace-relative path of the catalog

    def load(self) -> list[TrackedEntry]: ...

    def save(self, entries: Sequence[TrackedEntry]) -> None: ...


@runtime_checkable
class ArtifactSink(Protocol):
    """Write artifacts below a versioned directory tree.

    Both methods return the workspace-relative path that was written and raise
    :class:`~specwatch.domain.errors.PersistFailureError` on failure.
    """

    def write_artifact(self, path: str, content: str) -> str: ...

    def write_metadata(self, directory: str, metadata: Mapping[str, object]) -> str: ...


__all__ = ["ArtifactSink", "CatalogStore"]
