"""Domain model for tracked API specifications."""

from __future__ import annotations

from .artifacts import FetchedArtifact, ReleaseInfo
from .catalog import TrackedEntry
from .enums import UpdateType, VersioningStrategy

__all__ = [
    "FetchedArtifact",
    "ReleaseInfo",
    "TrackedEntry",
    "UpdateType",
    "VersioningStrategy",
]
