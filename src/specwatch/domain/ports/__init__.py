"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import SpecSource
from .persistence import ArtifactSink, CatalogStore
from .publishing import ChangeSubmitter

__all__ = [
    "ArtifactSink",
    "CatalogStore",
    "ChangeSubmitter",
    "SpecSource",
]
