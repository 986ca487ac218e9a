"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class VersioningStrategy(StrEnum):
    """How a tracked entry discovers new remote revisions."""

    RELEASE_TAG = "release-tag"
    FILE_BASED = "file-based"
    ROLLOUT_BASED = "rollout-based"


class UpdateType(StrEnum):
    """Which of {label, bytes} changed since the last run."""

    VERSION = "version"
    CONTENT = "content"
    BOTH = "both"

    @classmethod
    def classify(cls, *, version_changed: bool, content_changed: bool) -> UpdateType | None:
        if version_changed and content_changed:
            return cls.BOTH
        if version_changed:
            return cls.VERSION
        if content_changed:
            return cls.CONTENT
        return None
