"""Defaults for tracking runs."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_SPEC_BRANCH = "main"
DEFAULT_BRANCH_PREFIX = "spec-updates"
DEFAULT_LABELS = ("api-spec-update", "automated")


@dataclass(frozen=True, slots=True)
class TrackingConfig:
    default_branch: str = DEFAULT_SPEC_BRANCH
    branch_prefix: str = DEFAULT_BRANCH_PREFIX
    labels: tuple[str, ...] = field(default_factory=lambda: DEFAULT_LABELS)


def get_tracking_config() -> TrackingConfig:
    return TrackingConfig()
