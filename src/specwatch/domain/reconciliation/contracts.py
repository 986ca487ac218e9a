"""Outcomes produced by reconciling one tracked entry."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Literal, TypeAlias

if TYPE_CHECKING:
    from specwatch.domain.errors import FailureKind
    from specwatch.domain.model import FetchedArtifact, TrackedEntry, UpdateType


class OutcomeStatus(StrEnum):
    NO_CHANGE = "no-change"
    UPDATE = "update"
    FAILED = "failed"


@dataclass(frozen=True, slots=True, kw_only=True)
class NoChange:
    """Remote identifier and content both match the recorded state."""

    entry: TrackedEntry
    reason: str | None = None
    status: Literal[OutcomeStatus.NO_CHANGE] = OutcomeStatus.NO_CHANGE


@dataclass(frozen=True, slots=True, kw_only=True)
class Update:
    """A new revision to publish.

    ``updated_entry`` is the replacement catalog record. Callers swap it in
    only once the artifact has been written, so a failed write never leaves a
    catalog that claims a revision it does not hold.
    """

    entry: TrackedEntry
    updated_entry: TrackedEntry
    old_version: str
    new_version: str
    api_version: str
    download_url: str
    target_dir: str
    local_path: str
    content_changed: bool
    update_type: UpdateType
    content_hash: str
    artifact: FetchedArtifact
    status: Literal[OutcomeStatus.UPDATE] = OutcomeStatus.UPDATE


@dataclass(frozen=True, slots=True, kw_only=True)
class Failed:
    """Discovery, fetch or extraction failed; the entry is left as it was."""

    entry: TrackedEntry
    reason: str
    kind: FailureKind
    status: Literal[OutcomeStatus.FAILED] = OutcomeStatus.FAILED


ReconciliationOutcome: TypeAlias = NoChange | Update | Failed


__all__ = ["Failed", "NoChange", "OutcomeStatus", "ReconciliationOutcome", "Update"]
