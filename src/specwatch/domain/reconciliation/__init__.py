"""Reconciliation core: decide whether a tracked specification changed remotely.

Flow per entry:
1) resolve the latest remote identifier (tag, embedded version, rollout number)
2) fetch the artifact and fingerprint its bytes
3) extract the embedded API version
4) classify the change as version, content or both
5) hand back the outcome plus the replacement catalog record
"""

from __future__ import annotations

from .contracts import Failed, NoChange, OutcomeStatus, ReconciliationOutcome, Update
from .engine import ReconciliationEngine
from .fingerprint import content_changed, fingerprint
from .rollouts import RolloutPath, latest_rollout, split_rollout_path
from .version_extractor import extract_version

__all__ = [
    "Failed",
    "NoChange",
    "OutcomeStatus",
    "ReconciliationEngine",
    "ReconciliationOutcome",
    "RolloutPath",
    "Update",
    "content_changed",
    "extract_version",
    "fingerprint",
    "latest_rollout",
    "split_rollout_path",
]
