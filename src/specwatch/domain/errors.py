"""Failure taxonomy shared by the reconciliation core and its adapters."""

from __future__ import annotations

from enum import StrEnum


class FailureKind(StrEnum):
    NOT_FOUND_REMOTE = "not-found-remote"
    AUTH_FAILURE = "auth-failure"
    TRANSPORT_FAILURE = "transport-failure"
    EXTRACTION_FAILURE = "extraction-failure"
    PATH_FORMAT_FAILURE = "path-format-failure"
    PERSIST_FAILURE = "persist-failure"
    PUBLISH_FAILURE = "publish-failure"


class TrackerError(RuntimeError):
    """Base class for classified, per-entry recoverable failures."""

    kind: FailureKind = FailureKind.TRANSPORT_FAILURE


class NotFoundRemoteError(TrackerError):
    """Raised when a release, file, asset or directory does not exist remotely."""

    kind = FailureKind.NOT_FOUND_REMOTE


class NoRolloutsFoundError(NotFoundRemoteError):
    """Raised when a rollout directory holds no numbered entries."""


class AuthFailureError(TrackerError):
    """Raised when the remote rejects our credentials (HTTP 401/403)."""

    kind = FailureKind.AUTH_FAILURE


class TransportFailureError(TrackerError):
    """Raised on network errors and unexpected HTTP statuses."""

    kind = FailureKind.TRANSPORT_FAILURE

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ExtractionFailureError(TrackerError):
    """Raised when an artifact lacks the embedded version its strategy requires."""

    kind = FailureKind.EXTRACTION_FAILURE


class PathFormatFailureError(TrackerError):
    """Raised when a rollout spec path does not contain ``/Rollouts/<n>/<file>``."""

    kind = FailureKind.PATH_FORMAT_FAILURE


class PersistFailureError(TrackerError):
    """Raised when an artifact, metadata file or the catalog cannot be written."""

    kind = FailureKind.PERSIST_FAILURE


class PublishFailureError(TrackerError):
    """Raised when a change request cannot be submitted."""

    kind = FailureKind.PUBLISH_FAILURE


__all__ = [
    "AuthFailureError",
    "ExtractionFailureError",
    "FailureKind",
    "NoRolloutsFoundError",
    "NotFoundRemoteError",
    "PathFormatFailureError",
    "PersistFailureError",
    "PublishFailureError",
    "TrackerError",
    "TransportFailureError",
]
