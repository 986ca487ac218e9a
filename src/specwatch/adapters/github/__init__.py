"""Public interface for the GitHub adapter."""

from __future__ import annotations

from .client import GitHubClient, raise_for_status
from .schema import ContentEntryPayload, PullRequestPayload, ReleasePayload
from .source import GitHubSpecSource, raw_file_url, release_asset_url
from .submitter import GitHubChangeSubmitter

__all__ = [
    "ContentEntryPayload",
    "GitHubChangeSubmitter",
    "GitHubClient",
    "GitHubSpecSource",
    "PullRequestPayload",
    "ReleasePayload",
    "raise_for_status",
    "raw_file_url",
    "release_asset_url",
]
