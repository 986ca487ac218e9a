"""Open pull requests through the GitHub contents and pulls APIs."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from specwatch.domain.errors import PublishFailureError, TrackerError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from .client import GitHubClient

log = getLogger(__name__)


@dataclass(slots=True)
class GitHubChangeSubmitter:
    """Commit workspace files onto a fresh branch and open a pull request.

    Files are read from ``workspace_dir`` and committed one by one through the
    contents API, so no local git checkout or credentials helper is needed.
    """

    client: GitHubClient
    owner: str
    repo: str
    workspace_dir: Path

    def submit_change(
        self,
        *,
        branch_name: str,
        base_branch: str,
        title: str,
        body: str,
        paths: Sequence[str],
        labels: Sequence[str] = (),
    ) -> str:
        if not paths:
            raise PublishFailureError("Nothing to submit: no files were written")

        try:
            base_sha = self.client.get_branch_sha(self.owner, self.repo, base_branch)
            self.client.create_branch(self.owner, self.repo, branch_name, base_sha)
            for path in dict.fromkeys(paths):
                self._commit_file(branch_name, path)
            pull_request = self.client.create_pull_request(
                self.owner,
                self.repo,
                head=branch_name,
                base=base_branch,
                title=title,
                body=body,
            )
        except TrackerError as exc:
            raise PublishFailureError(f"Could not open pull request: {exc}") from exc
        except OSError as exc:
            raise PublishFailureError(f"Could not read workspace file: {exc}") from exc

        if labels:
            try:
                self.client.add_labels(self.owner, self.repo, pull_request.number, labels)
            except TrackerError as exc:
                log.warning("Labels could not be applied to #%s: %s", pull_request.number, exc)

        return pull_request.html_url

    def _commit_file(self, branch: str, path: str) -> None:
        content = (self.workspace_dir / path).read_text(encoding="utf-8")
        sha = self.client.get_file_sha(self.owner, self.repo, branch, path)
        self.client.put_file(
            self.owner,
            self.repo,
            branch=branch,
            path=path,
            content=content,
            message=f"{'Update' if sha else 'Add'} {path}",
            sha=sha,
        )
        log.debug("Committed %s to %s", path, branch)
