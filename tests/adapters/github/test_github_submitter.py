from __future__ import annotations

import base64
import json
from collections.abc import Callable  # noqa: TC003
from typing import TYPE_CHECKING

import httpx
import pytest

from specwatch.adapters.github import GitHubChangeSubmitter, GitHubClient
from specwatch.domain.errors import PublishFailureError
from tests.helpers.github import Handler

if TYPE_CHECKING:
    from pathlib import Path

MakeClient = Callable[[Handler], GitHubClient]


class FakeGitHub:
    """Scripted responses for the branch, contents, pulls and labels endpoints."""

    def __init__(self, *, existing: set[str] | None = None, label_status: int = 200) -> None:
        self.existing = existing or set()
        self.label_status = label_status
        self.requests: list[tuple[str, str]] = []
        self.commits: dict[str, dict[str, object]] = {}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.requests.append((request.method, path))
        prefix = "/repos/acme/specs"
        if path == f"{prefix}/git/ref/heads/main":
            return httpx.Response(200, json={"ref": "refs/heads/main", "object": {"sha": "base"}})
        if path == f"{prefix}/git/refs":
            return httpx.Response(201, json={"ref": "refs/heads/new", "object": {"sha": "base"}})
        if path.startswith(f"{prefix}/contents/"):
            file_path = path.removeprefix(f"{prefix}/contents/")
            if request.method == "GET":
                if file_path in self.existing:
                    return httpx.Response(
                        200,
                        json={"name": file_path, "path": file_path, "type": "file", "sha": "old"},
                    )
                return httpx.Response(404, json={"message": "Not Found"})
            self.commits[file_path] = json.loads(request.content)
            return httpx.Response(201, json={})
        if path == f"{prefix}/pulls":
            return httpx.Response(
                201, json={"number": 3, "html_url": "https://github.com/acme/specs/pull/3"}
            )
        if path == f"{prefix}/issues/3/labels":
            return httpx.Response(self.label_status, json=[])
        return httpx.Response(404, json={"message": "Not Found"})


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    (tmp_path / "specs/acme/widgets/2.0.0").mkdir(parents=True)
    (tmp_path / "specs/acme/widgets/2.0.0/openapi.yaml").write_text("openapi: 3.0.0\n")
    (tmp_path / "catalog.json").write_text("[]\n")
    return tmp_path


def _submit(submitter: GitHubChangeSubmitter, paths: list[str]) -> str:
    return submitter.submit_change(
        branch_name="spec-updates/20240305-140709",
        base_branch="main",
        title="Update Acme Widgets to 2.0.0",
        body="body",
        paths=paths,
        labels=["api-spec-update"],
    )


def test_submit_commits_files_and_opens_pull_request(
    make_github_client: MakeClient, workspace: Path
) -> None:
    github = FakeGitHub(existing={"catalog.json"})
    submitter = GitHubChangeSubmitter(
        client=make_github_client(github), owner="acme", repo="specs", workspace_dir=workspace
    )

    url = _submit(submitter, ["specs/acme/widgets/2.0.0/openapi.yaml", "catalog.json"])

    assert url == "https://github.com/acme/specs/pull/3"
    spec_commit = github.commits["specs/acme/widgets/2.0.0/openapi.yaml"]
    assert spec_commit["message"] == "Add specs/acme/widgets/2.0.0/openapi.yaml"
    assert "sha" not in spec_commit
    assert base64.b64decode(str(spec_commit["content"])) == b"openapi: 3.0.0\n"
    catalog_commit = github.commits["catalog.json"]
    assert catalog_commit["message"] == "Update catalog.json"
    assert catalog_commit["sha"] == "old"
    assert ("POST", "/repos/acme/specs/issues/3/labels") in github.requests


def test_label_failure_does_not_fail_submission(
    make_github_client: MakeClient, workspace: Path
) -> None:
    github = FakeGitHub(label_status=422)
    submitter = GitHubChangeSubmitter(
        client=make_github_client(github), owner="acme", repo="specs", workspace_dir=workspace
    )

    assert _submit(submitter, ["catalog.json"]).endswith("/pull/3")


def test_missing_workspace_file_is_publish_failure(
    make_github_client: MakeClient, workspace: Path
) -> None:
    submitter = GitHubChangeSubmitter(
        client=make_github_client(FakeGitHub()), owner="acme", repo="specs", workspace_dir=workspace
    )

    with pytest.raises(PublishFailureError, match="workspace file"):
        _submit(submitter, ["specs/missing.yaml"])


def test_remote_error_is_publish_failure(make_github_client: MakeClient, workspace: Path) -> None:
    submitter = GitHubChangeSubmitter(
        client=make_github_client(lambda _request: httpx.Response(403, json={"message": "denied"})),
        owner="acme",
        repo="specs",
        workspace_dir=workspace,
    )

    with pytest.raises(PublishFailureError, match="denied"):
        _submit(submitter, ["catalog.json"])


def test_empty_paths_are_rejected(make_github_client: MakeClient, workspace: Path) -> None:
    submitter = GitHubChangeSubmitter(
        client=make_github_client(FakeGitHub()), owner="acme", repo="specs", workspace_dir=workspace
    )

    with pytest.raises(PublishFailureError, match="Nothing to submit"):
        _submit(submitter, [])
