"""HTTP client for the GitHub REST API."""

from __future__ import annotations

import asyncio
import base64
from logging import getLogger
from typing import TYPE_CHECKING, TypeVar, Unpack
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from specwatch.adapters.http_resilience import ResilientClient
from specwatch.domain.errors import (
    AuthFailureError,
    NotFoundRemoteError,
    TransportFailureError,
)

from .schema import (
    ContentEntryPayload,
    ErrorPayload,
    GitRefPayload,
    PullRequestPayload,
    ReleasePayload,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from specwatch.adapters.http_resilience import RequestOptions
    from specwatch.config.github import GitHubConfig
    from specwatch.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

RAW_MEDIA_TYPE = "application/vnd.github.raw"
BINARY_MEDIA_TYPE = "application/octet-stream"


def _quote_path(path: str) -> str:
    return quote(path.strip("/"))


def _error_message(response: httpx.Response) -> str:
    try:
        return ErrorPayload.model_validate(response.json()).message
    except (ValueError, ValidationError):
        return response.reason_phrase or "unknown error"


def raise_for_status(response: httpx.Response, *, what: str) -> None:
    """Translate a non-2xx GitHub response into the tracker's failure taxonomy."""

    if response.is_success:
        return
    status = response.status_code
    message = f"{what}: HTTP {status}: {_error_message(response)}"
    if status in {401, 403}:
        raise AuthFailureError(message)
    if status == 404:
        raise NotFoundRemoteError(message)
    raise TransportFailureError(message, status_code=status)


def _decode_text(response: httpx.Response, *, what: str) -> str:
    try:
        return response.content.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise TransportFailureError(f"{what}: response is not UTF-8 text") from exc


def _json(response: httpx.Response, *, what: str) -> object:
    try:
        return response.json()
    except ValueError as exc:
        raise TransportFailureError(f"{what}: unexpected payload: {exc}") from exc


def _parse(model: type[M], payload: object, *, what: str) -> M:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise TransportFailureError(f"{what}: unexpected payload: {exc}") from exc


class GitHubClient:
    """Low-level client for the handful of GitHub endpoints specwatch needs.

    Public methods are synchronous; each one runs a short-lived async client
    under ``asyncio.run``. All failures surface as
    :class:`~specwatch.domain.errors.TrackerError` subclasses.
    """

    def __init__(
        self,
        *,
        config: GitHubConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    @property
    def config(self) -> GitHubConfig:
        return self._config

    # releases

    def get_latest_release(self, owner: str, repo: str) -> ReleasePayload:
        what = f"latest release of {owner}/{repo}"
        response = self._execute("GET", f"/repos/{owner}/{repo}/releases/latest", what=what)
        return _parse(ReleasePayload, _json(response, what=what), what=what)

    def get_release_by_tag(self, owner: str, repo: str, tag: str) -> ReleasePayload:
        what = f"release {tag} of {owner}/{repo}"
        response = self._execute(
            "GET",
            f"/repos/{owner}/{repo}/releases/tags/{quote(tag, safe='')}",
            what=what,
        )
        return _parse(ReleasePayload, _json(response, what=what), what=what)

    def download_asset(self, owner: str, repo: str, asset_id: int) -> str:
        what = f"release asset {asset_id} of {owner}/{repo}"
        response = self._execute(
            "GET",
            f"/repos/{owner}/{repo}/releases/assets/{asset_id}",
            what=what,
            headers={"Accept": BINARY_MEDIA_TYPE},
        )
        return _decode_text(response, what=what)

    # contents

    def get_file_text(self, owner: str, repo: str, ref: str, path: str) -> str:
        what = f"{owner}/{repo}@{ref}:{path}"
        response = self._execute(
            "GET",
            f"/repos/{owner}/{repo}/contents/{_quote_path(path)}",
            what=what,
            params={"ref": ref},
            headers={"Accept": RAW_MEDIA_TYPE},
        )
        return _decode_text(response, what=what)

    def list_directory(
        self, owner: str, repo: str, ref: str, path: str
    ) -> list[ContentEntryPayload]:
        what = f"directory {owner}/{repo}@{ref}:{path}"
        response = self._execute(
            "GET",
            f"/repos/{owner}/{repo}/contents/{_quote_path(path)}",
            what=what,
            params={"ref": ref},
        )
        payload = _json(response, what=what)
        if not isinstance(payload, list):
            raise TransportFailureError(f"{what}: path is not a directory")
        return [_parse(ContentEntryPayload, item, what=what) for item in payload]

    def get_file_sha(self, owner: str, repo: str, ref: str, path: str) -> str | None:
        what = f"{owner}/{repo}:{path}"
        try:
            response = self._execute(
                "GET",
                f"/repos/{owner}/{repo}/contents/{_quote_path(path)}",
                what=what,
                params={"ref": ref},
            )
        except NotFoundRemoteError:
            return None
        payload = _json(response, what=what)
        if not isinstance(payload, dict):
            return None
        return _parse(ContentEntryPayload, payload, what=what).sha

    def put_file(
        self,
        owner: str,
        repo: str,
        *,
        branch: str,
        path: str,
        content: str,
        message: str,
        sha: str | None = None,
    ) -> None:
        body: dict[str, object] = {
            "message": message,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
            "branch": branch,
        }
        if sha is not None:
            body["sha"] = sha
        self._execute(
            "PUT",
            f"/repos/{owner}/{repo}/contents/{_quote_path(path)}",
            what=f"write {owner}/{repo}@{branch}:{path}",
            json=body,
        )

    # git refs, pulls, labels

    def get_branch_sha(self, owner: str, repo: str, branch: str) -> str:
        what = f"branch {branch} of {owner}/{repo}"
        response = self._execute(
            "GET",
            f"/repos/{owner}/{repo}/git/ref/heads/{_quote_path(branch)}",
            what=what,
        )
        return _parse(GitRefPayload, _json(response, what=what), what=what).target.sha

    def create_branch(self, owner: str, repo: str, branch: str, sha: str) -> None:
        self._execute(
            "POST",
            f"/repos/{owner}/{repo}/git/refs",
            what=f"create branch {branch} in {owner}/{repo}",
            json={"ref": f"refs/heads/{branch}", "sha": sha},
        )

    def create_pull_request(
        self,
        owner: str,
        repo: str,
        *,
        head: str,
        base: str,
        title: str,
        body: str,
    ) -> PullRequestPayload:
        what = f"open pull request {head} -> {base} in {owner}/{repo}"
        response = self._execute(
            "POST",
            f"/repos/{owner}/{repo}/pulls",
            what=what,
            json={"head": head, "base": base, "title": title, "body": body},
        )
        return _parse(PullRequestPayload, _json(response, what=what), what=what)

    def add_labels(self, owner: str, repo: str, number: int, labels: Sequence[str]) -> None:
        self._execute(
            "POST",
            f"/repos/{owner}/{repo}/issues/{number}/labels",
            what=f"label pull request #{number} in {owner}/{repo}",
            json={"labels": list(labels)},
        )

    def _execute(
        self,
        method: str,
        path: str,
        *,
        what: str,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        return asyncio.run(self._execute_async(method, path, what=what, **kwargs))

    async def _execute_async(
        self,
        method: str,
        path: str,
        *,
        what: str,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        async with self._client_factory(self._resilience) as client:
            try:
                response = await client.request(method, path, **kwargs)
            except httpx.HTTPError as exc:
                raise TransportFailureError(f"{what}: {exc}") from exc
        log.debug("%s %s -> %s", method, path, response.status_code)
        raise_for_status(response, what=what)
        return response
