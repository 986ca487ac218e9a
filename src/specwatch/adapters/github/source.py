"""GitHub-backed implementation of the specification source port."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import quote

from specwatch.domain.errors import NotFoundRemoteError
from specwatch.domain.model import FetchedArtifact, ReleaseInfo

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .client import GitHubClient

RAW_CONTENT_URL = "https://raw.githubusercontent.com"
RELEASE_DOWNLOAD_URL = "https://github.com"


def raw_file_url(owner: str, repo: str, ref: str, path: str) -> str:
    return f"{RAW_CONTENT_URL}/{owner}/{repo}/{quote(ref)}/{quote(path.strip('/'))}"


def release_asset_url(owner: str, repo: str, tag: str, asset_name: str) -> str:
    return (
        f"{RELEASE_DOWNLOAD_URL}/{owner}/{repo}/releases/download/"
        f"{quote(tag, safe='')}/{quote(asset_name, safe='')}"
    )


@dataclass(slots=True)
class GitHubSpecSource:
    """Reads releases, files and directory listings of public GitHub repositories."""

    client: GitHubClient

    def latest_release(self, owner: str, repo: str) -> ReleaseInfo:
        payload = self.client.get_latest_release(owner, repo)
        return ReleaseInfo(
            tag=payload.tag_name,
            is_draft=payload.draft,
            is_prerelease=payload.prerelease,
            asset_names=tuple(asset.name for asset in payload.assets),
        )

    def fetch_release_asset(
        self, owner: str, repo: str, tag: str, asset_name: str
    ) -> FetchedArtifact:
        release = self.client.get_release_by_tag(owner, repo, tag)
        asset = release.find_asset(asset_name)
        if asset is None:
            raise NotFoundRemoteError(f"Release {tag} of {owner}/{repo} has no asset {asset_name!r}")
        content = self.client.download_asset(owner, repo, asset.id)
        return FetchedArtifact(
            content=content,
            source_path=asset.name,
            download_url=asset.browser_download_url
            or release_asset_url(owner, repo, tag, asset.name),
        )

    def fetch_file(self, owner: str, repo: str, ref: str, path: str) -> FetchedArtifact:
        content = self.client.get_file_text(owner, repo, ref, path)
        return FetchedArtifact(
            content=content,
            source_path=path,
            download_url=raw_file_url(owner, repo, ref, path),
        )

    def list_directory(self, owner: str, repo: str, branch: str, path: str) -> Sequence[str]:
        return [entry.name for entry in self.client.list_directory(owner, repo, branch, path)]

