"""Pydantic models describing the GitHub REST API payloads we consume."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class GitHubBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ReleaseAssetPayload(GitHubBaseModel):
    id: int
    name: str
    url: str
    browser_download_url: str


class ReleasePayload(GitHubBaseModel):
    tag_name: str
    draft: bool = False
    prerelease: bool = False
    assets: list[ReleaseAssetPayload] = Field(default_factory=list)

    def find_asset(self, name: str) -> ReleaseAssetPayload | None:
        return next((asset for asset in self.assets if asset.name == name), None)


class ContentEntryPayload(GitHubBaseModel):
    name: str
    path: str
    type: Literal["file", "dir", "symlink", "submodule"]
    sha: str | None = None


class GitObjectPayload(GitHubBaseModel):
    sha: str
    type: str | None = None


class GitRefPayload(GitHubBaseModel):
    ref: str
    target: GitObjectPayload = Field(alias="object")


class PullRequestPayload(GitHubBaseModel):
    number: int
    html_url: str


class ErrorPayload(GitHubBaseModel):
    message: str
    documentation_url: str | None = None
