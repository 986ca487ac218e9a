"""Shared fixtures for GitHub adapter tests."""

from __future__ import annotations

from collections.abc import Callable  # noqa: TC003

import pytest

from specwatch.adapters.github import GitHubClient
from specwatch.config.github import GitHubConfig
from specwatch.config.http_resilience import ResilienceConfig, RetryPolicy
from tests.helpers.github import API_URL, Handler, make_client_factory


@pytest.fixture
def github_config() -> GitHubConfig:
    return GitHubConfig(
        token="test-token",
        api_url=API_URL,
        resilience=ResilienceConfig(
            name="github",
            base_url=API_URL,
            retry=RetryPolicy(total=0),
            cache=None,
        ),
    )


@pytest.fixture
def make_github_client(github_config: GitHubConfig) -> Callable[[Handler], GitHubClient]:
    def build(handler: Handler) -> GitHubClient:
        return GitHubClient(config=github_config, client_factory=make_client_factory(handler))

    return build
