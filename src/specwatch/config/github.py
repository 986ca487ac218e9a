"""GitHub configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError
from .http_resilience import (
    ANONYMOUS_RATE_LIMIT,
    AUTHENTICATED_RATE_LIMIT,
    CacheConfig,
    ResilienceConfig,
    RetryPolicy,
)
from .storage import get_http_cache_path

DEFAULT_GITHUB_API_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"
GITHUB_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class GitHubConfig:
    """Holds GitHub API access values for reading tracked repositories."""

    token: str | None
    api_url: str
    resilience: ResilienceConfig


@dataclass(frozen=True, slots=True)
class PublishConfig:
    """Target repository for change requests."""

    owner: str
    repo: str
    token: str
    base_branch: str = "main"


def _default_headers(token: str | None) -> dict[str, str]:
    headers = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": GITHUB_API_VERSION,
        "User-Agent": "specwatch",
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def get_github_config(
    *, token: str | None = None, resilience: ResilienceConfig | None = None
) -> GitHubConfig:
    """Build the API configuration; an explicit ``token`` wins over ``GITHUB_TOKEN``."""

    token = token or optional_env_var("GITHUB_TOKEN")
    api_url = optional_env_var("GITHUB_API_URL", DEFAULT_GITHUB_API_URL) or DEFAULT_GITHUB_API_URL
    ratelimit = AUTHENTICATED_RATE_LIMIT if token else ANONYMOUS_RATE_LIMIT
    return GitHubConfig(
        token=token,
        api_url=api_url,
        resilience=resilience
        or ResilienceConfig(
            name="github",
            base_url=api_url,
            timeout_seconds=GITHUB_TIMEOUT_SECONDS,
            ratelimit=ratelimit,
            retry=RetryPolicy(total=3),
            cache=CacheConfig(backend="sqlite", sqlite_path=str(get_http_cache_path())),
            default_headers=_default_headers(token),
        ),
    )


def get_publish_config() -> PublishConfig:
    values = require_env_vars(("GITHUB_REPOSITORY", "GITHUB_TOKEN"))
    owner, sep, repo = values["GITHUB_REPOSITORY"].partition("/")
    if not sep or not owner or not repo or "/" in repo:
        raise ConfigurationError(
            f"GITHUB_REPOSITORY must look like 'owner/repo', got {values['GITHUB_REPOSITORY']!r}"
        )
    return PublishConfig(
        owner=owner,
        repo=repo,
        token=values["GITHUB_TOKEN"],
        base_branch=optional_env_var("SPECWATCH_BASE_BRANCH", "main") or "main",
    )
