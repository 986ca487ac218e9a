"""Transport settings for talking to the GitHub REST API.

The values here are plain data; :mod:`specwatch.adapters.http_resilience`
turns them into an httpx client with retries, a client-side rate limit and an
HTTP cache.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

import httpx

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """When a failed GitHub request is sent again.

    ``POST`` is not retried: creating a branch or a pull request twice fails
    with 422 on the second attempt. Contents ``PUT`` carries the blob sha and
    is safe to repeat.
    """

    total: int = 3
    backoff_factor: float = 0.5
    max_backoff_wait: float = 60.0
    respect_retry_after_header: bool = True
    allowed_methods: frozenset[str] = field(
        default_factory=lambda: frozenset({"GET", "HEAD", "PUT"})
    )
    # 403 is left out; GitHub uses it for both rate limits and missing scopes
    status_forcelist: frozenset[int] = field(
        default_factory=lambda: frozenset({429, 500, 502, 503, 504})
    )
    retry_on_exceptions: tuple[type[httpx.HTTPError], ...] = (
        httpx.TimeoutException,
        httpx.NetworkError,
        httpx.RemoteProtocolError,
    )
    backoff_jitter: float = 1.0


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float


AUTHENTICATED_RATE_LIMIT = RateLimit(max_calls=10, per_seconds=1.0)
# anonymous callers get 60 requests per hour
ANONYMOUS_RATE_LIMIT = RateLimit(max_calls=1, per_seconds=1.0)


@dataclass(slots=True, frozen=True)
class CacheConfig:
    """hishel storage for conditional GitHub requests."""

    backend: Literal["sqlite", "memory"] = "sqlite"
    sqlite_path: str | None = None
    default_ttl_seconds: float | None = None
    refresh_ttl_on_access: bool = True


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    name: str
    base_url: str | None = None
    timeout_seconds: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    cache: CacheConfig | None = field(default_factory=CacheConfig)
    default_headers: Mapping[str, str] | None = None
    # release asset downloads redirect to a storage host
    follow_redirects: bool = True
