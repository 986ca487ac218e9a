"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .github import GitHubConfig, PublishConfig, get_github_config, get_publish_config
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .storage import StorageConfig, get_storage_config
from .tracking import TrackingConfig, get_tracking_config

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "GitHubConfig",
    "MissingConfigurationError",
    "PublishConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "TrackingConfig",
    "configure_logging",
    "get_github_config",
    "get_publish_config",
    "get_storage_config",
    "get_tracking_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
