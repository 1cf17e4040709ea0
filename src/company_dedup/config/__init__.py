"""Application configuration helpers."""

from __future__ import annotations

from .dedup import DedupConfig, get_dedup_config
from .env import require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .hubspot import HubSpotConfig, get_hubspot_config

__all__ = [
    "ConfigurationError",
    "DedupConfig",
    "HubSpotConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "get_dedup_config",
    "get_hubspot_config",
    "require_env_var",
    "require_env_vars",
]
