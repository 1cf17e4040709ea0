"""HubSpot configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

HUBSPOT_BASE_URL = "https://api.hubapi.com"
HUBSPOT_TIMEOUT_SECONDS = 10.0
HUBSPOT_ACCESS_TOKEN_VAR = "HUBSPOT_ACCESS_TOKEN"


def default_hubspot_resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="hubspot",
        base_url=HUBSPOT_BASE_URL,
        timeout_seconds=HUBSPOT_TIMEOUT_SECONDS,
        retry=RetryPolicy(total=3),
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        default_headers=(("Accept", "application/json"),),
    )


@dataclass(frozen=True)
class HubSpotConfig:
    """Holds the private-app token and transport settings for the HubSpot API."""

    access_token: str = field(repr=False)
    resilience: ResilienceConfig = field(default_factory=default_hubspot_resilience)


def get_hubspot_config(*, resilience: ResilienceConfig | None = None) -> HubSpotConfig:
    values = require_env_vars((HUBSPOT_ACCESS_TOKEN_VAR,))
    return HubSpotConfig(
        access_token=values[HUBSPOT_ACCESS_TOKEN_VAR].strip(),
        resilience=resilience or default_hubspot_resilience(),
    )
