"""Clouddriver (remote tag listing) configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_var
from .http_resilience import (
    RateLimit,
    ResilienceConfig,
    RetryPolicy,
    log_error_responses,
)

CLOUDDRIVER_TIMEOUT_SECONDS = 60.0
DOCKER_REGISTRY_PROVIDER = "dockerRegistry"


@dataclass(frozen=True, slots=True)
class ClouddriverConfig:
    """Where to list registry accounts and their tagged images."""

    base_url: str
    resilience: ResilienceConfig
    provider_type: str = DOCKER_REGISTRY_PROVIDER


def get_clouddriver_config(*, resilience: ResilienceConfig | None = None) -> ClouddriverConfig:
    base_url = require_env_var("CLOUDDRIVER_BASE_URL").strip().rstrip("/")
    return ClouddriverConfig(
        base_url=base_url,
        resilience=resilience
        or ResilienceConfig(
            name="clouddriver",
            timeout_seconds=CLOUDDRIVER_TIMEOUT_SECONDS,
            retry=RetryPolicy(total=3),
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            response_hooks=(log_error_responses("clouddriver"),),
        ),
    )
