"""Echo (event sink) configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var
from .http_resilience import ResilienceConfig, RetryPolicy, log_error_responses

ECHO_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class EchoConfig:
    base_url: str
    resilience: ResilienceConfig
    source: str = "tagsync"


def get_echo_config() -> EchoConfig | None:
    """Return the sink configuration, or ``None`` when notifications are disabled."""

    base_url = optional_env_var("ECHO_BASE_URL")
    if base_url is None:
        return None
    return EchoConfig(
        base_url=base_url.rstrip("/"),
        resilience=ResilienceConfig(
            name="echo",
            timeout_seconds=ECHO_TIMEOUT_SECONDS,
            retry=RetryPolicy(total=2),
            response_hooks=(log_error_responses("echo"),),
            default_headers={"Content-Type": "application/json"},
        ),
    )
