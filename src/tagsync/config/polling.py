"""Polling defaults for the tag monitor."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_positive_int, optional_env_var

DEFAULT_CACHE_PREFIX = "tagsync"
DEFAULT_ITEM_UPPER_THRESHOLD = 1000
DEFAULT_POLL_INTERVAL_SECONDS = 60
DEFAULT_LOCK_TTL_SECONDS = 300


@dataclass(frozen=True, slots=True)
class PollingConfig:
    cache_prefix: str = DEFAULT_CACHE_PREFIX
    item_upper_threshold: int = DEFAULT_ITEM_UPPER_THRESHOLD
    interval_seconds: int = DEFAULT_POLL_INTERVAL_SECONDS
    lock_ttl_seconds: int = DEFAULT_LOCK_TTL_SECONDS


def get_polling_config() -> PollingConfig:
    return PollingConfig(
        cache_prefix=optional_env_var("TAGSYNC_CACHE_PREFIX") or DEFAULT_CACHE_PREFIX,
        item_upper_threshold=env_positive_int(
            "TAGSYNC_ITEM_UPPER_THRESHOLD", DEFAULT_ITEM_UPPER_THRESHOLD
        ),
        interval_seconds=env_positive_int(
            "TAGSYNC_POLL_INTERVAL_SECONDS", DEFAULT_POLL_INTERVAL_SECONDS
        ),
        lock_ttl_seconds=env_positive_int("TAGSYNC_LOCK_TTL_SECONDS", DEFAULT_LOCK_TTL_SECONDS),
    )
