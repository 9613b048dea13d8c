"""Application configuration helpers."""

from __future__ import annotations

from .clouddriver import ClouddriverConfig, get_clouddriver_config
from .echo import EchoConfig, get_echo_config
from .env import (
    env_flag,
    env_positive_int,
    optional_env_var,
    require_env_var,
    require_env_vars,
)
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import (
    RateLimit,
    ResilienceConfig,
    RetryPolicy,
    log_error_responses,
)
from .logging import configure_logging
from .polling import PollingConfig, get_polling_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "ClouddriverConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "EchoConfig",
    "MissingConfigurationError",
    "PollingConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "env_flag",
    "env_positive_int",
    "get_clouddriver_config",
    "get_database_config",
    "get_echo_config",
    "get_polling_config",
    "get_storage_config",
    "log_error_responses",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
