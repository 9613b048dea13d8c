from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tagsync.config import (
    ConfigurationError,
    MissingConfigurationError,
    configure_logging,
    env_positive_int,
    get_database_config,
    get_polling_config,
    get_storage_config,
    optional_env_var,
    require_env_var,
    require_env_vars,
)


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_A", raising=False)
    monkeypatch.delenv("MISSING_B", raising=False)

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)
    assert exc.value.names == ("MISSING_A", "MISSING_B")


def test_require_env_var_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError):
        require_env_var("EXAMPLE_VAR")


def test_optional_env_var_treats_blank_as_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  ")

    assert optional_env_var("EXAMPLE_VAR") is None


@pytest.mark.parametrize("raw", ["abc", "0", "-3"])
def test_env_positive_int_rejects_invalid_values(
    monkeypatch: pytest.MonkeyPatch,
    raw: str,
) -> None:
    monkeypatch.setenv("EXAMPLE_INT", raw)

    with pytest.raises(ConfigurationError, match="EXAMPLE_INT"):
        env_positive_int("EXAMPLE_INT", 5)


def test_env_positive_int_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EXAMPLE_INT", raising=False)

    assert env_positive_int("EXAMPLE_INT", 5) == 5


def test_polling_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "TAGSYNC_CACHE_PREFIX",
        "TAGSYNC_ITEM_UPPER_THRESHOLD",
        "TAGSYNC_POLL_INTERVAL_SECONDS",
        "TAGSYNC_LOCK_TTL_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)

    config = get_polling_config()

    assert config.cache_prefix == "tagsync"
    assert config.item_upper_threshold == 1000
    assert config.interval_seconds == 60
    assert config.lock_ttl_seconds == 300


def test_polling_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TAGSYNC_CACHE_PREFIX", "igor")
    monkeypatch.setenv("TAGSYNC_ITEM_UPPER_THRESHOLD", "25")
    monkeypatch.setenv("TAGSYNC_POLL_INTERVAL_SECONDS", "15")

    config = get_polling_config()

    assert config.cache_prefix == "igor"
    assert config.item_upper_threshold == 25
    assert config.interval_seconds == 15


def test_database_config_prefers_explicit_uri(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:///:memory:")

    assert get_database_config().uri == "sqlite+pysqlite:///:memory:"


def test_database_config_uses_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)
    monkeypatch.setenv("TAGSYNC_DATA_DIR", str(tmp_path / "data"))

    uri = get_database_config().uri

    assert uri == f"sqlite+pysqlite:///{tmp_path.resolve() / 'data' / 'tagsync.db'}"
    assert (tmp_path / "data").is_dir()


def test_storage_config_reads_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TAGSYNC_DATA_DIR", str(tmp_path))

    config = get_storage_config()

    assert config.data_dir == tmp_path.resolve()
    assert config.database_path == tmp_path.resolve() / "tagsync.db"


@pytest.mark.parametrize(("raw", "expected"), [("true", True), ("1", True), ("no", False)])
def test_database_config_sql_echo_flag(
    monkeypatch: pytest.MonkeyPatch,
    raw: str,
    expected: bool,  # noqa: FBT001
) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:///:memory:")
    monkeypatch.setenv("TAGSYNC_SQL_ECHO", raw)

    assert get_database_config().echo_sql is expected


def test_configure_logging_quiets_http_stack() -> None:
    configure_logging(level=logging.INFO, force=True)

    assert logging.getLogger("httpx").level == logging.WARNING

    configure_logging(level=logging.DEBUG, force=True)

    assert logging.getLogger("httpx").level == logging.DEBUG
