from __future__ import annotations

import pytest

from tagsync.adapters.sqlalchemy import MigrationResult
from tagsync.domain.polling import PollCycleResult
from tagsync.ui import cli as cli_module


def test_poll_command_sends_events_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_cycle(**kwargs: object) -> PollCycleResult:
        captured.update(kwargs)
        return PollCycleResult()

    monkeypatch.setattr(cli_module, "run_poll_cycle", fake_cycle)

    cli_module.main(["poll"])

    assert captured == {"send_events": True}


def test_poll_command_fast_forward(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_cycle(**kwargs: object) -> PollCycleResult:
        captured.update(kwargs)
        return PollCycleResult()

    monkeypatch.setattr(cli_module, "run_poll_cycle", fake_cycle)

    cli_module.main(["poll", "--fast-forward"])

    assert captured == {"send_events": False}


def test_run_command_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_run(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr(cli_module, "run_scheduler", fake_run)

    cli_module.main(["run", "--interval", "2.5", "--fast-forward-first", "--migrate-keys"])

    assert captured == {"interval_seconds": 2.5, "fast_forward_first": True, "migrate": True}


def test_run_command_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_run(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr(cli_module, "run_scheduler", fake_run)

    cli_module.main(["run"])

    assert captured == {"interval_seconds": None, "fast_forward_first": False, "migrate": False}


def test_run_command_rejects_non_positive_interval() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["run", "--interval", "0"])

    assert excinfo.value.code == 2


def test_threshold_command_prints_value(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setattr(cli_module, "partition_upper_threshold", lambda account: len(account))

    cli_module.main(["threshold", "acme"])

    assert capsys.readouterr().out.strip() == "4"


def test_migrate_keys_command(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[bool] = []

    def fake_migrate() -> MigrationResult:
        calls.append(True)
        return MigrationResult(migrated=2)

    monkeypatch.setattr(cli_module, "migrate_keys", fake_migrate)

    cli_module.main(["migrate-keys"])

    assert calls == [True]


def test_failure_exits_with_status_one(monkeypatch: pytest.MonkeyPatch) -> None:
    def failing(**_: object) -> PollCycleResult:
        raise RuntimeError("clouddriver down")

    monkeypatch.setattr(cli_module, "run_poll_cycle", failing)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["poll"])

    assert excinfo.value.code == 1


def test_missing_command_is_rejected() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main([])

    assert excinfo.value.code == 2
