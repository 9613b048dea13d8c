"""Application orchestration entry points."""

from __future__ import annotations

import threading
from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING

from tagsync.adapters.clouddriver import ClouddriverAccountRegistry, ClouddriverImageSource
from tagsync.adapters.echo import EchoEventSink
from tagsync.adapters.sqlalchemy import (
    SqlAlchemyImageCache,
    SqlAlchemyKeysMigration,
    SqlAlchemyLockManager,
    is_started,
    startup,
)
from tagsync.config import get_echo_config, get_polling_config
from tagsync.domain.polling import DockerTagMonitor, PollStatus, poll_single
from tagsync.scheduler import PollingScheduler

if TYPE_CHECKING:
    from tagsync.adapters.sqlalchemy import MigrationResult
    from tagsync.config import PollingConfig
    from tagsync.domain.ports import (
        AccountRegistry,
        EventSink,
        ImageCache,
        KeysMigration,
        LockManager,
        TaggedImageSource,
    )
    from tagsync.domain.polling import AccountPollResult, PollCycleResult

log = getLogger(__name__)


def _ensure_started() -> None:
    if not is_started():
        startup()


def _configured_sink() -> EventSink | None:
    config = get_echo_config()
    if config is None:
        log.warning("ECHO_BASE_URL is not set: tag notifications are disabled")
        return None
    return EchoEventSink(config)


def build_docker_monitor(
    *,
    accounts: AccountRegistry | None = None,
    source: TaggedImageSource | None = None,
    cache: ImageCache | None = None,
    sink: EventSink | None = None,
    keys_migration: KeysMigration | None = None,
    lock_manager: LockManager | None = None,
    polling: PollingConfig | None = None,
) -> DockerTagMonitor:
    """Wire the monitor, defaulting every collaborator to the configured adapters."""

    polling_config = polling or get_polling_config()
    if cache is None or keys_migration is None or lock_manager is None:
        _ensure_started()
    return DockerTagMonitor(
        accounts=accounts or ClouddriverAccountRegistry(),
        source=source or ClouddriverImageSource(),
        cache=cache or SqlAlchemyImageCache(polling_config.cache_prefix),
        config=polling_config,
        sink=sink or _configured_sink(),
        keys_migration=keys_migration or SqlAlchemyKeysMigration(polling_config.cache_prefix),
        lock_manager=lock_manager or SqlAlchemyLockManager(),
    )


def run_poll_cycle(
    *,
    send_events: bool = True,
    monitor: DockerTagMonitor | None = None,
) -> PollCycleResult:
    """Run one poll cycle across every account."""

    effective_monitor = monitor or build_docker_monitor()
    log.info("Starting poll cycle: send_events=%s", send_events)
    result = effective_monitor.poll(send_events)
    if result.skipped:
        log.info("Poll cycle skipped: %s", result.skipped_reason)
        return result
    log.info(
        "Finished poll cycle: accounts=%s, committed=%s, failed=%s, over_threshold=%s, items=%s",
        len(result.results),
        result.count(PollStatus.COMMITTED),
        result.count(PollStatus.FAILED),
        result.count(PollStatus.OVER_THRESHOLD),
        result.items,
    )
    return result


def poll_account(
    partition: str,
    *,
    send_events: bool = True,
    monitor: DockerTagMonitor | None = None,
) -> AccountPollResult:
    """Poll a single account by name; unknown accounts raise ``UnknownPartitionError``."""

    effective_monitor = monitor or build_docker_monitor()
    effective_monitor.accounts.refresh()
    ctx = effective_monitor.poll_context(partition)
    if not send_events:
        ctx = replace(ctx, fast_forward=True)
    return poll_single(
        effective_monitor,
        ctx,
        metrics=effective_monitor.metrics,
        lock_manager=effective_monitor.lock_manager,
        lock_ttl_seconds=effective_monitor.config.lock_ttl_seconds,
    )


def partition_upper_threshold(
    partition: str,
    *,
    monitor: DockerTagMonitor | None = None,
) -> int:
    effective_monitor = monitor or build_docker_monitor()
    effective_monitor.accounts.refresh()
    effective_monitor.poll_context(partition)
    return effective_monitor.partition_upper_threshold(partition)


def migrate_keys(*, migration: SqlAlchemyKeysMigration | None = None) -> MigrationResult:
    _ensure_started()
    effective = migration or SqlAlchemyKeysMigration(get_polling_config().cache_prefix)
    return effective.run()


def run_scheduler(
    *,
    interval_seconds: float | None = None,
    fast_forward_first: bool = False,
    migrate: bool = False,
    monitor: DockerTagMonitor | None = None,
) -> PollingScheduler:
    """Run the polling loop in the calling thread until it is stopped."""

    effective_monitor = monitor or build_docker_monitor()
    interval = interval_seconds or effective_monitor.config.interval_seconds
    scheduler = PollingScheduler(
        monitor=effective_monitor,
        interval_seconds=interval,
        fast_forward_first=fast_forward_first,
    )
    if migrate and isinstance(effective_monitor.keys_migration, SqlAlchemyKeysMigration):
        threading.Thread(
            target=effective_monitor.keys_migration.run,
            name="tagsync-keys-migration",
            daemon=True,
        ).start()
    scheduler.run()
    return scheduler
