"""Docker registry tag monitor: the poll-cycle orchestrator."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from tagsync.config import PollingConfig

from .commit import commit_delta
from .context import PollContext
from .delta import PollingDelta, generate_delta
from .metrics import POLL_CYCLE_SKIPPED, MonitorMetrics
from .runner import AccountPollResult, PollStatus, poll_single

if TYPE_CHECKING:
    import threading

    from tagsync.domain.ports import (
        AccountRegistry,
        EventSink,
        ImageCache,
        KeysMigration,
        LockManager,
        TaggedImageSource,
    )

log = getLogger(__name__)

MONITOR_NAME = "dockerTagMonitor"


class UnknownPartitionError(LookupError):
    """Raised when a poll is requested for an account that no longer exists."""


@dataclass(slots=True)
class PollCycleResult:
    """Summary of one poll invocation across all accounts."""

    results: list[AccountPollResult] = field(default_factory=list[AccountPollResult])
    skipped_reason: str | None = None
    cancelled: bool = False

    @property
    def skipped(self) -> bool:
        return self.skipped_reason is not None

    def count(self, status: PollStatus) -> int:
        return sum(1 for result in self.results if result.status is status)

    @property
    def items(self) -> int:
        return sum(
            result.delta_size for result in self.results if result.status is PollStatus.COMMITTED
        )


@dataclass(slots=True)
class DockerTagMonitor:
    """Reconciles every registry account's tags against the image cache."""

    accounts: AccountRegistry
    source: TaggedImageSource
    cache: ImageCache
    config: PollingConfig = field(default_factory=PollingConfig)
    sink: EventSink | None = None
    keys_migration: KeysMigration | None = None
    lock_manager: LockManager | None = None
    metrics: MonitorMetrics = field(default_factory=MonitorMetrics)

    @property
    def name(self) -> str:
        return MONITOR_NAME

    def poll(
        self,
        send_events: bool = True,  # noqa: FBT001, FBT002
        *,
        cancelled: threading.Event | None = None,
    ) -> PollCycleResult:
        if self.keys_migration is not None and self.keys_migration.running:
            log.warning("Skipping poll cycle: keys migration is in progress")
            self.metrics.increment(POLL_CYCLE_SKIPPED, monitor=self.name, reason="keysMigration")
            return PollCycleResult(skipped_reason="keysMigration")

        snapshot = self.accounts.refresh()
        cycle = PollCycleResult()
        for account in snapshot:
            if cancelled is not None and cancelled.is_set():
                log.info("Poll cycle cancelled before %s", account.name)
                cycle.cancelled = True
                break
            ctx = PollContext(account.name, account, fast_forward=not send_events)
            cycle.results.append(
                poll_single(
                    self,
                    ctx,
                    metrics=self.metrics,
                    lock_manager=self.lock_manager,
                    lock_ttl_seconds=self.config.lock_ttl_seconds,
                )
            )
        return cycle

    def poll_context(self, partition: str) -> PollContext:
        account = self.accounts.snapshot().find(partition)
        if account is None:
            raise UnknownPartitionError(f"Cannot find account named '{partition}'")
        return PollContext(account.name, account)

    def generate_delta(self, ctx: PollContext) -> PollingDelta:
        return generate_delta(
            ctx.account,
            source=self.source,
            cache=self.cache,
            key_prefix=self.config.cache_prefix,
        )

    def commit_delta(self, delta: PollingDelta, send_events: bool) -> None:  # noqa: FBT001
        commit_delta(
            delta,
            send_events=send_events,
            cache=self.cache,
            sink=self.sink,
            metrics=self.metrics,
            monitor_name=self.name,
        )

    def partition_upper_threshold(self, partition: str) -> int:
        account = self.accounts.snapshot().find(partition)
        if account is not None and account.item_upper_threshold:
            return account.item_upper_threshold
        return self.config.item_upper_threshold


if TYPE_CHECKING:
    from .runner import PollingMonitor

    def _monitor_check(monitor: DockerTagMonitor) -> PollingMonitor:
        return monitor
