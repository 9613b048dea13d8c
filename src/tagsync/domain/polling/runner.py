"""Run generate -> commit for one partition with the polling safeguards."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from tagsync.domain.ports import ImageSourceError

from .metrics import ITEMS_CACHED, ITEMS_OVER_THRESHOLD, LOCK_UNAVAILABLE, POLL_CYCLE_FAILED

if TYPE_CHECKING:
    from tagsync.domain.ports import LockManager

    from .context import PollContext
    from .delta import PollingDelta
    from .metrics import MonitorMetrics

log = getLogger(__name__)

DEFAULT_LOCK_TTL_SECONDS = 300


class PollingMonitor(Protocol):
    """The override points a polling data source provides."""

    @property
    def name(self) -> str: ...

    def poll_context(self, partition: str) -> PollContext: ...

    def generate_delta(self, ctx: PollContext) -> PollingDelta: ...

    def commit_delta(self, delta: PollingDelta, send_events: bool) -> None: ...  # noqa: FBT001

    def partition_upper_threshold(self, partition: str) -> int: ...


class PollStatus(StrEnum):
    COMMITTED = "committed"
    OVER_THRESHOLD = "over_threshold"
    FAILED = "failed"
    LOCK_UNAVAILABLE = "lock_unavailable"


@dataclass(slots=True)
class AccountPollResult:
    """Outcome of polling one partition."""

    partition: str
    status: PollStatus
    delta_size: int = 0
    error: BaseException | None = None


def poll_single(
    monitor: PollingMonitor,
    ctx: PollContext,
    *,
    metrics: MonitorMetrics,
    lock_manager: LockManager | None = None,
    lock_ttl_seconds: int = DEFAULT_LOCK_TTL_SECONDS,
) -> AccountPollResult:
    """Poll one partition, never letting its failure escape to the caller."""

    partition = ctx.partition_name
    lock_name = f"{monitor.name}.{partition}"
    if lock_manager is not None:
        try:
            acquired = lock_manager.acquire(lock_name, ttl_seconds=lock_ttl_seconds)
        except Exception as exc:
            log.exception("Failed to acquire lock %s", lock_name)
            metrics.increment(POLL_CYCLE_FAILED, monitor=monitor.name, partition=partition)
            return AccountPollResult(partition=partition, status=PollStatus.FAILED, error=exc)
        if not acquired:
            log.info("Skipping %s: lock %s is held elsewhere", partition, lock_name)
            metrics.increment(LOCK_UNAVAILABLE, monitor=monitor.name, partition=partition)
            return AccountPollResult(partition=partition, status=PollStatus.LOCK_UNAVAILABLE)

    try:
        return _generate_and_commit(monitor, ctx, metrics=metrics)
    except ImageSourceError as exc:
        log.warning("Failed to list images for %s, retrying next cycle: %s", partition, exc)
        metrics.increment(POLL_CYCLE_FAILED, monitor=monitor.name, partition=partition)
        return AccountPollResult(partition=partition, status=PollStatus.FAILED, error=exc)
    except Exception as exc:
        log.exception("Failed to update monitor items for %s:%s", monitor.name, partition)
        metrics.increment(POLL_CYCLE_FAILED, monitor=monitor.name, partition=partition)
        return AccountPollResult(partition=partition, status=PollStatus.FAILED, error=exc)
    finally:
        if lock_manager is not None:
            _release(lock_manager, lock_name)


def _release(lock_manager: LockManager, lock_name: str) -> None:
    # an unreleased lock expires after its TTL
    try:
        lock_manager.release(lock_name)
    except Exception:
        log.exception("Failed to release lock %s", lock_name)


def _generate_and_commit(
    monitor: PollingMonitor,
    ctx: PollContext,
    *,
    metrics: MonitorMetrics,
) -> AccountPollResult:
    partition = ctx.partition_name
    delta = monitor.generate_delta(ctx)
    delta_size = len(delta)
    upper_threshold = monitor.partition_upper_threshold(partition)
    tags = {"monitor": monitor.name, "partition": partition}

    if delta_size > upper_threshold:
        if not ctx.fast_forward:
            log.error(
                "Number of items (%s) to cache exceeds upper threshold (%s) in %s %s",
                delta_size,
                upper_threshold,
                monitor.name,
                partition,
            )
            metrics.set_gauge(ITEMS_OVER_THRESHOLD, delta_size, **tags)
            return AccountPollResult(
                partition=partition,
                status=PollStatus.OVER_THRESHOLD,
                delta_size=delta_size,
            )
        log.warning(
            "Fast forwarding items (%s) in %s %s",
            delta_size,
            monitor.name,
            partition,
        )
    metrics.set_gauge(ITEMS_OVER_THRESHOLD, 0, **tags)

    monitor.commit_delta(delta, not ctx.fast_forward)
    metrics.set_gauge(ITEMS_CACHED, delta_size, **tags)
    return AccountPollResult(
        partition=partition,
        status=PollStatus.COMMITTED,
        delta_size=delta_size,
    )
