"""Timer loop that invokes poll cycles one at a time."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from tagsync.domain.polling import PollCycleResult

log = getLogger(__name__)


class CycleMonitor(Protocol):
    @property
    def name(self) -> str: ...

    def poll(
        self,
        send_events: bool = True,  # noqa: FBT001, FBT002
        *,
        cancelled: threading.Event | None = None,
    ) -> PollCycleResult: ...


@dataclass(slots=True)
class PollingScheduler:
    """Run ``monitor.poll`` every ``interval_seconds`` until stopped.

    ``fast_forward_first`` runs the first cycle without events so a fresh cache
    is seeded silently. The stop flag doubles as the cycle's cancellation flag:
    a cycle in progress finishes the account it is working on and then returns.
    """

    monitor: CycleMonitor
    interval_seconds: float
    fast_forward_first: bool = False
    cycles: int = field(default=0, init=False)
    _stop: threading.Event = field(default_factory=threading.Event, init=False)

    def run(self, *, max_cycles: int | None = None) -> None:
        send_events = not self.fast_forward_first
        log.info(
            "Starting %s scheduler: interval=%ss, fast_forward_first=%s",
            self.monitor.name,
            self.interval_seconds,
            self.fast_forward_first,
        )
        while not self._stop.is_set():
            self.run_once(send_events=send_events)
            send_events = True
            if max_cycles is not None and self.cycles >= max_cycles:
                break
            self._stop.wait(self.interval_seconds)
        log.info("Stopped %s scheduler after %s cycles", self.monitor.name, self.cycles)

    def run_once(self, *, send_events: bool = True) -> PollCycleResult | None:
        try:
            result = self.monitor.poll(send_events, cancelled=self._stop)
        except Exception:
            log.exception("Poll cycle of %s failed", self.monitor.name)
            return None
        finally:
            self.cycles += 1
        if result.skipped:
            log.info("Poll cycle skipped: %s", result.skipped_reason)
        else:
            log.info(
                "Poll cycle finished: accounts=%s, items=%s, cancelled=%s",
                len(result.results),
                result.items,
                result.cancelled,
            )
        return result

    def stop(self) -> None:
        self._stop.set()

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()
