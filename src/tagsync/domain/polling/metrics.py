"""In-process counters and gauges recorded by the polling monitor."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TypeAlias

MetricKey: TypeAlias = tuple[str, tuple[tuple[str, str], ...]]

MISSED_NOTIFICATION = "missed_notification"
POLL_CYCLE_FAILED = "poll_cycle_failed"
POLL_CYCLE_SKIPPED = "poll_cycle_skipped"
LOCK_UNAVAILABLE = "lock_unavailable"
ITEMS_CACHED = "items_cached"
ITEMS_OVER_THRESHOLD = "items_over_threshold"


def _key(name: str, tags: dict[str, str]) -> MetricKey:
    return name, tuple(sorted(tags.items()))


@dataclass(slots=True)
class MonitorMetrics:
    """Counters and gauges keyed by metric name and tag values."""

    counters: Counter[MetricKey] = field(default_factory=Counter[MetricKey])
    gauges: dict[MetricKey, int] = field(default_factory=dict[MetricKey, int])

    def increment(self, name: str, amount: int = 1, **tags: str) -> None:
        self.counters[_key(name, tags)] += amount

    def count(self, name: str, **tags: str) -> int:
        """Sum a counter over every series whose tags include ``tags``."""

        wanted = set(tags.items())
        return sum(
            value
            for (metric, series), value in self.counters.items()
            if metric == name and wanted <= set(series)
        )

    def set_gauge(self, name: str, value: int, **tags: str) -> None:
        self.gauges[_key(name, tags)] = value

    def gauge(self, name: str, **tags: str) -> int | None:
        return self.gauges.get(_key(name, tags))
