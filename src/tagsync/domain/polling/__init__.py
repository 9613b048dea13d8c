"""Reconciliation engine for registry tag polling.

Flow per account: list remote images, classify each against the cache
(``classifier``), collect new and changed ones (``delta``), then persist
digests and notify (``commit``). ``monitor`` sequences accounts within one
poll cycle and ``runner`` applies the per-partition safeguards.
"""

from __future__ import annotations

from .classifier import ChangeKind, classify
from .commit import commit_delta, post_event
from .context import PollContext
from .delta import ImageDelta, PollingDelta, generate_delta
from .metrics import MonitorMetrics
from .monitor import DockerTagMonitor, PollCycleResult, UnknownPartitionError
from .runner import AccountPollResult, PollingMonitor, PollStatus, poll_single

__all__ = [
    "AccountPollResult",
    "ChangeKind",
    "DockerTagMonitor",
    "ImageDelta",
    "MonitorMetrics",
    "PollContext",
    "PollCycleResult",
    "PollStatus",
    "PollingDelta",
    "PollingMonitor",
    "UnknownPartitionError",
    "classify",
    "commit_delta",
    "generate_delta",
    "poll_single",
    "post_event",
]
