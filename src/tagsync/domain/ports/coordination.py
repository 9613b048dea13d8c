"""Ports for cross-process coordination."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class LockManager(Protocol):
    """Named, expiring locks shared by every process polling the same cache."""

    def acquire(self, name: str, *, ttl_seconds: int) -> bool: ...

    def release(self, name: str) -> None: ...


@runtime_checkable
class KeysMigration(Protocol):
    """Rewrites cache keys to the current layout; polling pauses while it runs."""

    @property
    def running(self) -> bool: ...
