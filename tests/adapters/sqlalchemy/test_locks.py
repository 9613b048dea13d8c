"""Tests for the database-backed polling locks."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from sqlalchemy.orm import Session, sessionmaker  # noqa: TC002

from tagsync.adapters.sqlalchemy import SqlAlchemyLockManager

LOCK = "dockerTagMonitor.acme"


class _Clock:
    def __init__(self) -> None:
        self.now = datetime(2024, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now


def test_lock_is_exclusive_between_owners(
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    first = SqlAlchemyLockManager(sqlite_session_factory, owner="one")
    second = SqlAlchemyLockManager(sqlite_session_factory, owner="two")

    assert first.acquire(LOCK, ttl_seconds=60)
    assert not second.acquire(LOCK, ttl_seconds=60)
    assert second.acquire("dockerTagMonitor.other", ttl_seconds=60)


def test_owner_can_reacquire(sqlite_session_factory: sessionmaker[Session]) -> None:
    manager = SqlAlchemyLockManager(sqlite_session_factory, owner="one")

    assert manager.acquire(LOCK, ttl_seconds=60)
    assert manager.acquire(LOCK, ttl_seconds=60)


def test_release_frees_lock(sqlite_session_factory: sessionmaker[Session]) -> None:
    first = SqlAlchemyLockManager(sqlite_session_factory, owner="one")
    second = SqlAlchemyLockManager(sqlite_session_factory, owner="two")
    first.acquire(LOCK, ttl_seconds=60)

    first.release(LOCK)

    assert second.acquire(LOCK, ttl_seconds=60)


def test_release_by_other_owner_is_ignored(
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    first = SqlAlchemyLockManager(sqlite_session_factory, owner="one")
    second = SqlAlchemyLockManager(sqlite_session_factory, owner="two")
    first.acquire(LOCK, ttl_seconds=60)

    second.release(LOCK)

    assert not second.acquire(LOCK, ttl_seconds=60)


def test_expired_lock_can_be_taken_over(
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    clock = _Clock()
    first = SqlAlchemyLockManager(sqlite_session_factory, owner="one", clock=clock)
    second = SqlAlchemyLockManager(sqlite_session_factory, owner="two", clock=clock)
    first.acquire(LOCK, ttl_seconds=60)

    clock.now += timedelta(seconds=30)
    assert not second.acquire(LOCK, ttl_seconds=60)

    clock.now += timedelta(seconds=31)
    assert second.acquire(LOCK, ttl_seconds=60)
    assert not first.acquire(LOCK, ttl_seconds=60)
