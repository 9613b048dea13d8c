"""Expiring named locks stored in the shared database."""

from __future__ import annotations

import os
import socket
import uuid
from datetime import UTC, datetime, timedelta
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError

from .engine import session_factory as default_session_factory
from .mappings import polling_lock_table

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.orm import Session, sessionmaker

log = getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _default_owner() -> str:
    return f"{socket.gethostname()}:{os.getpid()}:{uuid.uuid4().hex[:8]}"


class SqlAlchemyLockManager:
    def __init__(
        self,
        session_factory: sessionmaker[Session] | None = None,
        *,
        owner: str | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.session_factory = session_factory or default_session_factory()
        self.owner = owner or _default_owner()
        self._clock = clock

    def acquire(self, name: str, *, ttl_seconds: int) -> bool:
        now = self._clock()
        expires_at = now + timedelta(seconds=ttl_seconds)
        table = polling_lock_table
        try:
            with self.session_factory.begin() as session:
                session.execute(
                    delete(table).where(table.c.name == name).where(table.c.expires_at <= now)
                )
                holder = session.execute(
                    select(table.c.owner).where(table.c.name == name)
                ).scalar_one_or_none()
                if holder is None:
                    session.execute(
                        insert(table).values(name=name, owner=self.owner, expires_at=expires_at)
                    )
                    return True
                if holder == self.owner:
                    session.execute(
                        update(table).where(table.c.name == name).values(expires_at=expires_at)
                    )
                    return True
                log.debug("Lock %s is held by %s", name, holder)
                return False
        except IntegrityError:
            # another process inserted the lock between our select and insert
            return False

    def release(self, name: str) -> None:
        table = polling_lock_table
        with self.session_factory.begin() as session:
            session.execute(
                delete(table).where(table.c.name == name).where(table.c.owner == self.owner)
            )


if TYPE_CHECKING:
    from tagsync.domain.ports import LockManager

    def _lock_check(manager: SqlAlchemyLockManager) -> LockManager:
        return manager
