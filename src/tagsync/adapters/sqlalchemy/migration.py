"""Copy legacy ``v1`` cache rows to ``v2`` keys."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import insert, select

from tagsync.domain.model import (
    CACHE_ID,
    KEY_VERSION,
    LEGACY_KEY_VERSION,
    InvalidImageKeyError,
    LegacyImageKey,
)

from .engine import session_factory as default_session_factory
from .mappings import tagged_image_table

if TYPE_CHECKING:
    from sqlalchemy.orm import Session, sessionmaker

log = getLogger(__name__)


@dataclass(slots=True)
class MigrationResult:
    migrated: int = 0
    skipped: int = 0
    invalid: int = 0


class SqlAlchemyKeysMigration:
    """Copies ``v1`` rows (keyed with the registry) to the ``v2`` layout.

    Legacy rows are left in place and existing ``v2`` rows are never overwritten,
    so the migration can be re-run safely.
    """

    def __init__(self, prefix: str, session_factory: sessionmaker[Session] | None = None) -> None:
        self.prefix = prefix
        self.session_factory = session_factory or default_session_factory()
        self._running = threading.Event()

    @property
    def running(self) -> bool:
        return self._running.is_set()

    def run(self) -> MigrationResult:
        self._running.set()
        try:
            return self._migrate()
        finally:
            self._running.clear()

    def _migrate(self) -> MigrationResult:
        table = tagged_image_table
        result = MigrationResult()
        legacy_prefix = f"{self.prefix}:{CACHE_ID}:"
        stmt = (
            select(table.c.key, table.c.digest)
            .where(table.c.schema_version == LEGACY_KEY_VERSION)
            .where(table.c.key.startswith(legacy_prefix, autoescape=True))
        )
        with self.session_factory.begin() as session:
            legacy_rows = session.execute(stmt).all()
            for legacy_key, digest in legacy_rows:
                try:
                    key = LegacyImageKey.parse(legacy_key).upgrade()
                except InvalidImageKeyError:
                    log.warning("Skipping unparseable legacy key %s", legacy_key)
                    result.invalid += 1
                    continue
                new_key = str(key)
                exists = session.execute(
                    select(table.c.key).where(table.c.key == new_key)
                ).scalar_one_or_none()
                if exists is not None:
                    result.skipped += 1
                    continue
                session.execute(
                    insert(table).values(
                        key=new_key,
                        schema_version=KEY_VERSION,
                        account=key.account,
                        repository=key.repository,
                        tag=key.tag,
                        digest=digest,
                        updated_at=datetime.now(UTC),
                    )
                )
                result.migrated += 1
        log.info(
            "Keys migration finished: migrated=%s, skipped=%s, invalid=%s",
            result.migrated,
            result.skipped,
            result.invalid,
        )
        return result


if TYPE_CHECKING:
    from tagsync.domain.ports import KeysMigration

    def _migration_check(migration: SqlAlchemyKeysMigration) -> KeysMigration:
        return migration
