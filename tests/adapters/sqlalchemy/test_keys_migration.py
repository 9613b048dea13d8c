"""Tests for the v1 to v2 cache key migration."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import func, insert, select
from sqlalchemy.orm import Session, sessionmaker  # noqa: TC002

from tagsync.adapters.sqlalchemy import (
    SqlAlchemyImageCache,
    SqlAlchemyKeysMigration,
    tagged_image_table,
)
from tagsync.domain.model import LegacyImageKey, image_key

PREFIX = "tagsync"


def _seed_legacy(
    factory: sessionmaker[Session],
    *,
    tag: str,
    digest: str | None,
    key: str | None = None,
) -> str:
    legacy = LegacyImageKey(
        prefix=PREFIX,
        account="acme",
        registry="registry.example.com",
        repository="app",
        tag=tag,
    )
    value = key or str(legacy)
    with factory.begin() as session:
        session.execute(
            insert(tagged_image_table).values(
                key=value,
                schema_version="v1",
                account="acme",
                registry="registry.example.com",
                repository="app",
                tag=tag,
                digest=digest,
                updated_at=datetime.now(UTC),
            )
        )
    return value


def _row_count(factory: sessionmaker[Session]) -> int:
    with factory() as session:
        return session.execute(select(func.count()).select_from(tagged_image_table)).scalar_one()


def test_migration_copies_legacy_rows(sqlite_session_factory: sessionmaker[Session]) -> None:
    _seed_legacy(sqlite_session_factory, tag="latest", digest="sha1")
    _seed_legacy(sqlite_session_factory, tag="1.0", digest=None)
    migration = SqlAlchemyKeysMigration(PREFIX, sqlite_session_factory)

    result = migration.run()

    assert result.migrated == 2
    cache = SqlAlchemyImageCache(PREFIX, sqlite_session_factory)
    assert cache.images("acme") == {
        image_key(PREFIX, "acme", "app", "latest"),
        image_key(PREFIX, "acme", "app", "1.0"),
    }
    assert cache.last_digest("acme", "app", "latest") == "sha1"
    assert not migration.running


def test_migration_keeps_legacy_rows(sqlite_session_factory: sessionmaker[Session]) -> None:
    legacy_key = _seed_legacy(sqlite_session_factory, tag="latest", digest="sha1")

    SqlAlchemyKeysMigration(PREFIX, sqlite_session_factory).run()

    with sqlite_session_factory() as session:
        keys = set(session.execute(select(tagged_image_table.c.key)).scalars())
    assert legacy_key in keys
    assert _row_count(sqlite_session_factory) == 2


def test_migration_never_overwrites_current_rows(
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    _seed_legacy(sqlite_session_factory, tag="latest", digest="sha-old")
    cache = SqlAlchemyImageCache(PREFIX, sqlite_session_factory)
    cache.set_last_digest("acme", "app", "latest", "sha-new")

    result = SqlAlchemyKeysMigration(PREFIX, sqlite_session_factory).run()

    assert result.migrated == 0
    assert result.skipped == 1
    assert cache.last_digest("acme", "app", "latest") == "sha-new"


def test_migration_is_rerunnable(sqlite_session_factory: sessionmaker[Session]) -> None:
    _seed_legacy(sqlite_session_factory, tag="latest", digest="sha1")
    migration = SqlAlchemyKeysMigration(PREFIX, sqlite_session_factory)

    migration.run()
    second = migration.run()

    assert second.migrated == 0
    assert second.skipped == 1
    assert _row_count(sqlite_session_factory) == 2


def test_migration_counts_unparseable_keys(
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    _seed_legacy(
        sqlite_session_factory,
        tag="odd",
        digest="sha1",
        key="tagsync:dockerRegistry:acme:registry.example.com:5000:app:odd",
    )

    result = SqlAlchemyKeysMigration(PREFIX, sqlite_session_factory).run()

    assert result.invalid == 1
    assert result.migrated == 0


def test_migration_is_not_running_before_start(
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    assert not SqlAlchemyKeysMigration(PREFIX, sqlite_session_factory).running
