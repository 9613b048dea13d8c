"""Image cache backed by SQLAlchemy."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import insert, select, update

from tagsync.domain.model import CACHE_ID, KEY_VERSION, image_key

from .engine import session_factory as default_session_factory
from .mappings import tagged_image_table

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.orm import Session, sessionmaker


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SqlAlchemyImageCache:
    """Last known digest per image key; rows are upserted and never deleted."""

    def __init__(
        self,
        prefix: str,
        session_factory: sessionmaker[Session] | None = None,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.prefix = prefix
        self.session_factory = session_factory or default_session_factory()
        self._clock = clock

    def images(self, account: str) -> set[str]:
        key_prefix = f"{self.prefix}:{CACHE_ID}:{KEY_VERSION}:"
        stmt = (
            select(tagged_image_table.c.key)
            .where(tagged_image_table.c.account == account)
            .where(tagged_image_table.c.schema_version == KEY_VERSION)
            .where(tagged_image_table.c.key.startswith(key_prefix, autoescape=True))
        )
        with self.session_factory() as session:
            return set(session.execute(stmt).scalars())

    def last_digest(self, account: str, repository: str, tag: str) -> str | None:
        key = image_key(self.prefix, account, repository, tag)
        stmt = select(tagged_image_table.c.digest).where(tagged_image_table.c.key == key)
        with self.session_factory() as session:
            return session.execute(stmt).scalar_one_or_none()

    def set_last_digest(
        self,
        account: str,
        repository: str,
        tag: str,
        digest: str | None,
    ) -> None:
        key = image_key(self.prefix, account, repository, tag)
        now = self._clock()
        with self.session_factory.begin() as session:
            result = session.execute(
                update(tagged_image_table)
                .where(tagged_image_table.c.key == key)
                .values(digest=digest, updated_at=now)
            )
            if result.rowcount == 0:
                session.execute(
                    insert(tagged_image_table).values(
                        key=key,
                        schema_version=KEY_VERSION,
                        account=account,
                        repository=repository,
                        tag=tag,
                        digest=digest,
                        updated_at=now,
                    )
                )


if TYPE_CHECKING:
    from tagsync.domain.ports import ImageCache

    def _cache_check(cache: SqlAlchemyImageCache) -> ImageCache:
        return cache
