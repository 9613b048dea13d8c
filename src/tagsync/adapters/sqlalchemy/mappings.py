"""SQLAlchemy table metadata for the image cache and polling locks."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Column, DateTime, Dialect, Index, MetaData, String, Table, TypeDecorator

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


class UTCDateTime(TypeDecorator[datetime]):
    """Stores naive UTC timestamps and hands back aware ones."""

    impl = DateTime(timezone=False)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC).replace(tzinfo=None)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

tagged_image_table = Table(
    "tagged_image",
    metadata,
    Column("key", String(1024), primary_key=True),
    Column("schema_version", String(8), nullable=False),
    Column("account", String(255), nullable=False),
    Column("registry", String(255), nullable=True),
    Column("repository", String(512), nullable=False),
    Column("tag", String(255), nullable=False),
    Column("digest", String(255), nullable=True),
    Column("updated_at", UTCDateTime(), nullable=False),
    Index("ix_tagged_image_account_schema", "account", "schema_version"),
)

polling_lock_table = Table(
    "polling_lock",
    metadata,
    Column("name", String(255), primary_key=True),
    Column("owner", String(255), nullable=False),
    Column("expires_at", UTCDateTime(), nullable=False),
)


def create_all_tables(engine: Engine) -> None:
    metadata.create_all(engine, checkfirst=True)
