"""SQLAlchemy adapter package for tagsync."""

from __future__ import annotations

from .engine import StartupError, configured_engine, is_started, session_factory, shutdown, startup
from .locks import SqlAlchemyLockManager
from .mappings import create_all_tables, metadata, polling_lock_table, tagged_image_table
from .migration import MigrationResult, SqlAlchemyKeysMigration
from .repositories import SqlAlchemyImageCache

__all__ = [
    "MigrationResult",
    "SqlAlchemyImageCache",
    "SqlAlchemyKeysMigration",
    "SqlAlchemyLockManager",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "metadata",
    "polling_lock_table",
    "session_factory",
    "shutdown",
    "startup",
    "tagged_image_table",
]
