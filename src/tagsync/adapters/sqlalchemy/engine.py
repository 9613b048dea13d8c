"""Process-wide engine for the image cache and polling lock tables."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from tagsync.config import DatabaseConfig, get_database_config

from .mappings import create_all_tables

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the database is used before ``startup`` or started twice."""


@dataclass(slots=True)
class _Database:
    engine: Engine
    sessions: sessionmaker[Session]


@dataclass(slots=True)
class _Registry:
    database: _Database | None = None


_REGISTRY = _Registry()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> Engine:
    """Create the tables and register the engine used by the default adapters.

    ``force`` replaces an already registered engine without disposing it.
    """

    if _REGISTRY.database is not None and not force:
        raise StartupError("Database already started. Pass force=True to replace it.")

    if engine is None:
        config = DatabaseConfig(uri=database_uri) if database_uri else get_database_config()
        engine = create_engine(config.uri, echo=config.echo_sql)
    create_all_tables(engine)
    _REGISTRY.database = _Database(
        engine=engine,
        sessions=sessionmaker(bind=engine, expire_on_commit=False),
    )
    log.debug("Image cache database at %s", engine.url.render_as_string(hide_password=True))
    return engine


def session_factory() -> sessionmaker[Session]:
    database = _REGISTRY.database
    if database is None:
        raise StartupError(
            "Database not started. Call tagsync.adapters.sqlalchemy.startup() "
            "before using the image cache."
        )
    return database.sessions


def configured_engine() -> Engine | None:
    database = _REGISTRY.database
    return database.engine if database is not None else None


def is_started() -> bool:
    return _REGISTRY.database is not None


def shutdown() -> None:
    """Dispose the registered engine, if any."""

    database = _REGISTRY.database
    _REGISTRY.database = None
    if database is not None:
        database.engine.dispose()
