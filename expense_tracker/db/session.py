"""Database engine and session helpers.

Centralizes SQLAlchemy engine/session construction and provides the
FastAPI dependency (`get_db`) used by route handlers. The engine is built
lazily from the configured DATABASE_URL so tests can swap it out.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from expense_tracker.config.settings import get_config
from expense_tracker.db.tables import Base

logger = logging.getLogger(__name__)

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine for the given URL.

    SQLite connections are shared across the threadpool that runs request
    handlers, and in-memory databases use a single static connection so
    every session sees the same data.
    """
    kwargs = {"echo": echo, "future": True}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url == "sqlite://":
            kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, **kwargs)

    if database_url.startswith("sqlite"):

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def get_engine() -> Engine:
    """Return the process-wide engine, creating it on first use."""
    global _engine, _session_factory
    if _engine is None:
        config = get_config()
        _engine = build_engine(config.database_url, echo=config.database_echo)
        _session_factory = sessionmaker(
            bind=_engine, autoflush=False, expire_on_commit=False
        )
        logger.info(f"Database engine created for {_engine.url.render_as_string(hide_password=True)}")
    return _engine


def get_session_factory() -> sessionmaker:
    get_engine()
    assert _session_factory is not None
    return _session_factory


def configure_engine(engine: Engine) -> None:
    """Use an existing engine (tests, CLI overrides) for all new sessions."""
    global _engine, _session_factory
    _engine = engine
    _session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def reset_engine() -> None:
    """Dispose of the current engine so the next call rebuilds it from config."""
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None


def init_db(engine: Optional[Engine] = None) -> None:
    """Create all tables that do not exist yet."""
    target = engine or get_engine()
    Base.metadata.create_all(bind=target)
    logger.info("Database tables initialized")


def get_db() -> Iterator[Session]:
    """FastAPI dependency that yields a request-scoped SQLAlchemy session.

    Services commit their own writes; anything left uncommitted when the
    request fails is rolled back before the session is closed.

    Yields:
        sqlalchemy.orm.Session: An open session for the duration of the request.
    """
    db = get_session_factory()()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def session_scope() -> Iterator[Session]:
    """Session for use outside of requests (CLI commands, scripts)."""
    db = get_session_factory()()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
