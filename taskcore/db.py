"""Database engine + session management."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager, suppress

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, scoped_session, sessionmaker

from .errors import StorageUnavailableError
from .models import Base

logger = logging.getLogger(__name__)

_engine: Engine | None = None
_SessionFactory: scoped_session[Session] | None = None


def _normalize_url(url: str) -> str:
    # Normalize postgres schemes to ensure SQLAlchemy uses psycopg v3
    if url.startswith("postgres://"):
        return "postgresql+psycopg://" + url[len("postgres://") :]
    if url.startswith("postgresql://") and "+" not in url.split("://", 1)[1].split("@", 1)[0]:
        return "postgresql+psycopg://" + url[len("postgresql://") :]
    return url


def _build(database_url: str) -> Engine:
    engine = create_engine(_normalize_url(database_url), future=True, echo=False)
    if engine.dialect.name == "sqlite":
        # ON DELETE CASCADE from users to tasks needs FK enforcement on sqlite

        @event.listens_for(engine, "connect")
        def _fk_on(dbapi_conn, _record):  # type: ignore[no-untyped-def]
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA foreign_keys=ON")
            cur.close()

    return engine


def init_engine(database_url: str, force: bool = False) -> Engine:
    """Initialize global engine (idempotent) or reinitialize when force=True."""
    global _engine, _SessionFactory
    if _engine is not None and not force:
        return _engine
    if _engine is not None:
        _engine.dispose()
        if _SessionFactory is not None:
            with suppress(Exception):  # pragma: no cover
                _SessionFactory.remove()
    _engine = _build(database_url)
    _SessionFactory = scoped_session(sessionmaker(bind=_engine, autoflush=False, autocommit=False))
    return _engine


def get_engine() -> Engine:
    if _engine is None:
        raise RuntimeError("DB not initialized; call init_engine first")
    return _engine


def get_session() -> Session:
    if _SessionFactory is None:
        raise RuntimeError("DB not initialized; call init_engine first")
    return _SessionFactory()


@contextmanager
def session_scope(failure: str) -> Iterator[Session]:
    """Yield a session for one unit of work.

    Any SQLAlchemy fault is rolled back, logged and re-raised as
    StorageUnavailableError carrying the caller-facing ``failure`` message.
    Domain errors raised inside the block pass through untouched.
    """
    db = get_session()
    try:
        yield db
    except SQLAlchemyError as ex:
        with suppress(SQLAlchemyError):
            db.rollback()
        logger.exception("storage failure: %s", failure)
        raise StorageUnavailableError(failure, cause=str(ex)) from ex
    finally:
        db.close()


def create_all() -> None:  # dev helper ONLY for fresh ephemeral DBs (tests, scratch). Use Alembic in normal flows.
    Base.metadata.create_all(get_engine())
