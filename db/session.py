"""
db/session.py

SQLAlchemy engine and session factory.

The engine is created lazily on first use and disposed explicitly by
process entrypoints via `dispose_engine()`.
"""

from __future__ import annotations

import os
from collections.abc import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from db.config import resolve_database_url


def _get_bool_env(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def enable_sqlite_savepoints(engine: Engine) -> Engine:
    """
    Let SQLAlchemy emit BEGIN on pysqlite connections.

    pysqlite starts transactions lazily before DML only, so a SAVEPOINT could
    open the outer transaction itself and RELEASE would then commit it.
    """

    @event.listens_for(engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(connection) -> None:
        connection.exec_driver_sql("BEGIN")

    return engine


def create_db_engine(database_url: str | None = None) -> Engine:
    url = database_url or resolve_database_url()
    if url.startswith("sqlite"):
        engine = create_engine(url, echo=_get_bool_env("SQL_ECHO", default=False))
        return enable_sqlite_savepoints(engine)

    return create_engine(
        url,
        echo=_get_bool_env("SQL_ECHO", default=False),
        pool_pre_ping=True,
        pool_recycle=_get_int_env("DB_POOL_RECYCLE", 1800),
        pool_size=_get_int_env("DB_POOL_SIZE", 5),
        max_overflow=_get_int_env("DB_MAX_OVERFLOW", 10),
    )


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        bind=engine,
        class_=Session,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def get_engine() -> Engine:
    """Return the shared engine, creating it on first call."""
    global _engine
    if _engine is None:
        _engine = create_db_engine()
    return _engine


def get_session_factory() -> sessionmaker[Session]:
    global _session_factory
    if _session_factory is None:
        _session_factory = build_session_factory(get_engine())
    return _session_factory


def SessionLocal() -> Session:
    """Lazy session factory. Drop-in replacement for a sessionmaker() call."""
    return get_session_factory()()


def dispose_engine() -> None:
    """Close pooled connections; called once at process exit."""
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
