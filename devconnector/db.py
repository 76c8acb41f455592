"""
Storage handle for DevConnector.

``Database`` bundles an engine and its session factory. The app factory
builds one and keeps it on ``app.state``; tests build one per test around an
in-memory SQLite URL. Nothing here is a module-level singleton.

Usage:
    from devconnector.db import Database

    database = Database("sqlite:///devconnector.db")
    database.create_all_tables()
    with database.session() as session:
        profile = session.query(Profile).first()
"""

import time
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import Settings, get_settings


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all models."""

    pass


def _engine_options(url: str, settings: Settings) -> dict[str, Any]:
    """
    Pool and driver options for ``url``.

    In-memory SQLite must share one connection or every checkout would see
    an empty database. File SQLite keeps SQLAlchemy's default pool. Server
    databases get a sized, pre-pinged pool.
    """
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return {
            "pool_size": settings.db_pool_size,
            "max_overflow": settings.db_max_overflow,
            "pool_pre_ping": settings.db_pool_pre_ping,
        }

    options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    if parsed.database in (None, "", ":memory:"):
        options["poolclass"] = StaticPool
    return options


def _configure_sqlite(engine: Engine) -> None:
    """
    Foreign keys on, and transactions begun by SQLAlchemy rather than pysqlite.

    pysqlite defers BEGIN until the first DML statement, so a SAVEPOINT issued
    first would open the transaction itself and its RELEASE would commit.
    Emitting BEGIN explicitly keeps savepoints nested inside the unit of work.
    """

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def begin_transaction(conn):
        conn.exec_driver_sql("BEGIN")


class Database:
    """
    Engine plus session factory for one database URL.

    Sessions come from ``session()``, which commits when the block exits
    cleanly and rolls back when it raises. Sessions keep loaded attributes
    after commit so route handlers can serialize what they wrote.
    """

    def __init__(self, database_url: str | None = None, settings: Settings | None = None):
        settings = settings or get_settings()
        self.url = database_url or settings.database_url

        self.engine = create_engine(self.url, **_engine_options(self.url, settings))
        if self.engine.dialect.name == "sqlite":
            _configure_sqlite(self.engine)

        self.SessionLocal = sessionmaker(
            bind=self.engine,
            autoflush=False,
            expire_on_commit=False,
        )

    def create_all_tables(self) -> None:
        """Create any missing tables for the mapped models."""
        # Importing the package registers every model on Base.metadata
        from . import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def drop_all_tables(self) -> None:
        """Drop all tables. Tests only."""
        Base.metadata.drop_all(bind=self.engine)

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """One unit of work: commit on success, rollback on error, always close."""
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def health_check(self) -> dict:
        """
        Run ``SELECT 1`` against the database.

        Returns:
            dict with 'healthy' (bool), 'latency_ms' (float), and 'error' (str or None)
        """
        start = time.perf_counter()
        error = None
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except Exception as e:
            error = str(e)
        latency = round((time.perf_counter() - start) * 1000, 2)
        return {"healthy": error is None, "latency_ms": latency, "error": error}

    def dispose(self) -> None:
        """Close all pooled connections."""
        self.engine.dispose()


__all__ = ["Base", "Database"]
