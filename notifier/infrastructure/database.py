"""Database configuration and session management."""

from __future__ import annotations

from collections.abc import Generator

import logging

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


class Database:
    """Own the engine and session factory used by the notification engine.

    The handle is created by the process entry point and passed to whoever
    needs it; ``open`` and ``close`` bound the lifetime of the connection pool.
    """

    def __init__(self, url: str, *, echo: bool = False) -> None:
        self.url = url
        self.echo = echo
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Database is not open")
        return self._engine

    def open(self) -> "Database":
        """Create the engine and session factory if they do not exist yet."""

        if self._engine is not None:
            return self

        connect_args: dict[str, object] = {}
        if self.url.startswith("sqlite"):
            connect_args = {"check_same_thread": False, "timeout": 30}

        engine = create_engine(
            self.url,
            echo=self.echo,
            pool_pre_ping=True,
            connect_args=connect_args,
        )
        if engine.dialect.name == "sqlite":
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)

        self._engine = engine
        self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        logger.info("Database engine opened for dialect %s", engine.dialect.name)
        return self

    def close(self) -> None:
        """Dispose the connection pool."""

        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database engine disposed")

    def session(self) -> Session:
        """Return a new session bound to the open engine."""

        if self._session_factory is None:
            raise RuntimeError("Database is not open")
        return self._session_factory()

    def create_all(self) -> None:
        """Ensure all ORM models have corresponding database tables."""

        from notifier.infrastructure import models  # noqa: F401  # ensure models are imported

        Base.metadata.create_all(bind=self.engine, checkfirst=True)

    def __enter__(self) -> "Database":
        return self.open()

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_database(request: Request) -> Database:
    """Return the database handle attached to the running application."""

    database = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Application database has not been configured")
    return database


def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    db = get_database(request).session()
    try:
        yield db
    finally:
        db.close()


__all__ = ["Base", "Database", "get_database", "get_db"]
