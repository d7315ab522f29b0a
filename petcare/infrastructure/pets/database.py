"""
Adapter: SQL database and unit of work.

Builds the SQLAlchemy engine and implements the UnitOfWork port.
Repository calls made inside ``transaction()`` share one connection
and commit or roll back together; outside of it each call runs in its
own ``engine.begin()`` block.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from petcare.domain.pets.ports import UnitOfWork
from petcare.infrastructure.pets.tables import metadata

logger = logging.getLogger(__name__)

IN_MEMORY_SQLITE_DSNS = ("sqlite://", "sqlite:///:memory:")


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(dsn: str) -> Engine:
    """Build a SQLAlchemy engine for a DSN.

    SQLite connections may be used from FastAPI's worker threads, and an
    in-memory SQLite database is kept on a single shared connection.

    Args:
        dsn: Database URL (postgresql://..., sqlite:///file.db, sqlite://).
    """
    kwargs: dict = {"pool_pre_ping": True}
    if dsn.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if dsn in IN_MEMORY_SQLITE_DSNS:
            kwargs["poolclass"] = StaticPool
    engine = create_engine(dsn, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


class SqlDatabase(UnitOfWork):
    """Connection scoping over one engine, shared by the repositories.

    The active transaction is tracked per thread.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._local = threading.local()

    @property
    def engine(self) -> Engine:
        return self._engine

    def create_schema(self) -> None:
        """Create missing tables."""
        metadata.create_all(self._engine)
        logger.info("Database schema ready (%s).", self._engine.dialect.name)

    def drop_schema(self) -> None:
        metadata.drop_all(self._engine)

    def ping(self) -> bool:
        """Return True when a trivial query succeeds."""
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.warning("Database ping failed: %s", type(exc).__name__)
            return False
        return True

    def _active(self):
        return getattr(self._local, "connection", None)

    @contextmanager
    def connect(self) -> Iterator[Connection]:
        """Yield the active transaction's connection, or a fresh one."""
        active = self._active()
        if active is not None:
            yield active
            return
        with self._engine.begin() as conn:
            yield conn

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Group repository calls into one transaction. Nested calls join it."""
        if self._active() is not None:
            yield
            return
        with self._engine.begin() as conn:
            self._local.connection = conn
            try:
                yield
            finally:
                self._local.connection = None
