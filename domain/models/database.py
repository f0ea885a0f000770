"""
Database handle and session management.

The engine is owned by an explicitly constructed ``Database`` object; the
FastAPI lifespan connects it on startup and closes it on shutdown. Nothing is
created at import time.
"""

import logging
from typing import Generator, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.exceptions import UnavailableError

logger = logging.getLogger("pizzeria.database")

# Create SQLAlchemy Base
Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the SQLAlchemy engine and session factory for one relational store."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    @property
    def dialect(self) -> str:
        """Backend name of the URL ("postgresql", "sqlite"); never includes credentials"""
        return make_url(self.url).get_backend_name()

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise UnavailableError("Database not connected")
        return self._engine

    def connect(self) -> None:
        """
        Create the engine and verify the store answers.

        In-memory SQLite URLs share a single connection so every session
        sees the same data.

        Raises:
            UnavailableError: If the store cannot be reached
        """
        if self._engine is not None:
            return

        kwargs = {"echo": self.echo, "future": True}
        if self.url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in self.url or self.url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:"):
                kwargs["poolclass"] = StaticPool
        else:
            kwargs["pool_pre_ping"] = True

        engine = create_engine(self.url, **kwargs)
        if engine.dialect.name == "sqlite":
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)

        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            engine.dispose()
            logger.error(f"Could not connect to database: {e}")
            raise UnavailableError(
                "Could not connect to database", details={"dialect": engine.dialect.name}
            ) from e

        self._engine = engine
        self._session_factory = sessionmaker(
            bind=engine, autoflush=False, expire_on_commit=False, future=True
        )
        logger.info(f"Connected to {engine.dialect.name} database")

    def init_schema(self) -> None:
        """
        Create all tables and indexes that do not exist yet.

        Raises:
            UnavailableError: If the store fails while creating the schema
        """
        # Import models so they are registered on Base.metadata
        import domain.models.ingredient  # noqa: F401
        import domain.models.pizza  # noqa: F401

        try:
            with self.engine.begin() as conn:
                Base.metadata.create_all(bind=conn)
        except SQLAlchemyError as e:
            logger.error(f"Could not create database schema: {e}")
            raise UnavailableError(
                "Could not create database schema", details={"dialect": self.dialect}
            ) from e
        logger.info("Database tables created successfully")

    def close(self) -> None:
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database connection closed")

    def create_session(self) -> Session:
        if self._session_factory is None:
            raise UnavailableError("Database not connected")
        return self._session_factory()

    def get_session(self) -> Generator[Session, None, None]:
        """Yield a session that is always closed (for FastAPI dependency injection)"""
        db = self.create_session()
        try:
            yield db
        finally:
            db.close()

    def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)"""
        if self._engine is None:
            return False
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error(f"DB health check failed: {e}")
            return False
