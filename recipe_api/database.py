"""
Database connection and session management.

The Database object is the storage client shared by every service. It is
constructed explicitly, opened at application startup and closed at
shutdown (see the lifespan handler in recipe_api.main), and handed to the
services that need it rather than living in module-level state.

Usage:
    database = Database("sqlite:///./recipes.db")
    database.open()

    with database.transaction() as session:
        session.add(Tag(name="vegan"))
        # Commit happens automatically if no exception

    database.close()
"""

from contextlib import contextmanager
from typing import Iterator, Optional
import logging

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all ORM entities."""


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores REFERENCES clauses unless this is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the engine and session factory for one database."""

    def __init__(
        self,
        url: str,
        echo: bool = False,
        pool_size: int = 5,
        max_overflow: int = 10,
        pool_timeout: int = 30,
    ):
        self.url = url
        self.echo = echo
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.pool_timeout = pool_timeout
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @classmethod
    def from_settings(cls, settings) -> "Database":
        return cls(
            settings.database_url,
            echo=settings.db_echo,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
        )

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Database not opened. Call open() first.")
        return self._engine

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    def open(self) -> None:
        """Create the engine and session factory."""
        if self._engine is not None:
            return

        url = make_url(self.url)
        kwargs = {"echo": self.echo, "pool_pre_ping": True}

        if url.get_backend_name() == "sqlite":
            kwargs["connect_args"] = {"check_same_thread": False}
            if url.database in (None, "", ":memory:"):
                # Every connection to :memory: is a new empty database, so
                # share a single connection across the pool
                kwargs["poolclass"] = StaticPool
        else:
            kwargs.update(
                pool_size=self.pool_size,
                max_overflow=self.max_overflow,
                pool_timeout=self.pool_timeout,
            )

        engine = create_engine(self.url, **kwargs)
        if url.get_backend_name() == "sqlite":
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)

        self._engine = engine
        self._session_factory = sessionmaker(
            bind=engine,
            autoflush=False,
            expire_on_commit=False,
        )
        logger.info(f"Database opened ({url.get_backend_name()})")

    def close(self) -> None:
        """Dispose of all pooled connections."""
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database connections closed")

    def create_all(self) -> None:
        """Create all tables that do not exist yet."""
        # Entities register themselves on Base.metadata when imported
        from recipe_api.models import entities  # noqa: F401

        Base.metadata.create_all(self.engine)

    def drop_all(self) -> None:
        from recipe_api.models import entities  # noqa: F401

        Base.metadata.drop_all(self.engine)

    def _new_session(self) -> Session:
        if self._session_factory is None:
            raise RuntimeError("Database not opened. Call open() first.")
        return self._session_factory()

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        Provide a transactional scope for a unit of work.

        One session (and so one pooled connection) is held from the first
        statement until commit or rollback:
        - Commits on success
        - Rolls back on any exception, then re-raises it
        - Always closes the session, returning the connection to the pool
        """
        session = self._new_session()
        try:
            yield session
            session.commit()
        except Exception as e:
            session.rollback()
            logger.warning(f"Transaction rolled back: {type(e).__name__}")
            raise
        finally:
            session.close()

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Session for read-only work; always closed on exit."""
        session = self._new_session()
        try:
            yield session
        finally:
            session.close()

    def ping(self) -> bool:
        """Check if the database answers a trivial query."""
        try:
            with self.session() as session:
                return session.execute(text("SELECT 1")).scalar() == 1
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False
