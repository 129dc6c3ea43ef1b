"""
Document Store Connection Management.

This module handles the document store connection via SQLAlchemy.
It provides:
- Engine and session lifecycle
- Health checks
- Startup policy: a store that cannot be opened is fatal in production
  and degraded (repository calls fail with RepositoryUnavailable) otherwise
"""
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from aptix.core.config import Settings
from aptix.core.logging_config import get_logger

logger = get_logger(__name__)


def _redact(url: str) -> str:
    return url.split("@")[-1] if "@" in url else url


def _is_in_memory_sqlite(url: str) -> bool:
    database = url.split("://", 1)[-1].lstrip("/")
    return database == "" or database.startswith(":memory:") or "mode=memory" in url


class DatabaseConnection:
    """
    Manages document store connections and session lifecycle.

    Example:
        >>> db = DatabaseConnection("sqlite:///./aptix.db")
        >>> with db.get_session() as session:
        ...     session.execute(text("SELECT 1"))
    """

    def __init__(self, connection_url: Optional[str] = None, engine: Optional[Engine] = None):
        """
        Initialize the engine.

        Args:
            connection_url: SQLAlchemy URL. Ignored when ``engine`` is given.
            engine: Pre-built engine (tests pass an in-memory SQLite engine).
        """
        if engine is None:
            if not connection_url:
                raise ValueError("A connection URL or engine is required")
            engine = self._create_engine(connection_url)

        self.engine = engine
        self._session_factory = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

        logger.info(f"Document store initialized: {_redact(str(self.engine.url))}")

    @staticmethod
    def _create_engine(connection_url: str) -> Engine:
        if connection_url.startswith("sqlite"):
            # SQLite connections are shared with the threadpool
            options = {"connect_args": {"check_same_thread": False}, "echo": False}
            if _is_in_memory_sqlite(connection_url):
                # An in-memory database exists only inside its one connection
                options["poolclass"] = StaticPool
            return create_engine(connection_url, **options)
        # pool_pre_ping: test connections before using (handles stale connections)
        return create_engine(
            connection_url,
            pool_pre_ping=True,
            pool_size=5,
            max_overflow=10,
            echo=False,
        )

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """
        Get a session with automatic cleanup.

        Transactions are rolled back on error, committed on success.

        Yields:
            SQLAlchemy Session object
        """
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Document store error, rolling back: {e}")
            raise
        finally:
            session.close()

    def check_connection(self) -> bool:
        """
        Test document store connectivity.

        Returns:
            True if connection is healthy, False otherwise.
        """
        try:
            with self.get_session() as session:
                session.execute(text("SELECT 1"))
            logger.debug("Document store connection check: OK")
            return True
        except SQLAlchemyError as e:
            logger.error(f"Document store connection check failed: {e}")
            return False

    def close(self):
        """Close all connections in the pool."""
        self.engine.dispose()
        logger.info("Document store connections closed")


def open_document_store(settings: Settings) -> Optional[DatabaseConnection]:
    """
    Open the document store named by ``settings.database_url``.

    Returns:
        The connection, or None when opening failed outside production

    Raises:
        Exception: the original failure, in production mode
    """
    try:
        return DatabaseConnection(settings.database_url)
    except Exception as e:
        logger.error(f"Failed to initialize document store: {e}")
        if settings.is_production():
            raise
        logger.warning(
            "Running in development mode with document store initialization error. "
            "Agent lookups will fail until the store is reachable."
        )
        return None
