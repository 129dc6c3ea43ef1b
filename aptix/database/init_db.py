"""
Database Initialization - Create document store tables.

Used at startup when DB_AUTO_INIT is enabled (local/dev bootstrap)
and by the test suite. Schema migrations for shared deployments are
managed outside this service.
"""
from aptix.core.logging_config import get_logger
from aptix.database.connection import DatabaseConnection
from aptix.database.models import Base

logger = get_logger(__name__)


def init_tables(db: DatabaseConnection) -> bool:
    """
    Create the agents and analytics tables if they don't exist.

    Returns:
        True if tables were created successfully
    """
    try:
        Base.metadata.create_all(db.engine)
        logger.info("Document store tables initialized successfully")
        return True
    except Exception as e:
        logger.error(f"Failed to initialize document store tables: {e}")
        raise


def drop_tables(db: DatabaseConnection) -> bool:
    """
    Drop the document store tables (use with caution!).

    Mainly for testing/development purposes.
    """
    try:
        Base.metadata.drop_all(db.engine)
        logger.warning("Document store tables dropped")
        return True
    except Exception as e:
        logger.error(f"Failed to drop document store tables: {e}")
        raise


def initialize_document_store(db: DatabaseConnection, production: bool, auto_init: bool = True) -> bool:
    """
    Verify connectivity and (optionally) create missing tables.

    Args:
        db: Open document store
        production: Failures are fatal when True
        auto_init: Create missing tables

    Returns:
        True when the store is ready, False when running degraded

    Raises:
        RuntimeError: the store is unusable and ``production`` is True
    """
    try:
        if not db.check_connection():
            raise RuntimeError("Document store is unreachable")
        if auto_init:
            init_tables(db)
        return True
    except Exception as e:
        logger.error(f"Document store startup check failed: {e}")
        if production:
            raise RuntimeError(f"Document store startup check failed: {e}") from e
        logger.warning("Continuing in degraded mode; some features may not work correctly.")
        return False
