"""
Database utility functions for consistent session management across the application.

Scripts and startup checks should use get_db_session(); request handlers receive
their session through the FastAPI dependency in vhsa.api.deps.
"""

import logging
from contextlib import contextmanager
from typing import Generator, List

from sqlalchemy import inspect, text
from sqlalchemy.orm import Session

from vhsa.db.base import Base
from vhsa.db.session import SessionLocal

logger = logging.getLogger(__name__)


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """
    Get a database session with proper cleanup using context manager.

    Commits on success, rolls back and re-raises on any exception.

    Usage:
        with get_db_session() as db:
            result = db.query(Model).all()
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Database session error: {e}")
        raise
    finally:
        db.close()


def check_database_connection(db: Session) -> bool:
    """Run a trivial query; returns False instead of raising."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connection check failed: {e}")
        return False


def find_missing_tables(db: Session) -> List[str]:
    inspector = inspect(db.bind)
    existing_tables = set(inspector.get_table_names())
    required_tables = [table.name for table in Base.metadata.sorted_tables]
    return [table for table in required_tables if table not in existing_tables]
