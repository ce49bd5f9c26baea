"""Database session management for GroceryGo."""
from contextlib import contextmanager
from typing import Generator
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.engine import Engine
import sqlite3

from grocerygo.config.settings import get_settings

settings = get_settings()

# Enable SQLite foreign keys on every connection
@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Configure SQLite connection."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

engine = create_engine(settings.DB_URL, echo=settings.DB_ECHO)

# Create session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


def get_session() -> Session:
    """Get a new database session."""
    return SessionLocal()


class TransactionManager:
    """Manages database transactions with error handling."""

    def __init__(self, session: Session):
        self.session = session

    @contextmanager
    def transaction(self, *, auto_commit: bool = True) -> Generator[Session, None, None]:
        """
        Context manager for database transactions.

        Everything flushed inside the block is committed together or,
        if the block raises, rolled back together.

        Args:
            auto_commit: Whether to automatically commit on success

        Yields:
            Session: The database session

        Raises:
            Exception: Any exception that occurs during the transaction
        """
        try:
            yield self.session
            if auto_commit:
                self.session.commit()
        except Exception:
            self.session.rollback()
            raise
