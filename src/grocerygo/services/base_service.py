"""Base service class with common functionality."""
from typing import TypeVar, Generic, Optional, List
from datetime import datetime, UTC
from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from grocerygo.utils.logger import get_logger
from grocerygo.db.session import TransactionManager

# Generic type for service results
T = TypeVar('T')


class Result(BaseModel, Generic[T]):
    """Generic result type for service operations."""
    success: bool
    data: Optional[T] = None
    error: str = ""
    suggestions: List[str] = []
    metadata: dict = {}

    # Allow arbitrary types (like SQLAlchemy models)
    model_config = ConfigDict(arbitrary_types_allowed=True)

    @classmethod
    def ok(cls, data: T, **metadata) -> 'Result[T]':
        """Create a successful result."""
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def fail(cls, error: str, suggestions: Optional[List[str]] = None) -> 'Result[T]':
        """Create a failed result."""
        return cls(success=False, error=error or "Unknown error", suggestions=suggestions or [])


class BaseService:
    """Base class for all services."""

    def __init__(self, session: Session):
        """
        Initialize the service.

        Args:
            session: Database session
        """
        self.session = session
        self.logger = get_logger(self.__class__.__name__)
        self.transaction = TransactionManager(session)

    def _log_action(
        self,
        action: str,
        status: str = "success",
        **kwargs
    ) -> None:
        """
        Log a service action.

        Args:
            action: Name of the action
            status: Status of the action
            **kwargs: Additional log data
        """
        self.logger.info(f"{action}: {status}", **kwargs)

    def _get_now(self) -> datetime:
        """Get current UTC datetime."""
        return datetime.now(UTC)

    def _validate_name(self, name: Optional[str], field: str = "Name") -> Result[str]:
        """
        Validate a free-text name.

        Args:
            name: Name to validate
            field: Label used in the error message

        Returns:
            Result containing the stripped name, or an error
        """
        if not name or not name.strip():
            return Result.fail(f"{field} cannot be empty")
        return Result.ok(name.strip())
