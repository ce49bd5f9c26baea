"""ShoppingListItem model for GroceryGo."""
from datetime import datetime
from typing import Optional
from sqlalchemy import String, Boolean
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TZDateTime, utc_now


class ShoppingListItem(Base):
    """Model representing a free-text entry in the shopping to-do list."""

    __tablename__ = "shopping_list_items"

    # Primary key
    id: Mapped[int] = mapped_column(primary_key=True)

    # Fields
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    category: Mapped[Optional[str]] = mapped_column(String(50))
    is_completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    date_added: Mapped[datetime] = mapped_column(
        TZDateTime,
        default=utc_now,
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<ShoppingListItem(id={self.id}, name='{self.name}', completed={self.is_completed})>"
