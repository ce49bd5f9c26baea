"""Grocery catalog model for GroceryGo."""
from decimal import Decimal
from typing import Optional
from sqlalchemy import String, Numeric, Text, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Grocery(Base):
    """Model representing a purchasable catalog product."""

    __tablename__ = "groceries"

    __table_args__ = (
        CheckConstraint("price >= 0", name="check_grocery_price_non_negative"),
    )

    # Primary key
    id: Mapped[int] = mapped_column(primary_key=True)

    # Fields
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    image_ref: Mapped[str] = mapped_column(String(100), default="cart", nullable=False)
    image_name: Mapped[Optional[str]] = mapped_column(String(100))
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    unit: Mapped[str] = mapped_column(String(20), default="each", nullable=False)

    def __repr__(self) -> str:
        return f"<Grocery(id={self.id}, name='{self.name}', price={self.price})>"
