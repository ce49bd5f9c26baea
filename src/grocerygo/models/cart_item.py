"""CartItem model for GroceryGo."""
from datetime import datetime
from decimal import Decimal
from sqlalchemy import String, Integer, Numeric, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TZDateTime, utc_now


class CartItem(Base):
    """Model representing a catalog product placed in the cart."""

    __tablename__ = "cart_items"

    # One cart entry per catalog product
    __table_args__ = (
        UniqueConstraint("grocery_id", name="uq_cart_item_grocery"),
        CheckConstraint("quantity >= 1", name="check_cart_quantity_positive"),
    )

    # Primary key
    id: Mapped[int] = mapped_column(primary_key=True)

    # Fields copied from the catalog when the item is added
    grocery_name: Mapped[str] = mapped_column(String(100), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    unit: Mapped[str] = mapped_column(String(20), default="each", nullable=False)

    quantity: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    added_date: Mapped[datetime] = mapped_column(
        TZDateTime,
        default=utc_now,
        nullable=False
    )

    # Foreign keys
    grocery_id: Mapped[int] = mapped_column(
        ForeignKey("groceries.id", ondelete="CASCADE"),
        nullable=False
    )

    # Relationships
    grocery = relationship("Grocery")

    @property
    def total_price(self) -> Decimal:
        """Line total, always derived from the current price and quantity."""
        return self.price * self.quantity

    def __repr__(self) -> str:
        return f"<CartItem(id={self.id}, name='{self.grocery_name}', quantity={self.quantity})>"
