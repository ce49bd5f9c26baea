"""Order and OrderItem models for GroceryGo."""
from datetime import datetime
from decimal import Decimal
from typing import List
from sqlalchemy import String, Integer, Numeric, Text, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from grocerygo.domain.pricing import compute_subtotal
from grocerygo.domain.types import OrderStatus
from .base import Base, TZDateTime, utc_now


class Order(Base):
    """Model representing a placed order.

    Only ``status`` changes after creation; the total and the item
    snapshot are fixed at checkout.
    """

    __tablename__ = "orders"

    # Primary key
    id: Mapped[int] = mapped_column(primary_key=True)

    # Fields
    order_date: Mapped[datetime] = mapped_column(
        TZDateTime,
        default=utc_now,
        nullable=False
    )
    total_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[OrderStatus] = mapped_column(
        SAEnum(
            OrderStatus,
            name="order_status",
            native_enum=False,
            validate_strings=True,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        default=OrderStatus.PENDING,
        nullable=False
    )
    delivery_address: Mapped[str] = mapped_column(Text, nullable=False)

    # Relationships
    items: Mapped[List["OrderItem"]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.position"
    )

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def subtotal(self) -> Decimal:
        return compute_subtotal(self.items)

    @property
    def delivery_fee(self) -> Decimal:
        """Fee charged at checkout, recovered from the stored total."""
        return self.total_amount - self.subtotal

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, status='{self.status.value}', total={self.total_amount})>"


class OrderItem(Base):
    """Model representing one line of an order's cart snapshot.

    Holds copies of the cart values, never a reference to the cart item.
    """

    __tablename__ = "order_items"

    # Primary key
    id: Mapped[int] = mapped_column(primary_key=True)

    # Fields
    grocery_name: Mapped[str] = mapped_column(String(100), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    unit: Mapped[str] = mapped_column(String(20), nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Foreign keys
    order_id: Mapped[int] = mapped_column(
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False
    )

    # Relationships
    order: Mapped[Order] = relationship(back_populates="items")

    @property
    def total_price(self) -> Decimal:
        return self.price * self.quantity

    def __repr__(self) -> str:
        return f"<OrderItem(name='{self.grocery_name}', quantity={self.quantity}, price={self.price})>"
