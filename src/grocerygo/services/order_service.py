"""Checkout and order history service."""
from decimal import Decimal
from typing import List, Optional, Any, cast
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from grocerygo.config.settings import get_settings
from grocerygo.domain.pricing import compute_subtotal, compute_grand_total
from grocerygo.domain.types import OrderStatus, OrderItemSnapshot
from grocerygo.models import CartItem, Order, OrderItem
from .base_service import BaseService, Result


class OrderService(BaseService):
    """Service for turning the cart into orders and tracking them."""

    def __init__(self, session, delivery_fee: Optional[Decimal] = None):
        super().__init__(session)
        self.delivery_fee = get_settings().DELIVERY_FEE if delivery_fee is None else delivery_fee

    def checkout(self, delivery_address: str) -> Result[Order]:
        """
        Place an order for everything in the cart.

        The order insert and the cart clear are one transaction: if either
        fails, neither the order nor the cart change is kept.

        Args:
            delivery_address: Where to deliver the order

        Returns:
            Result containing the created order or error
        """
        address_result = self._validate_name(delivery_address, field="Delivery address")
        if not address_result.success:
            return cast(Result[Order], address_result)

        try:
            with self.transaction.transaction() as session:
                cart_items = session.execute(
                    select(CartItem).order_by(CartItem.added_date.desc(), CartItem.id.desc())
                ).scalars().all()
                if not cart_items:
                    return Result.fail(
                        "Your cart is empty",
                        suggestions=["Add items from the catalog before checking out"]
                    )

                snapshots = [OrderItemSnapshot.from_cart_item(item) for item in cart_items]
                subtotal = compute_subtotal(snapshots)
                total = compute_grand_total(subtotal, self.delivery_fee)

                order = Order(
                    order_date=self._get_now(),
                    total_amount=total,
                    status=OrderStatus.PENDING,
                    delivery_address=address_result.data,
                    items=[
                        OrderItem(position=position, **snapshot.model_dump())
                        for position, snapshot in enumerate(snapshots)
                    ],
                )
                session.add(order)
                session.flush()

                for item in cart_items:
                    session.delete(item)
                session.flush()

                self._log_action(
                    "checkout",
                    order_id=order.id,
                    line_count=len(snapshots),
                    subtotal=str(subtotal),
                    total=str(total)
                )

            self.session.refresh(order)
            return Result.ok(order, subtotal=subtotal, delivery_fee=self.delivery_fee)

        except Exception:
            self.logger.exception("Checkout failed")
            return Result.fail(
                "Failed to place order",
                suggestions=["Your cart was not changed, try again"]
            )

    def update_status(self, order_id: int, status: Any) -> Result[Order]:
        """
        Change an order's status.

        Args:
            order_id: ID of the order
            status: One of Pending, Processing, Shipped, Delivered, Cancelled

        Returns:
            Result containing the updated order or error
        """
        try:
            new_status = OrderStatus.parse(status)
        except ValueError as e:
            return Result.fail(str(e))

        try:
            with self.transaction.transaction() as session:
                order = session.get(Order, order_id)
                if not order:
                    return Result.fail("Order not found")

                old_status = order.status
                order.status = new_status

                self._log_action(
                    "update_order_status",
                    order_id=order_id,
                    old_status=old_status.value,
                    new_status=new_status.value
                )

            self.session.refresh(order)
            return Result.ok(order)

        except Exception:
            self.logger.exception("Failed to update order status")
            return Result.fail("Failed to update order status")

    def get_order(self, order_id: int) -> Result[Order]:
        """Get a single order with its items."""
        try:
            order = self.session.execute(
                select(Order)
                .options(selectinload(Order.items))
                .where(Order.id == order_id)
            ).scalar_one_or_none()
            if not order:
                return Result.fail("Order not found")
            return Result.ok(order)
        except Exception:
            self.logger.exception("Failed to get order")
            return Result.fail("Failed to load order")

    def get_orders(self) -> Result[List[Order]]:
        """Get order history, newest first."""
        try:
            orders = self.session.execute(
                select(Order)
                .options(selectinload(Order.items))
                .order_by(Order.order_date.desc(), Order.id.desc())
            ).scalars().all()
            return Result.ok(list(orders))
        except Exception:
            self.logger.exception("Failed to load orders")
            return Result.fail("Failed to load orders")

    def delete_order(self, order_id: int) -> Result[Order]:
        """Remove an order from the history."""
        try:
            with self.transaction.transaction() as session:
                order = session.get(Order, order_id)
                if not order:
                    return Result.fail("Order not found")

                session.delete(order)

                self._log_action("delete_order", order_id=order_id)
                return Result.ok(order)

        except Exception:
            self.logger.exception("Failed to delete order")
            return Result.fail("Failed to delete order")
