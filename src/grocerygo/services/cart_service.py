"""Cart management service."""
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from grocerygo.config.settings import get_settings
from grocerygo.domain.pricing import compute_subtotal, compute_grand_total
from grocerygo.domain.types import Quantity
from grocerygo.models import CartItem, Grocery
from .base_service import BaseService, Result


@dataclass
class CartSummary:
    """Totals shown under the cart."""
    subtotal: Decimal
    delivery_fee: Decimal
    total: Decimal
    line_count: int
    unit_count: int


class CartService(BaseService):
    """Service for managing cart items."""

    def __init__(self, session, delivery_fee: Optional[Decimal] = None):
        super().__init__(session)
        self.delivery_fee = get_settings().DELIVERY_FEE if delivery_fee is None else delivery_fee

    def add_to_cart(
        self,
        grocery_id: int,
        quantity: int = 1
    ) -> Result[CartItem]:
        """
        Add a catalog product to the cart.

        Quantities are never merged: a product already in the cart is rejected.

        Args:
            grocery_id: ID of the catalog product
            quantity: Initial quantity (default: 1)

        Returns:
            Result containing the created cart item or error
        """
        try:
            item_quantity = Quantity(value=quantity)
        except ValueError:
            return Result.fail("Quantity must be at least 1")

        try:
            with self.transaction.transaction() as session:
                grocery = session.get(Grocery, grocery_id)
                if not grocery:
                    return Result.fail("Product not found")

                existing = session.execute(
                    select(CartItem).where(CartItem.grocery_id == grocery_id)
                ).scalar_one_or_none()
                if existing:
                    return Result.fail(
                        f"'{grocery.name}' is already in your cart",
                        suggestions=["Change the quantity from the cart instead"]
                    )

                item = CartItem(
                    grocery_id=grocery.id,
                    grocery_name=grocery.name,
                    price=grocery.price,
                    quantity=item_quantity.value,
                    unit=grocery.unit,
                    added_date=self._get_now(),
                )
                session.add(item)
                session.flush()

                self._log_action(
                    "add_to_cart",
                    cart_item_id=item.id,
                    grocery_id=grocery_id,
                    quantity=item.quantity
                )

            self.session.refresh(item)
            return Result.ok(item)

        except IntegrityError:
            self.logger.exception("Failed to add item to cart")
            return Result.fail("Product is already in your cart")
        except Exception:
            self.logger.exception("Failed to add item to cart")
            return Result.fail("Failed to add item to cart")

    def is_in_cart(self, grocery_id: int) -> bool:
        """Whether the product already has a cart entry."""
        return self.session.execute(
            select(CartItem.id).where(CartItem.grocery_id == grocery_id)
        ).first() is not None

    def adjust_quantity(
        self,
        cart_item_id: int,
        delta: int
    ) -> Result[CartItem]:
        """
        Change a cart item's quantity by ``delta``.

        A change that would take the quantity below 1 leaves it untouched.

        Args:
            cart_item_id: ID of the cart item
            delta: Amount to add (negative to decrement)

        Returns:
            Result containing the cart item or error
        """
        try:
            with self.transaction.transaction() as session:
                item = session.get(CartItem, cart_item_id)
                if not item:
                    return Result.fail("Cart item not found")

                new_quantity = item.quantity + delta
                if new_quantity < 1:
                    self.logger.debug(
                        "Quantity floor reached",
                        cart_item_id=cart_item_id,
                        quantity=item.quantity
                    )
                    return Result.ok(item, changed=False)

                item.quantity = new_quantity

                self._log_action(
                    "adjust_quantity",
                    cart_item_id=cart_item_id,
                    delta=delta,
                    quantity=new_quantity
                )

            self.session.refresh(item)
            return Result.ok(item, changed=True)

        except Exception:
            self.logger.exception("Failed to adjust cart quantity")
            return Result.fail("Failed to update quantity")

    def increment(self, cart_item_id: int) -> Result[CartItem]:
        return self.adjust_quantity(cart_item_id, 1)

    def decrement(self, cart_item_id: int) -> Result[CartItem]:
        return self.adjust_quantity(cart_item_id, -1)

    def remove_item(self, cart_item_id: int) -> Result[CartItem]:
        """
        Remove an item from the cart.

        Args:
            cart_item_id: ID of the cart item to remove

        Returns:
            Result containing the removed item or error
        """
        try:
            with self.transaction.transaction() as session:
                item = session.get(CartItem, cart_item_id)
                if not item:
                    return Result.fail("Cart item not found")

                session.delete(item)

                self._log_action(
                    "remove_from_cart",
                    cart_item_id=cart_item_id,
                    grocery_id=item.grocery_id
                )
                return Result.ok(item)

        except Exception:
            self.logger.exception("Failed to remove cart item")
            return Result.fail("Failed to remove item from cart")

    def get_cart(self) -> Result[List[CartItem]]:
        """Get all cart items, most recently added first."""
        try:
            items = self.session.execute(
                select(CartItem).order_by(CartItem.added_date.desc(), CartItem.id.desc())
            ).scalars().all()
            return Result.ok(list(items))
        except Exception:
            self.logger.exception("Failed to load cart")
            return Result.fail("Failed to load cart")

    def get_summary(self) -> Result[CartSummary]:
        """Subtotal, delivery fee and grand total of the current cart."""
        cart_result = self.get_cart()
        if not cart_result.success:
            return Result.fail(cart_result.error)

        items = cart_result.data
        delivery_fee = self.delivery_fee
        subtotal = compute_subtotal(items)
        return Result.ok(CartSummary(
            subtotal=subtotal,
            delivery_fee=delivery_fee,
            total=compute_grand_total(subtotal, delivery_fee),
            line_count=len(items),
            unit_count=sum(item.quantity for item in items),
        ))
