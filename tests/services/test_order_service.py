"""Tests for checkout and order tracking."""
import pytest
from decimal import Decimal
from sqlalchemy import select

from grocerygo.domain.types import OrderStatus
from grocerygo.models import CartItem, Order, OrderItem
from grocerygo.services.cart_service import CartService
from grocerygo.services.order_service import OrderService


def test_checkout_milk_example(cart_service, order_service, milk):
    """Test the single-milk order: 4.29 + 2.99 delivery = 7.28."""
    cart_service.add_to_cart(milk.id, 1)
    assert cart_service.get_summary().data.total == Decimal("7.28")

    result = order_service.checkout("1 Main St")
    assert result.success
    order = result.data
    assert order.total_amount == Decimal("7.28")
    assert order.status == OrderStatus.PENDING
    assert order.delivery_address == "1 Main St"
    assert [(i.grocery_name, i.quantity, i.price) for i in order.items] == [
        ("Milk", 1, Decimal("4.29"))
    ]
    assert result.metadata["subtotal"] == Decimal("4.29")

    assert cart_service.get_cart().data == []


def test_checkout_charges_the_total_shown_in_the_cart(session, milk):
    """Test that a non-default fee gives the same total in the cart and the order."""
    fee = Decimal("5.00")
    cart_service = CartService(session, delivery_fee=fee)
    order_service = OrderService(session, delivery_fee=fee)
    cart_service.add_to_cart(milk.id, 1)
    summary = cart_service.get_summary().data
    assert summary.total == Decimal("9.29")

    order = order_service.checkout("1 Main St").data
    assert order.total_amount == summary.total
    assert order.subtotal == summary.subtotal
    assert order.delivery_fee == fee


def test_checkout_multiple_items(cart_service, order_service, milk, bread, apples):
    """Test totals and snapshot size for a larger cart."""
    cart_service.add_to_cart(milk.id, 2)
    cart_service.add_to_cart(bread.id, 1)
    cart_service.add_to_cart(apples.id, 3)
    summary = cart_service.get_summary().data

    result = order_service.checkout("  42 Elm Rd  ")
    assert result.success
    order = result.data
    assert order.total_amount == summary.subtotal + Decimal("2.99")
    assert len(order.items) == 3
    assert order.delivery_address == "42 Elm Rd"
    assert {i.grocery_name for i in order.items} == {"Milk", "White Bread", "Red Apples"}
    assert sum(i.total_price for i in order.items) == summary.subtotal
    assert cart_service.get_cart().data == []


def test_checkout_requires_address(cart_service, order_service, milk):
    """Test that a blank delivery address is rejected."""
    cart_service.add_to_cart(milk.id)

    for address in ["", "   ", None]:
        result = order_service.checkout(address)
        assert not result.success
        assert "Delivery address cannot be empty" in result.error

    assert len(cart_service.get_cart().data) == 1
    assert order_service.get_orders().data == []


def test_checkout_requires_items(order_service):
    """Test that an empty cart cannot be checked out."""
    result = order_service.checkout("1 Main St")
    assert not result.success
    assert "cart is empty" in result.error
    assert order_service.get_orders().data == []


def test_checkout_failure_keeps_cart(cart_service, order_service, session, milk, bread, monkeypatch):
    """Test that a failure while clearing the cart leaves no order behind."""
    cart_service.add_to_cart(milk.id)
    cart_service.add_to_cart(bread.id)

    original_delete = session.delete
    deleted = []

    def failing_delete(instance):
        if isinstance(instance, CartItem) and deleted:
            raise RuntimeError("disk full")
        deleted.append(instance)
        original_delete(instance)

    monkeypatch.setattr(session, "delete", failing_delete)

    result = order_service.checkout("1 Main St")
    assert not result.success
    assert "Failed to place order" in result.error

    monkeypatch.undo()
    assert session.execute(select(Order)).scalars().all() == []
    assert session.execute(select(OrderItem)).scalars().all() == []
    assert len(cart_service.get_cart().data) == 2


def test_order_snapshot_is_independent(cart_service, order_service, milk):
    """Test that later cart changes do not alter a placed order."""
    cart_service.add_to_cart(milk.id, 2)
    order = order_service.checkout("1 Main St").data
    order_id = order.id

    # Same product goes back into the cart and is changed
    item = cart_service.add_to_cart(milk.id, 1).data
    cart_service.adjust_quantity(item.id, 5)
    cart_service.remove_item(item.id)

    reloaded = order_service.get_order(order_id).data
    assert reloaded.total_amount == Decimal("11.57")
    assert len(reloaded.items) == 1
    assert reloaded.items[0].quantity == 2
    assert reloaded.items[0].price == Decimal("4.29")


@pytest.mark.parametrize("status", ["Pending", "Processing", "Shipped", "Delivered", "Cancelled"])
def test_update_status(cart_service, order_service, milk, status):
    """Test every defined status transition."""
    cart_service.add_to_cart(milk.id)
    order = order_service.checkout("1 Main St").data

    result = order_service.update_status(order.id, status)
    assert result.success
    assert result.data.status.value == status
    assert result.data.total_amount == Decimal("7.28")
    assert len(result.data.items) == 1


def test_update_status_accepts_enum(cart_service, order_service, milk):
    """Test passing an OrderStatus member."""
    cart_service.add_to_cart(milk.id)
    order = order_service.checkout("1 Main St").data

    result = order_service.update_status(order.id, OrderStatus.SHIPPED)
    assert result.success
    assert order_service.get_order(order.id).data.status == OrderStatus.SHIPPED


@pytest.mark.parametrize("status", ["shipped", "Returned", "", None])
def test_update_status_rejects_unknown(cart_service, order_service, milk, status):
    """Test that undefined statuses are rejected and nothing changes."""
    cart_service.add_to_cart(milk.id)
    order = order_service.checkout("1 Main St").data

    result = order_service.update_status(order.id, status)
    assert not result.success
    assert "Invalid order status" in result.error
    assert order_service.get_order(order.id).data.status == OrderStatus.PENDING


def test_update_status_unknown_order(order_service):
    """Test updating an order that does not exist."""
    result = order_service.update_status(999, "Shipped")
    assert not result.success
    assert "Order not found" in result.error


def test_get_orders_newest_first(cart_service, order_service, milk, bread):
    """Test order history ordering."""
    cart_service.add_to_cart(milk.id)
    first = order_service.checkout("1 Main St").data
    cart_service.add_to_cart(bread.id)
    second = order_service.checkout("2 Main St").data

    orders = order_service.get_orders().data
    assert [o.id for o in orders] == [second.id, first.id]


def test_delete_order(cart_service, order_service, session, milk):
    """Test removing an order from the history."""
    cart_service.add_to_cart(milk.id)
    order = order_service.checkout("1 Main St").data
    order_id = order.id

    result = order_service.delete_order(order_id)
    assert result.success
    assert order_service.get_orders().data == []
    assert session.execute(select(OrderItem)).scalars().all() == []

    result = order_service.delete_order(order_id)
    assert not result.success
    assert "Order not found" in result.error


def test_get_order_not_found(order_service):
    """Test looking up an unknown order."""
    result = order_service.get_order(999)
    assert not result.success
