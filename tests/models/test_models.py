"""Tests for GroceryGo database models."""
import pytest
from decimal import Decimal
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from grocerygo.domain.types import OrderStatus
from grocerygo.models import CartItem, Order, OrderItem, ShoppingListItem


def test_grocery_creation(milk):
    """Test that a catalog product keeps its values."""
    assert milk.id is not None
    assert milk.name == "Milk"
    assert milk.category == "Dairy"
    assert milk.price == Decimal("4.29")
    assert milk.unit == "gallon"
    assert milk.image_name is None


def test_grocery_negative_price_rejected(session):
    """Test the non-negative price constraint."""
    from grocerygo.models import Grocery

    session.add(Grocery(name="Refund", category="Other", price=Decimal("-1.00")))
    with pytest.raises(IntegrityError):
        session.commit()
    session.rollback()


def test_cart_item_total_price(session, milk):
    """Test that the line total is derived from price and quantity."""
    item = CartItem(
        grocery_id=milk.id,
        grocery_name=milk.name,
        price=milk.price,
        quantity=3,
        unit=milk.unit,
    )
    session.add(item)
    session.commit()
    session.refresh(item)

    assert item.total_price == Decimal("12.87")
    assert item.added_date.tzinfo is not None
    assert item.grocery == milk

    item.quantity = 1
    assert item.total_price == Decimal("4.29")


def test_cart_item_unique_per_grocery(session, milk):
    """Test that the store rejects a second cart entry for the same product."""
    for _ in range(2):
        session.add(CartItem(
            grocery_id=milk.id,
            grocery_name=milk.name,
            price=milk.price,
            unit=milk.unit,
        ))
    with pytest.raises(IntegrityError):
        session.commit()
    session.rollback()


def test_cart_item_quantity_floor(session, milk):
    """Test that a zero quantity cannot be stored."""
    session.add(CartItem(
        grocery_id=milk.id,
        grocery_name=milk.name,
        price=milk.price,
        quantity=0,
        unit=milk.unit,
    ))
    with pytest.raises(IntegrityError):
        session.commit()
    session.rollback()


def test_order_with_items(session):
    """Test that an order stores its items in position order."""
    order = Order(
        total_amount=Decimal("10.27"),
        delivery_address="1 Main St",
        items=[
            OrderItem(grocery_name="Bread", quantity=1, price=Decimal("2.99"), unit="loaf", position=1),
            OrderItem(grocery_name="Milk", quantity=1, price=Decimal("4.29"), unit="gallon", position=0),
        ],
    )
    session.add(order)
    session.commit()
    session.refresh(order)

    assert order.status == OrderStatus.PENDING
    assert order.status == "Pending"
    assert order.order_date.tzinfo is not None
    assert [item.grocery_name for item in order.items] == ["Milk", "Bread"]
    assert order.items[0].total_price == Decimal("4.29")
    assert order.item_count == 2
    assert order.subtotal == Decimal("7.28")
    assert order.delivery_fee == Decimal("2.99")


def test_order_delete_cascades_to_items(session):
    """Test that removing an order removes its snapshot lines."""
    order = Order(
        total_amount=Decimal("7.28"),
        delivery_address="1 Main St",
        items=[OrderItem(grocery_name="Milk", quantity=1, price=Decimal("4.29"), unit="gallon")],
    )
    session.add(order)
    session.commit()

    session.delete(order)
    session.commit()

    assert session.execute(select(OrderItem)).scalars().all() == []


def test_shopping_list_item_defaults(session):
    """Test shopping list entry defaults."""
    item = ShoppingListItem(name="Eggs")
    session.add(item)
    session.commit()
    session.refresh(item)

    assert item.id is not None
    assert item.category is None
    assert not item.is_completed
    assert item.date_added.tzinfo is not None
