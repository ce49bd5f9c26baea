"""Test configuration and fixtures for GroceryGo."""
import pytest
from decimal import Decimal
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from grocerygo.models import Base, Grocery
from grocerygo.services.catalog_service import CatalogService
from grocerygo.services.cart_service import CartService
from grocerygo.services.order_service import OrderService
from grocerygo.services.shopping_list_service import ShoppingListService

DELIVERY_FEE = Decimal("2.99")


@pytest.fixture
def engine():
    """Create a fresh in-memory database for each test."""
    test_engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session(engine):
    """Create a new database session for a test."""
    session = Session(bind=engine, autoflush=False)
    yield session
    session.close()


@pytest.fixture
def catalog_service(session):
    """Create a catalog service instance."""
    return CatalogService(session)


@pytest.fixture
def cart_service(session):
    """Create a cart service with the same fixed delivery fee."""
    return CartService(session, delivery_fee=DELIVERY_FEE)


@pytest.fixture
def order_service(session):
    """Create an order service with a fixed delivery fee."""
    return OrderService(session, delivery_fee=DELIVERY_FEE)


@pytest.fixture
def shopping_list_service(session):
    """Create a shopping list service instance."""
    return ShoppingListService(session)


def _add_grocery(session, **values) -> Grocery:
    grocery = Grocery(**values)
    session.add(grocery)
    session.commit()
    session.refresh(grocery)
    return grocery


@pytest.fixture
def milk(session) -> Grocery:
    """A dairy product."""
    return _add_grocery(
        session,
        name="Milk",
        category="Dairy",
        price=Decimal("4.29"),
        image_ref="drop",
        description="Fresh whole milk",
        unit="gallon",
    )


@pytest.fixture
def bread(session) -> Grocery:
    """A bakery product."""
    return _add_grocery(
        session,
        name="White Bread",
        category="Bakery",
        price=Decimal("2.99"),
        image_ref="square.stack",
        description="Fresh white bread",
        unit="loaf",
    )


@pytest.fixture
def apples(session) -> Grocery:
    """A fruit sold by weight."""
    return _add_grocery(
        session,
        name="Red Apples",
        category="Fruits",
        price=Decimal("3.99"),
        image_ref="apple.logo",
        description="Fresh, crisp red apples",
        unit="lb",
    )
