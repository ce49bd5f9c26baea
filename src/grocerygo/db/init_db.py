"""Database initialization script."""
from typing import Optional
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from grocerygo.models import Base
from grocerygo.config.settings import get_settings
from grocerygo.services.catalog_service import CatalogService
from grocerygo.utils.logger import get_logger

logger = get_logger(__name__)

SAMPLE_GROCERIES = [
    {"name": "Red Apples", "category": "Fruits", "price": "3.99", "image_ref": "apple.logo", "description": "Fresh, crisp red apples", "unit": "lb"},
    {"name": "Bananas", "category": "Fruits", "price": "2.49", "image_ref": "leaf", "description": "Ripe yellow bananas", "unit": "bunch"},
    {"name": "Strawberries", "category": "Fruits", "price": "4.99", "image_ref": "strawberry", "description": "Sweet fresh strawberries", "unit": "pint"},
    {"name": "Carrots", "category": "Vegetables", "price": "1.99", "image_ref": "carrot", "description": "Fresh organic carrots", "unit": "lb"},
    {"name": "Broccoli", "category": "Vegetables", "price": "2.99", "image_ref": "leaf.circle", "description": "Fresh green broccoli", "unit": "head"},
    {"name": "Tomatoes", "category": "Vegetables", "price": "3.49", "image_ref": "circle.fill", "description": "Vine-ripened tomatoes", "unit": "lb"},
    {"name": "Milk", "category": "Dairy", "price": "4.29", "image_ref": "drop", "description": "Fresh whole milk", "unit": "gallon"},
    {"name": "Cheese", "category": "Dairy", "price": "5.99", "image_ref": "square.stack.3d.up", "description": "Cheddar cheese block", "unit": "lb"},
    {"name": "Yogurt", "category": "Dairy", "price": "1.99", "image_ref": "cup.and.saucer", "description": "Greek yogurt", "unit": "6oz"},
    {"name": "White Bread", "category": "Bakery", "price": "2.99", "image_ref": "square.stack", "description": "Fresh white bread", "unit": "loaf"},
    {"name": "Croissants", "category": "Bakery", "price": "4.99", "image_ref": "moon", "description": "Butter croissants pack", "unit": "pack"},
    {"name": "Chicken Breast", "category": "Meat", "price": "7.99", "image_ref": "flame", "description": "Boneless chicken breast", "unit": "lb"},
    {"name": "Ground Beef", "category": "Meat", "price": "6.99", "image_ref": "flame.fill", "description": "Lean ground beef", "unit": "lb"},
    {"name": "Chips", "category": "Snacks", "price": "3.99", "image_ref": "rectangle.stack", "description": "Potato chips variety", "unit": "bag"},
    {"name": "Cookies", "category": "Snacks", "price": "4.49", "image_ref": "circle.hexagongrid", "description": "Chocolate chip cookies", "unit": "pack"},
    {"name": "Orange Juice", "category": "Beverages", "price": "5.49", "image_ref": "drop.triangle", "description": "Fresh squeezed orange juice", "unit": "64oz"},
    {"name": "Bottled Water", "category": "Beverages", "price": "4.99", "image_ref": "waterbottle", "description": "Spring water pack", "unit": "24-pack"},
]


def init_db(engine: Optional[Engine] = None) -> int:
    """Create tables and stock an empty catalog with sample products.

    Args:
        engine: Engine to initialize (default: the application engine)

    Returns:
        Number of sample products inserted
    """
    if engine is None:
        from grocerygo.db.session import engine

    Base.metadata.create_all(engine)

    if not get_settings().SEED_SAMPLE_CATALOG:
        logger.info("Sample catalog seeding disabled")
        return 0

    with Session(engine) as session:
        result = CatalogService(session).seed_catalog(SAMPLE_GROCERIES)
        if not result.success:
            raise RuntimeError(result.error)

    if result.data:
        logger.info("Created sample catalog", count=result.data)
    else:
        logger.info("Catalog already exists")
    return result.data


if __name__ == "__main__":
    init_db()
