"""Services package for GroceryGo."""
from .base_service import Result
from .catalog_service import CatalogService
from .cart_service import CartService, CartSummary
from .order_service import OrderService
from .shopping_list_service import ShoppingListService, ShoppingListContents

__all__ = [
    'Result',
    'CatalogService',
    'CartService',
    'CartSummary',
    'OrderService',
    'ShoppingListService',
    'ShoppingListContents'
]
