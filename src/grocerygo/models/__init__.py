"""Models package for GroceryGo."""
from .base import Base
from .grocery import Grocery
from .cart_item import CartItem
from .order import Order, OrderItem
from .shopping_list_item import ShoppingListItem

__all__ = ['Base', 'Grocery', 'CartItem', 'Order', 'OrderItem', 'ShoppingListItem']
