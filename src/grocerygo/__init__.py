"""GroceryGo: catalog, cart, orders, shopping list and store finder."""

__version__ = "0.1.0"
