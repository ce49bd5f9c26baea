"""Configuration for GroceryGo."""
