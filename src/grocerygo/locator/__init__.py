"""Store finder for GroceryGo."""
from .provider import LocationProvider, LocationSearchError
from .store_locator import StoreLocator, LocatorState

__all__ = ['LocationProvider', 'LocationSearchError', 'StoreLocator', 'LocatorState']
