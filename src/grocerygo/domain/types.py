"""Domain types for GroceryGo."""
import math
from decimal import Decimal
from enum import Enum
from typing import NewType, Optional, Annotated, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator


# Strong types for IDs
GroceryId = NewType('GroceryId', int)
CartItemId = NewType('CartItemId', int)
OrderId = NewType('OrderId', int)
ShoppingListItemId = NewType('ShoppingListItemId', int)

METERS_PER_MILE = 1609.34
FEET_PER_METER = 3.28084
EARTH_RADIUS_METERS = 6_371_000.0


class OrderStatus(str, Enum):
    """Lifecycle states of an order."""
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"

    @classmethod
    def parse(cls, value: Any) -> 'OrderStatus':
        """Parse a status value, accepting only the exact display names.

        Raises:
            ValueError: If the value is not one of the defined statuses
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise ValueError(f"Invalid order status '{value}'. Must be one of: {valid}") from None


class PermissionStatus(str, Enum):
    """Location authorization as reported by the platform."""
    NOT_DETERMINED = "not_determined"
    AUTHORIZED_WHEN_IN_USE = "authorized_when_in_use"
    AUTHORIZED_ALWAYS = "authorized_always"
    DENIED = "denied"
    RESTRICTED = "restricted"

    @property
    def is_authorized(self) -> bool:
        return self in (
            PermissionStatus.AUTHORIZED_WHEN_IN_USE,
            PermissionStatus.AUTHORIZED_ALWAYS,
        )

    @property
    def is_blocked(self) -> bool:
        """Denied or restricted; only the user can change this, outside the app."""
        return self in (PermissionStatus.DENIED, PermissionStatus.RESTRICTED)


class SearchPhase(str, Enum):
    """Where the store search currently stands."""
    IDLE = "idle"
    SEARCHING = "searching"
    RESULTS = "results"
    ERROR = "error"


class Quantity(BaseModel):
    """A cart quantity. There is no upper bound."""
    value: Annotated[int, Field(ge=1)]


class Coordinate(BaseModel):
    """A latitude/longitude pair in degrees."""
    model_config = ConfigDict(frozen=True)

    latitude: Annotated[float, Field(ge=-90, le=90)]
    longitude: Annotated[float, Field(ge=-180, le=180)]

    def key(self) -> str:
        """Coordinate rendered at micro-degree precision."""
        return f"{self.latitude:.6f},{self.longitude:.6f}"

    def distance_to(self, other: 'Coordinate') -> float:
        """Great-circle distance in meters."""
        lat1, lat2 = math.radians(self.latitude), math.radians(other.latitude)
        dlat = lat2 - lat1
        dlon = math.radians(other.longitude - self.longitude)
        a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
        return 2 * EARTH_RADIUS_METERS * math.asin(math.sqrt(a))


class StoreResult(BaseModel):
    """A store returned by the nearby-search provider."""
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    coordinate: Coordinate
    street_number: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    phone: Optional[str] = None
    url: Optional[str] = None

    @property
    def identity(self) -> str:
        """Stable key for list rendering and deduplication.

        Falls back from url to phone to name plus coordinate, and finally to
        the bare coordinate. Two distinct unnamed stores at the same spot
        share an identity.
        """
        if self.url:
            return f"url:{self.url}"
        if self.phone:
            return f"phone:{self.phone}"
        if self.name:
            return f"name:{self.name}@{self.coordinate.key()}"
        return f"coord:{self.coordinate.key()}"

    @property
    def display_name(self) -> str:
        return self.name or "Unknown Store"

    @property
    def short_address(self) -> Optional[str]:
        """Street, city and state, for result rows."""
        parts = [p for p in (self.street, self.city, self.state) if p]
        return ", ".join(parts) if parts else None

    @property
    def full_address(self) -> Optional[str]:
        """Numbered street, city and "state zip", for the detail view."""
        parts = []
        if self.street:
            parts.append(f"{self.street_number} {self.street}" if self.street_number else self.street)
        if self.city:
            parts.append(self.city)
        if self.state:
            parts.append(f"{self.state} {self.postal_code}" if self.postal_code else self.state)
        return ", ".join(parts) if parts else None

    @property
    def dial_number(self) -> Optional[str]:
        """Phone number reduced to its digits."""
        if not self.phone:
            return None
        return "".join(c for c in self.phone if c.isdigit())

    def distance_from(self, origin: Coordinate) -> float:
        return origin.distance_to(self.coordinate)

    def distance_label(self, origin: Optional[Coordinate]) -> Optional[str]:
        """Human readable distance from ``origin``: feet when very close, miles otherwise."""
        if origin is None:
            return None
        meters = self.distance_from(origin)
        miles = meters / METERS_PER_MILE
        if miles < 0.1:
            return f"{meters * FEET_PER_METER:.0f} ft"
        return f"{miles:.1f} mi"


class OrderItemSnapshot(BaseModel):
    """Immutable copy of a cart line taken at checkout."""
    model_config = ConfigDict(frozen=True)

    grocery_name: str
    quantity: Annotated[int, Field(ge=1)]
    price: Annotated[Decimal, Field(ge=0)]
    unit: str

    @field_validator('grocery_name')
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError('Item name cannot be empty')
        return v

    @classmethod
    def from_cart_item(cls, cart_item: Any) -> 'OrderItemSnapshot':
        return cls(
            grocery_name=cart_item.grocery_name,
            quantity=cart_item.quantity,
            price=cart_item.price,
            unit=cart_item.unit,
        )

    @property
    def total_price(self) -> Decimal:
        return self.price * self.quantity
