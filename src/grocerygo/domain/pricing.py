"""Cart pricing rules."""
from decimal import Decimal
from typing import Iterable, Optional, Protocol

from grocerygo.config.settings import get_settings

CENT = Decimal("0.01")


def to_money(value) -> Decimal:
    """Coerce a price to Decimal without picking up binary float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class PricedLine(Protocol):
    price: Decimal
    quantity: int


def compute_subtotal(items: Iterable[PricedLine]) -> Decimal:
    """Sum of price x quantity over all lines."""
    subtotal = sum(
        (to_money(item.price) * item.quantity for item in items),
        Decimal("0")
    )
    return subtotal.quantize(CENT)


def compute_grand_total(subtotal: Decimal, delivery_fee: Optional[Decimal] = None) -> Decimal:
    """Subtotal plus the flat delivery fee.

    Args:
        subtotal: Cart subtotal
        delivery_fee: Fee to add; defaults to the configured delivery fee

    Returns:
        The amount charged for the order
    """
    if delivery_fee is None:
        delivery_fee = get_settings().DELIVERY_FEE
    return (to_money(subtotal) + to_money(delivery_fee)).quantize(CENT)
