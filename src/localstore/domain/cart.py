"""Products, cart lines, and the pure cart arithmetic.

Invariants:
- At most one CartLine per product id.
- A line's quantity is always positive; a line that would reach zero is
  removed instead.
- Product stock is a ceiling checked at add time, never decremented.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from pydantic import Field

from localstore.domain.records import Record


class Product(Record):
    """An entry of the fixed product catalog."""

    model_config = {"frozen": True}

    id: int
    name: str
    unit_price: Decimal = Field(ge=0)
    stock: int = Field(ge=0)


class CartLine(Record):
    """One product in the cart; unit price is copied when first added."""

    product_id: int
    name: str
    unit_price: Decimal = Field(ge=0)
    quantity: int = Field(gt=0)

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


def compute_total(lines: Iterable[CartLine]) -> Decimal:
    """Sum of ``unit_price * quantity`` over all lines."""
    return sum((line.subtotal for line in lines), Decimal(0))


def apply_discount(price: Decimal, percent: Decimal) -> Decimal:
    """Return *price* reduced by *percent* (0-100).

    Raises:
        ValueError: If *percent* is outside 0-100.
    """
    if not Decimal(0) <= percent <= Decimal(100):
        msg = f"Discount percent must be between 0 and 100, got {percent}"
        raise ValueError(msg)
    return price - price * percent / Decimal(100)


def stock_value(products: Iterable[Product]) -> Decimal:
    """Total value of the stock on hand (price times stock, summed)."""
    return sum((p.unit_price * p.stock for p in products), Decimal(0))
