"""Derived pricing.

Display price and sale status are computed from ``price`` and
``sale_price`` every time a product is serialized. Nothing here is
stored on the entity.
"""

from decimal import Decimal
from typing import Protocol


class Priced(Protocol):
    """Anything carrying a list price and an optional sale price."""

    price: Decimal
    sale_price: Decimal | None


def is_on_sale(product: Priced) -> bool:
    """Check whether the product is discounted.

    A sale price equal to or above the list price is not a sale.

    Args:
        product: Product (or any priced object).

    Returns:
        True if a sale price is set and strictly below the list price.
    """
    return product.sale_price is not None and product.sale_price < product.price


def display_price(product: Priced) -> Decimal:
    """Get the price shown to the customer.

    Same value the price sort orders by. A sale price at or above the
    list price is still shown but is not flagged as a sale.

    Args:
        product: Product (or any priced object).

    Returns:
        Sale price when one is set, otherwise the list price.
    """
    if product.sale_price is not None:
        return product.sale_price
    return product.price
