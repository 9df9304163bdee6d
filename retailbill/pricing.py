"""Money figures for catalog items and bill lines.

Two pricing modes exist. Fixed items store their buying and selling price
directly. Wire/box items store a base price and two percentages off that
base: one giving the actual purchase cost, one giving the selling price.

Discounts are kept as a percentage off a base price. The older direct
"discount per unit" form is converted with ``discount_to_sell_percentage``
and can always be reconstructed from a base price and the charged unit price
with ``discount_per_unit``.

Every function here is pure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from retailbill.models.item import CatalogItem


def clamp_percentage(value: float | None) -> float:
    if value is None:
        return 0.0
    return min(100.0, max(0.0, value))


def actual_purchase_cost(buying_price: float | None, purchase_percentage: float | None) -> float | None:
    """Cost of one unit after the purchase discount, or None when the cost is unknown."""
    if buying_price is None:
        return None
    discount_factor = 1 - clamp_percentage(purchase_percentage) / 100
    return max(0.0, buying_price * discount_factor)


def wire_box_selling_price(buying_price: float, sell_percentage: float | None) -> float:
    return buying_price * (1 - clamp_percentage(sell_percentage) / 100)


def item_selling_price(item: CatalogItem) -> float:
    """Authoritative sell price: derived for wire/box items, stored for fixed ones."""
    if item.is_wire_box and item.buying_price is not None:
        return wire_box_selling_price(item.buying_price, item.sell_percentage)
    return item.selling_price


def effective_unit_price(unit_price: float, discount_per_unit: float) -> float:
    return max(0.0, unit_price - discount_per_unit)


def discount_per_unit(base_selling_price: float, unit_price: float) -> float:
    return max(0.0, base_selling_price - unit_price)


def discount_to_sell_percentage(base_price: float, discount: float) -> float:
    """Express a direct per-unit discount as a percentage off ``base_price``."""
    if base_price <= 0:
        return 0.0
    return clamp_percentage(discount / base_price * 100)


def sell_percentage_to_discount(base_price: float, sell_percentage: float | None) -> float:
    return base_price - wire_box_selling_price(base_price, sell_percentage)


def line_subtotal(quantity: float, unit_price: float) -> float:
    # Quantity is not clamped: a negative quantity is rejected by the caller.
    return max(0.0, unit_price) * quantity


def line_profit(
    unit_price: float,
    quantity: float,
    buying_price: float | None,
    purchase_percentage: float | None = None,
) -> float | None:
    """Profit of a line; None when the buying price is unknown. May be negative."""
    cost = actual_purchase_cost(buying_price, purchase_percentage)
    if cost is None:
        return None
    return (unit_price - cost) * quantity
