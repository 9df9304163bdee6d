from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from retailbill.constants import TOTAL_TOLERANCE
from retailbill.models import round_currency
from retailbill.models.item import WIRE_CONFIG
from retailbill.pricing import discount_per_unit, line_profit, line_subtotal


class LineItem(BaseModel):
    """A row of a bill being edited.

    Price fields are snapshots of the catalog item taken when it was
    selected, so the row stays stable while the catalog changes.
    ``unit_price`` of None means "charge the catalog price".
    """

    model_config = WIRE_CONFIG

    item_id: str = ""
    item_name: str = ""
    arabic_name: str = ""
    unit: str = ""
    quantity: float = 1
    unit_price: float | None = None
    purchase_price: float | None = None
    purchase_percentage: float | None = None
    sell_percentage: float | None = None
    base_selling_price: float = 0

    @property
    def is_resolved(self) -> bool:
        return bool(self.item_id.strip())

    @property
    def charged_price(self) -> float:
        return self.base_selling_price if self.unit_price is None else self.unit_price

    @property
    def subtotal(self) -> float:
        return line_subtotal(self.quantity, self.charged_price)

    @property
    def profit(self) -> float | None:
        return line_profit(self.charged_price, self.quantity, self.purchase_price, self.purchase_percentage)


class BillItem(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str | None = None
    bill_id: str | None = None
    item_id: str
    item_name: str = ""
    arabic_name: str = ""
    unit: str = ""
    quantity: float
    unit_price: float
    buying_price: float | None = None
    purchase_percentage: float | None = None
    base_selling_price: float = 0

    @property
    def discount_per_unit(self) -> float:
        return discount_per_unit(self.base_selling_price, self.unit_price)

    @property
    def subtotal(self) -> float:
        return line_subtotal(self.quantity, self.unit_price)

    @property
    def profit(self) -> float | None:
        return line_profit(self.unit_price, self.quantity, self.buying_price, self.purchase_percentage)


class Bill(BaseModel):
    model_config = WIRE_CONFIG

    id: str = ""
    customer: str | None = None
    total_amount: float = 0
    items: list[BillItem] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def computed_total(self) -> float:
        return round_currency(sum(item.subtotal for item in self.items))

    @property
    def is_total_consistent(self) -> bool:
        return abs(self.computed_total - self.total_amount) <= TOTAL_TOLERANCE

    @property
    def total_profit(self) -> float | None:
        profits = [item.profit for item in self.items if item.profit is not None]
        if not profits:
            return None
        return sum(profits)


class BillSummary(BaseModel):
    line_count: int = 0
    total: float = 0
    total_profit: float | None = None
    has_unknown_cost: bool = False
