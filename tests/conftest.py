"""Root conftest: sample catalog items, draft lines and bills."""

from __future__ import annotations

from datetime import datetime

import pytest

from retailbill.constants import KW_TZ
from retailbill.models.bill import Bill, BillItem
from retailbill.models.item import CatalogItem


def _fixed_item(**overrides) -> CatalogItem:
    defaults = dict(
        item_id="A100",
        name="Cable tie",
        arabic_name="ربطة كيبل",
        unit="pcs",
        buying_price=1.0,
        selling_price=1.5,
        created_at=datetime(2025, 3, 1, 9, 0, tzinfo=KW_TZ),
    )
    defaults.update(overrides)
    return CatalogItem(**defaults)


def _wire_box_item(**overrides) -> CatalogItem:
    defaults = dict(
        item_id="B200",
        name="Copper wire 2.5mm",
        arabic_name="سلك نحاس",
        unit="roll",
        is_wire_box=True,
        buying_price=10.0,
        purchase_percentage=9,
        sell_percentage=8,
        selling_price=9.2,
        created_at=datetime(2025, 3, 1, 9, 0, tzinfo=KW_TZ),
    )
    defaults.update(overrides)
    return CatalogItem(**defaults)


def _bill_item(index: int = 0, **overrides) -> BillItem:
    defaults = dict(
        item_id=f"I{index:03d}",
        item_name=f"Item {index}",
        unit="pcs",
        quantity=2,
        unit_price=1.25,
        buying_price=1.0,
        base_selling_price=1.5,
    )
    defaults.update(overrides)
    return BillItem(**defaults)


def _bill(count: int = 2, **overrides) -> Bill:
    items = [_bill_item(i) for i in range(count)]
    defaults = dict(
        id="01JQ8Z6X4N5V9T2C7M3B1K0ABC",
        customer="Al Noor Electric",
        total_amount=round(sum(item.unit_price * item.quantity for item in items), 3),
        items=items,
        created_at=datetime(2025, 3, 10, 14, 30, tzinfo=KW_TZ),
    )
    defaults.update(overrides)
    return Bill(**defaults)


@pytest.fixture()
def fixed_item():
    return _fixed_item


@pytest.fixture()
def wire_box_item():
    return _wire_box_item


@pytest.fixture()
def bill_item():
    return _bill_item


@pytest.fixture()
def sample_bill():
    return _bill
