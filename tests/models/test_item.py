from datetime import datetime

import pytest

from retailbill.constants import KW_TZ
from retailbill.models.item import CatalogItem, ItemCreate, PricingMode


class TestItemCreate:
    def test_defaults(self):
        payload = ItemCreate()
        assert payload.item_id == ""
        assert payload.is_wire_box is False
        assert payload.buying_price is None
        assert payload.selling_price == 0

    def test_accepts_wire_names(self):
        payload = ItemCreate.model_validate(
            {
                "itemId": "W1",
                "arabicName": "سلك",
                "isWireBox": True,
                "buyingPrice": 10,
                "purchasePercentage": 9,
                "sellPercentage": 8,
            }
        )
        assert payload.item_id == "W1"
        assert payload.is_wire_box is True
        assert payload.sell_percentage == 8


class TestCatalogItem:
    def test_fixed_mode(self, fixed_item):
        item = fixed_item()
        assert item.pricing_mode is PricingMode.FIXED
        assert item.pricing_mode.value == "fixed"
        assert item.effective_selling_price == 1.5

    def test_wire_box_mode(self, wire_box_item):
        item = wire_box_item()
        assert item.pricing_mode is PricingMode.WIRE_BOX
        assert item.pricing_mode.value == "wire_box"
        assert item.effective_selling_price == pytest.approx(9.2)

    def test_is_deleted(self, fixed_item):
        assert fixed_item().is_deleted is False
        assert fixed_item(deleted_at=datetime(2025, 3, 2, tzinfo=KW_TZ)).is_deleted is True

    def test_default_unit(self):
        item = CatalogItem(item_id="X1", name="Fuse", selling_price=0.5)
        assert item.unit == "pcs"
