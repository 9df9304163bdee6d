from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from retailbill.pricing import item_selling_price

WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PricingMode(str, Enum):
    FIXED = "fixed"
    WIRE_BOX = "wire_box"


class ItemCreate(BaseModel):
    model_config = WIRE_CONFIG

    item_id: str = ""
    name: str = ""
    arabic_name: str = ""
    unit: str = ""
    is_wire_box: bool = False
    buying_price: float | None = None
    selling_price: float = 0
    purchase_percentage: float | None = None
    sell_percentage: float | None = None


class CatalogItem(BaseModel):
    model_config = WIRE_CONFIG

    item_id: str
    name: str
    arabic_name: str = ""
    unit: str = "pcs"
    is_wire_box: bool = False
    buying_price: float | None = None
    selling_price: float = 0
    purchase_percentage: float | None = None
    sell_percentage: float | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    @property
    def pricing_mode(self) -> PricingMode:
        return PricingMode.WIRE_BOX if self.is_wire_box else PricingMode.FIXED

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def effective_selling_price(self) -> float:
        return item_selling_price(self)
