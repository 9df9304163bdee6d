from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta

from retailbill.constants import ITEM_ID_MAX_LENGTH, ITEM_ID_PATTERN, KW_TZ
from retailbill.errors import ValidationError
from retailbill.models.item import CatalogItem, ItemCreate
from retailbill.pricing import wire_box_selling_price
from retailbill.settings import settings

logger = logging.getLogger(__name__)


def validate_item_id(raw: str) -> str:
    item_id = raw.strip()
    if not item_id:
        raise ValidationError("itemId is required")
    if len(item_id) > ITEM_ID_MAX_LENGTH:
        raise ValidationError(f"itemId must be at most {ITEM_ID_MAX_LENGTH} characters")
    if not ITEM_ID_PATTERN.match(item_id):
        raise ValidationError("itemId must contain only letters and numbers")
    return item_id


def _is_positive(value: float) -> bool:
    return math.isfinite(value) and value > 0


def _check_percentage(name: str, value: float | None) -> None:
    if value is None or not math.isfinite(value) or value < 0 or value > 100:
        raise ValidationError(f"{name} must be between 0 and 100")


def validate_prices(payload: ItemCreate) -> None:
    if payload.is_wire_box:
        if payload.buying_price is None or not _is_positive(payload.buying_price):
            raise ValidationError("buyingPrice (base purchase price) is required for Wire/Box items")
        _check_percentage("purchasePercentage", payload.purchase_percentage)
        _check_percentage("sellPercentage", payload.sell_percentage)
        return
    if payload.buying_price is not None and not _is_positive(payload.buying_price):
        raise ValidationError("buyingPrice must be positive")
    if not _is_positive(payload.selling_price):
        raise ValidationError("sellingPrice must be positive")


class ItemService:
    """Catalog item rules: validation, normalisation and trash retention.

    Nothing here touches storage; every method returns a new ``CatalogItem``
    for the caller to persist.
    """

    def __init__(self, retention_hours: int | None = None) -> None:
        hours = settings.trash_retention_hours if retention_hours is None else retention_hours
        self.retention = timedelta(hours=hours)

    def _build(self, item_id: str, payload: ItemCreate, created_at: datetime, now: datetime) -> CatalogItem:
        if not payload.name.strip():
            raise ValidationError("name is required")
        if not payload.arabic_name.strip():
            raise ValidationError("arabicName is required")
        validate_prices(payload)

        if payload.is_wire_box:
            selling_price = wire_box_selling_price(payload.buying_price, payload.sell_percentage)
            purchase_percentage = payload.purchase_percentage
            sell_percentage = payload.sell_percentage
        else:
            selling_price = payload.selling_price
            purchase_percentage = None
            sell_percentage = None

        return CatalogItem(
            item_id=item_id,
            name=payload.name.strip(),
            arabic_name=payload.arabic_name.strip(),
            unit=payload.unit.strip() or settings.default_unit,
            is_wire_box=payload.is_wire_box,
            buying_price=payload.buying_price,
            selling_price=selling_price,
            purchase_percentage=purchase_percentage,
            sell_percentage=sell_percentage,
            created_at=created_at,
            updated_at=now,
        )

    def prepare(self, payload: ItemCreate, now: datetime | None = None) -> CatalogItem:
        now = now or datetime.now(KW_TZ)
        try:
            item_id = validate_item_id(payload.item_id)
            item = self._build(item_id, payload, now, now)
        except ValidationError as exc:
            logger.warning("Item rejected: itemId=%r reason=%s", payload.item_id, exc)
            raise
        logger.info("Item prepared: itemId=%s mode=%s", item.item_id, item.pricing_mode.value)
        return item

    def apply_update(self, existing: CatalogItem, payload: ItemCreate, now: datetime | None = None) -> CatalogItem:
        now = now or datetime.now(KW_TZ)
        if existing.is_deleted:
            logger.warning("Update rejected: item %s is deleted", existing.item_id)
            raise ValidationError("item not found")
        try:
            item = self._build(existing.item_id, payload, existing.created_at or now, now)
        except ValidationError as exc:
            logger.warning("Item update rejected: itemId=%s reason=%s", existing.item_id, exc)
            raise
        logger.info("Item updated: itemId=%s mode=%s", item.item_id, item.pricing_mode.value)
        return item

    def soft_delete(self, item: CatalogItem, now: datetime | None = None) -> CatalogItem:
        if item.is_deleted:
            raise ValidationError("item not found")
        now = now or datetime.now(KW_TZ)
        logger.info("Item %s moved to trash", item.item_id)
        return item.model_copy(update={"deleted_at": now, "updated_at": now})

    def can_restore(self, item: CatalogItem, now: datetime | None = None) -> bool:
        if item.deleted_at is None:
            return False
        now = now or datetime.now(KW_TZ)
        return item.deleted_at >= now - self.retention

    def restore(self, item: CatalogItem, now: datetime | None = None) -> CatalogItem:
        now = now or datetime.now(KW_TZ)
        if not self.can_restore(item, now):
            logger.warning("Restore rejected: item %s is not in the trash", item.item_id)
            raise ValidationError("item not found")
        logger.info("Item %s restored", item.item_id)
        return item.model_copy(update={"deleted_at": None, "updated_at": now})

    def is_purgeable(self, item: CatalogItem, now: datetime | None = None) -> bool:
        if item.deleted_at is None:
            return False
        now = now or datetime.now(KW_TZ)
        return item.deleted_at < now - self.retention

    @staticmethod
    def visible(items: list[CatalogItem], include_deleted: bool = False) -> list[CatalogItem]:
        if include_deleted:
            return list(items)
        return [item for item in items if not item.is_deleted]
