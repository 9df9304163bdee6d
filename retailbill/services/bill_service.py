from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from datetime import datetime

from ulid import ULID

from retailbill.constants import KW_TZ, TOTAL_TOLERANCE
from retailbill.errors import EmptyBillError, ValidationError
from retailbill.models import round_currency
from retailbill.models.bill import Bill, BillItem, BillSummary, LineItem
from retailbill.models.item import CatalogItem
from retailbill.pricing import line_subtotal

logger = logging.getLogger(__name__)


class BillService:
    """Builds bills from draft lines and checks their totals.

    Draft lines snapshot the catalog when an item is picked
    (``materialize_line``). Editing a saved bill re-snapshots the cost basis
    from the current catalog (``rehydrate_for_edit``) but keeps the price the
    operator charged.
    """

    @staticmethod
    def total(lines: Iterable[LineItem | BillItem]) -> float:
        return sum(line.subtotal for line in lines)

    @staticmethod
    def validate(lines: list[LineItem]) -> None:
        resolved = [line for line in lines if line.is_resolved]
        if not resolved:
            logger.warning("Bill rejected: no line references a catalog item")
            raise EmptyBillError()
        for line in resolved:
            if not math.isfinite(line.quantity) or line.quantity < 0:
                logger.warning("Bill rejected: item %s has quantity %s", line.item_id, line.quantity)
                raise ValidationError(f"quantity for {line.item_id} must be a non-negative number")
            if line.unit_price is not None and not math.isfinite(line.unit_price):
                logger.warning("Bill rejected: item %s has unit price %s", line.item_id, line.unit_price)
                raise ValidationError(f"unitPrice for {line.item_id} must be a finite number")

    @staticmethod
    def materialize_line(item: CatalogItem, quantity: float = 1) -> LineItem:
        selling_price = item.effective_selling_price
        return LineItem(
            item_id=item.item_id,
            item_name=item.name,
            arabic_name=item.arabic_name,
            unit=item.unit,
            quantity=quantity,
            unit_price=selling_price,
            purchase_price=item.buying_price,
            purchase_percentage=item.purchase_percentage,
            sell_percentage=item.sell_percentage,
            base_selling_price=selling_price,
        )

    @staticmethod
    def rehydrate_for_edit(bill_item: BillItem, current_item: CatalogItem | None) -> LineItem:
        if current_item is None:
            # Item left the catalog: fall back to what the bill recorded.
            return LineItem(
                item_id=bill_item.item_id,
                item_name=bill_item.item_name,
                arabic_name=bill_item.arabic_name,
                unit=bill_item.unit,
                quantity=bill_item.quantity,
                unit_price=bill_item.unit_price,
                purchase_price=bill_item.buying_price,
                purchase_percentage=bill_item.purchase_percentage,
                base_selling_price=bill_item.base_selling_price,
            )
        return LineItem(
            item_id=bill_item.item_id,
            item_name=current_item.name,
            arabic_name=current_item.arabic_name,
            unit=current_item.unit,
            quantity=bill_item.quantity,
            unit_price=bill_item.unit_price,
            purchase_price=current_item.buying_price,
            purchase_percentage=current_item.purchase_percentage,
            sell_percentage=current_item.sell_percentage,
            base_selling_price=current_item.effective_selling_price,
        )

    def rehydrate_bill(self, bill: Bill, catalog: Mapping[str, CatalogItem]) -> list[LineItem]:
        lines = [self.rehydrate_for_edit(item, catalog.get(item.item_id)) for item in bill.items]
        logger.debug("Bill %s rehydrated for edit: %d lines", bill.id, len(lines))
        return lines

    def _freeze(self, line: LineItem, catalog: Mapping[str, CatalogItem]) -> BillItem:
        item = catalog.get(line.item_id)
        if item is None or item.is_deleted:
            logger.warning("Bill rejected: item %s not found", line.item_id)
            raise ValidationError(f"item {line.item_id} not found")
        base_price = item.effective_selling_price
        unit_price = base_price if line.unit_price is None else line.unit_price
        buying_price, purchase_percentage = line.purchase_price, line.purchase_percentage
        if buying_price is None and purchase_percentage is None:
            # Line was never snapshotted (e.g. posted with just an itemId).
            buying_price, purchase_percentage = item.buying_price, item.purchase_percentage
        return BillItem(
            item_id=item.item_id,
            item_name=item.name,
            arabic_name=item.arabic_name,
            unit=item.unit,
            quantity=line.quantity,
            unit_price=unit_price,
            buying_price=buying_price,
            purchase_percentage=purchase_percentage,
            base_selling_price=base_price,
        )

    def create_bill(
        self,
        lines: list[LineItem],
        catalog: Mapping[str, CatalogItem],
        customer: str | None = None,
        now: datetime | None = None,
    ) -> Bill:
        self.validate(lines)
        items = [self._freeze(line, catalog) for line in lines if line.is_resolved]

        now = now or datetime.now(KW_TZ)
        total = round_currency(self.total(items))
        bill = Bill(
            id=str(ULID()),
            customer=(customer or "").strip() or None,
            total_amount=total,
            items=items,
            created_at=now,
            updated_at=now,
        )
        logger.info("Bill created: id=%s, customer=%s, items=%d, total=%.3f", bill.id, bill.customer, len(items), total)
        return bill

    def summarize(self, lines: Iterable[LineItem | BillItem]) -> BillSummary:
        count = 0
        total = 0.0
        profit = 0.0
        known = 0
        unknown = False
        for line in lines:
            if isinstance(line, LineItem) and not line.is_resolved:
                continue
            count += 1
            total += line.subtotal
            line_profit = line.profit
            if line_profit is None:
                unknown = True
            else:
                profit += line_profit
                known += 1
        return BillSummary(
            line_count=count,
            total=round_currency(total),
            total_profit=round_currency(profit) if known else None,
            has_unknown_cost=unknown,
        )

    @staticmethod
    def verify_total(bill: Bill) -> bool:
        recomputed = sum(line_subtotal(item.quantity, item.unit_price) for item in bill.items)
        ok = abs(recomputed - bill.total_amount) <= TOTAL_TOLERANCE
        if not ok:
            logger.warning("Bill %s total mismatch: stored=%.3f recomputed=%.3f", bill.id, bill.total_amount, recomputed)
        return ok
