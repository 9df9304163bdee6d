"""Split a bill's items across printed invoice pages.

A bill that fits on one page gets the company header, the item table and the
totals footer together. Longer bills get a first page (company header, no
footer), as many middle pages as needed (neither), and a last page (footer,
no company header). Each role has its own row capacity, and every page is
padded with blank rows up to its capacity so all pages print the same
height.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pydantic import BaseModel

from retailbill.errors import ConfigurationError, EmptyBillError
from retailbill.models.bill import BillItem
from retailbill.settings import Settings, settings

logger = logging.getLogger(__name__)


class PageCapacities(BaseModel):
    single: int = 18
    first: int = 30
    middle: int = 32
    last: int = 24

    @classmethod
    def from_settings(cls, config: Settings | None = None) -> PageCapacities:
        config = config or settings
        return cls(
            single=config.rows_single,
            first=config.rows_first,
            middle=config.rows_middle,
            last=config.rows_last,
        )


class InvoicePage(BaseModel):
    items: list[BillItem]
    fill_to: int
    is_first: bool
    is_last: bool
    number: int = 1
    count: int = 1

    @property
    def filler_rows(self) -> int:
        return max(0, self.fill_to - len(self.items))

    @property
    def show_company_header(self) -> bool:
        return self.is_first

    @property
    def show_column_header(self) -> bool:
        return True

    @property
    def show_footer(self) -> bool:
        return self.is_last


class InvoicePaginator:
    def __init__(self, capacities: PageCapacities | None = None) -> None:
        capacities = capacities or PageCapacities.from_settings()
        for role in ("single", "first", "middle", "last"):
            if getattr(capacities, role) <= 0:
                raise ConfigurationError(f"page capacity '{role}' must be positive, got {getattr(capacities, role)}")
        self.capacities = capacities

    def paginate(self, items: Sequence[BillItem]) -> list[InvoicePage]:
        if not items:
            raise EmptyBillError("cannot paginate a bill with no items")

        caps = self.capacities
        if len(items) <= caps.single:
            pages = [InvoicePage(items=list(items), fill_to=caps.single, is_first=True, is_last=True)]
        else:
            pages = [InvoicePage(items=list(items[: caps.first]), fill_to=caps.first, is_first=True, is_last=False)]
            cursor = caps.first
            while True:
                remaining = len(items) - cursor
                if remaining <= caps.last:
                    pages.append(
                        InvoicePage(items=list(items[cursor:]), fill_to=caps.last, is_first=False, is_last=True)
                    )
                    break
                pages.append(
                    InvoicePage(
                        items=list(items[cursor : cursor + caps.middle]),
                        fill_to=caps.middle,
                        is_first=False,
                        is_last=False,
                    )
                )
                cursor += caps.middle

        for number, page in enumerate(pages, start=1):
            page.number = number
            page.count = len(pages)

        logger.debug("Paginated %d items into %d pages", len(items), len(pages))
        return pages
