from __future__ import annotations

import logging

from fpdf import FPDF

from retailbill.constants import KW_TZ, UNKNOWN_PROFIT_LABEL
from retailbill.models import format_amount, split_currency
from retailbill.models.bill import Bill, BillItem
from retailbill.pdf.pagination import InvoicePage, InvoicePaginator, PageCapacities
from retailbill.settings import settings

logger = logging.getLogger(__name__)

PRIMARY = (31, 58, 96)
PRIMARY_LIGHT = (236, 241, 248)
BORDER = (190, 198, 210)
TEXT = (33, 37, 41)
MUTED = (120, 128, 140)
WHITE = (255, 255, 255)

ROW_H = 6.5

# Vertical space (mm) taken by the fixed blocks of a page.
PAGE_H = 297
TOP_MARGIN = 10
PAGE_NUMBER_BAND = 15
COMPANY_HEADER_H = 47
COLUMN_HEADER_H = 8
FOOTER_H = 43  # totals (20) + signatures (23)

# (header, width share, align)
COLUMNS = [
    ("Item No.", 0.08, "C"),
    ("Description", 0.30, "L"),
    ("Unit", 0.08, "C"),
    ("Qty.", 0.07, "C"),
    ("Unit Price", 0.12, "R"),
    ("Discount/Unit", 0.12, "R"),
    ("Subtotal", 0.12, "R"),
    ("Profit", 0.11, "R"),
]


def _latin1(text: str) -> str:
    # Core PDF fonts only cover Latin-1.
    return text.encode("latin-1", "replace").decode("latin-1")


def _format_quantity(quantity: float) -> str:
    return str(int(quantity)) if float(quantity).is_integer() else f"{quantity:g}"


def _row_cells(item: BillItem) -> list[str]:
    profit = item.profit
    return [
        item.item_id,
        item.item_name,
        item.unit,
        _format_quantity(item.quantity),
        format_amount(item.unit_price),
        format_amount(item.discount_per_unit),
        format_amount(item.subtotal),
        UNKNOWN_PROFIT_LABEL if profit is None else format_amount(profit),
    ]


def page_heights(capacities: PageCapacities) -> dict[str, float]:
    """Height each page role needs when filled to capacity."""
    return {
        "single": COMPANY_HEADER_H + COLUMN_HEADER_H + capacities.single * ROW_H + FOOTER_H,
        "first": COMPANY_HEADER_H + COLUMN_HEADER_H + capacities.first * ROW_H,
        "middle": COLUMN_HEADER_H + capacities.middle * ROW_H,
        "last": COLUMN_HEADER_H + capacities.last * ROW_H + FOOTER_H,
    }


class InvoicePDF:
    def __init__(self, paginator: InvoicePaginator | None = None) -> None:
        self.paginator = paginator or InvoicePaginator()
        self._check_page_heights()

    def _check_page_heights(self) -> None:
        # Auto page break is off, so overflowing rows print off the sheet.
        available = PAGE_H - TOP_MARGIN - PAGE_NUMBER_BAND
        capacities = self.paginator.capacities
        for role, needed in page_heights(capacities).items():
            if needed > available:
                logger.warning(
                    "Page capacity too large for A4: role=%s rows=%d needs %.1fmm of %.1fmm",
                    role,
                    getattr(capacities, role),
                    needed,
                    available,
                )

    def generate(self, bill: Bill, company_name: str | None = None) -> bytes:
        company_name = company_name or settings.company_name
        pages = self.paginator.paginate(bill.items)

        pdf = FPDF(format="A4")
        pdf.set_auto_page_break(auto=False)
        pdf.set_margins(10, TOP_MARGIN, 10)
        page_w = pdf.w - pdf.l_margin - pdf.r_margin

        for page in pages:
            pdf.add_page()
            if page.show_company_header:
                self._draw_company_header(pdf, page_w, company_name, bill)
            if page.show_column_header:
                self._draw_column_header(pdf, page_w)
            self._draw_rows(pdf, page_w, page)
            if page.show_footer:
                self._draw_totals(pdf, page_w, bill.total_amount)
                self._draw_signatures(pdf, page_w)
            self._draw_page_number(pdf, page)

        output = pdf.output()
        logger.debug(
            "PDF generated: bill=%s items=%d pages=%d size=%d bytes",
            bill.id,
            len(bill.items),
            len(pages),
            len(output),
        )
        return bytes(output)

    def _draw_company_header(self, pdf: FPDF, page_w: float, company_name: str, bill: Bill) -> None:
        x = pdf.l_margin
        y = pdf.get_y()

        pdf.set_fill_color(*PRIMARY)
        pdf.rect(x, y, page_w, 24, "F")
        pdf.set_y(y + 5)
        pdf.set_text_color(*WHITE)
        pdf.set_font("helvetica", "B", 18)
        pdf.cell(0, 9, _latin1(company_name), align="C", new_x="LMARGIN", new_y="NEXT")
        pdf.set_font("helvetica", "", 9)
        pdf.cell(0, 6, "INVOICE", align="C", new_x="LMARGIN", new_y="NEXT")

        pdf.set_y(y + 28)
        created = bill.created_at.astimezone(KW_TZ).strftime("%d/%m/%Y") if bill.created_at else ""
        info = [
            ("Date:", created),
            ("Customer:", bill.customer or "Walk-in Customer"),
            ("Invoice No:", bill.id[:13].upper()),
        ]
        pdf.set_text_color(*TEXT)
        for label, value in info:
            pdf.set_font("helvetica", "B", 9)
            pdf.cell(30, 5, label)
            pdf.set_font("helvetica", "", 9)
            pdf.cell(0, 5, _latin1(value), new_x="LMARGIN", new_y="NEXT")
        pdf.ln(4)

    def _draw_column_header(self, pdf: FPDF, page_w: float) -> None:
        pdf.set_fill_color(*PRIMARY)
        pdf.set_text_color(*WHITE)
        pdf.set_font("helvetica", "B", 8)
        for header, share, _align in COLUMNS:
            pdf.cell(page_w * share, 8, header, border=0, fill=True, align="C")
        pdf.ln(8)

    def _draw_rows(self, pdf: FPDF, page_w: float, page: InvoicePage) -> None:
        pdf.set_draw_color(*BORDER)
        pdf.set_line_width(0.2)
        pdf.set_text_color(*TEXT)
        pdf.set_font("helvetica", "", 8)

        rows = [_row_cells(item) for item in page.items]
        rows.extend([[""] * len(COLUMNS)] * page.filler_rows)

        for i, cells in enumerate(rows):
            pdf.set_fill_color(*(PRIMARY_LIGHT if i % 2 == 0 else WHITE))
            for (_header, share, align), value in zip(COLUMNS, cells):
                pdf.cell(page_w * share, ROW_H, _latin1(value), border="B", fill=True, align=align)
            pdf.ln(ROW_H)

    def _draw_totals(self, pdf: FPDF, page_w: float, total_amount: float) -> None:
        whole, fils = split_currency(total_amount)
        pdf.ln(4)

        label_w = page_w * 0.64
        col_w = page_w * 0.18
        pdf.set_text_color(*TEXT)
        pdf.set_font("helvetica", "B", 8)
        pdf.cell(label_w, 6, "")
        pdf.cell(col_w, 6, "K.D.", border=1, align="C")
        pdf.cell(col_w, 6, "Fils", border=1, align="C", new_x="LMARGIN", new_y="NEXT")

        pdf.set_fill_color(*PRIMARY)
        pdf.set_text_color(*WHITE)
        pdf.set_font("helvetica", "B", 11)
        pdf.cell(label_w, 10, "TOTAL  ", fill=True, align="R")
        pdf.cell(col_w, 10, f"{whole:,}", border=1, fill=True, align="C")
        pdf.cell(col_w, 10, fils, border=1, fill=True, align="C", new_x="LMARGIN", new_y="NEXT")

    def _draw_signatures(self, pdf: FPDF, page_w: float) -> None:
        pdf.ln(16)
        y = pdf.get_y()
        half = page_w / 2
        pdf.set_draw_color(*BORDER)
        pdf.set_line_width(0.3)
        pdf.line(pdf.l_margin + 10, y, pdf.l_margin + half - 10, y)
        pdf.line(pdf.l_margin + half + 10, y, pdf.l_margin + page_w - 10, y)
        pdf.ln(2)
        pdf.set_font("helvetica", "", 8)
        pdf.set_text_color(*MUTED)
        pdf.cell(half, 5, "Receiver's Signature", align="C")
        pdf.cell(half, 5, "Salesman's Signature", align="C")

    def _draw_page_number(self, pdf: FPDF, page: InvoicePage) -> None:
        pdf.set_y(-PAGE_NUMBER_BAND)
        pdf.set_font("helvetica", "", 7)
        pdf.set_text_color(*MUTED)
        pdf.cell(0, 5, f"Page {page.number} of {page.count}", align="C")
