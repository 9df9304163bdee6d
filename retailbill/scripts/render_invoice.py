"""Render a saved bill (JSON) to a paginated invoice PDF.

Usage:
    python -m retailbill.scripts.render_invoice bill.json
    python -m retailbill.scripts.render_invoice bill.json invoice.pdf
    python -m retailbill.scripts.render_invoice bill.json --dry-run
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from retailbill.constants import UNKNOWN_PROFIT_LABEL
from retailbill.errors import BillingError
from retailbill.models import format_kwd
from retailbill.models.bill import Bill
from retailbill.pdf.invoice import InvoicePDF
from retailbill.pdf.pagination import InvoicePaginator
from retailbill.services.bill_service import BillService

logger = logging.getLogger(__name__)

console = Console()


def load_bill(path: Path) -> Bill:
    return Bill.model_validate_json(path.read_text(encoding="utf-8"))


def pages_table(bill: Bill, paginator: InvoicePaginator) -> Table:
    table = Table(title=f"Invoice {bill.id[:13].upper() or '-'}")
    table.add_column("Page", style="dim")
    table.add_column("Items", justify="right")
    table.add_column("Blank rows", justify="right")
    table.add_column("Role")

    for page in paginator.paginate(bill.items):
        if page.is_first and page.is_last:
            role = "single"
        elif page.is_first:
            role = "first"
        elif page.is_last:
            role = "last"
        else:
            role = "middle"
        table.add_row(f"{page.number}/{page.count}", str(len(page.items)), str(page.filler_rows), role)
    return table


def main(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    dry_run = "--dry-run" in args
    paths = [arg for arg in args if arg != "--dry-run"]

    if not paths:
        console.print("[red]Usage: python -m retailbill BILL.json [OUT.pdf] [--dry-run][/red]")
        return 2

    source = Path(paths[0])
    target = Path(paths[1]) if len(paths) > 1 else source.with_suffix(".pdf")

    bill = load_bill(source)
    service = BillService()
    summary = service.summarize(bill.items)
    paginator = InvoicePaginator()

    try:
        console.print(pages_table(bill, paginator))
    except BillingError as exc:
        console.print(f"[red]{exc}[/red]")
        return 1

    profit = UNKNOWN_PROFIT_LABEL if summary.total_profit is None else format_kwd(summary.total_profit)
    console.print(f"Total: [bold]{format_kwd(bill.total_amount)}[/bold]  Profit: {profit}")
    if not service.verify_total(bill):
        console.print(f"[yellow]Stored total differs from items: {format_kwd(summary.total)}[/yellow]")

    if dry_run:
        console.print("[dim]Dry run: no PDF written.[/dim]")
        return 0

    pdf_bytes = InvoicePDF(paginator).generate(bill)
    target.write_bytes(pdf_bytes)
    logger.info("Invoice for bill %s written to %s", bill.id, target)
    console.print(f"[green]Written {target}[/green]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
