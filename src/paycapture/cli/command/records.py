from __future__ import annotations

from datetime import date
from typing import Optional

from rich.table import Table

from paycapture.dates import DATETIME_FORMAT, month_bounds, parse_month
from paycapture.storage.ledger_store import LedgerStore, StorageError
from paycapture.workspace import Workspace

from .util import console, fmt_amount


def run(
    *,
    month: Optional[str] = None,
    workspace: Workspace,
    limit: Optional[int] = None,
) -> int:
    """Show a month of saved records and per-category expense totals.

    month is 'YYYY-MM' (default: current month).

    Returns an exit code (0 for success, 1 for bad input or a missing ledger).
    """
    if month is None:
        today = date.today()
        year, mon = today.year, today.month
    else:
        try:
            year, mon = parse_month(month)
        except ValueError:
            console.print(f"[red]Error:[/red] Invalid month '{month}', expected YYYY-MM")
            return 1

    ledger_path = workspace.ledger_path
    if not ledger_path.exists():
        console.print(f"[red]Error:[/red] Ledger not found: {ledger_path}")
        console.print("[yellow]Run 'paycapture replay --write' to capture records first.[/yellow]")
        return 1

    start, end = month_bounds(year, mon)
    try:
        store = LedgerStore(ledger_path)
        records = store.query_by_range(start, end)
        totals = store.category_totals(start, end)
        net = store.total(start, end)
    except StorageError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        return 1

    shown = records[:limit] if limit else records
    table = Table(title=f"Records {year:04d}-{mon:02d}", show_lines=False)
    table.add_column("ID", style="blue", no_wrap=True)
    table.add_column("Time", style="white")
    table.add_column("Merchant", style="white")
    table.add_column("Category", style="cyan")
    table.add_column("Method", style="white")
    table.add_column("Amount", justify="right")
    table.add_column("Remark", style="dim")
    for r in shown:
        table.add_row(
            r.id[:8],
            r.occurred_at.strftime(DATETIME_FORMAT),
            r.merchant,
            r.category,
            r.pay_method,
            fmt_amount(r.amount),
            r.remark,
        )
    console.print(table)
    if len(shown) < len(records):
        console.print(f"[dim]Showing {len(shown)} of {len(records)} records[/]")

    if totals:
        summary = Table(title="Expenses by Category", show_lines=False)
        summary.add_column("Category", style="cyan")
        summary.add_column("Spent", justify="right")
        for name, amount in sorted(totals.items(), key=lambda kv: kv[1], reverse=True):
            summary.add_row(name, f"{amount:,.2f}")
        console.print(summary)

    console.print("Net:", fmt_amount(net))
    return 0
