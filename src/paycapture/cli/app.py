from __future__ import annotations

"""
PayCapture CLI Wrapper (Typer + Rich)

Offline tooling around the payment-capture core: replay recorded
accessibility events, inspect categorization, and browse the ledger.

All paths are resolved from a single workspace root:
  --data-dir / PAYCAPTURE_DATA env var / current working directory
"""

import logging
from pathlib import Path
from typing import Optional

import typer

from paycapture.cli.command.replay import Decision
from paycapture.workspace import Workspace

HELP_WRITE = "Persist changes (default: dry-run)"

APP_HELP = "PayCapture CLI (local-only)"

app = typer.Typer(no_args_is_help=True, add_completion=False, help=APP_HELP)


@app.callback()
def main(
    ctx: typer.Context,
    data_dir: Optional[Path] = typer.Option(
        None,
        "--data-dir",
        envvar="PAYCAPTURE_DATA",
        help="Workspace root directory (default: current directory)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """PayCapture CLI: all paths resolved from a single workspace root."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["workspace"] = Workspace.resolve(data_dir)


def _ws(ctx: typer.Context) -> Workspace:
    return ctx.obj["workspace"]


@app.command()
def init(ctx: typer.Context):
    """Initialize a new workspace with required directories and starter config.

    Safe to run on an existing workspace; skips anything that already exists.

    Examples:
      paycapture --data-dir ~/ledger init
      paycapture init
    """
    from paycapture.cli.command import init as cmd_init

    code = cmd_init.run(workspace=_ws(ctx))
    raise typer.Exit(code=code)


@app.command()
def replay(
    ctx: typer.Context,
    events_file: Path = typer.Argument(..., help="JSON-lines file of recorded UI events"),
    decision: Decision = typer.Option(
        Decision.confirm, "--decision", help="What to do with each confirmation card"
    ),
    write: bool = typer.Option(False, "--write", help=HELP_WRITE),
):
    """Replay recorded accessibility events through the detection pipeline.

    Examples:
      paycapture replay events.jsonl
      paycapture replay events.jsonl --decision timeout
      paycapture replay events.jsonl --write

    Safety: dry-run by default. Use --write to save confirmed records.
    """
    from paycapture.cli.command import replay as cmd_replay

    code = cmd_replay.run(events_file=events_file, decision=decision, workspace=_ws(ctx), write=write)
    raise typer.Exit(code=code)


@app.command()
def classify(
    ctx: typer.Context,
    merchant: str = typer.Argument(..., help="Merchant name as shown on the payment screen"),
):
    """Show the category a merchant would be filed under."""
    from paycapture.cli.command import classify as cmd_classify

    code = cmd_classify.run(merchant=merchant, workspace=_ws(ctx))
    raise typer.Exit(code=code)


@app.command()
def override(
    ctx: typer.Context,
    merchant: str = typer.Argument(..., help="Merchant name"),
    category: str = typer.Argument(..., help="Category to file this merchant under"),
    write: bool = typer.Option(False, "--write", help=HELP_WRITE),
):
    """Correct the category for a merchant; wins over keyword rules.

    Examples:
      paycapture override 星巴克咖啡 餐饮 --write
    """
    from paycapture.cli.command import override as cmd_override

    code = cmd_override.run(merchant=merchant, category=category, workspace=_ws(ctx), write=write)
    raise typer.Exit(code=code)


@app.command()
def records(
    ctx: typer.Context,
    month: Optional[str] = typer.Option(None, "--month", help="Month to show as YYYY-MM (default: current)"),
    limit: Optional[int] = typer.Option(None, "--limit", help="Max rows to display"),
):
    """List saved records for a month with per-category totals."""
    from paycapture.cli.command import records as cmd_records

    code = cmd_records.run(month=month, workspace=_ws(ctx), limit=limit)
    raise typer.Exit(code=code)


if __name__ == "__main__":
    app()
