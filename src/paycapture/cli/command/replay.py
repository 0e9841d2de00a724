"""Replay recorded accessibility events through the detection pipeline.

Input is a JSON-lines file, one UiEvent per line:

    {"kind": "window_state_changed", "package_name": "com.tencent.mm",
     "event_time_ms": 1741408200000, "root": {"children": [{"text": "支付成功"}, ...]}}

Blank lines and lines starting with '#' are skipped. Time is virtual: the
cooldown and the confirmation timeout advance with each event's
event_time_ms, so a replay is deterministic and never sleeps.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any, Callable

from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from paycapture.model.config_io import load_settings
from paycapture.model.payment import ExpenseRecord
from paycapture.model.ui_event import UiEvent
from paycapture.services.capture_session import CaptureSessionController, ConfirmationCard
from paycapture.services.detection_pipeline import DetectionPipeline
from paycapture.storage.ledger_store import LedgerStore, StorageError
from paycapture.storage.ledger_writer import QueuedLedgerWriter
from paycapture.workspace import Workspace

from .util import build_classifier, console, fmt_amount

logger = logging.getLogger(__name__)


class Decision(StrEnum):
    """What the simulated user does with each confirmation card."""

    confirm = "confirm"
    cancel = "cancel"
    timeout = "timeout"


@dataclass
class _VirtualTimer:
    deadline_ms: int
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class VirtualTimers:
    """Timer factory driven by replayed event time instead of the wall clock."""

    now_ms: int = 0
    pending: list[_VirtualTimer] = field(default_factory=list)

    def __call__(self, seconds: float, callback: Callable[[], None]) -> _VirtualTimer:
        timer = _VirtualTimer(deadline_ms=self.now_ms + int(seconds * 1000), callback=callback)
        self.pending.append(timer)
        return timer

    def advance(self, now_ms: int) -> None:
        """Move time forward and fire every due, uncancelled timer."""
        self.now_ms = max(self.now_ms, now_ms)
        due = [t for t in self.pending if t.deadline_ms <= self.now_ms]
        self.pending = [t for t in self.pending if t.deadline_ms > self.now_ms]
        for timer in sorted(due, key=lambda t: t.deadline_ms):
            if not timer.cancelled:
                timer.callback()

    def flush(self) -> None:
        """Fire everything still pending, as if the user walked away."""
        if self.pending:
            self.advance(max(t.deadline_ms for t in self.pending))


class ConsoleSurface:
    """Confirmation surface printing cards to the Rich console."""

    def __init__(self) -> None:
        self._next_handle = 0
        self.failures: list[str] = []

    def show(self, card: ConfirmationCard, on_confirm: Callable[[], Any], on_cancel: Callable[[], Any]) -> int:
        self._next_handle += 1
        body = (
            f"[bold]{card.amount_text}[/]  {card.merchant}\n"
            f"类别: [green]{card.category}[/]   方式: {card.channel}\n"
            f"[dim]{card.detected_at_text}[/]"
        )
        console.print(Panel(body, title=f"检测到支付 #{self._next_handle}", expand=False))
        return self._next_handle

    def dismiss(self, handle: int) -> None:
        console.print(f"[dim]card #{handle} closed[/]")

    def report_failure(self, message: str) -> None:
        self.failures.append(message)
        console.print(f"[red]{message}[/]")


class DryRunLedger:
    """Collects records instead of persisting them."""

    def __init__(self) -> None:
        self.records: list[ExpenseRecord] = []

    def insert(self, record: ExpenseRecord) -> None:
        self.records.append(record)


def _read_events(path: Path) -> list[tuple[int, UiEvent | None, str | None]]:
    """Parse the events file into (line number, event or None, error or None)."""
    parsed = []
    for lineno, line in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        try:
            parsed.append((lineno, UiEvent.model_validate(json.loads(stripped)), None))
        except json.JSONDecodeError as exc:
            parsed.append((lineno, None, f"invalid JSON: {exc.msg}"))
        except ValidationError as exc:
            parsed.append((lineno, None, f"invalid event: {exc.error_count()} error(s)"))
    return parsed


def _render_records(records: list[ExpenseRecord], title: str) -> None:
    table = Table(title=title, show_lines=False)
    table.add_column("ID", style="blue", no_wrap=True)
    table.add_column("Time", style="white")
    table.add_column("Merchant", style="white")
    table.add_column("Category", style="cyan")
    table.add_column("Method", style="white")
    table.add_column("Amount", justify="right")
    for r in records:
        table.add_row(r.id[:8], r.occurred_at.strftime("%Y-%m-%d %H:%M"), r.merchant, r.category, r.pay_method, fmt_amount(r.amount))
    console.print(table)


def run(
    *,
    events_file: Path,
    decision: Decision = Decision.confirm,
    workspace: Workspace,
    write: bool = False,
) -> int:
    """Feed each event to the pipeline and act on every card per decision.

    Returns an exit code (0 success; 1 if the events file is missing).
    Dry-run when write=False: confirmed records are listed, not saved.
    """
    if not events_file.exists():
        console.print(f"[red]Events file not found:[/] {events_file}")
        return 1

    settings = load_settings(workspace.settings_config)
    classifier = build_classifier(workspace)
    timers = VirtualTimers()
    surface = ConsoleSurface()

    writer: QueuedLedgerWriter | None = None
    dry_ledger = DryRunLedger()
    if write:
        try:
            writer = QueuedLedgerWriter(LedgerStore(workspace.ledger_path))
        except StorageError as exc:
            console.print(f"[red]Error:[/red] {exc}")
            return 1

    controller = CaptureSessionController(
        surface,
        writer if writer is not None else dry_ledger,
        classifier=classifier,
        timeout_ms=settings.session_timeout_ms,
        timer_factory=timers,
    )
    pipeline = DetectionPipeline(
        settings=settings,
        classifier=classifier,
        sessions=controller,
        clock=lambda: timers.now_ms,
    )

    seen = detected = invalid = 0
    confirmed: list[ExpenseRecord] = []
    try:
        for lineno, event, error in _read_events(events_file):
            if event is None:
                invalid += 1
                console.print(f"[yellow]Line {lineno} skipped:[/] {error}")
                continue
            seen += 1
            if event.event_time_ms is not None:
                timers.advance(event.event_time_ms)
            payment = pipeline.on_event(event)
            if payment is None:
                continue
            detected += 1
            session = controller.active
            if session is None:
                continue
            if decision is Decision.confirm:
                session.confirm()
                if session.record is not None:
                    confirmed.append(session.record)
            elif decision is Decision.cancel:
                session.cancel()
        timers.flush()
    finally:
        if writer is not None:
            writer.close()

    console.print(
        f"\nEvents: {seen}  detected: [bold]{detected}[/]  "
        f"confirmed: [green]{len(confirmed)}[/]  invalid lines: {invalid}"
    )
    if confirmed:
        if write:
            _render_records(confirmed, "Saved Records")
        else:
            _render_records(dry_ledger.records, "Records (dry-run)")
            console.print("[dim]Dry-run: use --write to save to the ledger[/]")
    if surface.failures:
        return 1
    return 0
