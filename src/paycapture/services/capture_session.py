"""
Capture session - the confirmation workflow for one detected payment.

A session is created already holding a DetectedPayment and is Displayed
from the start. It ends in exactly one of three terminal states:

    Displayed -> Confirmed   user confirmed; an ExpenseRecord is persisted
    Displayed -> Cancelled   user dismissed the card; nothing is saved
    Displayed -> TimedOut    nobody acted before the timeout; nothing is saved

Confirm and cancel arrive from a UI callback while the timeout arrives from
a timer thread. The terminal transition is a check-and-set under the
session lock, so whichever arrives first wins and every later attempt is a
no-op. The winner cancels the pending timer; a timer that fires anyway
finds the session terminal, or carries a stale generation after a refresh,
and does nothing.

Rendering and persistence belong to collaborators (ConfirmationSurface and
Ledger). The surface is never called while the lock is held, so a surface
may invoke the callbacks synchronously from show().

NO IMPORTS FROM:
- rich
- typer
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any, Callable, Protocol

from paycapture.config import DEFAULT_SESSION_TIMEOUT_MS, UNKNOWN_MERCHANT
from paycapture.dates import format_datetime_ms
from paycapture.model.payment import DetectedPayment, ExpenseRecord
from paycapture.services.amount_matcher import parse_amount
from paycapture.services.category_classifier import CategoryClassifier
from paycapture.services.sign_policy import SignPolicy
from paycapture.storage.ledger_store import StorageError

logger = logging.getLogger(__name__)


class SessionState(StrEnum):
    displayed = "displayed"
    confirmed = "confirmed"
    cancelled = "cancelled"
    timed_out = "timed_out"

    @property
    def is_terminal(self) -> bool:
        return self is not SessionState.displayed


@dataclass(frozen=True)
class ConfirmationCard:
    """What the surface renders: the payment, predicted category and timestamp."""

    payment: DetectedPayment
    category: str
    detected_at_text: str

    @property
    def amount_text(self) -> str:
        return self.payment.amount_text

    @property
    def merchant(self) -> str:
        return self.payment.merchant

    @property
    def channel(self) -> str:
        return self.payment.channel


class ConfirmationSurface(Protocol):
    """Renders confirmation cards. May optionally define report_failure(message)."""

    def show(self, card: ConfirmationCard, on_confirm: Callable[[], Any], on_cancel: Callable[[], Any]) -> Any:
        ...

    def dismiss(self, handle: Any) -> None:
        ...


class Ledger(Protocol):
    """Persists records. insert may return None or a Future for queued writes."""

    def insert(self, record: ExpenseRecord) -> Any:
        ...


class Cancellable(Protocol):
    def cancel(self) -> None:
        ...


TimerFactory = Callable[[float, Callable[[], None]], Cancellable]


def start_thread_timer(seconds: float, callback: Callable[[], None]) -> Cancellable:
    """Default timer: a daemon threading.Timer, already started."""
    timer = threading.Timer(seconds, callback)
    timer.daemon = True
    timer.start()
    return timer


class CaptureSession:
    def __init__(
        self,
        payment: DetectedPayment,
        category: str,
        *,
        surface: ConfirmationSurface,
        ledger: Ledger,
        classifier: CategoryClassifier | None = None,
        sign_policy: SignPolicy | None = None,
        timeout_ms: int = DEFAULT_SESSION_TIMEOUT_MS,
        timer_factory: TimerFactory = start_thread_timer,
        on_finished: Callable[[CaptureSession], None] | None = None,
    ):
        self._lock = threading.Lock()
        self._surface = surface
        self._ledger = ledger
        self._classifier = classifier
        self._sign_policy = sign_policy if sign_policy is not None else SignPolicy()
        self._timeout_ms = timeout_ms
        self._timer_factory = timer_factory
        self._on_finished = on_finished

        self._payment = payment
        self._predicted_category = category
        self._category = category
        self._state = SessionState.displayed
        self._generation = 0
        self._handle: Any = None
        self._timer: Cancellable | None = None
        self._record: ExpenseRecord | None = None

    # --- read-only views ---

    @property
    def state(self) -> SessionState:
        with self._lock:
            return self._state

    @property
    def payment(self) -> DetectedPayment:
        with self._lock:
            return self._payment

    @property
    def category(self) -> str:
        with self._lock:
            return self._category

    @property
    def record(self) -> ExpenseRecord | None:
        """The record built on confirmation, if any."""
        with self._lock:
            return self._record

    def card(self) -> ConfirmationCard:
        with self._lock:
            return self._card_locked()

    def _card_locked(self) -> ConfirmationCard:
        return ConfirmationCard(
            payment=self._payment,
            category=self._category,
            detected_at_text=format_datetime_ms(self._payment.detected_at_ms),
        )

    # --- display ---

    def open(self) -> None:
        """Render the card and arm the timeout."""
        with self._lock:
            if self._state.is_terminal:
                return
            generation = self._generation
            card = self._card_locked()
        self._show(card, generation)

    def refresh(self, payment: DetectedPayment, category: str) -> bool:
        """Replace the displayed card with a new payment and restart the timeout.

        Returns False when the session is already terminal; the caller should
        start a new session instead.
        """
        with self._lock:
            if self._state.is_terminal:
                return False
            self._generation += 1
            generation = self._generation
            old_timer, old_handle = self._timer, self._handle
            self._timer, self._handle = None, None
            self._payment = payment
            self._predicted_category = category
            self._category = category
            card = self._card_locked()
        if old_timer is not None:
            old_timer.cancel()
        if old_handle is not None:
            self._surface.dismiss(old_handle)
        self._show(card, generation)
        return True

    def _show(self, card: ConfirmationCard, generation: int) -> None:
        handle = self._surface.show(card, self.confirm, self.cancel)
        with self._lock:
            current = not self._state.is_terminal and generation == self._generation
            if current:
                self._handle = handle
                self._timer = self._timer_factory(
                    self._timeout_ms / 1000, lambda: self._on_timeout(generation)
                )
        if not current and handle is not None:
            # Finished or refreshed while the surface was rendering
            self._surface.dismiss(handle)

    # --- user edits ---

    def edit_category(self, category: str) -> bool:
        """Change the category the record will be saved with. No-op once terminal."""
        if not category.strip():
            raise ValueError("Category must not be blank")
        with self._lock:
            if self._state.is_terminal:
                return False
            self._category = category
            return True

    # --- terminal transitions ---

    def confirm(self) -> bool:
        """Save the payment as a record. Returns False if the session already ended."""
        if not self._finish(SessionState.confirmed):
            return False
        with self._lock:
            payment, category, predicted = self._payment, self._category, self._predicted_category
        try:
            if self._classifier is not None and category != predicted and payment.merchant != UNKNOWN_MERCHANT:
                self._classifier.override(payment.merchant, category)
            record = self._build_record(payment, category)
            if record is not None:
                with self._lock:
                    self._record = record
                self._persist(record)
        finally:
            self._release()
        return True

    def cancel(self) -> bool:
        """Discard the payment. Returns False if the session already ended."""
        if not self._finish(SessionState.cancelled):
            return False
        self._release()
        return True

    def _on_timeout(self, generation: int) -> None:
        if self._finish(SessionState.timed_out, generation=generation):
            logger.debug("Capture session timed out unattended")
            self._release()

    def _finish(self, target: SessionState, generation: int | None = None) -> bool:
        """Atomically move Displayed -> target and disarm the timer.

        A generation, when given, must still be current; timers armed before a
        refresh carry a stale one.
        """
        with self._lock:
            if self._state.is_terminal:
                return False
            if generation is not None and generation != self._generation:
                return False
            self._state = target
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()
        return True

    def _release(self) -> None:
        with self._lock:
            handle, self._handle = self._handle, None
        if handle is not None:
            self._surface.dismiss(handle)
        if self._on_finished is not None:
            self._on_finished(self)

    # --- persistence ---

    def _build_record(self, payment: DetectedPayment, category: str) -> ExpenseRecord | None:
        amount = parse_amount(payment.amount_text)
        if amount is None:
            logger.warning("Discarding confirmed payment with unreadable amount %r", payment.amount_text)
            return None
        return ExpenseRecord(
            amount=self._sign_policy.apply(amount, payment.channel),
            category=category,
            merchant=payment.merchant,
            pay_method=payment.channel,
            occurred_at=datetime.fromtimestamp(payment.detected_at_ms / 1000),
        )

    def _persist(self, record: ExpenseRecord) -> None:
        try:
            result = self._ledger.insert(record)
        except (StorageError, RuntimeError) as exc:
            self._report_failure(record, exc)
            return
        if isinstance(result, Future):
            result.add_done_callback(lambda fut: self._on_persisted(record, fut))
        else:
            logger.info("Saved record %s (%s %s)", record.id, record.merchant, record.amount)

    def _on_persisted(self, record: ExpenseRecord, future: Future) -> None:
        if future.cancelled():
            self._report_failure(record, StorageError("write was cancelled"))
            return
        exc = future.exception()
        if exc is None:
            logger.info("Saved record %s (%s %s)", record.id, record.merchant, record.amount)
        else:
            self._report_failure(record, exc)

    def _report_failure(self, record: ExpenseRecord, exc: BaseException) -> None:
        logger.error("Failed to save record %s: %s", record.id, exc, exc_info=exc)
        report = getattr(self._surface, "report_failure", None)
        if callable(report):
            report(f"记账失败: {exc}")


class CaptureSessionController:
    """Owns the single active capture session.

    begin() while a session is still displayed refreshes that session in place
    instead of opening a second, overlapping card.
    """

    def __init__(
        self,
        surface: ConfirmationSurface,
        ledger: Ledger,
        *,
        classifier: CategoryClassifier | None = None,
        sign_policy: SignPolicy | None = None,
        timeout_ms: int = DEFAULT_SESSION_TIMEOUT_MS,
        timer_factory: TimerFactory = start_thread_timer,
    ):
        self._surface = surface
        self._ledger = ledger
        self._classifier = classifier
        self._sign_policy = sign_policy if sign_policy is not None else SignPolicy()
        self._timeout_ms = timeout_ms
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._active: CaptureSession | None = None

    @property
    def active(self) -> CaptureSession | None:
        with self._lock:
            session = self._active
        if session is not None and session.state is SessionState.displayed:
            return session
        return None

    def begin(self, payment: DetectedPayment, category: str) -> CaptureSession:
        current = self.active
        if current is not None and current.refresh(payment, category):
            logger.debug("Refreshed displayed capture session")
            return current
        session = CaptureSession(
            payment,
            category,
            surface=self._surface,
            ledger=self._ledger,
            classifier=self._classifier,
            sign_policy=self._sign_policy,
            timeout_ms=self._timeout_ms,
            timer_factory=self._timer_factory,
            on_finished=self._session_finished,
        )
        with self._lock:
            self._active = session
        session.open()
        return session

    def _session_finished(self, session: CaptureSession) -> None:
        with self._lock:
            if self._active is session:
                self._active = None


__all__ = [
    "CaptureSession",
    "CaptureSessionController",
    "ConfirmationCard",
    "ConfirmationSurface",
    "Ledger",
    "SessionState",
    "start_thread_timer",
]
