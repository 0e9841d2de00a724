"""
Detection pipeline - turns one accessibility event into at most one payment.

Stages, in order:
    EventFilter -> snapshot -> AmountMatcher -> MerchantExtractor -> CategoryClassifier

Any stage without a result ends the run for that event with no side effects;
in particular the cooldown is stamped only after a complete detection. A
detection is handed to the capture session controller, when one is wired.

Events arrive one at a time on a single dispatch context, so the stages need
no locking of their own; the shared CooldownState and ClassifierCache guard
themselves.

NO IMPORTS FROM:
- rich
- typer
"""

from __future__ import annotations

import logging
from typing import Callable

from paycapture.dates import now_ms
from paycapture.model.payment import DetectedPayment
from paycapture.model.settings import CaptureSettings
from paycapture.model.ui_event import UiEvent
from paycapture.services.amount_matcher import AmountMatcher, parse_amount
from paycapture.services.capture_session import CaptureSessionController
from paycapture.services.category_classifier import CategoryClassifier
from paycapture.services.event_filter import CooldownState, EventFilter
from paycapture.services.merchant_extractor import MerchantExtractor
from paycapture.services.snapshot import build_snapshot

logger = logging.getLogger(__name__)


class DetectionPipeline:
    def __init__(
        self,
        *,
        settings: CaptureSettings | None = None,
        cooldown: CooldownState | None = None,
        amount_matcher: AmountMatcher | None = None,
        merchant_extractor: MerchantExtractor | None = None,
        classifier: CategoryClassifier | None = None,
        sessions: CaptureSessionController | None = None,
        clock: Callable[[], int] = now_ms,
    ):
        """
        Args:
            settings: Cooldown interval and tree-walk bounds (defaults if omitted)
            cooldown: Shared cooldown state (fresh if omitted)
            amount_matcher: Per-app amount rules
            merchant_extractor: Merchant heuristic
            classifier: Category classifier; share it with the session controller
            sessions: Receives each detection; detections are only returned if omitted
            clock: Epoch-millisecond clock used when an event carries no time
        """
        self.settings = settings if settings is not None else CaptureSettings()
        if cooldown is None:
            cooldown = CooldownState()
        self.event_filter = EventFilter(cooldown, self.settings.cooldown_ms)
        self.amount_matcher = amount_matcher if amount_matcher is not None else AmountMatcher()
        self.merchant_extractor = merchant_extractor if merchant_extractor is not None else MerchantExtractor()
        self.classifier = classifier if classifier is not None else CategoryClassifier()
        self.sessions = sessions
        self._clock = clock

    @property
    def cooldown(self) -> CooldownState:
        return self.event_filter.cooldown

    def on_event(self, event: UiEvent) -> DetectedPayment | None:
        """Run one event through the pipeline; None when nothing was detected."""
        now = event.event_time_ms if event.event_time_ms is not None else self._clock()

        app = self.event_filter.accept(event, now)
        if app is None:
            return None

        snapshot = build_snapshot(
            event.root,
            max_depth=self.settings.max_tree_depth,
            max_children=self.settings.max_children_per_node,
        )
        amount_text = self.amount_matcher.extract_amount(snapshot.full_text(), app)
        if amount_text is None:
            return None
        if parse_amount(amount_text) is None:
            logger.debug("Ignoring unreadable amount %r from %s", amount_text, app)
            return None

        merchant = self.merchant_extractor.extract_merchant(snapshot)
        category = self.classifier.classify(merchant)
        payment = DetectedPayment(
            amount_text=amount_text,
            merchant=merchant,
            channel=app.channel_label,
            detected_at_ms=now,
        )
        self.cooldown.stamp(now)
        logger.info("Detected payment: amount=%s merchant=%s channel=%s", amount_text, merchant, payment.channel)

        if self.sessions is not None:
            self.sessions.begin(payment, category)
        return payment


__all__ = ["DetectionPipeline"]
