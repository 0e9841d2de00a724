"""
Service layer for payment capture.

This module contains the functional core separated from the imperative
shell (CLI). Services take their collaborators (clock, timers, confirmation
surface, ledger) through constructors.

Principles:
- No UI framework imports (Rich, Typer)
- All dependencies injected through constructors
- Negative results are values (None), not exceptions
- Fully testable with simple unit tests
"""

from paycapture.services.amount_matcher import AmountMatcher, parse_amount
from paycapture.services.capture_session import (
    CaptureSession,
    CaptureSessionController,
    ConfirmationCard,
    SessionState,
)
from paycapture.services.category_classifier import CategoryClassifier, ClassifierCache
from paycapture.services.detection_pipeline import DetectionPipeline
from paycapture.services.event_filter import CooldownState, EventFilter
from paycapture.services.merchant_extractor import MerchantExtractor
from paycapture.services.sign_policy import Direction, SignPolicy
from paycapture.services.snapshot import UiTextSnapshot, build_snapshot

__all__ = [
    "AmountMatcher",
    "CaptureSession",
    "CaptureSessionController",
    "CategoryClassifier",
    "ClassifierCache",
    "ConfirmationCard",
    "CooldownState",
    "DetectionPipeline",
    "Direction",
    "EventFilter",
    "MerchantExtractor",
    "SessionState",
    "SignPolicy",
    "UiTextSnapshot",
    "build_snapshot",
    "parse_amount",
]
