from .payment import DetectedPayment, ExpenseRecord
from .rules import CategoryRule, CategoryRuleSet, default_rule_set
from .settings import CaptureSettings
from .ui_event import EventKind, SourceApp, UiEvent, UiNode

__all__ = [
    # models
    "CaptureSettings",
    "CategoryRule",
    "CategoryRuleSet",
    "DetectedPayment",
    "EventKind",
    "ExpenseRecord",
    "SourceApp",
    "UiEvent",
    "UiNode",
    # defaults
    "default_rule_set",
]
