"""
Amount pattern matcher - per-app rules over concatenated snapshot text.

Each source app has a success marker (a localized "payment succeeded"
phrase) and a currency pattern in one of two dialects:
- leading symbol: ¥88.00 (WeChat)
- trailing word:  35.50元 (Alipay)

The marker is checked on every call before the amount pattern is applied.
Absence of either is the expected common case and yields None.

Amounts stay as extracted text; parse_amount converts them for records and
reports malformed text as None rather than raising.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from paycapture.model.ui_event import SourceApp

PAY_SUCCESS_TEXT = "支付成功"

# Grouped thousands (1,288.00) or plain digits (88.00, 88., 88)
_AMOUNT_GROUP = r"([0-9]{1,3}(?:,[0-9]{3})+(?:\.[0-9]+)?|[0-9]+\.?[0-9]*)"


@dataclass(frozen=True)
class AmountRule:
    """Success marker and currency pattern for one source app.

    The pattern's first capturing group is the amount.
    """

    success_marker: str
    pattern: re.Pattern[str]


WECHAT_RULE = AmountRule(success_marker=PAY_SUCCESS_TEXT, pattern=re.compile(r"[¥￥]" + _AMOUNT_GROUP))
ALIPAY_RULE = AmountRule(success_marker=PAY_SUCCESS_TEXT, pattern=re.compile(_AMOUNT_GROUP + r"元"))

DEFAULT_AMOUNT_RULES: dict[SourceApp, AmountRule] = {
    SourceApp.wechat: WECHAT_RULE,
    SourceApp.alipay: ALIPAY_RULE,
}


class AmountMatcher:
    """Extracts the paid amount from snapshot text for a given source app."""

    def __init__(self, rules: dict[SourceApp, AmountRule] | None = None):
        self._rules = dict(DEFAULT_AMOUNT_RULES if rules is None else rules)

    def has_success_marker(self, snapshot_text: str, app: SourceApp) -> bool:
        rule = self._rules.get(app)
        return rule is not None and rule.success_marker in snapshot_text

    def extract_amount(self, snapshot_text: str, app: SourceApp) -> str | None:
        """Return the first amount match, or None without a success marker or match."""
        rule = self._rules.get(app)
        if rule is None or rule.success_marker not in snapshot_text:
            return None
        match = rule.pattern.search(snapshot_text)
        if match is None:
            return None
        return match.group(1)


def parse_amount(amount_text: str | None) -> Decimal | None:
    """Convert extracted amount text to a non-negative Decimal.

    Thousands separators are removed. Returns None for missing, malformed,
    non-finite, or negative text.
    """
    if not amount_text:
        return None
    cleaned = amount_text.strip().replace(",", "")
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None
    if not value.is_finite() or value < 0:
        return None
    return value


__all__ = [
    "ALIPAY_RULE",
    "AmountMatcher",
    "AmountRule",
    "DEFAULT_AMOUNT_RULES",
    "PAY_SUCCESS_TEXT",
    "WECHAT_RULE",
    "parse_amount",
]
