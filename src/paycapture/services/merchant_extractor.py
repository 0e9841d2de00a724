"""
Merchant extractor - label/sibling heuristic over a UI text snapshot.

Payment result screens show the merchant next to a fixed label such as
"商户:" or "收款方". For every node whose text equals one of the labels, in
tree order, the first sibling carrying non-empty text is the merchant. The
first hit wins. With no hit the unknown-merchant sentinel is returned, so the
extractor never fails and never returns an empty string.
"""

from __future__ import annotations

from paycapture.config import UNKNOWN_MERCHANT
from paycapture.services.snapshot import UiTextSnapshot

_LABEL_WORDS = ("商户", "收款方", "商家", "店铺")

MERCHANT_LABELS = frozenset(
    f"{word}{suffix}" for word in _LABEL_WORDS for suffix in ("", ":", "：")
)


class MerchantExtractor:
    def __init__(self, labels: frozenset[str] = MERCHANT_LABELS, fallback: str = UNKNOWN_MERCHANT):
        self._labels = labels
        self._fallback = fallback

    def extract_merchant(self, snapshot: UiTextSnapshot) -> str:
        for node in snapshot:
            if node.text.strip() not in self._labels:
                continue
            for sibling in snapshot.siblings_of(node.index):
                name = sibling.text.strip()
                if name:
                    return name
        return self._fallback


__all__ = ["MERCHANT_LABELS", "MerchantExtractor"]
