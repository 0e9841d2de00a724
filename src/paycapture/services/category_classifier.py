"""
Category classifier - ordered keyword rules plus an adaptive merchant cache.

Classification consults the cache first. On a miss the ordered rule table
is evaluated (first matching rule wins, substring containment), falling back
to the rule set's default category, and the result is cached. A merchant's
category is therefore sticky for the life of the cache; override() is the
only way to change a cached mapping.

Cache entries produced by classification are process-lifetime only. User
overrides are tracked separately so the caller can persist and re-seed them
(see paycapture.model.config_io).

NO IMPORTS FROM:
- rich
- typer
"""

from __future__ import annotations

import threading

from paycapture.model.rules import CategoryRuleSet, default_rule_set


class ClassifierCache:
    """Merchant -> category mapping shared between pipeline and UI readers."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[str, str] = {}

    def get(self, merchant: str) -> str | None:
        with self._lock:
            return self._entries.get(merchant)

    def put(self, merchant: str, category: str) -> None:
        with self._lock:
            self._entries[merchant] = category

    def get_or_put(self, merchant: str, category: str) -> str:
        """Store category unless merchant is already cached; return the cached value."""
        with self._lock:
            return self._entries.setdefault(merchant, category)

    def snapshot(self) -> dict[str, str]:
        with self._lock:
            return dict(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class CategoryClassifier:
    """Predicts a spending category from a merchant name."""

    def __init__(
        self,
        rule_set: CategoryRuleSet | None = None,
        cache: ClassifierCache | None = None,
        overrides: dict[str, str] | None = None,
    ):
        """
        Args:
            rule_set: Ordered keyword rules (built-in table if omitted)
            cache: Shared cache instance (fresh if omitted)
            overrides: Previously saved user corrections to seed the cache with
        """
        self.rule_set = rule_set if rule_set is not None else default_rule_set()
        self.cache = cache if cache is not None else ClassifierCache()
        self._overrides_lock = threading.Lock()
        self._overrides: dict[str, str] = {}
        for merchant, category in (overrides or {}).items():
            self.override(merchant, category)

    def classify(self, merchant: str) -> str:
        cached = self.cache.get(merchant)
        if cached is not None:
            return cached
        predicted = self.rule_set.first_match(merchant) or self.rule_set.default_category
        # A concurrent override between get and here keeps precedence
        return self.cache.get_or_put(merchant, predicted)

    def override(self, merchant: str, category: str) -> None:
        """Record a user correction; it replaces any cached mapping for merchant."""
        if not category.strip():
            raise ValueError(f"Category for merchant '{merchant}' must not be blank")
        with self._overrides_lock:
            self._overrides[merchant] = category
            self.cache.put(merchant, category)

    def user_overrides(self) -> dict[str, str]:
        with self._overrides_lock:
            return dict(self._overrides)


__all__ = ["CategoryClassifier", "ClassifierCache"]
