"""
Sign policy for auto-captured records.

Ledger amounts are signed: negative for expenses, positive for income.
Payments observed in a payment app are debits, so every channel is an
expense unless explicitly configured otherwise.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import StrEnum


class Direction(StrEnum):
    expense = "expense"
    income = "income"


@dataclass(frozen=True)
class SignPolicy:
    """Maps a payment channel label to the direction of its records."""

    directions: dict[str, Direction] = field(default_factory=dict)
    default: Direction = Direction.expense

    def direction_for(self, channel: str) -> Direction:
        return self.directions.get(channel, self.default)

    def apply(self, amount: Decimal, channel: str) -> Decimal:
        """Signed ledger amount for a non-negative detected amount."""
        magnitude = abs(amount)
        if self.direction_for(channel) is Direction.income:
            return magnitude
        return -magnitude if magnitude else magnitude


__all__ = ["Direction", "SignPolicy"]
