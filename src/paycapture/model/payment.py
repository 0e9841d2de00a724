from __future__ import annotations

"""
Payment and ledger record models.

Scope
- DetectedPayment: the immutable candidate produced by the detection pipeline
- ExpenseRecord: the entity persisted by the ledger collaborator
- Amounts are Decimal and serialize as strings to preserve precision

Privacy
- These models hold financial data but perform no network I/O
"""

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from paycapture.config import UNKNOWN_MERCHANT


class DetectedPayment(BaseModel):
    """A payment recognized on screen, awaiting user confirmation.

    amount_text is kept exactly as extracted (e.g. "1,288.00"); numeric
    conversion happens where a record is built.
    """

    model_config = ConfigDict(frozen=True)

    amount_text: str = Field(min_length=1, description="Extracted decimal text")
    merchant: str = Field(default=UNKNOWN_MERCHANT, min_length=1, description="Best-effort merchant name")
    channel: str = Field(description="Payment method label, e.g. 微信支付")
    detected_at_ms: int = Field(ge=0, description="Detection time in epoch milliseconds")

    @property
    def detected_at(self) -> datetime:
        return datetime.fromtimestamp(self.detected_at_ms / 1000)


class ExpenseRecord(BaseModel):
    """Ledger entry. Negative amounts are expenses, positive are income."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    amount: Decimal
    category: str
    merchant: str
    pay_method: str
    occurred_at: datetime
    remark: str = ""

    @property
    def is_expense(self) -> bool:
        return self.amount < 0

    @field_serializer("amount")
    def serialize_amount(self, value: Decimal) -> str:
        """Serialize Decimal to string to preserve precision."""
        return str(value)

    @field_validator("amount", mode="before")
    @classmethod
    def parse_amount(cls, value: Any) -> Decimal:
        """Parse amount from string or number."""
        if isinstance(value, Decimal):
            return value
        if isinstance(value, str):
            return Decimal(value)
        return Decimal(str(value))


__all__ = ["DetectedPayment", "ExpenseRecord"]
