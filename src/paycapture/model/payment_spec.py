from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from paycapture.config import UNKNOWN_MERCHANT
from paycapture.model.payment import DetectedPayment, ExpenseRecord


class DescribeDetectedPayment:
    def it_should_default_merchant_to_sentinel(self):
        payment = DetectedPayment(amount_text="8.00", channel="微信支付", detected_at_ms=0)
        assert payment.merchant == UNKNOWN_MERCHANT

    def it_should_reject_empty_amount_text(self):
        with pytest.raises(ValidationError):
            DetectedPayment(amount_text="", channel="微信支付", detected_at_ms=0)

    def it_should_be_immutable(self):
        payment = DetectedPayment(amount_text="8.00", channel="支付宝", detected_at_ms=0)
        with pytest.raises(ValidationError):
            payment.amount_text = "9.00"


class DescribeExpenseRecord:
    def it_should_generate_unique_ids(self):
        kwargs = dict(
            amount="-8.00",
            category="餐饮",
            merchant="星巴克",
            pay_method="微信支付",
            occurred_at=datetime(2025, 3, 1, 12, 0),
        )
        assert ExpenseRecord(**kwargs).id != ExpenseRecord(**kwargs).id

    def it_should_parse_amount_into_decimal(self):
        record = ExpenseRecord(
            amount=-35.5,
            category="购物",
            merchant="超市",
            pay_method="支付宝",
            occurred_at=datetime(2025, 3, 1),
        )
        assert record.amount == Decimal("-35.5")
        assert record.is_expense

    def it_should_serialize_amount_as_string(self):
        record = ExpenseRecord(
            amount=Decimal("-88.00"),
            category="餐饮",
            merchant="m",
            pay_method="微信支付",
            occurred_at=datetime(2025, 3, 1),
        )
        assert record.model_dump(mode="json")["amount"] == "-88.00"
