"""Date formatting and range helpers."""

from __future__ import annotations

import calendar
import time as _time
from datetime import date, datetime, time

from paycapture.config import UNKNOWN_TIME

DATETIME_FORMAT = "%Y-%m-%d %H:%M"


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(_time.time() * 1000)


def format_datetime_ms(epoch_ms: int | None) -> str:
    """Format epoch milliseconds as local 'YYYY-MM-DD HH:MM'."""
    if epoch_ms is None:
        return UNKNOWN_TIME
    try:
        return datetime.fromtimestamp(epoch_ms / 1000).strftime(DATETIME_FORMAT)
    except (OverflowError, OSError, ValueError):
        return UNKNOWN_TIME


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """First and last instant of a day."""
    return datetime.combine(day, time.min), datetime.combine(day, time.max)


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    """First and last instant of a calendar month."""
    last_day = calendar.monthrange(year, month)[1]
    return (
        datetime.combine(date(year, month, 1), time.min),
        datetime.combine(date(year, month, last_day), time.max),
    )


def parse_month(text: str) -> tuple[int, int]:
    """Parse 'YYYY-MM' into (year, month).

    Raises:
        ValueError: If the text is not a valid month
    """
    parsed = datetime.strptime(text.strip(), "%Y-%m")
    return parsed.year, parsed.month


__all__ = [
    "DATETIME_FORMAT",
    "day_bounds",
    "format_datetime_ms",
    "month_bounds",
    "now_ms",
    "parse_month",
]
