from __future__ import annotations

from datetime import date, datetime

import pytest

from paycapture.config import UNKNOWN_TIME
from paycapture.dates import day_bounds, format_datetime_ms, month_bounds, parse_month


class DescribeFormatDatetimeMs:
    def it_should_format_local_minutes(self):
        moment = datetime(2025, 3, 8, 14, 30, 59)
        assert format_datetime_ms(int(moment.timestamp() * 1000)) == "2025-03-08 14:30"

    def it_should_fall_back_for_missing_time(self):
        assert format_datetime_ms(None) == UNKNOWN_TIME

    def it_should_fall_back_for_out_of_range_time(self):
        assert format_datetime_ms(10**20) == UNKNOWN_TIME


class DescribeRanges:
    def it_should_cover_whole_day(self):
        start, end = day_bounds(date(2025, 3, 8))
        assert start == datetime(2025, 3, 8, 0, 0)
        assert end.date() == date(2025, 3, 8)
        assert end.hour == 23 and end.minute == 59

    def it_should_handle_leap_february(self):
        start, end = month_bounds(2024, 2)
        assert start == datetime(2024, 2, 1)
        assert end.date() == date(2024, 2, 29)

    def it_should_parse_month_text(self):
        assert parse_month("2025-03") == (2025, 3)

    def it_should_reject_invalid_month_text(self):
        with pytest.raises(ValueError):
            parse_month("2025-13")
