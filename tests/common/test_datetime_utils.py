from datetime import date

import pytest

from sports_institute.common.datetime_utils import days_in_month, parse_month, parse_request_date, weekday_code
from sports_institute.common.numbers import round_half_up
from sports_institute.core.enums import Weekday
from sports_institute.core.exceptions import ValidationError


def test_days_in_month_handles_leap_years():
    assert days_in_month("2024-02") == 29
    assert days_in_month("2026-02") == 28
    assert days_in_month("2026-10") == 31


def test_parse_month_rejects_other_formats():
    assert parse_month("2026-07") == (2026, 7)
    with pytest.raises(ValidationError):
        parse_month("07/2026")


def test_weekday_code_starts_on_monday():
    assert weekday_code(date(2026, 10, 19)) == Weekday.MON
    assert weekday_code(date(2026, 10, 25)) == Weekday.SUN


def test_parse_request_date():
    assert parse_request_date("2026-10-19") == date(2026, 10, 19)
    assert parse_request_date("", default=date(2026, 1, 1)) == date(2026, 1, 1)
    with pytest.raises(ValidationError):
        parse_request_date("19/10/2026")
    with pytest.raises(ValidationError):
        parse_request_date(None)


def test_round_half_up():
    assert round_half_up("12.5") == 13
    assert round_half_up("2.5") == 3
    assert round_half_up("2.49") == 2
