from datetime import date

import pytest
from fastapi import HTTPException

from barberbook.domain.periods import (
    commission_period_range,
    finance_period_range,
    growth_percentage,
    previous_finance_period_range,
)

TODAY = date(2024, 5, 15)  # a Wednesday


def test_finance_month_runs_from_first_of_month():
    assert finance_period_range("month", TODAY) == (date(2024, 5, 1), TODAY)


def test_finance_previous_month_is_full_calendar_month():
    assert previous_finance_period_range("month", TODAY) == (date(2024, 4, 1), date(2024, 4, 30))


def test_finance_previous_rolling_period_ends_before_current_start():
    start, end = previous_finance_period_range("7d", TODAY)
    assert start == date(2024, 5, 1)
    assert end == date(2024, 5, 7)


def test_finance_invalid_period():
    with pytest.raises(HTTPException) as exc:
        finance_period_range("decade", TODAY)
    assert exc.value.status_code == 400


def test_commission_week_starts_on_sunday():
    assert commission_period_range("week", TODAY) == (date(2024, 5, 12), date(2024, 5, 18))


def test_commission_month_and_year():
    assert commission_period_range("month", TODAY) == (date(2024, 5, 1), date(2024, 5, 31))
    assert commission_period_range("year", TODAY) == (date(2024, 1, 1), date(2024, 12, 31))


def test_commission_custom_range_falls_back_to_month():
    start, end = commission_period_range("custom", TODAY, custom_start=date(2024, 5, 10))
    assert (start, end) == (date(2024, 5, 10), date(2024, 5, 31))


def test_commission_custom_range_must_be_ordered():
    with pytest.raises(HTTPException):
        commission_period_range(
            "custom", TODAY, custom_start=date(2024, 5, 20), custom_end=date(2024, 5, 1)
        )


def test_growth_percentage():
    assert growth_percentage(150, 100) == 50.0
    assert growth_percentage(50, 100) == -50.0
    assert growth_percentage(10, 0) == 0.0
