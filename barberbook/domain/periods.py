"""Reporting period helpers shared by the finance and commissions domains"""

from datetime import date, timedelta
from typing import Optional

from dateutil.relativedelta import relativedelta
from fastapi import HTTPException

FINANCE_PERIODS = ("7d", "30d", "month", "3m", "year")
COMMISSION_PERIODS = ("today", "week", "month", "year", "custom")


def _month_bounds(day: date) -> tuple[date, date]:
    start = day.replace(day=1)
    end = start + relativedelta(months=1) - timedelta(days=1)
    return start, end


def finance_period_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """
    Inclusive (start, end) dates of a finance dashboard period.

    Rolling periods end today; "month" runs from the first of the month.
    """
    today = today or date.today()
    if period == "7d":
        return today - timedelta(days=7), today
    if period == "30d":
        return today - timedelta(days=30), today
    if period == "month":
        return today.replace(day=1), today
    if period == "3m":
        return today - relativedelta(months=3), today
    if period == "year":
        return today - relativedelta(months=12), today
    raise HTTPException(status_code=400, detail=f"Invalid period: {period}")


def previous_finance_period_range(
    period: str, today: Optional[date] = None
) -> tuple[date, date]:
    """The equivalent period immediately before finance_period_range(period)"""
    today = today or date.today()
    if period == "month":
        return _month_bounds(today - relativedelta(months=1))

    start, _ = finance_period_range(period, today)
    if period == "7d":
        previous_start = today - timedelta(days=14)
    elif period == "30d":
        previous_start = today - timedelta(days=60)
    elif period == "3m":
        previous_start = today - relativedelta(months=6)
    else:
        previous_start = today - relativedelta(months=24)
    return previous_start, start - timedelta(days=1)


def commission_period_range(
    period: str,
    today: Optional[date] = None,
    custom_start: Optional[date] = None,
    custom_end: Optional[date] = None,
) -> tuple[date, date]:
    """
    Inclusive (start, end) dates for the commissions page filters.

    Weeks start on Sunday. A custom range falls back to the current month
    for whichever bound is missing.
    """
    today = today or date.today()
    if period == "today":
        return today, today
    if period == "week":
        start = today - timedelta(days=(today.weekday() + 1) % 7)
        return start, start + timedelta(days=6)
    if period == "month":
        return _month_bounds(today)
    if period == "year":
        return date(today.year, 1, 1), date(today.year, 12, 31)
    if period == "custom":
        month_start, month_end = _month_bounds(today)
        start = custom_start or month_start
        end = custom_end or month_end
        if end < start:
            raise HTTPException(status_code=400, detail="End date must be after start date")
        return start, end
    raise HTTPException(status_code=400, detail=f"Invalid period: {period}")


def growth_percentage(current: float, previous: float) -> float:
    """Percent change from previous to current, 0 when there is no baseline"""
    if previous <= 0:
        return 0.0
    return round((current - previous) / previous * 100, 1)
