"""
Financial aggregation over a period's bookings.

Only ``completed`` bookings count as revenue. The cancellation rate is
measured against every booking of the period, whatever its status.
"""

from collections import Counter
from typing import Iterable

from ..periods import growth_percentage
from .schemas import BookingRecord, DailyRevenue, FinancialSummary, PeriodComparison, RevenueGroup

WEEKDAY_NAMES = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
UNKNOWN_NAME = "Unknown"


def _group_revenue(records: Iterable[BookingRecord], key) -> list[RevenueGroup]:
    groups: dict[str, RevenueGroup] = {}
    for record in records:
        name = key(record) or UNKNOWN_NAME
        group = groups.setdefault(name, RevenueGroup(name=name, revenue=0.0, count=0))
        group.revenue += record.total_price
        group.count += 1
    return sorted(groups.values(), key=lambda g: g.revenue, reverse=True)


def _most_common(values: Iterable[str]):
    counts = Counter(values)
    if not counts:
        return None
    return counts.most_common(1)[0][0]


def summarize_bookings(records: list[BookingRecord]) -> FinancialSummary:
    """Compute the dashboard metrics for one period"""
    completed = [r for r in records if r.status == "completed"]
    cancelled_count = sum(1 for r in records if r.status == "cancelled")

    total_revenue = sum(r.total_price for r in completed)
    total_bookings = len(completed)
    average_ticket = total_revenue / total_bookings if total_bookings else 0.0
    cancellation_rate = round(cancelled_count / len(records) * 100, 1) if records else 0.0

    daily: dict = {}
    for record in completed:
        day = daily.setdefault(
            record.booking_date, DailyRevenue(date=record.booking_date, revenue=0.0, count=0)
        )
        day.revenue += record.total_price
        day.count += 1

    by_professional = _group_revenue(completed, lambda r: r.professional_name)

    return FinancialSummary(
        total_revenue=total_revenue,
        total_bookings=total_bookings,
        average_ticket=average_ticket,
        cancellation_rate=cancellation_rate,
        cancelled_count=cancelled_count,
        all_bookings=len(records),
        busiest_day=_most_common(WEEKDAY_NAMES[r.booking_date.weekday()] for r in completed),
        peak_hour=_most_common(r.booking_time[:2] for r in completed),
        top_professional=by_professional[0] if by_professional else None,
        revenue_by_day=[daily[d] for d in sorted(daily)],
        revenue_by_service=_group_revenue(completed, lambda r: r.service_name),
        revenue_by_professional=by_professional,
    )


def compare_periods(current: FinancialSummary, previous: FinancialSummary) -> PeriodComparison:
    return PeriodComparison(
        revenue_growth=growth_percentage(current.total_revenue, previous.total_revenue),
        bookings_growth=growth_percentage(current.total_bookings, previous.total_bookings),
        average_ticket_growth=growth_percentage(current.average_ticket, previous.average_ticket),
    )
