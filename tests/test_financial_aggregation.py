from datetime import date

import pytest

from barberbook.domain.finance.aggregation import compare_periods, summarize_bookings
from barberbook.domain.finance.schemas import BookingRecord, FinancialSummary


def record(price, status="completed", professional="Rafael", service="Corte", day=date(2024, 5, 13), time="10:00"):
    return BookingRecord(
        booking_date=day,
        booking_time=time,
        status=status,
        total_price=price,
        professional_name=professional,
        service_name=service,
    )


def test_summary_counts_only_completed_revenue():
    records = [
        record(50),
        record(30, professional="Bruno", service="Barba", time="14:00"),
        record(20, status="cancelled"),
    ]
    summary = summarize_bookings(records)

    assert summary.total_revenue == 80
    assert summary.total_bookings == 2
    assert summary.average_ticket == 40
    assert summary.cancellation_rate == 33.3
    assert summary.cancelled_count == 1
    assert summary.all_bookings == 3
    assert summary.top_professional.name == "Rafael"
    assert summary.top_professional.revenue == 50
    assert [g.name for g in summary.revenue_by_service] == ["Corte", "Barba"]


def test_summary_of_empty_period_is_all_zero():
    summary = summarize_bookings([])
    assert summary.total_revenue == 0
    assert summary.average_ticket == 0
    assert summary.cancellation_rate == 0
    assert summary.busiest_day is None
    assert summary.top_professional is None


def test_busiest_day_peak_hour_and_daily_series():
    records = [
        record(40, day=date(2024, 5, 13), time="10:00"),  # monday
        record(40, day=date(2024, 5, 20), time="10:30"),  # monday
        record(40, day=date(2024, 5, 14), time="15:00"),  # tuesday
    ]
    summary = summarize_bookings(records)

    assert summary.busiest_day == "monday"
    assert summary.peak_hour == "10"
    assert [d.date for d in summary.revenue_by_day] == [
        date(2024, 5, 13),
        date(2024, 5, 14),
        date(2024, 5, 20),
    ]


def test_missing_names_are_grouped_as_unknown():
    summary = summarize_bookings([record(25, professional=None, service=None)])
    assert summary.revenue_by_professional[0].name == "Unknown"
    assert summary.revenue_by_service[0].name == "Unknown"


def test_compare_periods():
    current = FinancialSummary(total_revenue=200, total_bookings=4, average_ticket=50)
    previous = FinancialSummary(total_revenue=100, total_bookings=4, average_ticket=25)
    comparison = compare_periods(current, previous)

    assert comparison.revenue_growth == 100.0
    assert comparison.bookings_growth == 0.0
    assert comparison.average_ticket_growth == 100.0


def test_compare_periods_without_baseline():
    comparison = compare_periods(FinancialSummary(total_revenue=80), FinancialSummary())
    assert comparison.revenue_growth == pytest.approx(0.0)
