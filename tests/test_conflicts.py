from datetime import date, datetime

import pytest

from barberbook.domain.scheduling.conflicts import (
    available_slots,
    check_conflicts,
    is_time_in_past,
    minutes_to_time,
    time_to_minutes,
    validate_appointment,
)
from barberbook.domain.scheduling.schemas import BlockedWindow, BookedSlot

DAY = date(2030, 3, 14)


def booked(start, duration=30, status="confirmed", booking_id="b1"):
    return BookedSlot(id=booking_id, start_time=start, duration_minutes=duration, status=status)


def test_time_to_minutes_ignores_seconds():
    assert time_to_minutes("09:30") == 570
    assert time_to_minutes("09:30:45") == 570


def test_adjacent_booking_does_not_conflict():
    result = check_conflicts("10:00", 30, [booked("09:00", duration=60)], [])
    assert result.has_conflict is False
    assert result.suggested_slots == []


def test_overlapping_booking_conflicts():
    result = check_conflicts("09:30", 30, [booked("09:00", duration=60)], [], booking_date=DAY)
    assert result.has_conflict is True
    assert result.conflict.kind == "booking"
    assert result.conflict.id == "b1"
    assert result.conflict.start == "09:00"
    assert result.conflict.end == "10:00"


def test_cancelled_and_completed_bookings_are_ignored():
    bookings = [
        booked("09:00", status="cancelled", booking_id="c1"),
        booked("09:00", status="completed", booking_id="c2"),
    ]
    assert check_conflicts("09:00", 30, bookings, []).has_conflict is False


def test_time_block_conflicts():
    block = BlockedWindow(id="blk", start_time="12:00", end_time="13:00", reason="Almoço")
    result = check_conflicts("12:30", 30, [], [block], booking_date=DAY)
    assert result.has_conflict is True
    assert result.conflict.kind == "block"
    assert result.conflict.label == "Almoço"


BOOKED_START, BOOKED_END = 600, 660
BLOCK_START, BLOCK_END = 840, 870
GRID = [
    (minutes_to_time(start), duration)
    for start in range(510, 945, 15)
    for duration in (15, 30, 45, 60, 90)
]


@pytest.mark.parametrize("start,duration", GRID)
def test_booking_conflict_matches_interval_overlap(start, duration):
    begin = time_to_minutes(start)
    expected = begin < BOOKED_END and begin + duration > BOOKED_START

    result = check_conflicts(start, duration, [booked("10:00", duration=60)], [])

    assert result.has_conflict is expected


@pytest.mark.parametrize("start,duration", GRID)
def test_block_conflict_matches_interval_overlap(start, duration):
    begin = time_to_minutes(start)
    expected = begin < BLOCK_END and begin + duration > BLOCK_START
    block = BlockedWindow(id="blk", start_time="14:00", end_time="14:30", reason="Almoço")

    result = check_conflicts(start, duration, [], [block])

    assert result.has_conflict is expected


@pytest.mark.parametrize(
    "start,duration,expected",
    [
        ("09:00", 60, False),
        ("09:00", 61, True),
        ("11:00", 30, False),
        ("10:59", 30, True),
        ("13:30", 30, False),
        ("14:30", 15, False),
        ("14:29", 15, True),
    ],
)
def test_touching_edges(start, duration, expected):
    block = BlockedWindow(id="blk", start_time="14:00", end_time="14:30", reason="Almoço")
    result = check_conflicts(start, duration, [booked("10:00", duration=60)], [block])
    assert result.has_conflict is expected


def test_suggestions_are_closest_first_and_capped():
    result = check_conflicts("10:15", 30, [booked("10:00")], [], booking_date=DAY)
    assert result.has_conflict is True
    assert result.suggested_slots == ["10:30", "09:30", "11:00", "09:00", "11:30"]


def test_available_slots_respect_closing_time():
    assert available_slots("08:00", "09:00", 45, [], []) == ["08:00"]


def test_available_slots_skip_past_starts_today():
    now = datetime(2030, 3, 14, 12, 10)
    slots = available_slots("08:00", "14:00", 30, [], [], booking_date=DAY, now=now)
    assert slots == ["12:30", "13:00", "13:30"]


def test_available_slots_keep_past_starts_on_other_days():
    now = datetime(2030, 3, 13, 23, 0)
    slots = available_slots("08:00", "09:00", 30, [], [], booking_date=DAY, now=now)
    assert slots == ["08:00", "08:30"]


def test_is_time_in_past():
    now = datetime(2030, 3, 14, 10, 0)
    assert is_time_in_past(DAY, "09:59", now) is True
    assert is_time_in_past(DAY, "10:00", now) is False


def test_validate_appointment_reports_missing_fields():
    errors = validate_appointment({})
    assert set(errors) == {
        "client_id",
        "service_id",
        "professional_id",
        "booking_date",
        "booking_time",
    }


def test_validate_appointment_rejects_past_time():
    data = {
        "client_id": "c",
        "service_id": "s",
        "professional_id": "p",
        "booking_date": "2030-03-14",
        "booking_time": "08:00",
    }
    errors = validate_appointment(data, now=datetime(2030, 3, 14, 9, 0))
    assert errors == {"booking_time": "Time cannot be in the past"}

    assert validate_appointment(data, now=datetime(2030, 3, 13, 9, 0)) == {}
