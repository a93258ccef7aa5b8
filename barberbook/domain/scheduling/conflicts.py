"""
Slot conflict detection for a professional's agenda.

Everything here is pure: callers fetch the day's bookings and time blocks,
convert them to BookedSlot / BlockedWindow and pass them in. Times are
handled as minutes since midnight and intervals are half-open, so a booking
ending at 10:00 does not collide with one starting at 10:00.
"""

from datetime import date, datetime, time
from typing import Any, Optional

from .schemas import BlockedWindow, BookedSlot, ConflictEntry, ConflictResult

ACTIVE_BOOKING_STATUSES = ("pending", "confirmed")
SLOT_INTERVAL_MINUTES = 30
MAX_SUGGESTED_SLOTS = 5

REQUIRED_APPOINTMENT_FIELDS = {
    "client_id": "Client is required",
    "service_id": "Service is required",
    "professional_id": "Professional is required",
    "booking_date": "Date is required",
    "booking_time": "Time is required",
}


def time_to_minutes(value: str) -> int:
    """Convert "HH:MM" (seconds ignored) to minutes since midnight"""
    hours, minutes = value.split(":")[:2]
    return int(hours) * 60 + int(minutes)


def minutes_to_time(minutes: int) -> str:
    """Convert minutes since midnight to "HH:MM" """
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def overlaps(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    return start_a < end_b and end_a > start_b


def is_time_in_past(booking_date: date, booking_time: str, now: Optional[datetime] = None) -> bool:
    """True when the given date/time lies before ``now``"""
    now = now or datetime.now()
    minutes = time_to_minutes(booking_time)
    start = datetime.combine(booking_date, time(minutes // 60, minutes % 60))
    return start < now


def _occupied_windows(
    bookings: list[BookedSlot], blocks: list[BlockedWindow]
) -> list[ConflictEntry]:
    windows = []
    for booking in bookings:
        if booking.status not in ACTIVE_BOOKING_STATUSES:
            continue
        start = time_to_minutes(booking.start_time)
        windows.append(
            ConflictEntry(
                kind="booking",
                id=booking.id,
                start=minutes_to_time(start),
                end=minutes_to_time(start + booking.duration_minutes),
                label=booking.label,
            )
        )
    for block in blocks:
        windows.append(
            ConflictEntry(
                kind="block",
                id=block.id,
                start=block.start_time,
                end=block.end_time,
                label=block.reason,
            )
        )
    return windows


def _find_conflict(start: int, end: int, windows: list[ConflictEntry]) -> Optional[ConflictEntry]:
    for window in windows:
        if overlaps(start, end, time_to_minutes(window.start), time_to_minutes(window.end)):
            return window
    return None


def available_slots(
    opening_time: str,
    closing_time: str,
    duration_minutes: int,
    bookings: list[BookedSlot],
    blocks: list[BlockedWindow],
    booking_date: Optional[date] = None,
    now: Optional[datetime] = None,
    interval_minutes: int = SLOT_INTERVAL_MINUTES,
) -> list[str]:
    """
    List every free start on the slot grid for one professional's day.

    A start is free when the whole service duration fits before closing time
    and overlaps no active booking or time block. When ``booking_date`` is
    today (relative to ``now``), starts already in the past are skipped.
    """
    now = now or datetime.now()
    windows = _occupied_windows(bookings, blocks)
    skip_past = booking_date is not None and booking_date == now.date()

    open_minutes = time_to_minutes(opening_time)
    close_minutes = time_to_minutes(closing_time)

    free = []
    current = open_minutes
    while current + duration_minutes <= close_minutes:
        slot = minutes_to_time(current)
        if skip_past and is_time_in_past(booking_date, slot, now):
            current += interval_minutes
            continue
        if _find_conflict(current, current + duration_minutes, windows) is None:
            free.append(slot)
        current += interval_minutes
    return free


def check_conflicts(
    booking_time: str,
    duration_minutes: int,
    bookings: list[BookedSlot],
    blocks: list[BlockedWindow],
    opening_time: str = "08:00",
    closing_time: str = "19:00",
    booking_date: Optional[date] = None,
    now: Optional[datetime] = None,
    max_suggestions: int = MAX_SUGGESTED_SLOTS,
) -> ConflictResult:
    """
    Check a candidate appointment against the professional's agenda.

    Returns the first overlapping booking or block and, on conflict, up to
    ``max_suggestions`` free starts ordered by distance from the requested
    time (earlier start wins a tie).
    """
    start = time_to_minutes(booking_time)
    end = start + duration_minutes

    conflict = _find_conflict(start, end, _occupied_windows(bookings, blocks))
    if conflict is None:
        return ConflictResult(has_conflict=False)

    free = available_slots(
        opening_time,
        closing_time,
        duration_minutes,
        bookings,
        blocks,
        booking_date=booking_date,
        now=now,
    )
    free.sort(key=lambda slot: (abs(time_to_minutes(slot) - start), time_to_minutes(slot)))

    return ConflictResult(
        has_conflict=True,
        conflict=conflict,
        suggested_slots=free[:max_suggestions],
    )


def validate_appointment(
    data: dict[str, Any], now: Optional[datetime] = None
) -> dict[str, str]:
    """
    Collect form errors for a manual appointment, keyed by field name.

    An empty dict means the appointment can be submitted.
    """
    errors = {}
    for field, message in REQUIRED_APPOINTMENT_FIELDS.items():
        if not data.get(field):
            errors[field] = message

    booking_date = data.get("booking_date")
    booking_time = data.get("booking_time")
    if booking_date and booking_time and "booking_time" not in errors:
        if isinstance(booking_date, str):
            booking_date = date.fromisoformat(booking_date)
        if is_time_in_past(booking_date, booking_time, now):
            errors["booking_time"] = "Time cannot be in the past"

    return errors
