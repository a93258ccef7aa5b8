"""Scheduling domain schemas - Pydantic models for slot conflict checks"""

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_time


class BookedSlot(BaseModel):
    """An existing booking occupying a professional's agenda"""

    id: str
    start_time: str
    duration_minutes: int = 30
    status: str = "pending"
    label: Optional[str] = None

    @field_validator("start_time")
    @classmethod
    def validate_start(cls, v):
        return validate_time(v)


class BlockedWindow(BaseModel):
    """A manual unavailability window (lunch break, day off, ...)"""

    id: str
    start_time: str
    end_time: str
    reason: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_times(cls, v):
        return validate_time(v)


class ConflictEntry(BaseModel):
    kind: Literal["booking", "block"]
    id: str
    start: str
    end: str
    label: Optional[str] = None


class ConflictResult(BaseModel):
    has_conflict: bool
    conflict: Optional[ConflictEntry] = None
    suggested_slots: list[str] = Field(default_factory=list)


class ConflictCheckRequest(BaseModel):
    """Schema for the conflict check endpoint"""

    professional_id: str
    booking_date: date
    booking_time: str
    duration_minutes: Optional[int] = Field(default=None, gt=0)
    service_id: Optional[str] = None
    exclude_booking_id: Optional[str] = None

    @field_validator("booking_time")
    @classmethod
    def validate_booking_time(cls, v):
        return validate_time(v)


class AvailabilityResponse(BaseModel):
    professional_id: str
    date: date
    duration_minutes: int
    available_starts: list[str]
