"""Booking domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_time


class BookingCreate(BaseModel):
    """
    Schema for a manual appointment created from the admin agenda.

    Required fields are optional here so missing values are reported
    together, keyed by field name, instead of as a schema error.
    """

    client_id: Optional[str] = None
    service_id: Optional[str] = None
    professional_id: Optional[str] = None
    booking_date: Optional[date] = None
    booking_time: Optional[str] = None
    status: Literal["pending", "confirmed"] = "confirmed"
    notes: Optional[str] = None
    price_override: Optional[float] = Field(default=None, ge=0)
    use_subscription: bool = False
    send_notification: bool = True

    @field_validator("booking_time")
    @classmethod
    def validate_booking_time(cls, v):
        if v:
            return validate_time(v)
        return v


class PublicBookingCreate(BaseModel):
    """Schema for a booking made by a client on the public page"""

    service_id: str
    professional_id: str
    booking_date: date
    booking_time: str
    notes: Optional[str] = None
    use_subscription: bool = False

    @field_validator("booking_time")
    @classmethod
    def validate_booking_time(cls, v):
        return validate_time(v)


class BookingStatusUpdate(BaseModel):
    status: Literal["pending", "confirmed", "completed", "cancelled"]


class BookingReschedule(BaseModel):
    booking_date: date
    booking_time: str
    professional_id: Optional[str] = None

    @field_validator("booking_time")
    @classmethod
    def validate_booking_time(cls, v):
        return validate_time(v)


class BookingResponse(BaseModel):
    id: str
    barbershop_id: str
    client_id: str
    professional_id: str
    service_id: str
    booking_date: date
    booking_time: str
    status: str
    total_price: float
    notes: Optional[str] = None
    client_name: Optional[str] = None
    client_phone: Optional[str] = None
    service_name: Optional[str] = None
    professional_name: Optional[str] = None
    duration_minutes: int = 30
    created_at: Optional[datetime] = None


class ClientBookingResponse(BookingResponse):
    """Booking as seen by the client, with the barbershop it belongs to"""

    barbershop_name: Optional[str] = None
    barbershop_slug: Optional[str] = None
