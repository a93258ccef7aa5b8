"""Client domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_br_phone, validate_email


class ClientCreate(BaseModel):
    """Schema for registering a walk-in client"""

    full_name: str = Field(min_length=1)
    phone: Optional[str] = None
    email: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        if v:
            return validate_br_phone(v)
        return v

    @field_validator("email")
    @classmethod
    def validate_client_email(cls, v):
        return validate_email(v)


class ClientUpdate(BaseModel):
    """Schema for updating a barbershop's client record"""

    phone: Optional[str] = None
    email: Optional[str] = None
    notes: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        if v:
            return validate_br_phone(v)
        return v

    @field_validator("email")
    @classmethod
    def validate_client_email(cls, v):
        return validate_email(v)


class ClientResponse(BaseModel):
    id: str
    client_id: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    notes: Optional[str] = None
    first_visit: Optional[datetime] = None
    last_visit: Optional[datetime] = None
    total_visits: int
    is_active: bool
    segment: str


class ClientHistoryBooking(BaseModel):
    id: str
    booking_date: date
    booking_time: str
    status: str
    total_price: float
    service_name: Optional[str] = None
    professional_name: Optional[str] = None


class ClientHistoryResponse(BaseModel):
    client: ClientResponse
    bookings: list[ClientHistoryBooking]
    total_spent: float
    completed_count: int
    cancelled_count: int


class SegmentGroup(BaseModel):
    count: int
    clients: list[ClientResponse]


class ClientSegmentsResponse(BaseModel):
    new: SegmentGroup
    regular: SegmentGroup
    vip: SegmentGroup
    inactive: SegmentGroup
