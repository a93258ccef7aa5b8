"""Barbershop domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import (
    validate_br_phone,
    validate_email,
    validate_hex_color,
    validate_time,
)

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


class OwnerRegistration(BaseModel):
    email: str
    password: str = Field(min_length=6)
    full_name: str = Field(min_length=1)
    phone: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_owner_email(cls, v):
        return validate_email(v)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        if v:
            return validate_br_phone(v)
        return v


class BarbershopRegistrationData(BaseModel):
    name: str = Field(min_length=1)
    address: Optional[str] = None
    description: Optional[str] = None


class BarbershopRegisterRequest(BaseModel):
    """Schema for self-service barbershop sign-up"""

    code: str = Field(min_length=1)
    owner: OwnerRegistration
    barbershop: BarbershopRegistrationData


class BarbershopRegisterResponse(BaseModel):
    success: bool = True
    user_id: str
    barbershop_id: str
    slug: str


class BarbershopSettingsUpdate(BaseModel):
    """Schema for updating barbershop settings (only provided fields change)"""

    name: Optional[str] = None
    address: Optional[str] = None
    description: Optional[str] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    instagram: Optional[str] = None
    tiktok: Optional[str] = None
    logo_url: Optional[str] = None
    primary_color: Optional[str] = None
    opening_time: Optional[str] = None
    closing_time: Optional[str] = None
    opening_days: Optional[list[str]] = None
    custom_message: Optional[str] = None

    @field_validator("phone", "whatsapp")
    @classmethod
    def validate_phones(cls, v):
        if v:
            return validate_br_phone(v)
        return v

    @field_validator("opening_time", "closing_time")
    @classmethod
    def validate_hours(cls, v):
        return validate_time(v)

    @field_validator("primary_color")
    @classmethod
    def validate_color(cls, v):
        return validate_hex_color(v)

    @field_validator("opening_days")
    @classmethod
    def validate_days(cls, v):
        if v is None:
            return v
        days = [d.strip().lower() for d in v]
        invalid = [d for d in days if d not in WEEKDAYS]
        if invalid:
            raise ValueError(f"Invalid weekday(s): {', '.join(invalid)}")
        return days


class BarbershopResponse(BaseModel):
    id: str
    name: str
    slug: str
    owner_id: str
    address: Optional[str] = None
    description: Optional[str] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    instagram: Optional[str] = None
    tiktok: Optional[str] = None
    logo_url: Optional[str] = None
    primary_color: Optional[str] = None
    opening_time: str
    closing_time: str
    opening_days: Optional[list[str]] = None
    custom_message: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class GalleryImageCreate(BaseModel):
    image_url: str = Field(min_length=1)
    title: Optional[str] = None
    description: Optional[str] = None
    display_order: int = 0


class GalleryImageUpdate(BaseModel):
    image_url: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    display_order: Optional[int] = None


class GalleryImageResponse(BaseModel):
    id: str
    barbershop_id: str
    image_url: str
    title: Optional[str] = None
    description: Optional[str] = None
    display_order: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RegistrationCodeCreate(BaseModel):
    code: Optional[str] = None
    expires_in_days: Optional[int] = Field(default=30, gt=0)


class RegistrationCodeResponse(BaseModel):
    id: str
    code: str
    expires_at: Optional[datetime] = None
    is_used: bool
    used_at: Optional[datetime] = None
    used_by: Optional[str] = None

    class Config:
        from_attributes = True
