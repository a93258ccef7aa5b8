"""Professional domain schemas - Pydantic models for professionals and time blocks"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...shared.validators import validate_time


class ProfessionalCreate(BaseModel):
    name: str = Field(min_length=1)
    bio: Optional[str] = None
    photo_url: Optional[str] = None
    specialties: list[str] = Field(default_factory=list)
    rating: Optional[float] = Field(default=5.0, ge=0, le=5)
    user_id: Optional[str] = None
    is_active: bool = True


class ProfessionalUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    bio: Optional[str] = None
    photo_url: Optional[str] = None
    specialties: Optional[list[str]] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    user_id: Optional[str] = None
    is_active: Optional[bool] = None


class ProfessionalResponse(BaseModel):
    id: str
    barbershop_id: str
    user_id: Optional[str] = None
    name: str
    bio: Optional[str] = None
    photo_url: Optional[str] = None
    specialties: Optional[list[str]] = None
    rating: Optional[float] = None
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TimeBlockCreate(BaseModel):
    """Schema for a manual unavailability window"""

    block_date: date
    start_time: str
    end_time: str
    reason: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_times(cls, v):
        return validate_time(v)

    @model_validator(mode="after")
    def check_order(self):
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class TimeBlockResponse(BaseModel):
    id: str
    professional_id: str
    block_date: date
    start_time: str
    end_time: str
    reason: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
