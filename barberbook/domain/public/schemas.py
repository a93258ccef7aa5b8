"""Public domain schemas - What a barbershop exposes on its booking page"""

from typing import Optional

from pydantic import BaseModel


class PublicBarbershopResponse(BaseModel):
    id: str
    name: str
    slug: str
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

    class Config:
        from_attributes = True
