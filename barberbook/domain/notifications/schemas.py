"""Notification domain schemas - Pydantic models for settings, templates and the in-app feed"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_br_phone, validate_email

TemplateChannel = Literal["email", "whatsapp"]
TriggerEvent = Literal["booking_confirmed", "booking_cancelled", "booking_reminder"]
NotificationType = Literal["confirmation", "cancellation", "reminder"]


class NotificationSettingsUpdate(BaseModel):
    enabled: Optional[bool] = None
    send_to_client: Optional[bool] = None
    send_whatsapp: Optional[bool] = None
    admin_email: Optional[str] = None
    admin_whatsapp: Optional[str] = None
    reminder_minutes: Optional[int] = Field(default=None, ge=5, le=1440)
    custom_message: Optional[str] = None
    n8n_webhook_url: Optional[str] = None
    send_booking_confirmation: Optional[bool] = None
    send_booking_reminder: Optional[bool] = None
    evolution_api_url: Optional[str] = None
    evolution_api_key: Optional[str] = None
    evolution_instance_name: Optional[str] = None

    @field_validator("admin_email")
    @classmethod
    def validate_admin_email(cls, v):
        return validate_email(v)

    @field_validator("admin_whatsapp")
    @classmethod
    def validate_admin_whatsapp(cls, v):
        if v:
            return validate_br_phone(v)
        return v

    @field_validator("n8n_webhook_url", "evolution_api_url")
    @classmethod
    def validate_url(cls, v):
        if v and not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v


class NotificationSettingsResponse(BaseModel):
    """Settings as returned to the admin; the gateway key itself is never echoed"""

    id: str
    barbershop_id: str
    enabled: bool
    send_to_client: bool
    send_whatsapp: bool
    admin_email: Optional[str] = None
    admin_whatsapp: Optional[str] = None
    reminder_minutes: int
    custom_message: Optional[str] = None
    n8n_webhook_url: Optional[str] = None
    send_booking_confirmation: bool
    send_booking_reminder: bool
    evolution_api_url: Optional[str] = None
    evolution_instance_name: Optional[str] = None
    evolution_configured: bool = False


class TemplateCreate(BaseModel):
    channel: TemplateChannel
    trigger_event: TriggerEvent
    subject: Optional[str] = None
    content: str = Field(min_length=1)
    is_active: bool = True


class TemplateUpdate(BaseModel):
    subject: Optional[str] = None
    content: Optional[str] = Field(default=None, min_length=1)
    is_active: Optional[bool] = None


class TemplateResponse(BaseModel):
    id: str
    barbershop_id: str
    channel: str
    trigger_event: str
    subject: Optional[str] = None
    content: str
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class NotificationResponse(BaseModel):
    id: str
    barbershop_id: Optional[str] = None
    booking_id: Optional[str] = None
    title: str
    message: str
    type: str
    read: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class DispatchRequest(BaseModel):
    notification_type: NotificationType = "confirmation"


class DispatchResponse(BaseModel):
    email_sent: bool = False
    whatsapp_sent: bool = False
    admin_email_sent: bool = False
    skipped: Optional[str] = None
    errors: list[str] = Field(default_factory=list)


class WhatsAppStatusResponse(BaseModel):
    configured: bool
    provider: Optional[Literal["evolution", "n8n"]] = None
    state: Optional[str] = None
    phone_number: Optional[str] = None
    message: Optional[str] = None


class WhatsAppTestRequest(BaseModel):
    phone: Optional[str] = None
    message: Optional[str] = None

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        if v:
            return validate_br_phone(v)
        return v


class WhatsAppTestResponse(BaseModel):
    success: bool
    error: Optional[str] = None


class ReminderSweepResponse(BaseModel):
    checked: int = 0
    sent: int = 0
    errors: int = 0
