"""Notification router - FastAPI endpoints for notification settings, templates and feed"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_admin_barbershop, get_current_user
from ...database import get_db
from ...models import Barbershop, Profile
from .schemas import (
    DispatchRequest,
    DispatchResponse,
    NotificationResponse,
    NotificationSettingsResponse,
    NotificationSettingsUpdate,
    TemplateCreate,
    TemplateResponse,
    TemplateUpdate,
    WhatsAppStatusResponse,
    WhatsAppTestRequest,
    WhatsAppTestResponse,
)
from .service import NotificationService, to_settings_response

router = APIRouter(prefix="/barbershops/{barbershop_id}/notifications", tags=["Notifications"])
feed_router = APIRouter(prefix="/me/notifications", tags=["Notifications"])


def get_notification_service(db: Session = Depends(get_db)) -> NotificationService:
    """Dependency injection for NotificationService"""
    return NotificationService(db)


# ============================================================================
# SETTINGS
# ============================================================================


@router.get("/settings", response_model=NotificationSettingsResponse)
async def get_settings(
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: NotificationService = Depends(get_notification_service),
):
    return to_settings_response(service.get_settings(barbershop.id))


@router.put("/settings", response_model=NotificationSettingsResponse)
async def update_settings(
    data: NotificationSettingsUpdate,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: NotificationService = Depends(get_notification_service),
):
    return to_settings_response(service.update_settings(barbershop.id, data))


# ============================================================================
# TEMPLATES
# ============================================================================


@router.get("/templates", response_model=list[TemplateResponse])
async def get_templates(
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: NotificationService = Depends(get_notification_service),
):
    return service.get_templates(barbershop.id)


@router.post("/templates", response_model=TemplateResponse, status_code=201)
async def create_template(
    data: TemplateCreate,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: NotificationService = Depends(get_notification_service),
):
    return service.create_template(barbershop.id, data)


@router.put("/templates/{template_id}", response_model=TemplateResponse)
async def update_template(
    template_id: str,
    data: TemplateUpdate,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: NotificationService = Depends(get_notification_service),
):
    return service.update_template(template_id, barbershop.id, data)


@router.delete("/templates/{template_id}")
async def delete_template(
    template_id: str,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: NotificationService = Depends(get_notification_service),
):
    return service.delete_template(template_id, barbershop.id)


# ============================================================================
# DELIVERY
# ============================================================================


@router.post("/bookings/{booking_id}/dispatch", response_model=DispatchResponse)
async def dispatch_booking_notification(
    booking_id: str,
    data: DispatchRequest,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: NotificationService = Depends(get_notification_service),
):
    """Send (or resend) a booking notification over the enabled channels"""
    return await service.dispatch(barbershop.id, booking_id, data.notification_type)


@router.get("/whatsapp/status", response_model=WhatsAppStatusResponse)
async def get_whatsapp_status(
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: NotificationService = Depends(get_notification_service),
):
    return await service.whatsapp_status(barbershop)


@router.post("/whatsapp/test", response_model=WhatsAppTestResponse)
async def send_whatsapp_test(
    data: WhatsAppTestRequest,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: NotificationService = Depends(get_notification_service),
):
    return await service.send_test_whatsapp(barbershop, data)


# ============================================================================
# IN-APP FEED
# ============================================================================


@feed_router.get("", response_model=list[NotificationResponse])
async def get_my_notifications(
    unread_only: bool = Query(False),
    limit: int = Query(50, ge=1, le=200),
    current_user: Profile = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service),
):
    return service.get_feed(current_user, unread_only, limit)


@feed_router.post("/read-all")
async def mark_all_notifications_read(
    current_user: Profile = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service),
):
    return service.mark_all_read(current_user)


@feed_router.post("/{notification_id}/read", response_model=NotificationResponse)
async def mark_notification_read(
    notification_id: str,
    current_user: Profile = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service),
):
    return service.mark_read(current_user, notification_id)


__all__ = ["router", "feed_router"]
