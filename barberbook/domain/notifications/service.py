"""Notification service - Business logic for notification settings, templates and reminders"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Barbershop, NotificationSettings, Profile
from ...services import evolution_service
from ...services.notification_service import (
    DEFAULT_CUSTOM_MESSAGE,
    send_booking_notifications,
    send_whatsapp,
)
from ..bookings.repository import BookingRepository
from ..scheduling.conflicts import time_to_minutes
from .repository import NotificationRepository
from .schemas import (
    NotificationSettingsUpdate,
    TemplateCreate,
    TemplateUpdate,
    WhatsAppTestRequest,
)

logger = logging.getLogger(__name__)

REMINDER_WINDOW_MINUTES = 5
TEST_MESSAGE = "✅ Mensagem de teste: as notificações de WhatsApp da sua barbearia estão funcionando!"


def _evolution_configured(settings: NotificationSettings) -> bool:
    return bool(
        settings.evolution_api_url
        and settings.evolution_api_key
        and settings.evolution_instance_name
    )


def to_settings_response(settings: NotificationSettings) -> dict:
    return {
        "id": settings.id,
        "barbershop_id": settings.barbershop_id,
        "enabled": settings.enabled,
        "send_to_client": settings.send_to_client,
        "send_whatsapp": settings.send_whatsapp,
        "admin_email": settings.admin_email,
        "admin_whatsapp": settings.admin_whatsapp,
        "reminder_minutes": settings.reminder_minutes,
        "custom_message": settings.custom_message,
        "n8n_webhook_url": settings.n8n_webhook_url,
        "send_booking_confirmation": settings.send_booking_confirmation,
        "send_booking_reminder": settings.send_booking_reminder,
        "evolution_api_url": settings.evolution_api_url,
        "evolution_instance_name": settings.evolution_instance_name,
        "evolution_configured": _evolution_configured(settings),
    }


class NotificationService:
    """Service layer for notification business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = NotificationRepository()

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def get_settings(self, barbershop_id: str) -> NotificationSettings:
        """Settings of a barbershop, created with defaults on first access"""
        settings = self.repo.get_settings(self.db, barbershop_id)
        if not settings:
            logger.info(f"ℹ️ Creating default notification settings for {barbershop_id}")
            settings = self.repo.create_settings(
                self.db, barbershop_id, custom_message=DEFAULT_CUSTOM_MESSAGE
            )
        return settings

    def update_settings(self, barbershop_id: str, data: NotificationSettingsUpdate) -> NotificationSettings:
        settings = self.get_settings(barbershop_id)
        settings = self.repo.update_settings(self.db, settings, **data.model_dump(exclude_unset=True))
        logger.info(f"✅ Notification settings updated for {barbershop_id}")
        return settings

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------

    def get_templates(self, barbershop_id: str):
        return self.repo.get_templates(self.db, barbershop_id)

    def get_template(self, template_id: str, barbershop_id: str):
        template = self.repo.get_template(self.db, template_id, barbershop_id)
        if not template:
            raise HTTPException(status_code=404, detail="Template not found")
        return template

    def create_template(self, barbershop_id: str, data: TemplateCreate):
        return self.repo.create_template(self.db, barbershop_id, **data.model_dump())

    def update_template(self, template_id: str, barbershop_id: str, data: TemplateUpdate):
        template = self.get_template(template_id, barbershop_id)
        return self.repo.update_template(self.db, template, **data.model_dump(exclude_unset=True))

    def delete_template(self, template_id: str, barbershop_id: str) -> dict:
        template = self.get_template(template_id, barbershop_id)
        self.repo.delete_template(self.db, template)
        return {"message": "Template deleted successfully"}

    # ------------------------------------------------------------------
    # In-app feed
    # ------------------------------------------------------------------

    def get_feed(self, user: Profile, unread_only: bool = False, limit: int = 50):
        return self.repo.get_notifications(self.db, user.id, unread_only, limit)

    def mark_read(self, user: Profile, notification_id: str):
        notification = self.repo.get_notification(self.db, notification_id, user.id)
        if not notification:
            raise HTTPException(status_code=404, detail="Notification not found")
        notification.read = True
        self.db.commit()
        self.db.refresh(notification)
        return notification

    def mark_all_read(self, user: Profile) -> dict:
        return {"updated": self.repo.mark_all_read(self.db, user.id)}

    # ------------------------------------------------------------------
    # Delivery
    # ------------------------------------------------------------------

    async def dispatch(self, barbershop_id: str, booking_id: str, notification_type: str) -> dict:
        """Send a booking notification on demand"""
        booking = BookingRepository.get_booking(self.db, booking_id, barbershop_id)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")
        return await send_booking_notifications(self.db, booking, notification_type)

    async def whatsapp_status(self, barbershop: Barbershop) -> dict:
        settings = self.get_settings(barbershop.id)
        if _evolution_configured(settings):
            status = await evolution_service.get_instance_status(
                settings.evolution_api_url,
                settings.evolution_api_key,
                settings.evolution_instance_name,
            )
            return {"configured": True, "provider": "evolution", **status}
        if settings.n8n_webhook_url or settings.send_whatsapp:
            return {
                "configured": True,
                "provider": "n8n",
                "message": "Messages are delivered through the n8n WhatsApp workflow",
            }
        return {"configured": False, "message": "WhatsApp channel not configured"}

    async def send_test_whatsapp(self, barbershop: Barbershop, data: WhatsAppTestRequest) -> dict:
        settings = self.get_settings(barbershop.id)
        phone = data.phone or settings.admin_whatsapp or barbershop.whatsapp
        if not phone:
            raise HTTPException(status_code=400, detail="No phone number to send the test to")

        sent, error = await send_whatsapp(
            settings,
            barbershop,
            phone,
            data.message or TEST_MESSAGE,
            payload={"notification_type": "test", "barbershop_name": barbershop.name},
            is_test=True,
        )
        return {"success": sent, "error": error}


async def send_due_reminders(db: Session, now: Optional[datetime] = None) -> dict:
    """
    Send reminders for bookings starting around ``now + reminder_minutes``.

    Each barbershop with reminders enabled is checked for pending/confirmed
    bookings inside a +/- 5 minute window around its target time. A booking
    is reminded at most once; failures are counted and the sweep continues.
    """
    now = now or datetime.now()
    repo = NotificationRepository()
    result = {"checked": 0, "sent": 0, "errors": 0}

    for settings in repo.get_reminder_settings(db):
        target = now + timedelta(minutes=settings.reminder_minutes or 30)
        window_start = target - timedelta(minutes=REMINDER_WINDOW_MINUTES)
        window_end = target + timedelta(minutes=REMINDER_WINDOW_MINUTES)

        bookings = repo.get_upcoming_bookings(
            db, settings.barbershop_id, window_start.date(), window_end.date()
        )
        for booking in bookings:
            minutes = time_to_minutes(booking.booking_time)
            starts_at = datetime.combine(booking.booking_date, datetime.min.time()) + timedelta(
                minutes=minutes
            )
            if not window_start <= starts_at <= window_end:
                continue
            result["checked"] += 1
            if repo.reminder_sent(db, booking.id):
                continue

            try:
                await send_booking_notifications(db, booking, "reminder")
                repo.mark_reminder_sent(db, booking.id)
                result["sent"] += 1
                logger.info(f"⏰ Reminder sent for booking {booking.id}")
            except Exception as e:
                db.rollback()
                result["errors"] += 1
                logger.error(f"❌ Error sending reminder for booking {booking.id}: {e}")

    logger.info(f"⏰ Reminder sweep done: {result['sent']} sent, {result['errors']} errors")
    return result
