"""Notification repository - Database operations for settings, templates and the feed"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...config import DEFAULT_REMINDER_MINUTES
from ...models import (
    Booking,
    BookingReminderSent,
    Notification,
    NotificationSettings,
    NotificationTemplate,
)


class NotificationRepository:
    """Repository for notification database operations"""

    # Settings

    @staticmethod
    def get_settings(db: Session, barbershop_id: str) -> Optional[NotificationSettings]:
        return (
            db.query(NotificationSettings)
            .filter(NotificationSettings.barbershop_id == barbershop_id)
            .first()
        )

    @staticmethod
    def create_settings(db: Session, barbershop_id: str, **data) -> NotificationSettings:
        settings = NotificationSettings(
            barbershop_id=barbershop_id, reminder_minutes=DEFAULT_REMINDER_MINUTES, **data
        )
        db.add(settings)
        db.commit()
        db.refresh(settings)
        return settings

    @staticmethod
    def update_settings(db: Session, settings: NotificationSettings, **updates) -> NotificationSettings:
        for key, value in updates.items():
            if value is not None and hasattr(settings, key):
                setattr(settings, key, value)
        db.commit()
        db.refresh(settings)
        return settings

    @staticmethod
    def get_reminder_settings(db: Session) -> list[NotificationSettings]:
        return (
            db.query(NotificationSettings)
            .filter(
                NotificationSettings.enabled.is_(True),
                NotificationSettings.send_booking_reminder.is_(True),
            )
            .all()
        )

    # Templates

    @staticmethod
    def get_templates(db: Session, barbershop_id: str) -> list[NotificationTemplate]:
        return (
            db.query(NotificationTemplate)
            .filter(NotificationTemplate.barbershop_id == barbershop_id)
            .order_by(NotificationTemplate.trigger_event, NotificationTemplate.channel)
            .all()
        )

    @staticmethod
    def get_template(db: Session, template_id: str, barbershop_id: str) -> Optional[NotificationTemplate]:
        return (
            db.query(NotificationTemplate)
            .filter(
                NotificationTemplate.id == template_id,
                NotificationTemplate.barbershop_id == barbershop_id,
            )
            .first()
        )

    @staticmethod
    def create_template(db: Session, barbershop_id: str, **data) -> NotificationTemplate:
        template = NotificationTemplate(barbershop_id=barbershop_id, **data)
        db.add(template)
        db.commit()
        db.refresh(template)
        return template

    @staticmethod
    def update_template(db: Session, template: NotificationTemplate, **updates) -> NotificationTemplate:
        for key, value in updates.items():
            if value is not None and hasattr(template, key):
                setattr(template, key, value)
        db.commit()
        db.refresh(template)
        return template

    @staticmethod
    def delete_template(db: Session, template: NotificationTemplate) -> None:
        db.delete(template)
        db.commit()

    # In-app feed

    @staticmethod
    def get_notifications(
        db: Session, user_id: str, unread_only: bool = False, limit: int = 50
    ) -> list[Notification]:
        query = db.query(Notification).filter(Notification.user_id == user_id)
        if unread_only:
            query = query.filter(Notification.read.is_(False))
        return query.order_by(Notification.created_at.desc()).limit(limit).all()

    @staticmethod
    def get_notification(db: Session, notification_id: str, user_id: str) -> Optional[Notification]:
        return (
            db.query(Notification)
            .filter(Notification.id == notification_id, Notification.user_id == user_id)
            .first()
        )

    @staticmethod
    def mark_all_read(db: Session, user_id: str) -> int:
        count = (
            db.query(Notification)
            .filter(Notification.user_id == user_id, Notification.read.is_(False))
            .update({Notification.read: True}, synchronize_session=False)
        )
        db.commit()
        return count

    # Reminders

    @staticmethod
    def get_upcoming_bookings(
        db: Session, barbershop_id: str, start_date: date, end_date: date
    ) -> list[Booking]:
        return (
            db.query(Booking)
            .options(
                joinedload(Booking.client),
                joinedload(Booking.service),
                joinedload(Booking.professional),
            )
            .filter(
                Booking.barbershop_id == barbershop_id,
                Booking.status.in_(("pending", "confirmed")),
                Booking.booking_date >= start_date,
                Booking.booking_date <= end_date,
            )
            .all()
        )

    @staticmethod
    def reminder_sent(db: Session, booking_id: str) -> bool:
        return (
            db.query(BookingReminderSent).filter(BookingReminderSent.booking_id == booking_id).first()
            is not None
        )

    @staticmethod
    def mark_reminder_sent(db: Session, booking_id: str) -> None:
        db.add(BookingReminderSent(booking_id=booking_id))
        db.commit()
