"""Booking service - Business logic for bookings"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Barbershop, Booking, Profile
from ...services.notification_service import send_booking_notifications
from ...subscription_limits import has_active_subscription
from ..barbershops.schemas import WEEKDAYS
from ..clients.repository import ClientRepository
from ..scheduling.conflicts import is_time_in_past, time_to_minutes, validate_appointment
from ..scheduling.schemas import ConflictCheckRequest, ConflictResult
from ..scheduling.service import SchedulingService
from ..subscriptions.service import SubscriptionService
from .repository import BookingRepository
from .schemas import BookingCreate, BookingReschedule, PublicBookingCreate

logger = logging.getLogger(__name__)

FINAL_STATUSES = ("completed", "cancelled")


def to_booking_response(booking: Booking) -> dict:
    client = booking.client
    service = booking.service
    barbershop = booking.barbershop
    return {
        "id": booking.id,
        "barbershop_id": booking.barbershop_id,
        "client_id": booking.client_id,
        "professional_id": booking.professional_id,
        "service_id": booking.service_id,
        "booking_date": booking.booking_date,
        "booking_time": booking.booking_time,
        "status": booking.status,
        "total_price": booking.total_price,
        "notes": booking.notes,
        "client_name": client.full_name if client else None,
        "client_phone": client.phone if client else None,
        "service_name": service.name if service else None,
        "professional_name": booking.professional.name if booking.professional else None,
        "duration_minutes": service.duration_minutes if service else 30,
        "created_at": booking.created_at,
        "barbershop_name": barbershop.name if barbershop else None,
        "barbershop_slug": barbershop.slug if barbershop else None,
    }


def _conflict_error(result: ConflictResult) -> HTTPException:
    return HTTPException(
        status_code=409,
        detail={
            "message": "Time slot unavailable",
            "conflict": result.conflict.model_dump() if result.conflict else None,
            "suggested_slots": result.suggested_slots,
        },
    )


class BookingService:
    """Service layer for booking business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BookingRepository()
        self.scheduling = SchedulingService(db)

    def get_bookings(self, barbershop_id: str, **filters) -> list[dict]:
        bookings = self.repo.get_bookings(self.db, barbershop_id, **filters)
        return [to_booking_response(b) for b in bookings]

    def get_booking(self, booking_id: str, barbershop_id: str) -> Booking:
        booking = self.repo.get_booking(self.db, booking_id, barbershop_id)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")
        return booking

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    async def create_booking(
        self, barbershop: Barbershop, data: BookingCreate, now: Optional[datetime] = None
    ) -> dict:
        """Create a manual appointment from the admin agenda"""
        logger.info(f"📥 Creating booking for barbershop_id: {barbershop.id}")

        errors = validate_appointment(data.model_dump(), now)
        if errors:
            raise HTTPException(
                status_code=400, detail={"message": "Invalid appointment", "errors": errors}
            )

        client = self.db.query(Profile).filter(Profile.id == data.client_id).first()
        if not client:
            raise HTTPException(status_code=404, detail="Client not found")

        booking = self._create(
            barbershop,
            client,
            data.service_id,
            data.professional_id,
            data.booking_date,
            data.booking_time,
            status=data.status,
            notes=data.notes,
            price_override=data.price_override,
            use_subscription=data.use_subscription,
            now=now,
        )

        if data.send_notification:
            await self._notify(booking, "confirmation")
        return to_booking_response(booking)

    async def create_client_booking(
        self,
        barbershop: Barbershop,
        client: Profile,
        data: PublicBookingCreate,
        now: Optional[datetime] = None,
    ) -> dict:
        """Create a pending booking requested by a client on the public page"""
        logger.info(f"📥 Client {client.id} booking at barbershop {barbershop.slug}")

        opening_days = barbershop.opening_days or []
        if opening_days and WEEKDAYS[data.booking_date.weekday()] not in opening_days:
            raise HTTPException(status_code=400, detail="Barbershop is closed on this day")
        if is_time_in_past(data.booking_date, data.booking_time, now):
            raise HTTPException(status_code=400, detail="Time cannot be in the past")

        booking = self._create(
            barbershop,
            client,
            data.service_id,
            data.professional_id,
            data.booking_date,
            data.booking_time,
            status="pending",
            notes=data.notes,
            use_subscription=data.use_subscription,
            within_opening_hours=True,
            now=now,
        )

        await self._notify(booking, "confirmation")
        return to_booking_response(booking)

    def _create(
        self,
        barbershop: Barbershop,
        client: Profile,
        service_id: str,
        professional_id: str,
        booking_date,
        booking_time: str,
        status: str,
        notes: Optional[str] = None,
        price_override: Optional[float] = None,
        use_subscription: bool = False,
        within_opening_hours: bool = False,
        now: Optional[datetime] = None,
    ) -> Booking:
        service = self.repo.get_service(self.db, service_id, barbershop.id)
        if not service or not service.is_active:
            raise HTTPException(status_code=404, detail="Service not found")
        professional = self.repo.get_professional(self.db, professional_id, barbershop.id)
        if not professional or not professional.is_active:
            raise HTTPException(status_code=404, detail="Professional not found")

        if within_opening_hours:
            start = time_to_minutes(booking_time)
            if start < time_to_minutes(barbershop.opening_time) or (
                start + service.duration_minutes > time_to_minutes(barbershop.closing_time)
            ):
                raise HTTPException(status_code=400, detail="Time is outside opening hours")

        conflict = self.scheduling.check_conflict(
            barbershop,
            professional.id,
            booking_date,
            booking_time,
            service.duration_minutes,
            now=now,
        )
        if conflict.has_conflict:
            raise _conflict_error(conflict)

        price = price_override if price_override is not None else service.price
        subscription_id = None
        if use_subscription:
            check = has_active_subscription(self.db, barbershop.id, client.id, service.id)
            if not check["can_use"]:
                raise HTTPException(
                    status_code=400, detail="Client has no usable subscription for this service"
                )
            subscription_id = check["subscription_id"]
            price = 0.0

        booking = self.repo.create_booking(
            self.db,
            barbershop_id=barbershop.id,
            client_id=client.id,
            professional_id=professional.id,
            service_id=service.id,
            booking_date=booking_date,
            booking_time=booking_time,
            status=status,
            total_price=price,
            notes=notes,
        )
        ClientRepository.upsert_client(self.db, barbershop.id, client, commit=False)
        if subscription_id:
            SubscriptionService(self.db).record_usage(subscription_id, booking.id, commit=False)
        self.db.commit()
        self.db.refresh(booking)

        if subscription_id:
            logger.info(f"🎟️ Booking {booking.id} charged to subscription {subscription_id}")

        logger.info(f"✅ Booking created: {booking.id} ({booking_date} {booking_time})")
        return booking

    async def _notify(self, booking: Booking, notification_type: str) -> Optional[dict]:
        try:
            return await send_booking_notifications(self.db, booking, notification_type)
        except Exception as e:
            logger.error(f"❌ Failed to dispatch {notification_type} for booking {booking.id}: {e}")
            return None

    # ------------------------------------------------------------------
    # Changes
    # ------------------------------------------------------------------

    async def update_status(self, barbershop_id: str, booking_id: str, status: str) -> dict:
        booking = self.get_booking(booking_id, barbershop_id)
        if booking.status == status:
            return to_booking_response(booking)
        if booking.status in FINAL_STATUSES:
            raise HTTPException(status_code=400, detail=f"Booking is already {booking.status}")

        booking.status = status
        if status == "completed":
            ClientRepository.register_visit(
                self.db, booking.barbershop_id, booking.client_id, datetime.utcnow()
            )
        self.db.commit()
        self.db.refresh(booking)
        logger.info(f"🔄 Booking {booking.id} status -> {status}")

        if status == "cancelled":
            await self._notify(booking, "cancellation")
        return to_booking_response(booking)

    async def cancel_booking(self, barbershop_id: str, booking_id: str) -> dict:
        return await self.update_status(barbershop_id, booking_id, "cancelled")

    def reschedule(
        self,
        barbershop: Barbershop,
        booking_id: str,
        data: BookingReschedule,
        now: Optional[datetime] = None,
    ) -> dict:
        booking = self.get_booking(booking_id, barbershop.id)
        if booking.status in FINAL_STATUSES:
            raise HTTPException(status_code=400, detail=f"Cannot reschedule a {booking.status} booking")

        professional_id = data.professional_id or booking.professional_id
        self.scheduling.get_professional(professional_id, barbershop.id)

        if is_time_in_past(data.booking_date, data.booking_time, now):
            raise HTTPException(status_code=400, detail="Time cannot be in the past")

        duration = booking.service.duration_minutes if booking.service else 30
        conflict = self.scheduling.check_conflict(
            barbershop,
            professional_id,
            data.booking_date,
            data.booking_time,
            duration,
            exclude_booking_id=booking.id,
            now=now,
        )
        if conflict.has_conflict:
            raise _conflict_error(conflict)

        booking = self.repo.update_booking(
            self.db,
            booking,
            booking_date=data.booking_date,
            booking_time=data.booking_time,
            professional_id=professional_id,
        )
        logger.info(f"✅ Booking {booking.id} rescheduled to {data.booking_date} {data.booking_time}")
        return to_booking_response(booking)

    def check_conflict(
        self, barbershop: Barbershop, data: ConflictCheckRequest, now: Optional[datetime] = None
    ) -> ConflictResult:
        self.scheduling.get_professional(data.professional_id, barbershop.id)
        duration = self.scheduling.resolve_duration(
            barbershop.id, data.service_id, data.duration_minutes
        )
        return self.scheduling.check_conflict(
            barbershop,
            data.professional_id,
            data.booking_date,
            data.booking_time,
            duration,
            exclude_booking_id=data.exclude_booking_id,
            now=now,
        )

    # ------------------------------------------------------------------
    # Client side
    # ------------------------------------------------------------------

    def get_my_bookings(self, client: Profile) -> list[dict]:
        return [to_booking_response(b) for b in self.repo.get_client_bookings(self.db, client.id)]

    async def cancel_my_booking(
        self, client: Profile, booking_id: str, now: Optional[datetime] = None
    ) -> dict:
        booking = self.repo.get_booking(self.db, booking_id)
        if not booking or booking.client_id != client.id:
            raise HTTPException(status_code=404, detail="Booking not found")
        if booking.status in FINAL_STATUSES:
            raise HTTPException(status_code=400, detail=f"Booking is already {booking.status}")
        if is_time_in_past(booking.booking_date, booking.booking_time, now):
            raise HTTPException(status_code=400, detail="Past bookings cannot be cancelled")

        booking.status = "cancelled"
        self.db.commit()
        self.db.refresh(booking)
        logger.info(f"🔄 Booking {booking.id} cancelled by client {client.id}")

        await self._notify(booking, "cancellation")
        return to_booking_response(booking)
