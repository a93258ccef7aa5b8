"""Scheduling service - Conflict checks and day availability against the database"""

import logging
from datetime import date, datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Barbershop, Professional, Service
from ..barbershops.schemas import WEEKDAYS
from .conflicts import available_slots, check_conflicts
from .repository import AgendaRepository
from .schemas import AvailabilityResponse, ConflictResult

logger = logging.getLogger(__name__)

DEFAULT_DURATION_MINUTES = 30


class SchedulingService:
    """Service layer wrapping the pure conflict functions"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AgendaRepository()

    def get_professional(self, professional_id: str, barbershop_id: str) -> Professional:
        professional = (
            self.db.query(Professional)
            .filter(Professional.id == professional_id, Professional.barbershop_id == barbershop_id)
            .first()
        )
        if not professional:
            raise HTTPException(status_code=404, detail="Professional not found")
        return professional

    def resolve_duration(
        self, barbershop_id: str, service_id: Optional[str], duration_minutes: Optional[int]
    ) -> int:
        if duration_minutes:
            return duration_minutes
        if service_id:
            service = (
                self.db.query(Service)
                .filter(Service.id == service_id, Service.barbershop_id == barbershop_id)
                .first()
            )
            if not service:
                raise HTTPException(status_code=404, detail="Service not found")
            return service.duration_minutes
        return DEFAULT_DURATION_MINUTES

    def check_conflict(
        self,
        barbershop: Barbershop,
        professional_id: str,
        booking_date: date,
        booking_time: str,
        duration_minutes: int,
        exclude_booking_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> ConflictResult:
        bookings = self.repo.get_day_bookings(
            self.db, professional_id, booking_date, exclude_booking_id
        )
        blocks = self.repo.get_day_blocks(self.db, professional_id, booking_date)
        result = check_conflicts(
            booking_time,
            duration_minutes,
            bookings,
            blocks,
            opening_time=barbershop.opening_time,
            closing_time=barbershop.closing_time,
            booking_date=booking_date,
            now=now,
        )
        if result.has_conflict:
            logger.info(
                f"⚠️ Slot conflict for professional {professional_id} on {booking_date} "
                f"{booking_time}: {result.conflict.kind} {result.conflict.id}"
            )
        return result

    def day_availability(
        self,
        barbershop: Barbershop,
        professional_id: str,
        day: date,
        service_id: Optional[str] = None,
        duration_minutes: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> AvailabilityResponse:
        """Free starts for one professional's day; empty when the shop is closed"""
        self.get_professional(professional_id, barbershop.id)
        duration = self.resolve_duration(barbershop.id, service_id, duration_minutes)

        starts = []
        opening_days = barbershop.opening_days or []
        if not opening_days or WEEKDAYS[day.weekday()] in opening_days:
            starts = available_slots(
                barbershop.opening_time,
                barbershop.closing_time,
                duration,
                self.repo.get_day_bookings(self.db, professional_id, day),
                self.repo.get_day_blocks(self.db, professional_id, day),
                booking_date=day,
                now=now,
            )

        return AvailabilityResponse(
            professional_id=professional_id,
            date=day,
            duration_minutes=duration,
            available_starts=starts,
        )
