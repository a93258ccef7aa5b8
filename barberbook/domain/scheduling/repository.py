"""Scheduling repository - Loads a professional's day agenda for conflict checks"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Booking, ProfessionalTimeBlock
from .schemas import BlockedWindow, BookedSlot


class AgendaRepository:
    """Repository for agenda reads"""

    @staticmethod
    def get_day_bookings(
        db: Session,
        professional_id: str,
        booking_date: date,
        exclude_booking_id: Optional[str] = None,
    ) -> list[BookedSlot]:
        query = (
            db.query(Booking)
            .options(joinedload(Booking.service), joinedload(Booking.client))
            .filter(Booking.professional_id == professional_id, Booking.booking_date == booking_date)
        )
        if exclude_booking_id:
            query = query.filter(Booking.id != exclude_booking_id)

        return [
            BookedSlot(
                id=b.id,
                start_time=b.booking_time,
                duration_minutes=b.service.duration_minutes if b.service else 30,
                status=b.status,
                label=b.client.full_name if b.client else None,
            )
            for b in query.all()
        ]

    @staticmethod
    def get_day_blocks(db: Session, professional_id: str, block_date: date) -> list[BlockedWindow]:
        blocks = (
            db.query(ProfessionalTimeBlock)
            .filter(
                ProfessionalTimeBlock.professional_id == professional_id,
                ProfessionalTimeBlock.block_date == block_date,
            )
            .order_by(ProfessionalTimeBlock.start_time)
            .all()
        )
        return [
            BlockedWindow(id=b.id, start_time=b.start_time, end_time=b.end_time, reason=b.reason)
            for b in blocks
        ]
