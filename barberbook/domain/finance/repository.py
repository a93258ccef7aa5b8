"""Finance repository - Loads booking rows for reporting"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Booking
from .schemas import BookingRecord


def to_booking_record(booking: Booking) -> BookingRecord:
    return BookingRecord(
        id=booking.id,
        booking_date=booking.booking_date,
        booking_time=booking.booking_time,
        status=booking.status,
        total_price=booking.total_price or 0.0,
        professional_id=booking.professional_id,
        professional_name=booking.professional.name if booking.professional else None,
        service_id=booking.service_id,
        service_name=booking.service.name if booking.service else None,
        client_name=booking.client.full_name if booking.client else None,
    )


class FinanceRepository:
    """Repository for reporting reads"""

    @staticmethod
    def get_bookings(
        db: Session,
        barbershop_id: str,
        start_date: date,
        end_date: date,
        status: Optional[str] = None,
        professional_id: Optional[str] = None,
    ) -> list[Booking]:
        query = (
            db.query(Booking)
            .options(
                joinedload(Booking.professional),
                joinedload(Booking.service),
                joinedload(Booking.client),
            )
            .filter(
                Booking.barbershop_id == barbershop_id,
                Booking.booking_date >= start_date,
                Booking.booking_date <= end_date,
            )
        )
        if status:
            query = query.filter(Booking.status == status)
        if professional_id:
            query = query.filter(Booking.professional_id == professional_id)
        return query.order_by(Booking.booking_date.desc(), Booking.booking_time.desc()).all()

    @staticmethod
    def get_booking_records(
        db: Session,
        barbershop_id: str,
        start_date: date,
        end_date: date,
        status: Optional[str] = None,
        professional_id: Optional[str] = None,
    ) -> list[BookingRecord]:
        bookings = FinanceRepository.get_bookings(
            db, barbershop_id, start_date, end_date, status, professional_id
        )
        return [to_booking_record(b) for b in bookings]
