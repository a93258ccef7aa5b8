"""Booking repository - Database operations for bookings"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Booking, Professional, Service


class BookingRepository:
    """Repository for booking database operations"""

    @staticmethod
    def _with_relations(db: Session):
        return db.query(Booking).options(
            joinedload(Booking.client),
            joinedload(Booking.service),
            joinedload(Booking.professional),
            joinedload(Booking.barbershop),
        )

    @staticmethod
    def get_bookings(
        db: Session,
        barbershop_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[str] = None,
        professional_id: Optional[str] = None,
    ) -> list[Booking]:
        """Get a barbershop's bookings ordered by date and time"""
        query = BookingRepository._with_relations(db).filter(Booking.barbershop_id == barbershop_id)
        if start_date:
            query = query.filter(Booking.booking_date >= start_date)
        if end_date:
            query = query.filter(Booking.booking_date <= end_date)
        if status:
            query = query.filter(Booking.status == status)
        if professional_id:
            query = query.filter(Booking.professional_id == professional_id)
        return query.order_by(Booking.booking_date, Booking.booking_time).all()

    @staticmethod
    def get_booking(db: Session, booking_id: str, barbershop_id: Optional[str] = None) -> Optional[Booking]:
        query = BookingRepository._with_relations(db).filter(Booking.id == booking_id)
        if barbershop_id:
            query = query.filter(Booking.barbershop_id == barbershop_id)
        return query.first()

    @staticmethod
    def get_client_bookings(db: Session, client_id: str) -> list[Booking]:
        return (
            BookingRepository._with_relations(db)
            .filter(Booking.client_id == client_id)
            .order_by(Booking.booking_date.desc(), Booking.booking_time.desc())
            .all()
        )

    @staticmethod
    def get_service(db: Session, service_id: str, barbershop_id: str) -> Optional[Service]:
        return (
            db.query(Service)
            .filter(Service.id == service_id, Service.barbershop_id == barbershop_id)
            .first()
        )

    @staticmethod
    def get_professional(db: Session, professional_id: str, barbershop_id: str) -> Optional[Professional]:
        return (
            db.query(Professional)
            .filter(Professional.id == professional_id, Professional.barbershop_id == barbershop_id)
            .first()
        )

    @staticmethod
    def create_booking(db: Session, **data) -> Booking:
        """Add a booking to the session without committing"""
        booking = Booking(**data)
        db.add(booking)
        db.flush()
        return booking

    @staticmethod
    def update_booking(db: Session, booking: Booking, **updates) -> Booking:
        for key, value in updates.items():
            if value is not None and hasattr(booking, key):
                setattr(booking, key, value)
        db.commit()
        db.refresh(booking)
        return booking
