"""Client repository - Database operations for barbershop clients"""

from datetime import datetime
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from ...models import BarbershopClient, Booking, Profile


class ClientRepository:
    """Repository for client database operations"""

    @staticmethod
    def get_clients(
        db: Session,
        barbershop_id: str,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> list[BarbershopClient]:
        """Get all clients of a barbershop, most recent visit first"""
        query = (
            db.query(BarbershopClient)
            .join(Profile, BarbershopClient.client_id == Profile.id)
            .options(joinedload(BarbershopClient.client))
            .filter(BarbershopClient.barbershop_id == barbershop_id)
        )
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(
                or_(
                    Profile.full_name.ilike(pattern),
                    Profile.phone.ilike(pattern),
                    Profile.email.ilike(pattern),
                    BarbershopClient.phone.ilike(pattern),
                    BarbershopClient.email.ilike(pattern),
                )
            )
        if is_active is not None:
            query = query.filter(BarbershopClient.is_active.is_(is_active))
        return query.order_by(BarbershopClient.last_visit.desc(), BarbershopClient.created_at.desc()).all()

    @staticmethod
    def get_client(db: Session, barbershop_id: str, client_id: str) -> Optional[BarbershopClient]:
        return (
            db.query(BarbershopClient)
            .options(joinedload(BarbershopClient.client))
            .filter(
                BarbershopClient.barbershop_id == barbershop_id,
                BarbershopClient.client_id == client_id,
            )
            .first()
        )

    @staticmethod
    def get_profile_by_phone(db: Session, phone: str) -> Optional[Profile]:
        return db.query(Profile).filter(Profile.phone == phone).first()

    @staticmethod
    def create_profile(db: Session, **data) -> Profile:
        profile = Profile(**data)
        db.add(profile)
        db.flush()
        return profile

    @staticmethod
    def upsert_client(
        db: Session,
        barbershop_id: str,
        profile: Profile,
        notes: Optional[str] = None,
        commit: bool = True,
    ) -> BarbershopClient:
        """Create the barbershop/client link if it does not exist yet"""
        row = (
            db.query(BarbershopClient)
            .filter(
                BarbershopClient.barbershop_id == barbershop_id,
                BarbershopClient.client_id == profile.id,
            )
            .first()
        )
        if not row:
            row = BarbershopClient(
                barbershop_id=barbershop_id,
                client_id=profile.id,
                email=profile.email,
                phone=profile.phone,
                notes=notes,
                total_visits=0,
                is_active=True,
            )
            db.add(row)
        if commit:
            db.commit()
            db.refresh(row)
        else:
            db.flush()
        return row

    @staticmethod
    def register_visit(db: Session, barbershop_id: str, client_id: str, visited_at: datetime) -> None:
        row = (
            db.query(BarbershopClient)
            .filter(
                BarbershopClient.barbershop_id == barbershop_id,
                BarbershopClient.client_id == client_id,
            )
            .first()
        )
        if not row:
            row = BarbershopClient(barbershop_id=barbershop_id, client_id=client_id, total_visits=0)
            db.add(row)
        row.total_visits = (row.total_visits or 0) + 1
        row.first_visit = row.first_visit or visited_at
        row.last_visit = visited_at

    @staticmethod
    def update_client(db: Session, client: BarbershopClient, **updates) -> BarbershopClient:
        for key, value in updates.items():
            if value is not None and hasattr(client, key):
                setattr(client, key, value)
        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def get_client_bookings(db: Session, barbershop_id: str, client_id: str) -> list[Booking]:
        return (
            db.query(Booking)
            .options(joinedload(Booking.service), joinedload(Booking.professional))
            .filter(Booking.barbershop_id == barbershop_id, Booking.client_id == client_id)
            .order_by(Booking.booking_date.desc(), Booking.booking_time.desc())
            .all()
        )
