"""Client service - Business logic for barbershop clients"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import BarbershopClient
from .repository import ClientRepository
from .schemas import ClientCreate, ClientUpdate
from .segments import SEGMENTS, classify_client

logger = logging.getLogger(__name__)


def to_client_response(row: BarbershopClient, now: Optional[datetime] = None) -> dict:
    profile = row.client
    return {
        "id": row.id,
        "client_id": row.client_id,
        "full_name": profile.full_name if profile else None,
        "email": row.email or (profile.email if profile else None),
        "phone": row.phone or (profile.phone if profile else None),
        "avatar_url": profile.avatar_url if profile else None,
        "notes": row.notes,
        "first_visit": row.first_visit,
        "last_visit": row.last_visit,
        "total_visits": row.total_visits or 0,
        "is_active": row.is_active,
        "segment": classify_client(row.total_visits or 0, row.last_visit, row.is_active, now),
    }


class ClientService:
    """Service layer for client business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ClientRepository()

    def get_clients(
        self, barbershop_id: str, search: Optional[str] = None, is_active: Optional[bool] = None
    ) -> list[dict]:
        rows = self.repo.get_clients(self.db, barbershop_id, search, is_active)
        return [to_client_response(r) for r in rows]

    def get_client(self, barbershop_id: str, client_id: str) -> BarbershopClient:
        row = self.repo.get_client(self.db, barbershop_id, client_id)
        if not row:
            raise HTTPException(status_code=404, detail="Client not found")
        return row

    def create_client(self, barbershop_id: str, data: ClientCreate) -> dict:
        """Register a walk-in client, reusing an existing profile with the same phone"""
        logger.info(f"📥 Creating client for barbershop_id: {barbershop_id}")

        profile = self.repo.get_profile_by_phone(self.db, data.phone) if data.phone else None
        if profile:
            if self.repo.get_client(self.db, barbershop_id, profile.id):
                raise HTTPException(status_code=409, detail="Client already registered")
            logger.info(f"♻️ Reusing profile {profile.id} matched by phone")
        else:
            profile = self.repo.create_profile(
                self.db,
                full_name=data.full_name,
                phone=data.phone,
                email=data.email,
                role="client",
            )

        row = self.repo.upsert_client(self.db, barbershop_id, profile, notes=data.notes)
        return to_client_response(row)

    def update_client(self, barbershop_id: str, client_id: str, data: ClientUpdate) -> dict:
        row = self.get_client(barbershop_id, client_id)
        row = self.repo.update_client(self.db, row, **data.model_dump(exclude_unset=True))
        return to_client_response(row)

    def get_history(self, barbershop_id: str, client_id: str) -> dict:
        """Bookings of one client at this barbershop plus what they spent"""
        row = self.get_client(barbershop_id, client_id)
        bookings = self.repo.get_client_bookings(self.db, barbershop_id, client_id)

        completed = [b for b in bookings if b.status == "completed"]
        return {
            "client": to_client_response(row),
            "bookings": [
                {
                    "id": b.id,
                    "booking_date": b.booking_date,
                    "booking_time": b.booking_time,
                    "status": b.status,
                    "total_price": b.total_price,
                    "service_name": b.service.name if b.service else None,
                    "professional_name": b.professional.name if b.professional else None,
                }
                for b in bookings
            ],
            "total_spent": sum(b.total_price for b in completed),
            "completed_count": len(completed),
            "cancelled_count": sum(1 for b in bookings if b.status == "cancelled"),
        }

    def get_segments(self, barbershop_id: str) -> dict:
        clients = self.get_clients(barbershop_id)
        segments = {name: [] for name in SEGMENTS}
        for client in clients:
            segments[client["segment"]].append(client)
        return {name: {"count": len(rows), "clients": rows} for name, rows in segments.items()}
