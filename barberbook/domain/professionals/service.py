"""Professional service - Business logic for professionals and their time blocks"""

import logging
from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Booking, Professional, ProfessionalTimeBlock
from .repository import ProfessionalRepository
from .schemas import ProfessionalCreate, ProfessionalUpdate, TimeBlockCreate

logger = logging.getLogger(__name__)


class ProfessionalService:
    """Service layer for professional business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ProfessionalRepository()

    def get_professionals(self, barbershop_id: str, active_only: bool = False) -> list[Professional]:
        return self.repo.get_professionals(self.db, barbershop_id, active_only)

    def get_professional(self, professional_id: str, barbershop_id: str) -> Professional:
        professional = self.repo.get_professional_by_id(self.db, professional_id, barbershop_id)
        if not professional:
            raise HTTPException(status_code=404, detail="Professional not found")
        return professional

    def create_professional(self, barbershop_id: str, data: ProfessionalCreate) -> Professional:
        logger.info(f"📥 Creating professional '{data.name}' for barbershop {barbershop_id}")
        return self.repo.create_professional(self.db, barbershop_id, **data.model_dump())

    def update_professional(
        self, professional_id: str, barbershop_id: str, data: ProfessionalUpdate
    ) -> Professional:
        professional = self.get_professional(professional_id, barbershop_id)
        return self.repo.update_professional(
            self.db, professional, **data.model_dump(exclude_unset=True)
        )

    def delete_professional(self, professional_id: str, barbershop_id: str) -> dict:
        """Delete a professional, or deactivate one that still has bookings"""
        professional = self.get_professional(professional_id, barbershop_id)
        has_bookings = (
            self.db.query(Booking.id).filter(Booking.professional_id == professional.id).first()
        )
        if has_bookings:
            self.repo.update_professional(self.db, professional, is_active=False)
            return {"message": "Professional deactivated"}

        for block in self.repo.get_time_blocks(self.db, professional.id):
            self.db.delete(block)
        self.repo.delete_professional(self.db, professional)
        return {"message": "Professional deleted"}

    # ========================================================================
    # TIME BLOCKS
    # ========================================================================

    def get_time_blocks(
        self, professional_id: str, barbershop_id: str, block_date: Optional[date] = None
    ) -> list[ProfessionalTimeBlock]:
        professional = self.get_professional(professional_id, barbershop_id)
        return self.repo.get_time_blocks(self.db, professional.id, block_date)

    def create_time_block(
        self, professional_id: str, barbershop_id: str, data: TimeBlockCreate
    ) -> ProfessionalTimeBlock:
        professional = self.get_professional(professional_id, barbershop_id)
        logger.info(
            f"🚫 Blocking {data.block_date} {data.start_time}-{data.end_time} for professional {professional.id}"
        )
        return self.repo.create_time_block(
            self.db,
            barbershop_id=barbershop_id,
            professional_id=professional.id,
            **data.model_dump(),
        )

    def delete_time_block(self, block_id: str, professional_id: str, barbershop_id: str) -> dict:
        professional = self.get_professional(professional_id, barbershop_id)
        block = self.repo.get_time_block(self.db, block_id, professional.id)
        if not block:
            raise HTTPException(status_code=404, detail="Time block not found")
        self.repo.delete_time_block(self.db, block)
        return {"message": "Time block deleted"}
