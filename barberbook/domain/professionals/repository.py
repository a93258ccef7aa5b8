"""Professional repository - Database operations for professionals and time blocks"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from ...models import Professional, ProfessionalTimeBlock


class ProfessionalRepository:
    """Repository for professional database operations"""

    @staticmethod
    def get_professionals(
        db: Session, barbershop_id: str, active_only: bool = False
    ) -> list[Professional]:
        query = db.query(Professional).filter(Professional.barbershop_id == barbershop_id)
        if active_only:
            query = query.filter(Professional.is_active.is_(True))
        return query.order_by(Professional.name).all()

    @staticmethod
    def get_professional_by_id(
        db: Session, professional_id: str, barbershop_id: str
    ) -> Optional[Professional]:
        return (
            db.query(Professional)
            .filter(Professional.id == professional_id, Professional.barbershop_id == barbershop_id)
            .first()
        )

    @staticmethod
    def create_professional(db: Session, barbershop_id: str, **data) -> Professional:
        professional = Professional(barbershop_id=barbershop_id, **data)
        db.add(professional)
        db.commit()
        db.refresh(professional)
        return professional

    @staticmethod
    def update_professional(db: Session, professional: Professional, **updates) -> Professional:
        for key, value in updates.items():
            if value is not None and hasattr(professional, key):
                setattr(professional, key, value)
        db.commit()
        db.refresh(professional)
        return professional

    @staticmethod
    def delete_professional(db: Session, professional: Professional) -> None:
        db.delete(professional)
        db.commit()

    # Time blocks

    @staticmethod
    def get_time_blocks(
        db: Session, professional_id: str, block_date: Optional[date] = None
    ) -> list[ProfessionalTimeBlock]:
        query = db.query(ProfessionalTimeBlock).filter(
            ProfessionalTimeBlock.professional_id == professional_id
        )
        if block_date:
            query = query.filter(ProfessionalTimeBlock.block_date == block_date)
        return query.order_by(ProfessionalTimeBlock.block_date, ProfessionalTimeBlock.start_time).all()

    @staticmethod
    def get_time_block(
        db: Session, block_id: str, professional_id: str
    ) -> Optional[ProfessionalTimeBlock]:
        return (
            db.query(ProfessionalTimeBlock)
            .filter(
                ProfessionalTimeBlock.id == block_id,
                ProfessionalTimeBlock.professional_id == professional_id,
            )
            .first()
        )

    @staticmethod
    def create_time_block(db: Session, **data) -> ProfessionalTimeBlock:
        block = ProfessionalTimeBlock(**data)
        db.add(block)
        db.commit()
        db.refresh(block)
        return block

    @staticmethod
    def delete_time_block(db: Session, block: ProfessionalTimeBlock) -> None:
        db.delete(block)
        db.commit()
