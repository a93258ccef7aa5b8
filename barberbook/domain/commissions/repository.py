"""Commission repository - Database operations for commission rates and payments"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import CommissionPayment, Professional, ProfessionalCommission


class CommissionRepository:
    """Repository for commission database operations"""

    @staticmethod
    def get_professionals(db: Session, barbershop_id: str) -> list[Professional]:
        return (
            db.query(Professional)
            .filter(Professional.barbershop_id == barbershop_id)
            .order_by(Professional.name)
            .all()
        )

    @staticmethod
    def get_rates(db: Session, barbershop_id: str) -> dict[str, float]:
        rows = (
            db.query(ProfessionalCommission)
            .filter(ProfessionalCommission.barbershop_id == barbershop_id)
            .all()
        )
        return {row.professional_id: row.commission_rate for row in rows}

    @staticmethod
    def upsert_rate(
        db: Session, barbershop_id: str, professional_id: str, commission_rate: float
    ) -> ProfessionalCommission:
        row = (
            db.query(ProfessionalCommission)
            .filter(
                ProfessionalCommission.barbershop_id == barbershop_id,
                ProfessionalCommission.professional_id == professional_id,
            )
            .first()
        )
        if row:
            row.commission_rate = commission_rate
        else:
            row = ProfessionalCommission(
                barbershop_id=barbershop_id,
                professional_id=professional_id,
                commission_rate=commission_rate,
            )
            db.add(row)
        db.commit()
        db.refresh(row)
        return row

    @staticmethod
    def get_payments(
        db: Session,
        barbershop_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        professional_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> list[CommissionPayment]:
        """Payments whose period overlaps [start_date, end_date]"""
        query = (
            db.query(CommissionPayment)
            .options(joinedload(CommissionPayment.professional))
            .filter(CommissionPayment.barbershop_id == barbershop_id)
        )
        if start_date:
            query = query.filter(CommissionPayment.period_end >= start_date)
        if end_date:
            query = query.filter(CommissionPayment.period_start <= end_date)
        if professional_id:
            query = query.filter(CommissionPayment.professional_id == professional_id)
        if status:
            query = query.filter(CommissionPayment.status == status)
        return query.order_by(CommissionPayment.created_at.desc()).all()

    @staticmethod
    def get_payment(db: Session, payment_id: str, barbershop_id: str) -> Optional[CommissionPayment]:
        return (
            db.query(CommissionPayment)
            .filter(CommissionPayment.id == payment_id, CommissionPayment.barbershop_id == barbershop_id)
            .first()
        )

    @staticmethod
    def create_payment(db: Session, **data) -> CommissionPayment:
        payment = CommissionPayment(**data)
        db.add(payment)
        db.commit()
        db.refresh(payment)
        return payment
