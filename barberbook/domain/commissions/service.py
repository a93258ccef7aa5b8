"""Commission service - Rates, period summaries and payouts"""

import logging
from datetime import date, datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ..finance.repository import FinanceRepository
from ..periods import commission_period_range
from ..scheduling.service import SchedulingService
from .aggregation import commission_amount, rate_for, summarize_commissions
from .repository import CommissionRepository
from .schemas import CommissionSummary, GeneratePaymentRequest, PaymentRecord

logger = logging.getLogger(__name__)


class CommissionService:
    """Service layer for commission business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CommissionRepository()

    def get_rates(self, barbershop_id: str) -> list[dict]:
        """Every professional with their rate, the default marked as such"""
        rates = self.repo.get_rates(self.db, barbershop_id)
        return [
            {
                "professional_id": p.id,
                "professional_name": p.name,
                "commission_rate": rate_for(p.id, rates),
                "is_default": p.id not in rates,
            }
            for p in self.repo.get_professionals(self.db, barbershop_id)
        ]

    def set_rate(self, barbershop_id: str, professional_id: str, commission_rate: float) -> dict:
        professional = SchedulingService(self.db).get_professional(professional_id, barbershop_id)
        row = self.repo.upsert_rate(self.db, barbershop_id, professional_id, commission_rate)
        logger.info(f"✅ Commission rate for {professional_id} set to {commission_rate}%")
        return {
            "professional_id": professional_id,
            "professional_name": professional.name,
            "commission_rate": row.commission_rate,
            "is_default": False,
        }

    def get_summary(
        self,
        barbershop_id: str,
        period: str = "month",
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        professional_id: Optional[str] = None,
        payment_status: str = "all",
        today: Optional[date] = None,
    ) -> CommissionSummary:
        if payment_status not in ("all", "paid", "pending"):
            raise HTTPException(status_code=400, detail=f"Invalid payment status: {payment_status}")
        start, end = commission_period_range(period, today, start_date, end_date)

        bookings = FinanceRepository.get_booking_records(
            self.db, barbershop_id, start, end, status="completed"
        )
        payments = [
            PaymentRecord(
                id=p.id,
                professional_id=p.professional_id,
                commission_amount=p.commission_amount,
                status=p.status,
            )
            for p in self.repo.get_payments(self.db, barbershop_id, start, end)
        ]

        summary = summarize_commissions(
            bookings,
            payments,
            self.repo.get_rates(self.db, barbershop_id),
            professional_id=professional_id,
            payment_status=payment_status,
        )
        summary.start_date = start
        summary.end_date = end
        return summary

    def generate_payment(
        self, barbershop_id: str, data: GeneratePaymentRequest, today: Optional[date] = None
    ):
        """Create a pending payout from a professional's completed bookings in the period"""
        SchedulingService(self.db).get_professional(data.professional_id, barbershop_id)
        start, end = commission_period_range(data.period, today, data.start_date, data.end_date)

        bookings = FinanceRepository.get_booking_records(
            self.db,
            barbershop_id,
            start,
            end,
            status="completed",
            professional_id=data.professional_id,
        )
        if not bookings:
            raise HTTPException(status_code=400, detail="No completed bookings in this period")

        rates = self.repo.get_rates(self.db, barbershop_id)
        rate = rate_for(data.professional_id, rates)
        revenue = sum(b.total_price for b in bookings)

        payment = self.repo.create_payment(
            self.db,
            barbershop_id=barbershop_id,
            professional_id=data.professional_id,
            period_start=start,
            period_end=end,
            total_revenue=revenue,
            commission_rate=rate,
            commission_amount=commission_amount(revenue, rate),
            bookings_count=len(bookings),
            status="pending",
            notes=data.notes,
        )
        logger.info(
            f"✅ Commission payment {payment.id} generated: {payment.commission_amount:.2f} "
            f"for {data.professional_id}"
        )
        return payment

    def get_payments(
        self,
        barbershop_id: str,
        professional_id: Optional[str] = None,
        status: Optional[str] = None,
    ):
        return self.repo.get_payments(
            self.db, barbershop_id, professional_id=professional_id, status=status
        )

    def mark_paid(self, barbershop_id: str, payment_id: str):
        payment = self.repo.get_payment(self.db, payment_id, barbershop_id)
        if not payment:
            raise HTTPException(status_code=404, detail="Payment not found")
        if payment.status == "paid":
            return payment
        payment.status = "paid"
        payment.paid_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(payment)
        logger.info(f"✅ Commission payment {payment.id} marked as paid")
        return payment
