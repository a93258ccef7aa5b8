"""Commission router - FastAPI endpoints for commission rates and payouts"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_admin_barbershop
from ...database import get_db
from ...models import Barbershop
from .schemas import (
    CommissionPaymentResponse,
    CommissionRateResponse,
    CommissionRateUpdate,
    CommissionSummary,
    GeneratePaymentRequest,
)
from .service import CommissionService

router = APIRouter(prefix="/barbershops/{barbershop_id}/commissions", tags=["Commissions"])


def get_commission_service(db: Session = Depends(get_db)) -> CommissionService:
    """Dependency injection for CommissionService"""
    return CommissionService(db)


# ============================================================================
# RATES
# ============================================================================


@router.get("/rates", response_model=list[CommissionRateResponse])
async def get_rates(
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: CommissionService = Depends(get_commission_service),
):
    return service.get_rates(barbershop.id)


@router.put("/rates/{professional_id}", response_model=CommissionRateResponse)
async def set_rate(
    professional_id: str,
    data: CommissionRateUpdate,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: CommissionService = Depends(get_commission_service),
):
    return service.set_rate(barbershop.id, professional_id, data.commission_rate)


# ============================================================================
# SUMMARY AND PAYMENTS
# ============================================================================


@router.get("/summary", response_model=CommissionSummary)
async def get_summary(
    period: str = Query("month", description="today, week, month, year or custom"),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    professional_id: Optional[str] = Query(None),
    payment_status: str = Query("all"),
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: CommissionService = Depends(get_commission_service),
):
    return service.get_summary(
        barbershop.id, period, start_date, end_date, professional_id, payment_status
    )


@router.get("/payments", response_model=list[CommissionPaymentResponse])
async def get_payments(
    professional_id: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: CommissionService = Depends(get_commission_service),
):
    return service.get_payments(barbershop.id, professional_id, status)


@router.post("/payments", response_model=CommissionPaymentResponse, status_code=201)
async def generate_payment(
    data: GeneratePaymentRequest,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: CommissionService = Depends(get_commission_service),
):
    """Create a pending payout from the professional's completed bookings"""
    return service.generate_payment(barbershop.id, data)


@router.post("/payments/{payment_id}/pay", response_model=CommissionPaymentResponse)
async def mark_payment_paid(
    payment_id: str,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: CommissionService = Depends(get_commission_service),
):
    return service.mark_paid(barbershop.id, payment_id)


__all__ = ["router"]
