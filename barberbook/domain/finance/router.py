"""Finance router - FastAPI endpoints for the financial dashboard"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_admin_barbershop
from ...database import get_db
from ...models import Barbershop
from .schemas import FinanceDashboardResponse, TransactionListResponse
from .service import FinanceService

router = APIRouter(prefix="/barbershops/{barbershop_id}/finance", tags=["Finance"])


def get_finance_service(db: Session = Depends(get_db)) -> FinanceService:
    return FinanceService(db)


@router.get("/dashboard", response_model=FinanceDashboardResponse)
async def get_dashboard(
    period: str = Query("month", description="7d, 30d, month, 3m or year"),
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: FinanceService = Depends(get_finance_service),
):
    return service.get_dashboard(barbershop.id, period)


@router.get("/transactions", response_model=TransactionListResponse)
async def get_transactions(
    period: str = Query("month"),
    status: Optional[str] = Query(None),
    professional_id: Optional[str] = Query(None),
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: FinanceService = Depends(get_finance_service),
):
    return service.get_transactions(barbershop.id, period, status, professional_id)


__all__ = ["router"]
