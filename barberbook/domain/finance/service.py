"""Finance service - Dashboard and transaction listing"""

import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from ..periods import finance_period_range, previous_finance_period_range
from .aggregation import compare_periods, summarize_bookings
from .repository import FinanceRepository
from .schemas import FinanceDashboardResponse

logger = logging.getLogger(__name__)


class FinanceService:
    """Service layer for financial reporting"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = FinanceRepository()

    def get_dashboard(
        self, barbershop_id: str, period: str = "month", today: Optional[date] = None
    ) -> FinanceDashboardResponse:
        """Summary of the selected period compared with the one before it"""
        start, end = finance_period_range(period, today)
        previous_start, previous_end = previous_finance_period_range(period, today)

        current = summarize_bookings(
            self.repo.get_booking_records(self.db, barbershop_id, start, end)
        )
        previous = summarize_bookings(
            self.repo.get_booking_records(self.db, barbershop_id, previous_start, previous_end)
        )
        logger.info(
            f"📊 Finance dashboard {barbershop_id} ({period}): revenue {current.total_revenue:.2f}"
        )

        return FinanceDashboardResponse(
            period=period,
            start_date=start,
            end_date=end,
            current=current,
            previous=previous,
            comparison=compare_periods(current, previous),
        )

    def get_transactions(
        self,
        barbershop_id: str,
        period: str = "month",
        status: Optional[str] = None,
        professional_id: Optional[str] = None,
        today: Optional[date] = None,
    ) -> dict:
        start, end = finance_period_range(period, today)
        records = self.repo.get_booking_records(
            self.db, barbershop_id, start, end, status, professional_id
        )
        return {
            "transactions": [r.model_dump() for r in records],
            "total": len(records),
            "total_amount": sum(r.total_price for r in records if r.status == "completed"),
        }
