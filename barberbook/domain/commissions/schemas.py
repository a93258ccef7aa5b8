"""Commission domain schemas - Pydantic models for commission rates and payments"""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field


class CommissionRateUpdate(BaseModel):
    commission_rate: float = Field(ge=0, le=100)


class CommissionRateResponse(BaseModel):
    professional_id: str
    professional_name: Optional[str] = None
    commission_rate: float
    is_default: bool = False


class PaymentRecord(BaseModel):
    """Flattened commission payment consumed by the aggregation functions"""

    id: str
    professional_id: str
    commission_amount: float = 0.0
    status: str = "pending"


class ProfessionalCommissionRow(BaseModel):
    professional_id: str
    name: str
    revenue: float
    commission: float
    commission_rate: float
    bookings_count: int


class DailyCommissionRow(BaseModel):
    date: date
    revenue: float
    commission: float


class CommissionSummary(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    total_revenue: float = 0.0
    total_commission: float = 0.0
    total_paid: float = 0.0
    total_pending: float = 0.0
    paid_count: int = 0
    pending_count: int = 0
    by_professional: list[ProfessionalCommissionRow] = Field(default_factory=list)
    by_day: list[DailyCommissionRow] = Field(default_factory=list)


class GeneratePaymentRequest(BaseModel):
    professional_id: str
    period: Literal["today", "week", "month", "year", "custom"] = "month"
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    notes: Optional[str] = None


class CommissionPaymentResponse(BaseModel):
    id: str
    professional_id: str
    period_start: date
    period_end: date
    total_revenue: float
    commission_rate: float
    commission_amount: float
    bookings_count: int
    status: str
    paid_at: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
