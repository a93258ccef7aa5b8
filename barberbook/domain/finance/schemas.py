"""Finance domain schemas - Pydantic models for the financial dashboard"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class BookingRecord(BaseModel):
    """Flattened booking row consumed by the aggregation functions"""

    id: Optional[str] = None
    booking_date: date
    booking_time: str
    status: str
    total_price: float = 0.0
    professional_id: Optional[str] = None
    professional_name: Optional[str] = None
    service_id: Optional[str] = None
    service_name: Optional[str] = None
    client_name: Optional[str] = None


class RevenueGroup(BaseModel):
    name: str
    revenue: float
    count: int


class DailyRevenue(BaseModel):
    date: date
    revenue: float
    count: int


class FinancialSummary(BaseModel):
    total_revenue: float = 0.0
    total_bookings: int = 0
    average_ticket: float = 0.0
    cancellation_rate: float = 0.0
    cancelled_count: int = 0
    all_bookings: int = 0
    busiest_day: Optional[str] = None
    peak_hour: Optional[str] = None
    top_professional: Optional[RevenueGroup] = None
    revenue_by_day: list[DailyRevenue] = Field(default_factory=list)
    revenue_by_service: list[RevenueGroup] = Field(default_factory=list)
    revenue_by_professional: list[RevenueGroup] = Field(default_factory=list)


class PeriodComparison(BaseModel):
    revenue_growth: float = 0.0
    bookings_growth: float = 0.0
    average_ticket_growth: float = 0.0


class FinanceDashboardResponse(BaseModel):
    period: str
    start_date: date
    end_date: date
    current: FinancialSummary
    previous: FinancialSummary
    comparison: PeriodComparison


class TransactionResponse(BaseModel):
    id: str
    booking_date: date
    booking_time: str
    status: str
    total_price: float
    client_name: Optional[str] = None
    professional_name: Optional[str] = None
    service_name: Optional[str] = None


class TransactionListResponse(BaseModel):
    transactions: list[TransactionResponse]
    total: int
    total_amount: float
