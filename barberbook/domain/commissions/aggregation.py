"""Commission math over a period's completed bookings and recorded payments"""

from typing import Optional

from ...config import DEFAULT_COMMISSION_RATE
from ..finance.schemas import BookingRecord
from .schemas import CommissionSummary, DailyCommissionRow, PaymentRecord, ProfessionalCommissionRow


def rate_for(professional_id: str, rates: dict[str, float]) -> float:
    """Configured rate for a professional, the shop default when none is set"""
    rate = rates.get(professional_id)
    return DEFAULT_COMMISSION_RATE if rate is None else rate


def commission_amount(price: float, rate: float) -> float:
    return price * rate / 100


def summarize_commissions(
    bookings: list[BookingRecord],
    payments: list[PaymentRecord],
    rates: dict[str, float],
    professional_id: Optional[str] = None,
    payment_status: str = "all",
) -> CommissionSummary:
    """
    Aggregate commissions for completed bookings and the payments of a period.

    ``professional_id`` narrows both bookings and payments. ``payment_status``
    ("all", "paid" or "pending") narrows payments only.
    """
    completed = [b for b in bookings if b.status == "completed"]
    if professional_id:
        completed = [b for b in completed if b.professional_id == professional_id]
        payments = [p for p in payments if p.professional_id == professional_id]
    if payment_status != "all":
        payments = [p for p in payments if p.status == payment_status]

    rows: dict[str, ProfessionalCommissionRow] = {}
    daily: dict = {}
    total_revenue = 0.0
    total_commission = 0.0

    for booking in completed:
        rate = rate_for(booking.professional_id, rates)
        commission = commission_amount(booking.total_price, rate)
        total_revenue += booking.total_price
        total_commission += commission

        row = rows.setdefault(
            booking.professional_id,
            ProfessionalCommissionRow(
                professional_id=booking.professional_id,
                name=booking.professional_name or "Unknown",
                revenue=0.0,
                commission=0.0,
                commission_rate=rate,
                bookings_count=0,
            ),
        )
        row.revenue += booking.total_price
        row.commission += commission
        row.bookings_count += 1

        day = daily.setdefault(
            booking.booking_date,
            DailyCommissionRow(date=booking.booking_date, revenue=0.0, commission=0.0),
        )
        day.revenue += booking.total_price
        day.commission += commission

    paid = [p for p in payments if p.status == "paid"]
    pending = [p for p in payments if p.status == "pending"]

    return CommissionSummary(
        total_revenue=total_revenue,
        total_commission=total_commission,
        total_paid=sum(p.commission_amount for p in paid),
        total_pending=sum(p.commission_amount for p in pending),
        paid_count=len(paid),
        pending_count=len(pending),
        by_professional=sorted(rows.values(), key=lambda r: r.commission, reverse=True),
        by_day=[daily[d] for d in sorted(daily)],
    )
