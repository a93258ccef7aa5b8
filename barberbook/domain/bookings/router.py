"""Booking router - FastAPI endpoints for booking operations"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_admin_barbershop, get_current_user
from ...database import get_db
from ...models import Barbershop, Profile
from ..scheduling.schemas import ConflictCheckRequest, ConflictResult
from .schemas import (
    BookingCreate,
    BookingReschedule,
    BookingResponse,
    BookingStatusUpdate,
    ClientBookingResponse,
)
from .service import BookingService, to_booking_response

router = APIRouter(prefix="/barbershops/{barbershop_id}/bookings", tags=["Bookings"])
client_router = APIRouter(prefix="/me/bookings", tags=["Bookings"])


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db)


# ============================================================================
# ADMIN AGENDA
# ============================================================================


@router.get("", response_model=list[BookingResponse])
async def get_bookings(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    status: Optional[str] = Query(None),
    professional_id: Optional[str] = Query(None),
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: BookingService = Depends(get_booking_service),
):
    """Get bookings filtered by date range, status and professional"""
    return service.get_bookings(
        barbershop.id,
        start_date=start_date,
        end_date=end_date,
        status=status,
        professional_id=professional_id,
    )


@router.post("", response_model=BookingResponse, status_code=201)
async def create_booking(
    data: BookingCreate,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: BookingService = Depends(get_booking_service),
):
    """Create a manual appointment; 409 with suggested slots when the time is taken"""
    return await service.create_booking(barbershop, data)


@router.post("/check-conflict", response_model=ConflictResult)
async def check_conflict(
    data: ConflictCheckRequest,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: BookingService = Depends(get_booking_service),
):
    return service.check_conflict(barbershop, data)


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: str,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: BookingService = Depends(get_booking_service),
):
    return to_booking_response(service.get_booking(booking_id, barbershop.id))


@router.patch("/{booking_id}/status", response_model=BookingResponse)
async def update_booking_status(
    booking_id: str,
    data: BookingStatusUpdate,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: BookingService = Depends(get_booking_service),
):
    return await service.update_status(barbershop.id, booking_id, data.status)


@router.post("/{booking_id}/cancel", response_model=BookingResponse)
async def cancel_booking(
    booking_id: str,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: BookingService = Depends(get_booking_service),
):
    return await service.cancel_booking(barbershop.id, booking_id)


@router.put("/{booking_id}/reschedule", response_model=BookingResponse)
async def reschedule_booking(
    booking_id: str,
    data: BookingReschedule,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: BookingService = Depends(get_booking_service),
):
    return service.reschedule(barbershop, booking_id, data)


# ============================================================================
# CLIENT BOOKINGS
# ============================================================================


@client_router.get("", response_model=list[ClientBookingResponse])
async def get_my_bookings(
    current_user: Profile = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.get_my_bookings(current_user)


@client_router.post("/{booking_id}/cancel", response_model=ClientBookingResponse)
async def cancel_my_booking(
    booking_id: str,
    current_user: Profile = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return await service.cancel_my_booking(current_user, booking_id)


__all__ = ["router", "client_router"]
