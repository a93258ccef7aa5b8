"""Public router - Unauthenticated storefront endpoints addressed by barbershop slug"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import Barbershop, Profile
from ..barbershops.repository import BarbershopRepository
from ..barbershops.schemas import GalleryImageResponse
from ..bookings.schemas import BookingResponse, PublicBookingCreate
from ..bookings.service import BookingService
from ..catalog.repository import ServiceRepository
from ..catalog.schemas import ServiceResponse
from ..professionals.repository import ProfessionalRepository
from ..professionals.schemas import ProfessionalResponse
from ..scheduling.schemas import AvailabilityResponse
from ..scheduling.service import SchedulingService
from ..subscriptions.repository import SubscriptionRepository
from ..subscriptions.schemas import PlanResponse
from .schemas import PublicBarbershopResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/public/{slug}", tags=["Public"])


def get_public_barbershop(slug: str, db: Session = Depends(get_db)) -> Barbershop:
    """Resolve the barbershop of a public page, 404 when the slug is unknown"""
    barbershop = BarbershopRepository.get_by_slug(db, slug)
    if not barbershop:
        raise HTTPException(status_code=404, detail="Barbershop not found")
    return barbershop


@router.get("", response_model=PublicBarbershopResponse)
async def get_barbershop(barbershop: Barbershop = Depends(get_public_barbershop)):
    return barbershop


@router.get("/services", response_model=list[ServiceResponse])
async def get_services(
    barbershop: Barbershop = Depends(get_public_barbershop),
    db: Session = Depends(get_db),
):
    return ServiceRepository.get_services(db, barbershop.id, active_only=True)


@router.get("/professionals", response_model=list[ProfessionalResponse])
async def get_professionals(
    barbershop: Barbershop = Depends(get_public_barbershop),
    db: Session = Depends(get_db),
):
    return ProfessionalRepository.get_professionals(db, barbershop.id, active_only=True)


@router.get("/gallery", response_model=list[GalleryImageResponse])
async def get_gallery(
    barbershop: Barbershop = Depends(get_public_barbershop),
    db: Session = Depends(get_db),
):
    return BarbershopRepository.get_gallery(db, barbershop.id)


@router.get("/plans", response_model=list[PlanResponse])
async def get_plans(
    barbershop: Barbershop = Depends(get_public_barbershop),
    db: Session = Depends(get_db),
):
    return SubscriptionRepository.get_plans(db, barbershop.id, active_only=True)


@router.get("/availability", response_model=AvailabilityResponse)
async def get_availability(
    professional_id: str = Query(...),
    day: date = Query(..., alias="date"),
    service_id: Optional[str] = Query(None),
    barbershop: Barbershop = Depends(get_public_barbershop),
    db: Session = Depends(get_db),
):
    """Free start times for a professional on a given day"""
    return SchedulingService(db).day_availability(barbershop, professional_id, day, service_id)


@router.post("/bookings", response_model=BookingResponse, status_code=201)
async def create_booking(
    data: PublicBookingCreate,
    barbershop: Barbershop = Depends(get_public_barbershop),
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Book a service as the signed-in client"""
    return await BookingService(db).create_client_booking(barbershop, current_user, data)


__all__ = ["router"]
