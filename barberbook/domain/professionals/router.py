"""Professional router - FastAPI endpoints for professionals, time blocks and availability"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_admin_barbershop
from ...database import get_db
from ...models import Barbershop
from ..scheduling.schemas import AvailabilityResponse
from ..scheduling.service import SchedulingService
from .schemas import (
    ProfessionalCreate,
    ProfessionalResponse,
    ProfessionalUpdate,
    TimeBlockCreate,
    TimeBlockResponse,
)
from .service import ProfessionalService

router = APIRouter(prefix="/barbershops/{barbershop_id}/professionals", tags=["Professionals"])


def get_professional_service(db: Session = Depends(get_db)) -> ProfessionalService:
    """Dependency injection for ProfessionalService"""
    return ProfessionalService(db)


def get_scheduling_service(db: Session = Depends(get_db)) -> SchedulingService:
    return SchedulingService(db)


# ============================================================================
# CORE CRUD OPERATIONS
# ============================================================================


@router.get("", response_model=list[ProfessionalResponse])
async def get_professionals(
    active_only: bool = Query(False),
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: ProfessionalService = Depends(get_professional_service),
):
    return service.get_professionals(barbershop.id, active_only)


@router.post("", response_model=ProfessionalResponse, status_code=201)
async def create_professional(
    data: ProfessionalCreate,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: ProfessionalService = Depends(get_professional_service),
):
    return service.create_professional(barbershop.id, data)


@router.get("/{professional_id}", response_model=ProfessionalResponse)
async def get_professional(
    professional_id: str,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: ProfessionalService = Depends(get_professional_service),
):
    return service.get_professional(professional_id, barbershop.id)


@router.put("/{professional_id}", response_model=ProfessionalResponse)
async def update_professional(
    professional_id: str,
    data: ProfessionalUpdate,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: ProfessionalService = Depends(get_professional_service),
):
    return service.update_professional(professional_id, barbershop.id, data)


@router.delete("/{professional_id}")
async def delete_professional(
    professional_id: str,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: ProfessionalService = Depends(get_professional_service),
):
    return service.delete_professional(professional_id, barbershop.id)


# ============================================================================
# TIME BLOCKS & AVAILABILITY
# ============================================================================


@router.get("/{professional_id}/time-blocks", response_model=list[TimeBlockResponse])
async def get_time_blocks(
    professional_id: str,
    block_date: Optional[date] = Query(None, alias="date"),
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: ProfessionalService = Depends(get_professional_service),
):
    return service.get_time_blocks(professional_id, barbershop.id, block_date)


@router.post("/{professional_id}/time-blocks", response_model=TimeBlockResponse, status_code=201)
async def create_time_block(
    professional_id: str,
    data: TimeBlockCreate,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: ProfessionalService = Depends(get_professional_service),
):
    return service.create_time_block(professional_id, barbershop.id, data)


@router.delete("/{professional_id}/time-blocks/{block_id}")
async def delete_time_block(
    professional_id: str,
    block_id: str,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: ProfessionalService = Depends(get_professional_service),
):
    return service.delete_time_block(block_id, professional_id, barbershop.id)


@router.get("/{professional_id}/availability", response_model=AvailabilityResponse)
async def get_availability(
    professional_id: str,
    day: date = Query(..., alias="date"),
    service_id: Optional[str] = Query(None),
    duration_minutes: Optional[int] = Query(None, gt=0),
    barbershop: Barbershop = Depends(get_admin_barbershop),
    scheduling: SchedulingService = Depends(get_scheduling_service),
):
    """Free starts for the professional's day on the 30-minute grid"""
    return scheduling.day_availability(
        barbershop, professional_id, day, service_id, duration_minutes
    )


__all__ = ["router"]
