"""Barbershop router - FastAPI endpoints for sign-up, settings and gallery"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_admin_barbershop, get_current_user
from ...database import get_db
from ...models import Barbershop, Profile
from .schemas import (
    BarbershopRegisterRequest,
    BarbershopRegisterResponse,
    BarbershopResponse,
    BarbershopSettingsUpdate,
    GalleryImageCreate,
    GalleryImageResponse,
    GalleryImageUpdate,
    RegistrationCodeCreate,
    RegistrationCodeResponse,
)
from .service import BarbershopService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/barbershops", tags=["Barbershops"])


def get_barbershop_service(db: Session = Depends(get_db)) -> BarbershopService:
    """Dependency injection for BarbershopService"""
    return BarbershopService(db)


# ============================================================================
# REGISTRATION
# ============================================================================


@router.post("/register", response_model=BarbershopRegisterResponse, status_code=201)
async def register_barbershop(
    data: BarbershopRegisterRequest,
    service: BarbershopService = Depends(get_barbershop_service),
):
    """Register a new barbershop and its owner (requires a registration code)"""
    return await service.register(data)


@router.post("/registration-codes", response_model=RegistrationCodeResponse, status_code=201)
async def create_registration_code(
    data: RegistrationCodeCreate,
    current_user: Profile = Depends(get_current_user),
    service: BarbershopService = Depends(get_barbershop_service),
):
    """Issue a single-use registration code (super admin only)"""
    return service.create_registration_code(data, current_user)


# ============================================================================
# SETTINGS
# ============================================================================


@router.get("/mine", response_model=list[BarbershopResponse])
async def get_my_barbershops(
    current_user: Profile = Depends(get_current_user),
    service: BarbershopService = Depends(get_barbershop_service),
):
    return service.get_my_barbershops(current_user)


@router.get("/{barbershop_id}/settings", response_model=BarbershopResponse)
async def get_settings(barbershop: Barbershop = Depends(get_admin_barbershop)):
    return barbershop


@router.put("/{barbershop_id}/settings", response_model=BarbershopResponse)
async def update_settings(
    data: BarbershopSettingsUpdate,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: BarbershopService = Depends(get_barbershop_service),
):
    return service.update_settings(barbershop, data)


# ============================================================================
# GALLERY
# ============================================================================


@router.get("/{barbershop_id}/gallery", response_model=list[GalleryImageResponse])
async def get_gallery(
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: BarbershopService = Depends(get_barbershop_service),
):
    return service.get_gallery(barbershop.id)


@router.post("/{barbershop_id}/gallery", response_model=GalleryImageResponse, status_code=201)
async def add_gallery_image(
    data: GalleryImageCreate,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: BarbershopService = Depends(get_barbershop_service),
):
    return service.add_gallery_image(barbershop.id, data)


@router.put("/{barbershop_id}/gallery/{image_id}", response_model=GalleryImageResponse)
async def update_gallery_image(
    image_id: str,
    data: GalleryImageUpdate,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: BarbershopService = Depends(get_barbershop_service),
):
    return service.update_gallery_image(image_id, barbershop.id, data)


@router.delete("/{barbershop_id}/gallery/{image_id}")
async def delete_gallery_image(
    image_id: str,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: BarbershopService = Depends(get_barbershop_service),
):
    return service.delete_gallery_image(image_id, barbershop.id)


__all__ = ["router"]
