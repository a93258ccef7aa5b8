"""Tutorial router - FastAPI endpoints for tutorial videos and images"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_admin_barbershop, get_current_user
from ...database import get_db
from ...models import Barbershop, Profile
from .schemas import (
    GenerateImagesRequest,
    GenerateImagesResponse,
    TutorialCategoryResponse,
    TutorialImageResponse,
    TutorialVideoCreate,
    TutorialVideoResponse,
    TutorialVideoUpdate,
)
from .service import TutorialService

router = APIRouter(prefix="/barbershops/{barbershop_id}/tutorials", tags=["Tutorials"])


def get_tutorial_service(db: Session = Depends(get_db)) -> TutorialService:
    return TutorialService(db)


# ============================================================================
# VIDEOS
# ============================================================================


@router.get("/videos", response_model=list[TutorialCategoryResponse])
async def get_videos(
    category_id: Optional[str] = Query(None),
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: TutorialService = Depends(get_tutorial_service),
):
    """Videos grouped by category, global ones included"""
    return service.get_videos_by_category(barbershop.id, category_id)


@router.post("/videos", response_model=TutorialVideoResponse, status_code=201)
async def create_video(
    data: TutorialVideoCreate,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    current_user: Profile = Depends(get_current_user),
    service: TutorialService = Depends(get_tutorial_service),
):
    return service.create_video(barbershop.id, data, current_user)


@router.put("/videos/{video_id}", response_model=TutorialVideoResponse)
async def update_video(
    video_id: str,
    data: TutorialVideoUpdate,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    current_user: Profile = Depends(get_current_user),
    service: TutorialService = Depends(get_tutorial_service),
):
    return service.update_video(video_id, barbershop.id, data, current_user)


@router.delete("/videos/{video_id}")
async def delete_video(
    video_id: str,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    current_user: Profile = Depends(get_current_user),
    service: TutorialService = Depends(get_tutorial_service),
):
    return service.delete_video(video_id, barbershop.id, current_user)


# ============================================================================
# IMAGES
# ============================================================================


@router.get("/images", response_model=list[TutorialImageResponse])
async def get_images(
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: TutorialService = Depends(get_tutorial_service),
):
    return service.get_images(barbershop.id)


@router.post("/images/generate", response_model=GenerateImagesResponse)
async def generate_images(
    data: GenerateImagesRequest,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: TutorialService = Depends(get_tutorial_service),
):
    """Generate illustrations for every tutorial step, or just one"""
    return await service.generate_images(barbershop.id, data.tutorial_id)


__all__ = ["router"]
