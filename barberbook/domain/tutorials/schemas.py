"""Tutorial domain schemas - Pydantic models for tutorial videos and images"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .catalog import VIDEO_CATEGORIES


class TutorialVideoCreate(BaseModel):
    category_id: str
    title: str = Field(min_length=1)
    description: Optional[str] = None
    video_url: str
    duration: Optional[str] = None
    display_order: int = 0
    is_global: bool = False

    @field_validator("category_id")
    @classmethod
    def validate_category(cls, v):
        if v not in VIDEO_CATEGORIES:
            raise ValueError(f"Unknown category: {v}")
        return v

    @field_validator("video_url")
    @classmethod
    def validate_video_url(cls, v):
        if not v.startswith(("http://", "https://")):
            raise ValueError("Video URL must start with http:// or https://")
        return v


class TutorialVideoUpdate(BaseModel):
    category_id: Optional[str] = None
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    video_url: Optional[str] = None
    duration: Optional[str] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None

    @field_validator("category_id")
    @classmethod
    def validate_category(cls, v):
        if v is not None and v not in VIDEO_CATEGORIES:
            raise ValueError(f"Unknown category: {v}")
        return v


class TutorialVideoResponse(BaseModel):
    id: str
    barbershop_id: Optional[str] = None
    category_id: str
    category_title: str
    category_icon: Optional[str] = None
    title: str
    description: Optional[str] = None
    video_url: str
    duration: Optional[str] = None
    display_order: int
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TutorialCategoryResponse(BaseModel):
    category_id: str
    title: str
    icon: Optional[str] = None
    videos: list[TutorialVideoResponse]


class GenerateImagesRequest(BaseModel):
    tutorial_id: Optional[str] = None


class ImageGenerationResult(BaseModel):
    tutorial_id: str
    status: Literal["success", "rate_limited", "payment_required", "no_image", "error"]
    error: Optional[str] = None


class GenerateImagesResponse(BaseModel):
    success: bool
    results: list[ImageGenerationResult]
    generated: int
    total: int


class TutorialImageResponse(BaseModel):
    id: str
    category_id: str
    tutorial_id: str
    title: str
    description: Optional[str] = None
    image_url: str
    step_order: int
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
