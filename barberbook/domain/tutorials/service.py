"""Tutorial service - Tutorial videos and AI-generated step illustrations"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...auth import is_super_admin
from ...models import Profile, TutorialVideo
from ...services import image_gateway
from .catalog import TUTORIAL_IMAGE_PROMPTS, VIDEO_CATEGORIES, find_tutorial
from .repository import TutorialRepository
from .schemas import TutorialVideoCreate, TutorialVideoUpdate

logger = logging.getLogger(__name__)


class TutorialService:
    """Service layer for tutorial business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = TutorialRepository()

    # ------------------------------------------------------------------
    # Videos
    # ------------------------------------------------------------------

    def get_videos_by_category(self, barbershop_id: str, category_id: Optional[str] = None) -> list[dict]:
        grouped: dict[str, dict] = {}
        for video in self.repo.get_videos(self.db, barbershop_id, category_id):
            group = grouped.setdefault(
                video.category_id,
                {
                    "category_id": video.category_id,
                    "title": video.category_title,
                    "icon": video.category_icon,
                    "videos": [],
                },
            )
            group["videos"].append(video)
        return list(grouped.values())

    def _get_editable_video(self, video_id: str, barbershop_id: str, user: Profile) -> TutorialVideo:
        video = self.repo.get_video(self.db, video_id)
        if not video or video.barbershop_id not in (None, barbershop_id):
            raise HTTPException(status_code=404, detail="Video not found")
        if video.barbershop_id is None and not is_super_admin(self.db, user):
            raise HTTPException(status_code=403, detail="Only super admins can edit global videos")
        return video

    def create_video(self, barbershop_id: str, data: TutorialVideoCreate, user: Profile) -> TutorialVideo:
        if data.is_global and not is_super_admin(self.db, user):
            raise HTTPException(status_code=403, detail="Only super admins can create global videos")

        category = VIDEO_CATEGORIES[data.category_id]
        video = self.repo.create_video(
            self.db,
            barbershop_id=None if data.is_global else barbershop_id,
            category_title=category["title"],
            category_icon=category["icon"],
            **data.model_dump(exclude={"is_global"}),
        )
        logger.info(f"✅ Tutorial video created: {video.id} ({video.category_id})")
        return video

    def update_video(
        self, video_id: str, barbershop_id: str, data: TutorialVideoUpdate, user: Profile
    ) -> TutorialVideo:
        video = self._get_editable_video(video_id, barbershop_id, user)
        updates = data.model_dump(exclude_unset=True)
        if updates.get("category_id"):
            category = VIDEO_CATEGORIES[updates["category_id"]]
            updates["category_title"] = category["title"]
            updates["category_icon"] = category["icon"]
        return self.repo.update_video(self.db, video, **updates)

    def delete_video(self, video_id: str, barbershop_id: str, user: Profile) -> dict:
        video = self._get_editable_video(video_id, barbershop_id, user)
        self.repo.delete_video(self.db, video)
        return {"message": "Video deleted successfully"}

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    def get_images(self, barbershop_id: str):
        return self.repo.get_images(self.db, barbershop_id)

    async def generate_images(self, barbershop_id: str, tutorial_id: Optional[str] = None) -> dict:
        """
        Generate tutorial illustrations one at a time.

        A failed item is reported with its status and does not stop the rest.
        """
        if tutorial_id:
            tutorial = find_tutorial(tutorial_id)
            if not tutorial:
                raise HTTPException(status_code=404, detail="Tutorial not found")
            tutorials = [tutorial]
        else:
            tutorials = TUTORIAL_IMAGE_PROMPTS

        logger.info(f"🎨 Generating {len(tutorials)} tutorial images for barbershop {barbershop_id}")

        results = []
        for tutorial in tutorials:
            generated = await image_gateway.generate_image(tutorial["prompt"])
            status = generated["status"]
            if status != "success":
                logger.warning(f"⚠️ Image for {tutorial['tutorial_id']}: {status}")
                results.append(
                    {
                        "tutorial_id": tutorial["tutorial_id"],
                        "status": status,
                        "error": generated.get("message"),
                    }
                )
                continue

            self.repo.upsert_image(self.db, barbershop_id, tutorial, generated["image_url"])
            results.append({"tutorial_id": tutorial["tutorial_id"], "status": "success"})

        generated_count = sum(1 for r in results if r["status"] == "success")
        logger.info(f"✅ Generated {generated_count}/{len(tutorials)} tutorial images")
        return {
            "success": True,
            "results": results,
            "generated": generated_count,
            "total": len(tutorials),
        }
