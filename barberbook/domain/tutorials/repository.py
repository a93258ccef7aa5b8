"""Tutorial repository - Database operations for tutorial videos and images"""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ...models import TutorialImage, TutorialVideo


class TutorialRepository:
    """Repository for tutorial database operations"""

    @staticmethod
    def get_videos(
        db: Session,
        barbershop_id: str,
        category_id: Optional[str] = None,
        active_only: bool = True,
    ) -> list[TutorialVideo]:
        """Global videos plus the ones recorded for this barbershop"""
        query = db.query(TutorialVideo).filter(
            or_(TutorialVideo.barbershop_id.is_(None), TutorialVideo.barbershop_id == barbershop_id)
        )
        if category_id:
            query = query.filter(TutorialVideo.category_id == category_id)
        if active_only:
            query = query.filter(TutorialVideo.is_active.is_(True))
        return query.order_by(TutorialVideo.category_id, TutorialVideo.display_order).all()

    @staticmethod
    def get_video(db: Session, video_id: str) -> Optional[TutorialVideo]:
        return db.query(TutorialVideo).filter(TutorialVideo.id == video_id).first()

    @staticmethod
    def create_video(db: Session, **data) -> TutorialVideo:
        video = TutorialVideo(**data)
        db.add(video)
        db.commit()
        db.refresh(video)
        return video

    @staticmethod
    def update_video(db: Session, video: TutorialVideo, **updates) -> TutorialVideo:
        for key, value in updates.items():
            if value is not None and hasattr(video, key):
                setattr(video, key, value)
        db.commit()
        db.refresh(video)
        return video

    @staticmethod
    def delete_video(db: Session, video: TutorialVideo) -> None:
        db.delete(video)
        db.commit()

    @staticmethod
    def get_images(db: Session, barbershop_id: str) -> list[TutorialImage]:
        return (
            db.query(TutorialImage)
            .filter(TutorialImage.barbershop_id == barbershop_id)
            .order_by(TutorialImage.category_id, TutorialImage.step_order)
            .all()
        )

    @staticmethod
    def upsert_image(db: Session, barbershop_id: str, tutorial: dict, image_url: str) -> TutorialImage:
        image = (
            db.query(TutorialImage)
            .filter(
                TutorialImage.barbershop_id == barbershop_id,
                TutorialImage.tutorial_id == tutorial["tutorial_id"],
            )
            .first()
        )
        if not image:
            image = TutorialImage(barbershop_id=barbershop_id, tutorial_id=tutorial["tutorial_id"])
            db.add(image)
        image.category_id = tutorial["category_id"]
        image.title = tutorial["title"]
        image.description = tutorial["description"]
        image.step_order = tutorial["step_order"]
        image.image_url = image_url
        db.commit()
        db.refresh(image)
        return image
