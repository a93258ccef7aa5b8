"""Barbershop repository - Database operations for barbershops, gallery and sign-up"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import (
    Barbershop,
    GalleryImage,
    NotificationSettings,
    Profile,
    RegistrationCode,
    UserRole,
)


class BarbershopRepository:
    """Repository for barbershop database operations"""

    @staticmethod
    def get_by_id(db: Session, barbershop_id: str) -> Optional[Barbershop]:
        return db.query(Barbershop).filter(Barbershop.id == barbershop_id).first()

    @staticmethod
    def get_by_slug(db: Session, slug: str) -> Optional[Barbershop]:
        return db.query(Barbershop).filter(Barbershop.slug == slug).first()

    @staticmethod
    def slug_exists(db: Session, slug: str) -> bool:
        return db.query(Barbershop.id).filter(Barbershop.slug == slug).first() is not None

    @staticmethod
    def get_admin_barbershops(db: Session, user_id: str) -> list[Barbershop]:
        """Barbershops the user owns or holds an admin role for"""
        role_shop_ids = [
            r.barbershop_id
            for r in db.query(UserRole)
            .filter(UserRole.user_id == user_id, UserRole.role == "admin")
            .all()
            if r.barbershop_id
        ]
        query = db.query(Barbershop)
        if role_shop_ids:
            query = query.filter(
                (Barbershop.owner_id == user_id) | (Barbershop.id.in_(role_shop_ids))
            )
        else:
            query = query.filter(Barbershop.owner_id == user_id)
        return query.order_by(Barbershop.created_at).all()

    @staticmethod
    def update_barbershop(db: Session, barbershop: Barbershop, **updates) -> Barbershop:
        for key, value in updates.items():
            if value is not None and hasattr(barbershop, key):
                setattr(barbershop, key, value)
        db.commit()
        db.refresh(barbershop)
        return barbershop

    # Registration

    @staticmethod
    def get_registration_code(db: Session, code: str) -> Optional[RegistrationCode]:
        return db.query(RegistrationCode).filter(RegistrationCode.code == code).first()

    @staticmethod
    def create_registration_code(db: Session, **data) -> RegistrationCode:
        registration_code = RegistrationCode(**data)
        db.add(registration_code)
        db.commit()
        db.refresh(registration_code)
        return registration_code

    @staticmethod
    def upsert_admin_profile(
        db: Session, user_id: str, email: str, full_name: str, phone: Optional[str]
    ) -> Profile:
        profile = db.query(Profile).filter(Profile.id == user_id).first()
        if profile:
            profile.role = "admin"
            profile.full_name = profile.full_name or full_name
            profile.phone = profile.phone or phone
        else:
            profile = Profile(id=user_id, email=email, full_name=full_name, phone=phone, role="admin")
            db.add(profile)
        db.flush()
        return profile

    @staticmethod
    def add_barbershop(db: Session, **data) -> Barbershop:
        barbershop = Barbershop(**data)
        db.add(barbershop)
        db.flush()
        return barbershop

    @staticmethod
    def add_user_role(db: Session, user_id: str, role: str, barbershop_id: Optional[str]) -> UserRole:
        user_role = UserRole(user_id=user_id, role=role, barbershop_id=barbershop_id)
        db.add(user_role)
        db.flush()
        return user_role

    @staticmethod
    def add_notification_settings(db: Session, barbershop_id: str, **data) -> NotificationSettings:
        settings = NotificationSettings(barbershop_id=barbershop_id, **data)
        db.add(settings)
        db.flush()
        return settings

    # Gallery

    @staticmethod
    def get_gallery(db: Session, barbershop_id: str) -> list[GalleryImage]:
        return (
            db.query(GalleryImage)
            .filter(GalleryImage.barbershop_id == barbershop_id)
            .order_by(GalleryImage.display_order, GalleryImage.created_at)
            .all()
        )

    @staticmethod
    def get_gallery_image(db: Session, image_id: str, barbershop_id: str) -> Optional[GalleryImage]:
        return (
            db.query(GalleryImage)
            .filter(GalleryImage.id == image_id, GalleryImage.barbershop_id == barbershop_id)
            .first()
        )

    @staticmethod
    def create_gallery_image(db: Session, barbershop_id: str, **data) -> GalleryImage:
        image = GalleryImage(barbershop_id=barbershop_id, **data)
        db.add(image)
        db.commit()
        db.refresh(image)
        return image

    @staticmethod
    def update_gallery_image(db: Session, image: GalleryImage, **updates) -> GalleryImage:
        for key, value in updates.items():
            if value is not None and hasattr(image, key):
                setattr(image, key, value)
        db.commit()
        db.refresh(image)
        return image

    @staticmethod
    def delete_gallery_image(db: Session, image: GalleryImage) -> None:
        db.delete(image)
        db.commit()
