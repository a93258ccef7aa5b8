"""Barbershop service - Business logic for sign-up, settings and gallery"""

import logging
import secrets
from datetime import datetime, timedelta

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...auth import is_super_admin
from ...config import DEFAULT_REMINDER_MINUTES
from ...models import Barbershop, GalleryImage, Profile, RegistrationCode
from ...services.auth_admin import create_auth_user
from ...services.notification_service import DEFAULT_CUSTOM_MESSAGE
from ...shared.validators import slugify
from .repository import BarbershopRepository
from .schemas import (
    BarbershopRegisterRequest,
    BarbershopSettingsUpdate,
    GalleryImageCreate,
    GalleryImageUpdate,
    RegistrationCodeCreate,
)

logger = logging.getLogger(__name__)


class BarbershopService:
    """Service layer for barbershop business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BarbershopRepository()

    # ========================================================================
    # REGISTRATION
    # ========================================================================

    def unique_slug(self, name: str) -> str:
        """Slug from the name, suffixed -2, -3, ... until unused"""
        base = slugify(name)
        slug = base
        counter = 2
        while self.repo.slug_exists(self.db, slug):
            slug = f"{base}-{counter}"
            counter += 1
        return slug

    def validate_registration_code(self, code: str) -> RegistrationCode:
        registration_code = self.repo.get_registration_code(self.db, code.strip())
        if not registration_code:
            raise HTTPException(status_code=400, detail="Invalid registration code")
        if registration_code.is_used:
            raise HTTPException(status_code=409, detail="Registration code already used")
        if registration_code.expires_at and registration_code.expires_at < datetime.utcnow():
            raise HTTPException(status_code=400, detail="Registration code has expired")
        return registration_code

    async def register(self, data: BarbershopRegisterRequest) -> dict:
        """
        Self-service sign-up of a barbershop and its owner.

        Steps: check the single-use code, create the owner in the auth
        service, then in one transaction the admin profile, the barbershop,
        the admin user role and default notification settings, and finally
        burn the code.
        """
        logger.info(f"📥 Starting barbershop registration for: {data.owner.email}")
        registration_code = self.validate_registration_code(data.code)

        user_id = await create_auth_user(
            email=data.owner.email,
            password=data.owner.password,
            full_name=data.owner.full_name,
            phone=data.owner.phone,
        )

        try:
            self.repo.upsert_admin_profile(
                self.db, user_id, data.owner.email, data.owner.full_name, data.owner.phone
            )
            barbershop = self.repo.add_barbershop(
                self.db,
                name=data.barbershop.name,
                slug=self.unique_slug(data.barbershop.name),
                owner_id=user_id,
                address=data.barbershop.address,
                description=data.barbershop.description,
                phone=data.owner.phone,
                whatsapp=data.owner.phone,
                opening_days=["monday", "tuesday", "wednesday", "thursday", "friday", "saturday"],
            )
            self.repo.add_user_role(self.db, user_id, "admin", barbershop.id)
            self.repo.add_notification_settings(
                self.db,
                barbershop.id,
                enabled=True,
                send_to_client=True,
                send_whatsapp=False,
                admin_email=data.owner.email,
                admin_whatsapp=data.owner.phone,
                reminder_minutes=DEFAULT_REMINDER_MINUTES,
                custom_message=DEFAULT_CUSTOM_MESSAGE,
            )
            registration_code.is_used = True
            registration_code.used_at = datetime.utcnow()
            registration_code.used_by = user_id
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Barbershop registration failed after auth user {user_id} was created: {e}")
            raise HTTPException(status_code=500, detail="Failed to create barbershop") from e

        logger.info(f"✅ Barbershop registered: {barbershop.id} ({barbershop.slug})")
        return {
            "success": True,
            "user_id": user_id,
            "barbershop_id": barbershop.id,
            "slug": barbershop.slug,
        }

    def create_registration_code(self, data: RegistrationCodeCreate, user: Profile) -> RegistrationCode:
        if not is_super_admin(self.db, user):
            raise HTTPException(status_code=403, detail="Super admin access required")

        code = (data.code or secrets.token_hex(4)).strip().upper()
        if self.repo.get_registration_code(self.db, code):
            raise HTTPException(status_code=409, detail="Registration code already exists")

        expires_at = None
        if data.expires_in_days:
            expires_at = datetime.utcnow() + timedelta(days=data.expires_in_days)
        return self.repo.create_registration_code(self.db, code=code, expires_at=expires_at)

    # ========================================================================
    # SETTINGS
    # ========================================================================

    def get_my_barbershops(self, user: Profile) -> list[Barbershop]:
        return self.repo.get_admin_barbershops(self.db, user.id)

    def update_settings(self, barbershop: Barbershop, data: BarbershopSettingsUpdate) -> Barbershop:
        updates = data.model_dump(exclude_unset=True)
        opening = updates.get("opening_time", barbershop.opening_time)
        closing = updates.get("closing_time", barbershop.closing_time)
        if opening >= closing:
            raise HTTPException(status_code=400, detail="Closing time must be after opening time")

        logger.info(f"🔄 Updating settings for barbershop {barbershop.id}: {list(updates.keys())}")
        return self.repo.update_barbershop(self.db, barbershop, **updates)

    # ========================================================================
    # GALLERY
    # ========================================================================

    def get_gallery(self, barbershop_id: str) -> list[GalleryImage]:
        return self.repo.get_gallery(self.db, barbershop_id)

    def get_gallery_image(self, image_id: str, barbershop_id: str) -> GalleryImage:
        image = self.repo.get_gallery_image(self.db, image_id, barbershop_id)
        if not image:
            raise HTTPException(status_code=404, detail="Gallery image not found")
        return image

    def add_gallery_image(self, barbershop_id: str, data: GalleryImageCreate) -> GalleryImage:
        return self.repo.create_gallery_image(self.db, barbershop_id, **data.model_dump())

    def update_gallery_image(
        self, image_id: str, barbershop_id: str, data: GalleryImageUpdate
    ) -> GalleryImage:
        image = self.get_gallery_image(image_id, barbershop_id)
        return self.repo.update_gallery_image(self.db, image, **data.model_dump(exclude_unset=True))

    def delete_gallery_image(self, image_id: str, barbershop_id: str) -> dict:
        image = self.get_gallery_image(image_id, barbershop_id)
        self.repo.delete_gallery_image(self.db, image)
        return {"message": "Gallery image deleted"}
