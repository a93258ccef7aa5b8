"""Catalog service - Business logic for barbershop services"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Booking, Service
from .repository import ServiceRepository
from .schemas import ServiceCreate, ServiceUpdate

logger = logging.getLogger(__name__)


class CatalogService:
    """Service layer for the service catalog"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ServiceRepository()

    def get_services(self, barbershop_id: str, active_only: bool = False) -> list[Service]:
        return self.repo.get_services(self.db, barbershop_id, active_only)

    def get_service(self, service_id: str, barbershop_id: str) -> Service:
        service = self.repo.get_service_by_id(self.db, service_id, barbershop_id)
        if not service:
            raise HTTPException(status_code=404, detail="Service not found")
        return service

    def create_service(self, barbershop_id: str, data: ServiceCreate) -> Service:
        logger.info(f"📥 Creating service '{data.name}' for barbershop {barbershop_id}")
        return self.repo.create_service(self.db, barbershop_id, **data.model_dump())

    def update_service(self, service_id: str, barbershop_id: str, data: ServiceUpdate) -> Service:
        service = self.get_service(service_id, barbershop_id)
        return self.repo.update_service(self.db, service, **data.model_dump(exclude_unset=True))

    def delete_service(self, service_id: str, barbershop_id: str) -> dict:
        """Delete a service, or deactivate it when bookings still reference it"""
        service = self.get_service(service_id, barbershop_id)
        in_use = self.db.query(Booking.id).filter(Booking.service_id == service.id).first()
        if in_use:
            self.repo.update_service(self.db, service, is_active=False)
            logger.info(f"ℹ️ Service {service.id} has bookings, deactivated instead of deleted")
            return {"message": "Service deactivated"}

        self.repo.delete_service(self.db, service)
        return {"message": "Service deleted"}
