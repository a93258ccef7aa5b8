"""Catalog repository - Database operations for services"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Service


class ServiceRepository:
    """Repository for service database operations"""

    @staticmethod
    def get_services(db: Session, barbershop_id: str, active_only: bool = False) -> list[Service]:
        query = db.query(Service).filter(Service.barbershop_id == barbershop_id)
        if active_only:
            query = query.filter(Service.is_active.is_(True))
        return query.order_by(Service.name).all()

    @staticmethod
    def get_service_by_id(db: Session, service_id: str, barbershop_id: str) -> Optional[Service]:
        return (
            db.query(Service)
            .filter(Service.id == service_id, Service.barbershop_id == barbershop_id)
            .first()
        )

    @staticmethod
    def create_service(db: Session, barbershop_id: str, **data) -> Service:
        service = Service(barbershop_id=barbershop_id, **data)
        db.add(service)
        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def update_service(db: Session, service: Service, **updates) -> Service:
        for key, value in updates.items():
            if value is not None and hasattr(service, key):
                setattr(service, key, value)
        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def delete_service(db: Session, service: Service) -> None:
        db.delete(service)
        db.commit()
