"""Catalog router - FastAPI endpoints for barbershop services"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_admin_barbershop
from ...database import get_db
from ...models import Barbershop
from .schemas import ServiceCreate, ServiceResponse, ServiceUpdate
from .service import CatalogService

router = APIRouter(prefix="/barbershops/{barbershop_id}/services", tags=["Services"])


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    """Dependency injection for CatalogService"""
    return CatalogService(db)


@router.get("", response_model=list[ServiceResponse])
async def get_services(
    active_only: bool = Query(False),
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.get_services(barbershop.id, active_only)


@router.post("", response_model=ServiceResponse, status_code=201)
async def create_service(
    data: ServiceCreate,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.create_service(barbershop.id, data)


@router.get("/{service_id}", response_model=ServiceResponse)
async def get_service(
    service_id: str,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.get_service(service_id, barbershop.id)


@router.put("/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: str,
    data: ServiceUpdate,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.update_service(service_id, barbershop.id, data)


@router.delete("/{service_id}")
async def delete_service(
    service_id: str,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.delete_service(service_id, barbershop.id)


__all__ = ["router"]
