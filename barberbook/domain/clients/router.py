"""Client router - FastAPI endpoints for client operations"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_admin_barbershop
from ...database import get_db
from ...models import Barbershop
from .schemas import (
    ClientCreate,
    ClientHistoryResponse,
    ClientResponse,
    ClientSegmentsResponse,
    ClientUpdate,
)
from .service import ClientService, to_client_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/barbershops/{barbershop_id}/clients", tags=["Clients"])


def get_client_service(db: Session = Depends(get_db)) -> ClientService:
    """Dependency injection for ClientService"""
    return ClientService(db)


# ============================================================================
# CORE CRUD OPERATIONS
# ============================================================================


@router.get("", response_model=list[ClientResponse])
async def get_clients(
    search: Optional[str] = Query(None),
    is_active: Optional[bool] = Query(None),
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: ClientService = Depends(get_client_service),
):
    """Get all clients of the barbershop, optionally filtered by name/phone/email"""
    return service.get_clients(barbershop.id, search, is_active)


@router.post("", response_model=ClientResponse, status_code=201)
async def create_client(
    data: ClientCreate,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: ClientService = Depends(get_client_service),
):
    return service.create_client(barbershop.id, data)


@router.get("/segments", response_model=ClientSegmentsResponse)
async def get_segments(
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: ClientService = Depends(get_client_service),
):
    """Clients grouped into new / regular / vip / inactive"""
    return service.get_segments(barbershop.id)


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: str,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: ClientService = Depends(get_client_service),
):
    return to_client_response(service.get_client(barbershop.id, client_id))


@router.put("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: str,
    data: ClientUpdate,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: ClientService = Depends(get_client_service),
):
    return service.update_client(barbershop.id, client_id, data)


@router.get("/{client_id}/history", response_model=ClientHistoryResponse)
async def get_client_history(
    client_id: str,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: ClientService = Depends(get_client_service),
):
    return service.get_history(barbershop.id, client_id)


__all__ = ["router"]
