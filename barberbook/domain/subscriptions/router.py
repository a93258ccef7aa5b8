"""Subscription router - FastAPI endpoints for plans, client subscriptions and payment webhooks"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from ...auth import get_admin_barbershop, get_current_user
from ...database import get_db
from ...models import Barbershop, Profile
from .schemas import (
    ClientSubscriptionResponse,
    ExpireResponse,
    PlanCreate,
    PlanResponse,
    PlanUpdate,
    SubscribeRequest,
    SubscriptionCheckResponse,
    TrialStatusResponse,
)
from .service import SubscriptionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/barbershops/{barbershop_id}", tags=["Subscriptions"])
client_router = APIRouter(prefix="/me/barbershops/{barbershop_id}", tags=["My Subscription"])
webhook_router = APIRouter(prefix="/webhooks", tags=["Webhooks"])


def get_subscription_service(db: Session = Depends(get_db)) -> SubscriptionService:
    """Dependency injection for SubscriptionService"""
    return SubscriptionService(db)


# ============================================================================
# PLANS
# ============================================================================


@router.get("/subscription-plans", response_model=list[PlanResponse])
async def get_plans(
    active_only: bool = Query(False),
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: SubscriptionService = Depends(get_subscription_service),
):
    return service.get_plans(barbershop.id, active_only)


@router.post("/subscription-plans", response_model=PlanResponse, status_code=201)
async def create_plan(
    data: PlanCreate,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: SubscriptionService = Depends(get_subscription_service),
):
    return service.create_plan(barbershop.id, data)


@router.put("/subscription-plans/{plan_id}", response_model=PlanResponse)
async def update_plan(
    plan_id: str,
    data: PlanUpdate,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: SubscriptionService = Depends(get_subscription_service),
):
    return service.update_plan(plan_id, barbershop.id, data)


@router.delete("/subscription-plans/{plan_id}")
async def deactivate_plan(
    plan_id: str,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: SubscriptionService = Depends(get_subscription_service),
):
    return service.deactivate_plan(plan_id, barbershop.id)


# ============================================================================
# CLIENT SUBSCRIPTIONS
# ============================================================================


@router.get("/subscriptions", response_model=list[ClientSubscriptionResponse])
async def get_subscriptions(
    status: Optional[str] = Query(None),
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: SubscriptionService = Depends(get_subscription_service),
):
    return service.get_subscriptions(barbershop.id, status)


@router.post("/subscriptions", response_model=ClientSubscriptionResponse, status_code=201)
async def subscribe_client(
    data: SubscribeRequest,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: SubscriptionService = Depends(get_subscription_service),
):
    return service.subscribe(barbershop.id, data)


@router.get("/subscriptions/check", response_model=SubscriptionCheckResponse)
async def check_subscription(
    client_id: str = Query(...),
    service_id: Optional[str] = Query(None),
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: SubscriptionService = Depends(get_subscription_service),
):
    return service.check_subscription(barbershop.id, client_id, service_id)


@router.post("/subscriptions/expire", response_model=ExpireResponse)
async def expire_subscriptions(
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: SubscriptionService = Depends(get_subscription_service),
):
    """Run the expiry sweep now (normally done by the worker)"""
    return {"expired": service.expire_overdue(barbershop_id=barbershop.id)}


@router.post("/subscriptions/{subscription_id}/cancel", response_model=ClientSubscriptionResponse)
async def cancel_subscription(
    subscription_id: str,
    barbershop: Barbershop = Depends(get_admin_barbershop),
    service: SubscriptionService = Depends(get_subscription_service),
):
    return service.cancel_subscription(subscription_id, barbershop.id)


# ============================================================================
# CLIENT-FACING
# ============================================================================


@client_router.get("/trial-status", response_model=TrialStatusResponse)
async def get_trial_status(
    barbershop_id: str,
    current_user: Profile = Depends(get_current_user),
    service: SubscriptionService = Depends(get_subscription_service),
):
    return service.trial_status(current_user, barbershop_id)


@client_router.get("/subscription", response_model=SubscriptionCheckResponse)
async def get_my_subscription(
    barbershop_id: str,
    service_id: Optional[str] = Query(None),
    current_user: Profile = Depends(get_current_user),
    service: SubscriptionService = Depends(get_subscription_service),
):
    return service.check_subscription(barbershop_id, current_user.id, service_id)


# ============================================================================
# WEBHOOKS
# ============================================================================


@webhook_router.post("/mercadopago")
async def mercadopago_webhook(
    request: Request,
    service: SubscriptionService = Depends(get_subscription_service),
):
    """Mercado Pago payment notifications (topic/id in the query or in the body)"""
    params = request.query_params
    try:
        body = await request.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    payment_id = params.get("id") or params.get("data.id") or (body.get("data") or {}).get("id")
    topic = params.get("topic") or params.get("type") or body.get("type")
    logger.info(f"📨 Mercado Pago webhook received: type={topic} id={payment_id}")
    return await service.handle_payment_webhook(topic, payment_id)


__all__ = ["router", "client_router", "webhook_router"]
