"""
Subscription limits and trial utilities for client plan usage.
"""

from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from .config import TRIAL_DAYS
from .models import ClientSubscription, Profile, SubscriptionPlan


def get_services_remaining(
    plan: Optional[SubscriptionPlan], subscription: ClientSubscription
) -> Optional[int]:
    """Services left this month. Returns None for unlimited plans."""
    if plan is None or plan.max_services_per_month is None:
        return None
    return max(0, plan.max_services_per_month - (subscription.services_used_this_month or 0))


def plan_covers_service(plan: Optional[SubscriptionPlan], service_id: Optional[str]) -> bool:
    """An empty services_included list means every service is covered"""
    if plan is None:
        return False
    included = plan.services_included or []
    if not included or not service_id:
        return True
    return service_id in included


def has_active_subscription(
    db: Session,
    barbershop_id: str,
    client_id: str,
    service_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> dict:
    """
    Check whether a client can book a service on their subscription.

    Returns a dict with has_subscription, can_use, services_remaining (None =
    unlimited) and subscription_id.
    """
    now = now or datetime.utcnow()
    subscription = (
        db.query(ClientSubscription)
        .filter(
            ClientSubscription.barbershop_id == barbershop_id,
            ClientSubscription.client_id == client_id,
            ClientSubscription.status == "active",
            ClientSubscription.end_date >= now,
        )
        .order_by(ClientSubscription.end_date.desc())
        .first()
    )
    if not subscription:
        return {
            "has_subscription": False,
            "can_use": False,
            "services_remaining": 0,
            "subscription_id": None,
        }

    plan = subscription.plan
    remaining = get_services_remaining(plan, subscription)
    can_use = plan_covers_service(plan, service_id) and (remaining is None or remaining > 0)

    return {
        "has_subscription": True,
        "can_use": can_use,
        "services_remaining": remaining,
        "subscription_id": subscription.id,
    }


def get_trial_status(
    profile: Profile, has_subscription: bool, now: Optional[datetime] = None
) -> dict:
    """
    Trial window of TRIAL_DAYS days starting at profile creation.
    A client with an active subscription is never "in trial".
    """
    now = now or datetime.utcnow()
    if not profile.created_at:
        return {
            "is_in_trial": False,
            "trial_expired": False,
            "days_remaining": 0,
            "trial_end_date": None,
            "has_active_subscription": has_subscription,
        }

    trial_end = profile.created_at + timedelta(days=TRIAL_DAYS)
    trial_expired = now > trial_end
    return {
        "is_in_trial": not trial_expired and not has_subscription,
        "trial_expired": trial_expired,
        "days_remaining": max(0, (trial_end - now).days),
        "trial_end_date": trial_end,
        "has_active_subscription": has_subscription,
    }
