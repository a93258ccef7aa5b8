"""Subscription service - Business logic for plans, client subscriptions and payments"""

import json
import logging
from datetime import datetime, timedelta
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Barbershop, ClientSubscription, PaymentTransaction, Profile, SubscriptionPlan
from ...services import mercadopago_service
from ...services.notification_service import create_in_app_notification
from ...subscription_limits import get_trial_status, has_active_subscription
from .repository import SubscriptionRepository
from .schemas import PlanCreate, PlanUpdate, SubscribeRequest

logger = logging.getLogger(__name__)


def to_subscription_response(subscription: ClientSubscription) -> dict:
    return {
        "id": subscription.id,
        "barbershop_id": subscription.barbershop_id,
        "client_id": subscription.client_id,
        "client_name": subscription.client.full_name if subscription.client else None,
        "plan_id": subscription.plan_id,
        "plan_name": subscription.plan.name if subscription.plan else None,
        "start_date": subscription.start_date,
        "end_date": subscription.end_date,
        "status": subscription.status,
        "payment_status": subscription.payment_status,
        "services_used_this_month": subscription.services_used_this_month,
    }


class SubscriptionService:
    """Service layer for subscription business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SubscriptionRepository()

    # ========================================================================
    # PLANS
    # ========================================================================

    def get_plans(self, barbershop_id: str, active_only: bool = False) -> list[SubscriptionPlan]:
        return self.repo.get_plans(self.db, barbershop_id, active_only)

    def get_plan(self, plan_id: str, barbershop_id: str) -> SubscriptionPlan:
        plan = self.repo.get_plan(self.db, plan_id, barbershop_id)
        if not plan:
            raise HTTPException(status_code=404, detail="Subscription plan not found")
        return plan

    def create_plan(self, barbershop_id: str, data: PlanCreate) -> SubscriptionPlan:
        logger.info(f"📥 Creating subscription plan '{data.name}' for barbershop {barbershop_id}")
        return self.repo.create_plan(self.db, barbershop_id, **data.model_dump())

    def update_plan(self, plan_id: str, barbershop_id: str, data: PlanUpdate) -> SubscriptionPlan:
        plan = self.get_plan(plan_id, barbershop_id)
        return self.repo.update_plan(self.db, plan, **data.model_dump(exclude_unset=True))

    def deactivate_plan(self, plan_id: str, barbershop_id: str) -> dict:
        """Plans are never deleted while subscriptions may reference them"""
        plan = self.get_plan(plan_id, barbershop_id)
        self.repo.update_plan(self.db, plan, is_active=False)
        return {"message": "Subscription plan deactivated"}

    # ========================================================================
    # CLIENT SUBSCRIPTIONS
    # ========================================================================

    def get_subscriptions(self, barbershop_id: str, status: Optional[str] = None) -> list[dict]:
        return [
            to_subscription_response(s)
            for s in self.repo.get_subscriptions(self.db, barbershop_id, status)
        ]

    def subscribe(self, barbershop_id: str, data: SubscribeRequest) -> dict:
        plan = self.get_plan(data.plan_id, barbershop_id)
        if not plan.is_active:
            raise HTTPException(status_code=400, detail="Subscription plan is not active")

        client = self.db.query(Profile).filter(Profile.id == data.client_id).first()
        if not client:
            raise HTTPException(status_code=404, detail="Client not found")

        existing = self.repo.get_active_subscription(
            self.db, barbershop_id, client.id, datetime.utcnow()
        )
        if existing:
            raise HTTPException(status_code=409, detail="Client already has an active subscription")

        start = data.start_date or datetime.utcnow()
        subscription = self.repo.create_subscription(
            self.db,
            barbershop_id=barbershop_id,
            client_id=client.id,
            plan_id=plan.id,
            start_date=start,
            end_date=start + timedelta(days=plan.duration_days),
            status="active",
            payment_status=data.payment_status,
        )
        logger.info(f"✅ Client {client.id} subscribed to plan {plan.id}")
        return to_subscription_response(subscription)

    def cancel_subscription(self, subscription_id: str, barbershop_id: str) -> dict:
        subscription = self.repo.get_subscription(self.db, subscription_id, barbershop_id)
        if not subscription:
            raise HTTPException(status_code=404, detail="Subscription not found")
        subscription.status = "cancelled"
        self.db.commit()
        self.db.refresh(subscription)
        return to_subscription_response(subscription)

    def check_subscription(
        self, barbershop_id: str, client_id: str, service_id: Optional[str] = None
    ) -> dict:
        return has_active_subscription(self.db, barbershop_id, client_id, service_id)

    def record_usage(self, subscription_id: str, booking_id: str, commit: bool = True) -> None:
        """Count one service against the subscription's monthly allowance"""
        subscription = (
            self.db.query(ClientSubscription).filter(ClientSubscription.id == subscription_id).first()
        )
        if not subscription:
            raise HTTPException(status_code=404, detail="Subscription not found")
        self.repo.add_usage(self.db, subscription.id, booking_id)
        subscription.services_used_this_month = (subscription.services_used_this_month or 0) + 1
        if commit:
            self.db.commit()

    def expire_overdue(
        self, now: Optional[datetime] = None, barbershop_id: Optional[str] = None
    ) -> int:
        """Mark active subscriptions past their end date as expired (all shops unless scoped)"""
        now = now or datetime.utcnow()
        overdue = self.repo.get_overdue_subscriptions(self.db, now, barbershop_id)
        for subscription in overdue:
            subscription.status = "expired"
        self.db.commit()
        if overdue:
            logger.info(f"⏰ Expired {len(overdue)} subscriptions")
        return len(overdue)

    def reset_monthly_usage(self) -> int:
        return self.repo.reset_monthly_usage(self.db)

    def trial_status(self, user: Profile, barbershop_id: str) -> dict:
        subscription = self.repo.get_active_subscription(
            self.db, barbershop_id, user.id, datetime.utcnow()
        )
        return get_trial_status(user, subscription is not None)

    # ========================================================================
    # MERCADO PAGO WEBHOOK
    # ========================================================================

    async def handle_payment_webhook(
        self, topic: Optional[str], payment_id: Optional[str]
    ) -> dict:
        """
        Process a Mercado Pago payment notification.

        Always answers with a result dict: the provider only needs a 200.
        """
        if topic != "payment" or not payment_id:
            logger.info("ℹ️ Ignoring non-payment notification")
            return {"received": True, "processed": False}

        payment = await mercadopago_service.get_payment(str(payment_id))
        if not payment:
            return {"received": True, "processed": False}

        status = payment.get("status")
        try:
            reference = json.loads(payment.get("external_reference") or "{}")
        except ValueError:
            logger.error(f"❌ Failed to parse external_reference for payment {payment_id}")
            reference = {}
        if not isinstance(reference, dict):
            reference = {}

        plan_id = reference.get("planId")
        barbershop_id = reference.get("barbershopId")
        user_id = reference.get("userId")
        if not plan_id or not barbershop_id or not user_id:
            logger.error(f"❌ Missing external reference data for payment {payment_id}")
            return {"received": True, "processed": False}

        barbershop = self.db.query(Barbershop).filter(Barbershop.id == barbershop_id).first()
        plan = self.repo.get_plan(self.db, plan_id, barbershop_id)
        if not barbershop or not plan:
            logger.error(f"❌ Unknown barbershop or plan in payment {payment_id}")
            return {"received": True, "processed": False}

        self._record_transaction(payment, payment_id, status, barbershop_id, user_id, plan_id)

        if status == "approved":
            self._activate_subscription(barbershop_id, user_id, plan)
            create_in_app_notification(
                self.db,
                user_id=user_id,
                barbershop_id=barbershop_id,
                title="Assinatura Ativada! 🎉",
                message="Seu pagamento foi confirmado e sua assinatura está ativa.",
                notification_type="success",
            )
        elif status in ("rejected", "cancelled"):
            create_in_app_notification(
                self.db,
                user_id=user_id,
                barbershop_id=barbershop_id,
                title="Pagamento não aprovado",
                message="Houve um problema com seu pagamento. Tente novamente.",
                notification_type="error",
            )

        logger.info(f"💳 Processed Mercado Pago payment {payment_id}: {status}")
        return {"received": True, "processed": True, "status": status}

    def _record_transaction(
        self,
        payment: dict,
        payment_id: str,
        status: Optional[str],
        barbershop_id: str,
        user_id: str,
        plan_id: str,
    ) -> PaymentTransaction:
        preference_id = payment.get("preference_id")
        transaction = None
        if preference_id:
            transaction = self.repo.get_transaction_by_preference(self.db, preference_id)
        if not transaction:
            transaction = PaymentTransaction(
                barbershop_id=barbershop_id,
                user_id=user_id,
                plan_id=plan_id,
                preference_id=preference_id,
            )
            self.db.add(transaction)

        transaction.transaction_id = str(payment_id)
        transaction.status = "completed" if status == "approved" else (status or "unknown")
        transaction.provider_status = status
        transaction.payment_method = payment.get("payment_type_id")
        transaction.raw_response = payment
        self.db.commit()
        return transaction

    def _activate_subscription(self, barbershop_id: str, user_id: str, plan: SubscriptionPlan) -> ClientSubscription:
        now = datetime.utcnow()
        end_date = now + timedelta(days=plan.duration_days or 30)
        subscription = self.repo.get_any_active_subscription(self.db, barbershop_id, user_id)
        if subscription:
            subscription.plan_id = plan.id
            subscription.end_date = end_date
            subscription.payment_status = "paid"
            self.db.commit()
            logger.info(f"🔄 Subscription {subscription.id} extended to {end_date}")
            return subscription

        return self.repo.create_subscription(
            self.db,
            barbershop_id=barbershop_id,
            client_id=user_id,
            plan_id=plan.id,
            start_date=now,
            end_date=end_date,
            status="active",
            payment_status="paid",
        )
