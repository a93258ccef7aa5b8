"""Subscription repository - Database operations for plans, subscriptions and payments"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import (
    ClientSubscription,
    PaymentTransaction,
    SubscriptionPlan,
    SubscriptionUsage,
)


class SubscriptionRepository:
    """Repository for subscription database operations"""

    # Plans

    @staticmethod
    def get_plans(db: Session, barbershop_id: str, active_only: bool = False) -> list[SubscriptionPlan]:
        query = db.query(SubscriptionPlan).filter(SubscriptionPlan.barbershop_id == barbershop_id)
        if active_only:
            query = query.filter(SubscriptionPlan.is_active.is_(True))
        return query.order_by(SubscriptionPlan.price).all()

    @staticmethod
    def get_plan(db: Session, plan_id: str, barbershop_id: Optional[str] = None) -> Optional[SubscriptionPlan]:
        query = db.query(SubscriptionPlan).filter(SubscriptionPlan.id == plan_id)
        if barbershop_id:
            query = query.filter(SubscriptionPlan.barbershop_id == barbershop_id)
        return query.first()

    @staticmethod
    def create_plan(db: Session, barbershop_id: str, **data) -> SubscriptionPlan:
        plan = SubscriptionPlan(barbershop_id=barbershop_id, **data)
        db.add(plan)
        db.commit()
        db.refresh(plan)
        return plan

    @staticmethod
    def update_plan(db: Session, plan: SubscriptionPlan, **updates) -> SubscriptionPlan:
        for key, value in updates.items():
            if value is not None and hasattr(plan, key):
                setattr(plan, key, value)
        db.commit()
        db.refresh(plan)
        return plan

    # Client subscriptions

    @staticmethod
    def get_subscriptions(
        db: Session, barbershop_id: str, status: Optional[str] = None
    ) -> list[ClientSubscription]:
        query = (
            db.query(ClientSubscription)
            .options(joinedload(ClientSubscription.plan), joinedload(ClientSubscription.client))
            .filter(ClientSubscription.barbershop_id == barbershop_id)
        )
        if status:
            query = query.filter(ClientSubscription.status == status)
        return query.order_by(ClientSubscription.created_at.desc()).all()

    @staticmethod
    def get_subscription(
        db: Session, subscription_id: str, barbershop_id: str
    ) -> Optional[ClientSubscription]:
        return (
            db.query(ClientSubscription)
            .filter(
                ClientSubscription.id == subscription_id,
                ClientSubscription.barbershop_id == barbershop_id,
            )
            .first()
        )

    @staticmethod
    def get_active_subscription(
        db: Session, barbershop_id: str, client_id: str, now: datetime
    ) -> Optional[ClientSubscription]:
        return (
            db.query(ClientSubscription)
            .options(joinedload(ClientSubscription.plan))
            .filter(
                ClientSubscription.barbershop_id == barbershop_id,
                ClientSubscription.client_id == client_id,
                ClientSubscription.status == "active",
                ClientSubscription.end_date >= now,
            )
            .order_by(ClientSubscription.end_date.desc())
            .first()
        )

    @staticmethod
    def get_any_active_subscription(
        db: Session, barbershop_id: str, client_id: str
    ) -> Optional[ClientSubscription]:
        return (
            db.query(ClientSubscription)
            .filter(
                ClientSubscription.barbershop_id == barbershop_id,
                ClientSubscription.client_id == client_id,
                ClientSubscription.status == "active",
            )
            .first()
        )

    @staticmethod
    def create_subscription(db: Session, **data) -> ClientSubscription:
        subscription = ClientSubscription(**data)
        db.add(subscription)
        db.commit()
        db.refresh(subscription)
        return subscription

    @staticmethod
    def get_overdue_subscriptions(
        db: Session, now: datetime, barbershop_id: Optional[str] = None
    ) -> list[ClientSubscription]:
        query = db.query(ClientSubscription).filter(
            ClientSubscription.status == "active", ClientSubscription.end_date < now
        )
        if barbershop_id:
            query = query.filter(ClientSubscription.barbershop_id == barbershop_id)
        return query.all()

    @staticmethod
    def reset_monthly_usage(db: Session) -> int:
        count = (
            db.query(ClientSubscription)
            .filter(
                ClientSubscription.status == "active",
                ClientSubscription.services_used_this_month > 0,
            )
            .update({ClientSubscription.services_used_this_month: 0}, synchronize_session=False)
        )
        db.commit()
        return count

    @staticmethod
    def add_usage(db: Session, subscription_id: str, booking_id: str) -> SubscriptionUsage:
        usage = SubscriptionUsage(subscription_id=subscription_id, booking_id=booking_id)
        db.add(usage)
        return usage

    # Payment transactions

    @staticmethod
    def get_transaction_by_preference(
        db: Session, preference_id: str
    ) -> Optional[PaymentTransaction]:
        return (
            db.query(PaymentTransaction)
            .filter(PaymentTransaction.preference_id == preference_id)
            .first()
        )
