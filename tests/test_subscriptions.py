import json
from datetime import datetime, timedelta

import httpx
import pytest

from barberbook.domain.subscriptions.service import SubscriptionService
from barberbook.models import (
    Barbershop,
    ClientSubscription,
    Notification,
    PaymentTransaction,
    Profile,
    SubscriptionPlan,
)
from barberbook.services import http_client, mercadopago_service
from barberbook.subscription_limits import get_trial_status, has_active_subscription


@pytest.fixture
def plan(db, barbershop):
    item = SubscriptionPlan(
        barbershop_id=barbershop.id,
        name="Clube do Corte",
        price=99.0,
        duration_days=30,
        max_services_per_month=2,
        services_included=[],
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def subscribe(db, barbershop, client_profile, plan, used=0, days_left=10, status="active"):
    subscription = ClientSubscription(
        barbershop_id=barbershop.id,
        client_id=client_profile.id,
        plan_id=plan.id,
        start_date=datetime.utcnow() - timedelta(days=5),
        end_date=datetime.utcnow() + timedelta(days=days_left),
        status=status,
        services_used_this_month=used,
    )
    db.add(subscription)
    db.commit()
    db.refresh(subscription)
    return subscription


def test_no_subscription(db, barbershop, client_profile):
    check = has_active_subscription(db, barbershop.id, client_profile.id)
    assert check == {
        "has_subscription": False,
        "can_use": False,
        "services_remaining": 0,
        "subscription_id": None,
    }


def test_subscription_with_allowance_left(db, barbershop, client_profile, plan):
    subscription = subscribe(db, barbershop, client_profile, plan, used=1)
    check = has_active_subscription(db, barbershop.id, client_profile.id)
    assert check["can_use"] is True
    assert check["services_remaining"] == 1
    assert check["subscription_id"] == subscription.id


def test_subscription_allowance_used_up(db, barbershop, client_profile, plan):
    subscribe(db, barbershop, client_profile, plan, used=2)
    check = has_active_subscription(db, barbershop.id, client_profile.id)
    assert check["has_subscription"] is True
    assert check["can_use"] is False
    assert check["services_remaining"] == 0


def test_unlimited_plan_reports_none_remaining(db, barbershop, client_profile, plan):
    plan.max_services_per_month = None
    db.commit()
    subscribe(db, barbershop, client_profile, plan, used=40)
    check = has_active_subscription(db, barbershop.id, client_profile.id)
    assert check["can_use"] is True
    assert check["services_remaining"] is None


def test_plan_restricted_to_other_services(db, barbershop, client_profile, plan, service):
    plan.services_included = ["some-other-service"]
    db.commit()
    subscribe(db, barbershop, client_profile, plan)
    check = has_active_subscription(db, barbershop.id, client_profile.id, service.id)
    assert check["has_subscription"] is True
    assert check["can_use"] is False


def test_expired_subscription_is_not_active(db, barbershop, client_profile, plan):
    subscribe(db, barbershop, client_profile, plan, days_left=-1)
    assert has_active_subscription(db, barbershop.id, client_profile.id)["has_subscription"] is False


def test_trial_status():
    profile = Profile(id="u1", created_at=datetime(2024, 1, 1))

    in_trial = get_trial_status(profile, False, now=datetime(2024, 1, 3))
    assert in_trial["is_in_trial"] is True
    assert in_trial["days_remaining"] == 5

    expired = get_trial_status(profile, False, now=datetime(2024, 1, 10))
    assert expired["trial_expired"] is True
    assert expired["days_remaining"] == 0

    subscribed = get_trial_status(profile, True, now=datetime(2024, 1, 3))
    assert subscribed["is_in_trial"] is False


def test_expire_overdue(db, barbershop, client_profile, plan):
    overdue = subscribe(db, barbershop, client_profile, plan, days_left=-2)
    assert SubscriptionService(db).expire_overdue() == 1
    db.refresh(overdue)
    assert overdue.status == "expired"


def test_admin_expiry_sweep_is_scoped_to_own_shop(
    client, db, barbershop, owner, client_profile, plan, headers_for
):
    other_shop = Barbershop(
        name="Barbearia do Bairro",
        slug="barbearia-do-bairro",
        owner_id=client_profile.id,
        opening_time="09:00",
        closing_time="18:00",
        opening_days=[],
    )
    db.add(other_shop)
    db.commit()
    other_plan = SubscriptionPlan(barbershop_id=other_shop.id, name="Plano Bairro", price=79.0)
    db.add(other_plan)
    db.commit()
    own = subscribe(db, barbershop, client_profile, plan, days_left=-2)
    other = subscribe(db, other_shop, client_profile, other_plan, days_left=-2)

    response = client.post(
        f"/barbershops/{barbershop.id}/subscriptions/expire", headers=headers_for(owner)
    )
    assert response.status_code == 200
    assert response.json() == {"expired": 1}

    db.refresh(own)
    db.refresh(other)
    assert own.status == "expired"
    assert other.status == "active"


def test_reset_monthly_usage(db, barbershop, client_profile, plan):
    subscription = subscribe(db, barbershop, client_profile, plan, used=2)
    assert SubscriptionService(db).reset_monthly_usage() == 1
    db.refresh(subscription)
    assert subscription.services_used_this_month == 0


def test_subscribe_rejects_second_active_subscription(
    client, db, barbershop, owner, client_profile, plan, headers_for
):
    headers = headers_for(owner)
    first = client.post(
        f"/barbershops/{barbershop.id}/subscriptions",
        json={"client_id": client_profile.id, "plan_id": plan.id},
        headers=headers,
    )
    assert first.status_code == 201
    assert first.json()["plan_name"] == "Clube do Corte"

    second = client.post(
        f"/barbershops/{barbershop.id}/subscriptions",
        json={"client_id": client_profile.id, "plan_id": plan.id},
        headers=headers,
    )
    assert second.status_code == 409


def test_deleting_plan_only_deactivates(client, db, barbershop, owner, plan, headers_for):
    response = client.delete(
        f"/barbershops/{barbershop.id}/subscription-plans/{plan.id}", headers=headers_for(owner)
    )
    assert response.status_code == 200
    db.refresh(plan)
    assert plan.is_active is False


def test_approved_payment_activates_subscription(
    client, db, barbershop, client_profile, plan, monkeypatch
):
    payment = {
        "id": 123456,
        "status": "approved",
        "payment_type_id": "pix",
        "external_reference": json.dumps(
            {"planId": plan.id, "barbershopId": barbershop.id, "userId": client_profile.id}
        ),
    }

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v1/payments/123456"
        return httpx.Response(200, json=payment)

    monkeypatch.setattr(mercadopago_service, "MERCADOPAGO_ACCESS_TOKEN", "test-token")
    monkeypatch.setattr(http_client, "_transport", httpx.MockTransport(handler))

    response = client.post("/webhooks/mercadopago", params={"type": "payment", "data.id": "123456"})
    assert response.status_code == 200
    assert response.json() == {"received": True, "processed": True, "status": "approved"}

    subscription = db.query(ClientSubscription).filter(ClientSubscription.client_id == client_profile.id).one()
    assert subscription.status == "active"
    assert subscription.payment_status == "paid"

    transaction = db.query(PaymentTransaction).one()
    assert transaction.status == "completed"
    assert transaction.transaction_id == "123456"

    notification = db.query(Notification).filter(Notification.user_id == client_profile.id).one()
    assert notification.type == "success"


def test_non_payment_webhook_is_ignored(client):
    response = client.post("/webhooks/mercadopago", params={"type": "merchant_order", "id": "1"})
    assert response.status_code == 200
    assert response.json() == {"received": True, "processed": False}


def test_payment_with_foreign_reference_is_not_processed(client, db, monkeypatch):
    payment = {"id": 777, "status": "approved", "external_reference": "4521"}

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=payment)

    monkeypatch.setattr(mercadopago_service, "MERCADOPAGO_ACCESS_TOKEN", "test-token")
    monkeypatch.setattr(http_client, "_transport", httpx.MockTransport(handler))

    response = client.post("/webhooks/mercadopago", params={"type": "payment", "data.id": "777"})
    assert response.status_code == 200
    assert response.json() == {"received": True, "processed": False}
    assert db.query(PaymentTransaction).count() == 0
