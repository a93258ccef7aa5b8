import asyncio
from datetime import datetime, timedelta

import pytest

from barberbook.domain.bookings.schemas import BookingCreate
from barberbook.domain.bookings.service import BookingService
from barberbook.domain.subscriptions.repository import SubscriptionRepository
from barberbook.models import (
    BarbershopClient,
    Booking,
    ClientSubscription,
    Notification,
    ProfessionalTimeBlock,
    SubscriptionPlan,
)


def booking_payload(client_profile, professional, service, day, time="10:00", **extra):
    return {
        "client_id": client_profile.id,
        "service_id": service.id,
        "professional_id": professional.id,
        "booking_date": day.isoformat(),
        "booking_time": time,
        **extra,
    }


def test_requires_authentication(client, barbershop):
    response = client.get(f"/barbershops/{barbershop.id}/bookings")
    assert response.status_code == 401


def test_rejects_non_admin(client, barbershop, client_profile, headers_for):
    response = client.get(
        f"/barbershops/{barbershop.id}/bookings", headers=headers_for(client_profile)
    )
    assert response.status_code == 403


def test_create_booking(
    client, db, barbershop, owner, professional, service, client_profile, booking_day, headers_for
):
    response = client.post(
        f"/barbershops/{barbershop.id}/bookings",
        json=booking_payload(client_profile, professional, service, booking_day),
        headers=headers_for(owner),
    )
    assert response.status_code == 201
    booking = response.json()
    assert booking["status"] == "confirmed"
    assert booking["total_price"] == 50.0
    assert booking["service_name"] == "Corte Masculino"
    assert booking["professional_name"] == "Rafael Navalha"

    link = (
        db.query(BarbershopClient)
        .filter(
            BarbershopClient.barbershop_id == barbershop.id,
            BarbershopClient.client_id == client_profile.id,
        )
        .first()
    )
    assert link is not None
    assert link.total_visits == 0


def test_create_booking_reports_missing_fields(client, barbershop, owner, headers_for):
    response = client.post(
        f"/barbershops/{barbershop.id}/bookings", json={}, headers=headers_for(owner)
    )
    assert response.status_code == 400
    errors = response.json()["detail"]["errors"]
    assert "client_id" in errors
    assert "booking_time" in errors


def test_price_override(
    client, barbershop, owner, professional, service, client_profile, booking_day, headers_for
):
    response = client.post(
        f"/barbershops/{barbershop.id}/bookings",
        json=booking_payload(client_profile, professional, service, booking_day, price_override=35),
        headers=headers_for(owner),
    )
    assert response.status_code == 201
    assert response.json()["total_price"] == 35


def test_conflict_returns_suggestions(
    client, barbershop, owner, professional, service, client_profile, booking_day, headers_for
):
    headers = headers_for(owner)
    first = client.post(
        f"/barbershops/{barbershop.id}/bookings",
        json=booking_payload(client_profile, professional, service, booking_day, "10:00"),
        headers=headers,
    )
    assert first.status_code == 201

    second = client.post(
        f"/barbershops/{barbershop.id}/bookings",
        json=booking_payload(client_profile, professional, service, booking_day, "10:15"),
        headers=headers,
    )
    assert second.status_code == 409
    detail = second.json()["detail"]
    assert detail["conflict"]["kind"] == "booking"
    assert detail["conflict"]["id"] == first.json()["id"]
    assert detail["suggested_slots"][0] == "10:30"
    assert len(detail["suggested_slots"]) == 5


def test_time_block_conflict(
    client, db, barbershop, owner, professional, service, client_profile, booking_day, headers_for
):
    db.add(
        ProfessionalTimeBlock(
            barbershop_id=barbershop.id,
            professional_id=professional.id,
            block_date=booking_day,
            start_time="12:00",
            end_time="13:00",
            reason="Almoço",
        )
    )
    db.commit()

    response = client.post(
        f"/barbershops/{barbershop.id}/bookings",
        json=booking_payload(client_profile, professional, service, booking_day, "12:30"),
        headers=headers_for(owner),
    )
    assert response.status_code == 409
    assert response.json()["detail"]["conflict"]["kind"] == "block"


def test_check_conflict_endpoint(
    client, barbershop, owner, professional, service, client_profile, booking_day, headers_for
):
    headers = headers_for(owner)
    client.post(
        f"/barbershops/{barbershop.id}/bookings",
        json=booking_payload(client_profile, professional, service, booking_day, "09:00"),
        headers=headers,
    )
    response = client.post(
        f"/barbershops/{barbershop.id}/bookings/check-conflict",
        json={
            "professional_id": professional.id,
            "booking_date": booking_day.isoformat(),
            "booking_time": "09:30",
            "service_id": service.id,
        },
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["has_conflict"] is False


def test_completing_booking_registers_visit(
    client, db, barbershop, owner, professional, service, client_profile, booking_day, headers_for
):
    headers = headers_for(owner)
    created = client.post(
        f"/barbershops/{barbershop.id}/bookings",
        json=booking_payload(client_profile, professional, service, booking_day),
        headers=headers,
    ).json()

    response = client.patch(
        f"/barbershops/{barbershop.id}/bookings/{created['id']}/status",
        json={"status": "completed"},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["status"] == "completed"

    link = db.query(BarbershopClient).filter(BarbershopClient.client_id == client_profile.id).first()
    assert link.total_visits == 1
    assert link.last_visit is not None

    reopened = client.patch(
        f"/barbershops/{barbershop.id}/bookings/{created['id']}/status",
        json={"status": "pending"},
        headers=headers,
    )
    assert reopened.status_code == 400


def test_cancel_notifies_owner(
    client,
    db,
    barbershop,
    owner,
    professional,
    service,
    client_profile,
    notification_settings,
    booking_day,
    headers_for,
):
    headers = headers_for(owner)
    created = client.post(
        f"/barbershops/{barbershop.id}/bookings",
        json=booking_payload(
            client_profile, professional, service, booking_day, send_notification=False
        ),
        headers=headers,
    ).json()

    response = client.post(
        f"/barbershops/{barbershop.id}/bookings/{created['id']}/cancel", headers=headers
    )
    assert response.status_code == 200
    assert response.json()["status"] == "cancelled"

    feed = db.query(Notification).filter(Notification.user_id == owner.id).all()
    assert [n.title for n in feed] == ["Cancelamento de Agendamento"]


def test_reschedule_ignores_own_slot(
    client, barbershop, owner, professional, service, client_profile, booking_day, headers_for
):
    headers = headers_for(owner)
    created = client.post(
        f"/barbershops/{barbershop.id}/bookings",
        json=booking_payload(client_profile, professional, service, booking_day, "10:00"),
        headers=headers,
    ).json()

    response = client.put(
        f"/barbershops/{barbershop.id}/bookings/{created['id']}/reschedule",
        json={"booking_date": booking_day.isoformat(), "booking_time": "10:15"},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["booking_time"] == "10:15"


def active_subscription(db, barbershop, client_profile):
    plan = SubscriptionPlan(
        barbershop_id=barbershop.id, name="Clube do Corte", price=99.0, max_services_per_month=4
    )
    db.add(plan)
    db.commit()
    subscription = ClientSubscription(
        barbershop_id=barbershop.id,
        client_id=client_profile.id,
        plan_id=plan.id,
        start_date=datetime.utcnow() - timedelta(days=1),
        end_date=datetime.utcnow() + timedelta(days=29),
        status="active",
        services_used_this_month=0,
    )
    db.add(subscription)
    db.commit()
    return subscription


def test_subscription_booking_is_free_and_counted(
    client, db, barbershop, owner, professional, service, client_profile, booking_day, headers_for
):
    subscription = active_subscription(db, barbershop, client_profile)

    response = client.post(
        f"/barbershops/{barbershop.id}/bookings",
        json=booking_payload(
            client_profile, professional, service, booking_day, use_subscription=True
        ),
        headers=headers_for(owner),
    )
    assert response.status_code == 201
    assert response.json()["total_price"] == 0

    db.refresh(subscription)
    assert subscription.services_used_this_month == 1


def test_client_books_on_public_page(
    client, db, barbershop, owner, professional, service, client_profile, booking_day, headers_for
):
    response = client.post(
        f"/public/{barbershop.slug}/bookings",
        json={
            "service_id": service.id,
            "professional_id": professional.id,
            "booking_date": booking_day.isoformat(),
            "booking_time": "11:00",
        },
        headers=headers_for(client_profile),
    )
    assert response.status_code == 201
    assert response.json()["status"] == "pending"

    mine = client.get("/me/bookings", headers=headers_for(client_profile))
    assert mine.status_code == 200
    assert mine.json()[0]["barbershop_slug"] == "barbearia-central"


def test_public_booking_outside_opening_hours(
    client, barbershop, professional, service, client_profile, booking_day, headers_for
):
    response = client.post(
        f"/public/{barbershop.slug}/bookings",
        json={
            "service_id": service.id,
            "professional_id": professional.id,
            "booking_date": booking_day.isoformat(),
            "booking_time": "18:45",
        },
        headers=headers_for(client_profile),
    )
    assert response.status_code == 400


def test_client_cannot_cancel_someone_elses_booking(
    client, db, barbershop, owner, professional, service, client_profile, booking_day, headers_for
):
    booking = Booking(
        barbershop_id=barbershop.id,
        client_id=owner.id,
        professional_id=professional.id,
        service_id=service.id,
        booking_date=booking_day,
        booking_time="15:00",
        status="confirmed",
        total_price=50.0,
    )
    db.add(booking)
    db.commit()

    response = client.post(
        f"/me/bookings/{booking.id}/cancel", headers=headers_for(client_profile)
    )
    assert response.status_code == 404


def test_subscription_booking_rolls_back_when_usage_fails(
    db, barbershop, professional, service, client_profile, booking_day, monkeypatch
):
    subscription = active_subscription(db, barbershop, client_profile)

    def fail_usage(db, subscription_id, booking_id):
        raise RuntimeError("usage table unavailable")

    monkeypatch.setattr(SubscriptionRepository, "add_usage", staticmethod(fail_usage))
    data = BookingCreate(
        client_id=client_profile.id,
        service_id=service.id,
        professional_id=professional.id,
        booking_date=booking_day,
        booking_time="10:00",
        use_subscription=True,
        send_notification=False,
    )

    with pytest.raises(RuntimeError):
        asyncio.run(BookingService(db).create_booking(barbershop, data))
    db.rollback()

    assert db.query(Booking).count() == 0
    db.refresh(subscription)
    assert subscription.services_used_this_month == 0
