from datetime import datetime, timedelta

from barberbook.domain.clients.segments import classify_client
from barberbook.models import BarbershopClient, Booking

NOW = datetime(2024, 6, 1, 12, 0)


def test_segments_by_visit_count():
    recent = NOW - timedelta(days=3)
    assert classify_client(0, None, now=NOW) == "new"
    assert classify_client(1, recent, now=NOW) == "new"
    assert classify_client(2, recent, now=NOW) == "regular"
    assert classify_client(10, recent, now=NOW) == "vip"


def test_segments_inactive_by_recency_or_flag():
    assert classify_client(12, NOW - timedelta(days=31), now=NOW) == "inactive"
    assert classify_client(12, NOW - timedelta(days=29), now=NOW) == "vip"
    assert classify_client(3, NOW, is_active=False, now=NOW) == "inactive"


def test_walk_in_reuses_profile_matched_by_phone(
    client, db, barbershop, owner, client_profile, headers_for
):
    response = client.post(
        f"/barbershops/{barbershop.id}/clients",
        json={"full_name": "João", "phone": "(11) 98765-4321"},
        headers=headers_for(owner),
    )
    assert response.status_code == 201
    body = response.json()
    assert body["client_id"] == client_profile.id
    assert body["total_visits"] == 0
    assert body["segment"] == "new"

    again = client.post(
        f"/barbershops/{barbershop.id}/clients",
        json={"full_name": "João", "phone": "11987654321"},
        headers=headers_for(owner),
    )
    assert again.status_code == 409


def test_walk_in_without_match_creates_profile(client, db, barbershop, owner, headers_for):
    response = client.post(
        f"/barbershops/{barbershop.id}/clients",
        json={"full_name": "Pedro Avulso", "phone": "21999998888", "notes": "Prefere máquina 2"},
        headers=headers_for(owner),
    )
    assert response.status_code == 201
    body = response.json()
    assert body["full_name"] == "Pedro Avulso"
    assert body["notes"] == "Prefere máquina 2"

    listed = client.get(
        f"/barbershops/{barbershop.id}/clients",
        params={"search": "pedro"},
        headers=headers_for(owner),
    )
    assert [c["client_id"] for c in listed.json()] == [body["client_id"]]


def test_client_history_totals_completed_bookings(
    client, db, barbershop, owner, professional, service, client_profile, headers_for
):
    db.add(BarbershopClient(barbershop_id=barbershop.id, client_id=client_profile.id, total_visits=1))
    for status, price in (("completed", 50.0), ("completed", 30.0), ("cancelled", 40.0)):
        db.add(
            Booking(
                barbershop_id=barbershop.id,
                client_id=client_profile.id,
                professional_id=professional.id,
                service_id=service.id,
                booking_date=NOW.date(),
                booking_time="10:00",
                status=status,
                total_price=price,
            )
        )
    db.commit()

    response = client.get(
        f"/barbershops/{barbershop.id}/clients/{client_profile.id}/history",
        headers=headers_for(owner),
    )
    assert response.status_code == 200
    history = response.json()
    assert history["total_spent"] == 80
    assert history["completed_count"] == 2
    assert history["cancelled_count"] == 1
    assert len(history["bookings"]) == 3


def test_unknown_client_is_404(client, barbershop, owner, headers_for):
    response = client.get(
        f"/barbershops/{barbershop.id}/clients/does-not-exist", headers=headers_for(owner)
    )
    assert response.status_code == 404
