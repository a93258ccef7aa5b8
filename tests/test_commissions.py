from datetime import date

from barberbook.config import DEFAULT_COMMISSION_RATE
from barberbook.domain.commissions.aggregation import rate_for, summarize_commissions
from barberbook.domain.commissions.schemas import PaymentRecord
from barberbook.domain.finance.schemas import BookingRecord
from barberbook.models import Booking, CommissionPayment


def completed(professional_id, price, name="Rafael", day=date(2024, 5, 10)):
    return BookingRecord(
        booking_date=day,
        booking_time="10:00",
        status="completed",
        total_price=price,
        professional_id=professional_id,
        professional_name=name,
    )


def test_rate_for_uses_default_only_when_unset():
    assert rate_for("p1", {"p1": 0.0}) == 0.0
    assert rate_for("p1", {"p1": 35.0}) == 35.0
    assert rate_for("p2", {}) == DEFAULT_COMMISSION_RATE


def test_summary_applies_each_professional_rate():
    bookings = [
        completed("p1", 100),
        completed("p1", 50, day=date(2024, 5, 11)),
        completed("p2", 80, name="Bruno"),
        BookingRecord(
            booking_date=date(2024, 5, 10),
            booking_time="11:00",
            status="cancelled",
            total_price=999,
            professional_id="p1",
        ),
    ]
    payments = [
        PaymentRecord(id="pay1", professional_id="p1", commission_amount=20, status="paid"),
        PaymentRecord(id="pay2", professional_id="p2", commission_amount=10, status="pending"),
    ]
    summary = summarize_commissions(bookings, payments, {"p1": 40.0, "p2": 0.0})

    assert summary.total_revenue == 230
    assert summary.total_commission == 60
    assert summary.total_paid == 20
    assert summary.total_pending == 10
    assert summary.paid_count == 1
    assert summary.pending_count == 1

    rows = {r.professional_id: r for r in summary.by_professional}
    assert rows["p1"].commission == 60
    assert rows["p1"].bookings_count == 2
    assert rows["p2"].commission == 0
    assert [d.date for d in summary.by_day] == [date(2024, 5, 10), date(2024, 5, 11)]


def test_summary_filters_by_professional_and_payment_status():
    bookings = [completed("p1", 100), completed("p2", 100)]
    payments = [
        PaymentRecord(id="a", professional_id="p1", commission_amount=5, status="paid"),
        PaymentRecord(id="b", professional_id="p1", commission_amount=7, status="pending"),
        PaymentRecord(id="c", professional_id="p2", commission_amount=9, status="pending"),
    ]
    summary = summarize_commissions(
        bookings, payments, {}, professional_id="p1", payment_status="pending"
    )

    assert summary.total_revenue == 100
    assert summary.total_pending == 7
    assert summary.total_paid == 0


def test_generate_payment_without_completed_bookings(client, barbershop, owner, professional, headers_for):
    response = client.post(
        f"/barbershops/{barbershop.id}/commissions/payments",
        json={"professional_id": professional.id, "period": "month"},
        headers=headers_for(owner),
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "No completed bookings in this period"


def test_generate_and_pay_commission(
    client, db, barbershop, owner, professional, service, client_profile, headers_for
):
    db.add(
        Booking(
            barbershop_id=barbershop.id,
            client_id=client_profile.id,
            professional_id=professional.id,
            service_id=service.id,
            booking_date=date.today(),
            booking_time="10:00",
            status="completed",
            total_price=100.0,
        )
    )
    db.commit()
    headers = headers_for(owner)

    rate = client.put(
        f"/barbershops/{barbershop.id}/commissions/rates/{professional.id}",
        json={"commission_rate": 40},
        headers=headers,
    )
    assert rate.status_code == 200
    assert rate.json()["commission_rate"] == 40

    created = client.post(
        f"/barbershops/{barbershop.id}/commissions/payments",
        json={"professional_id": professional.id, "period": "month"},
        headers=headers,
    )
    assert created.status_code == 201
    payment = created.json()
    assert payment["status"] == "pending"
    assert payment["commission_amount"] == 40
    assert payment["bookings_count"] == 1

    paid = client.post(
        f"/barbershops/{barbershop.id}/commissions/payments/{payment['id']}/pay",
        headers=headers,
    )
    assert paid.status_code == 200
    assert paid.json()["status"] == "paid"
    assert paid.json()["paid_at"] is not None

    stored = db.query(CommissionPayment).filter(CommissionPayment.id == payment["id"]).first()
    assert stored.status == "paid"


def test_rates_list_marks_defaults(client, barbershop, owner, professional, headers_for):
    response = client.get(
        f"/barbershops/{barbershop.id}/commissions/rates", headers=headers_for(owner)
    )
    assert response.status_code == 200
    rates = response.json()
    assert rates[0]["professional_id"] == professional.id
    assert rates[0]["commission_rate"] == DEFAULT_COMMISSION_RATE
    assert rates[0]["is_default"] is True
