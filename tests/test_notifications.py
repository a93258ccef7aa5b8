import asyncio
import json
from datetime import date, datetime

import pytest

from barberbook.domain.notifications.service import send_due_reminders
from barberbook.models import Booking, BookingReminderSent, Notification, NotificationTemplate
from barberbook.services import webhook_service
from barberbook.services.notification_service import (
    render_custom_message,
    render_template,
    send_booking_notifications,
)

EMAIL_WEBHOOK = "https://n8n.example.com/webhook/email"


@pytest.fixture(autouse=True)
def no_global_webhooks(monkeypatch):
    monkeypatch.setattr(webhook_service, "N8N_EMAIL_WEBHOOK_URL", None)
    monkeypatch.setattr(webhook_service, "N8N_WHATSAPP_WEBHOOK_URL", None)


@pytest.fixture
def booking(db, barbershop, professional, service, client_profile):
    item = Booking(
        barbershop_id=barbershop.id,
        client_id=client_profile.id,
        professional_id=professional.id,
        service_id=service.id,
        booking_date=date(2030, 1, 10),
        booking_time="09:30",
        status="confirmed",
        total_price=50.0,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def test_render_template_fills_known_placeholders():
    content = "Olá {{cliente_nome}}, seu {{servico_nome}} custa {{valor}}. {{desconhecido}}"
    rendered = render_template(
        content, {"cliente_nome": "João", "servico_nome": "Corte", "valor": "R$ 50.00"}
    )
    assert rendered == "Olá João, seu Corte custa R$ 50.00. {{desconhecido}}"


def test_render_custom_message():
    context = {
        "cliente_nome": "João",
        "data_agendamento": "10/01/2030",
        "horario_agendamento": "09:30",
        "servico_nome": "Corte",
        "profissional_nome": "Rafael",
    }
    message = render_custom_message("{nome}: {servico} com {profissional} em {data} às {hora}", context)
    assert message == "João: Corte com Rafael em 10/01/2030 às 09:30"


def test_confirmation_goes_to_client_and_admin(
    db, booking, owner, notification_settings, http_calls
):
    notification_settings.n8n_webhook_url = EMAIL_WEBHOOK
    notification_settings.admin_email = "dono@barbeariacentral.com"
    db.commit()

    result = asyncio.run(send_booking_notifications(db, booking, "confirmation"))

    assert result["email_sent"] is True
    assert result["admin_email_sent"] is True
    assert result["errors"] == []
    assert len(http_calls) == 2

    client_email = json.loads(http_calls[0].content)
    assert client_email["client_email"] == "joao@example.com"
    assert client_email["email_subject"] == "Confirmação de Agendamento"
    assert "10/01/2030" in client_email["email_content"]

    feed = db.query(Notification).filter(Notification.user_id == owner.id).all()
    assert len(feed) == 1
    assert feed[0].type == "booking"


def test_custom_template_is_used(db, barbershop, booking, notification_settings, http_calls):
    notification_settings.n8n_webhook_url = EMAIL_WEBHOOK
    db.add(
        NotificationTemplate(
            barbershop_id=barbershop.id,
            channel="email",
            trigger_event="booking_cancelled",
            subject="Cancelado: {{servico_nome}}",
            content="{{cliente_nome}}, seu horário das {{horario_agendamento}} foi cancelado.",
        )
    )
    db.commit()

    asyncio.run(send_booking_notifications(db, booking, "cancellation"))

    body = json.loads(http_calls[0].content)
    assert body["email_subject"] == "Cancelado: Corte Masculino"
    assert body["email_content"] == "João Cliente, seu horário das 09:30 foi cancelado."


def test_whatsapp_goes_through_evolution(db, booking, notification_settings, http_calls):
    notification_settings.send_to_client = False
    notification_settings.send_whatsapp = True
    notification_settings.evolution_api_url = "https://evo.example.com/"
    notification_settings.evolution_api_key = "evo-key"
    notification_settings.evolution_instance_name = "central"
    db.commit()

    result = asyncio.run(send_booking_notifications(db, booking, "reminder"))

    assert result["whatsapp_sent"] is True
    request = http_calls[0]
    assert str(request.url) == "https://evo.example.com/message/sendText/central"
    assert request.headers["apikey"] == "evo-key"
    assert json.loads(request.content)["number"] == "5511987654321"


def test_disabled_settings_skip_delivery(db, booking, notification_settings, http_calls):
    notification_settings.enabled = False
    db.commit()

    result = asyncio.run(send_booking_notifications(db, booking, "confirmation"))

    assert result["skipped"] == "Notifications disabled"
    assert http_calls == []


def test_reminder_sweep_sends_once(db, booking, notification_settings):
    now = datetime(2030, 1, 10, 9, 0)

    first = asyncio.run(send_due_reminders(db, now=now))
    assert first == {"checked": 1, "sent": 1, "errors": 0}
    assert db.query(BookingReminderSent).filter(BookingReminderSent.booking_id == booking.id).count() == 1

    second = asyncio.run(send_due_reminders(db, now=now))
    assert second == {"checked": 1, "sent": 0, "errors": 0}


def test_reminder_sweep_ignores_bookings_outside_window(db, booking, notification_settings):
    result = asyncio.run(send_due_reminders(db, now=datetime(2030, 1, 10, 8, 0)))
    assert result["checked"] == 0
    assert result["sent"] == 0


def test_settings_are_created_on_first_access(client, barbershop, owner, headers_for):
    response = client.get(
        f"/barbershops/{barbershop.id}/notifications/settings", headers=headers_for(owner)
    )
    assert response.status_code == 200
    settings = response.json()
    assert settings["enabled"] is True
    assert settings["reminder_minutes"] == 30
    assert settings["evolution_configured"] is False
    assert "evolution_api_key" not in settings


def test_feed_mark_all_read(client, db, owner, headers_for):
    for title in ("Novo agendamento", "Cancelamento"):
        db.add(Notification(user_id=owner.id, title=title, message="..."))
    db.commit()
    headers = headers_for(owner)

    unread = client.get("/me/notifications", params={"unread_only": True}, headers=headers)
    assert len(unread.json()) == 2

    marked = client.post("/me/notifications/read-all", headers=headers)
    assert marked.status_code == 200
    assert marked.json()["updated"] == 2

    unread = client.get("/me/notifications", params={"unread_only": True}, headers=headers)
    assert unread.json() == []
