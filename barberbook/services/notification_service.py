"""
Unified Booking Notification Service
Delivers booking confirmations, cancellations and reminders over email
(n8n workflow) and WhatsApp (Evolution gateway or n8n workflow), and records
the in-app notification for the barbershop owner.
Delivery failures are logged and reported in the result, never raised.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..models import Barbershop, Booking, Notification, NotificationSettings, NotificationTemplate
from . import evolution_service, webhook_service

logger = logging.getLogger(__name__)

TRIGGER_EVENTS = {
    "confirmation": "booking_confirmed",
    "cancellation": "booking_cancelled",
    "reminder": "booking_reminder",
}

TYPE_LABELS = {
    "confirmation": "Confirmação de Agendamento",
    "cancellation": "Cancelamento de Agendamento",
    "reminder": "Lembrete de Agendamento",
}

PLACEHOLDERS = (
    "cliente_nome",
    "servico_nome",
    "profissional_nome",
    "data_agendamento",
    "horario_agendamento",
    "barbearia_nome",
    "valor",
)

DEFAULT_CUSTOM_MESSAGE = (
    "Olá {nome}! Seu agendamento foi confirmado para {data} às {hora}. "
    "Serviço: {servico}. Profissional: {profissional}. Aguardamos você!"
)


def format_price(price: Optional[float]) -> str:
    if not price:
        return "—"
    return f"R$ {price:.2f}"


def render_template(content: str, context: dict) -> str:
    """Replace every {{placeholder}} known to booking templates"""
    for key in PLACEHOLDERS:
        content = content.replace("{{" + key + "}}", str(context.get(key, "")))
    return content


def render_custom_message(message: str, context: dict) -> str:
    """Fill the barbershop's single-brace custom message ({nome}, {data}, ...)"""
    return (
        message.replace("{nome}", context["cliente_nome"])
        .replace("{data}", context["data_agendamento"])
        .replace("{hora}", context["horario_agendamento"])
        .replace("{servico}", context["servico_nome"])
        .replace("{profissional}", context["profissional_nome"])
    )


def build_booking_context(booking: Booking, barbershop: Barbershop) -> dict:
    client = booking.client
    return {
        "cliente_nome": (client.full_name if client else None) or "Cliente",
        "servico_nome": booking.service.name if booking.service else "",
        "profissional_nome": booking.professional.name if booking.professional else "",
        "data_agendamento": booking.booking_date.strftime("%d/%m/%Y"),
        "horario_agendamento": booking.booking_time,
        "barbearia_nome": barbershop.name or "Barbearia",
        "valor": format_price(booking.total_price),
    }


def default_whatsapp_message(notification_type: str, context: dict) -> str:
    return (
        f"*{TYPE_LABELS[notification_type]}*\n\n"
        f"👤 Cliente: {context['cliente_nome']}\n"
        f"✂️ Serviço: {context['servico_nome']}\n"
        f"👨‍💼 Profissional: {context['profissional_nome']}\n"
        f"📅 Data: {context['data_agendamento']}\n"
        f"⏰ Horário: {context['horario_agendamento']}"
    )


def _active_templates(db: Session, barbershop_id: str, notification_type: str) -> dict:
    templates = (
        db.query(NotificationTemplate)
        .filter(
            NotificationTemplate.barbershop_id == barbershop_id,
            NotificationTemplate.trigger_event == TRIGGER_EVENTS[notification_type],
            NotificationTemplate.is_active.is_(True),
        )
        .all()
    )
    by_channel = {}
    for template in templates:
        by_channel.setdefault(template.channel, template)
    return by_channel


def _channel_enabled(settings: NotificationSettings, notification_type: str) -> bool:
    if notification_type == "confirmation":
        return settings.send_booking_confirmation
    if notification_type == "reminder":
        return settings.send_booking_reminder
    return True


def create_in_app_notification(
    db: Session,
    user_id: str,
    title: str,
    message: str,
    notification_type: str = "info",
    barbershop_id: Optional[str] = None,
    booking_id: Optional[str] = None,
) -> Notification:
    notification = Notification(
        user_id=user_id,
        barbershop_id=barbershop_id,
        booking_id=booking_id,
        title=title,
        message=message,
        type=notification_type,
    )
    db.add(notification)
    db.commit()
    db.refresh(notification)
    return notification


async def send_whatsapp(
    settings: NotificationSettings,
    barbershop: Barbershop,
    phone: str,
    message: str,
    payload: Optional[dict] = None,
    is_test: bool = False,
) -> tuple[bool, Optional[str]]:
    """Send over the barbershop's Evolution instance, or the n8n workflow when none is set up"""
    if settings.evolution_api_url and settings.evolution_api_key and settings.evolution_instance_name:
        return await evolution_service.send_text_message(
            settings.evolution_api_url,
            settings.evolution_api_key,
            settings.evolution_instance_name,
            phone,
            message,
        )
    body = {**(payload or {}), "client_phone": phone, "message": message}
    return await webhook_service.send_whatsapp_webhook(
        barbershop.id, barbershop.slug, body, is_test=is_test
    )


async def send_booking_notifications(db: Session, booking: Booking, notification_type: str) -> dict:
    """
    Send a booking notification over every enabled channel.

    Args:
        db: Database session
        booking: Booking with client, service and professional loaded
        notification_type: "confirmation", "cancellation" or "reminder"

    Returns:
        Dict with email_sent, whatsapp_sent, admin_email_sent, skipped and errors
    """
    result = {
        "email_sent": False,
        "whatsapp_sent": False,
        "admin_email_sent": False,
        "skipped": None,
        "errors": [],
    }

    barbershop = db.query(Barbershop).filter(Barbershop.id == booking.barbershop_id).first()
    settings = (
        db.query(NotificationSettings)
        .filter(NotificationSettings.barbershop_id == booking.barbershop_id)
        .first()
    )
    if not barbershop or not settings or not settings.enabled:
        logger.info(f"ℹ️ Notifications disabled for barbershop {booking.barbershop_id}")
        result["skipped"] = "Notifications disabled"
        return result
    if not _channel_enabled(settings, notification_type):
        result["skipped"] = f"{notification_type} notifications disabled"
        return result

    context = build_booking_context(booking, barbershop)
    templates = _active_templates(db, barbershop.id, notification_type)
    client = booking.client
    label = TYPE_LABELS[notification_type]

    payload = {
        "notification_type": notification_type,
        "client_name": context["cliente_nome"],
        "service_name": context["servico_nome"],
        "professional_name": context["profissional_nome"],
        "booking_date": booking.booking_date.isoformat(),
        "booking_time": booking.booking_time,
        "barbershop_name": context["barbearia_nome"],
        "price": booking.total_price,
    }

    # Client email
    if settings.send_to_client and client and client.email:
        try:
            template = templates.get("email")
            if template:
                content = render_template(template.content, context)
            elif notification_type == "confirmation":
                content = render_custom_message(
                    settings.custom_message or DEFAULT_CUSTOM_MESSAGE, context
                )
            else:
                content = (
                    f"{label}: {context['servico_nome']} em {context['data_agendamento']} "
                    f"às {context['horario_agendamento']}"
                )
            subject = render_template(template.subject, context) if template and template.subject else label
            sent, error = await webhook_service.send_email_webhook(
                barbershop.id,
                {
                    **payload,
                    "client_email": client.email,
                    "email_subject": subject,
                    "email_content": content,
                },
                webhook_url=settings.n8n_webhook_url,
            )
            result["email_sent"] = sent
            if error:
                result["errors"].append(f"Email: {error}")
        except Exception as e:
            result["errors"].append(f"Email: {str(e)}")
            logger.error(f"❌ Failed to send {notification_type} email for booking {booking.id}: {e}")

    # Admin email
    if settings.admin_email and notification_type != "reminder":
        try:
            sent, error = await webhook_service.send_email_webhook(
                barbershop.id,
                {
                    **payload,
                    "client_email": client.email if client else None,
                    "client_phone": client.phone if client else None,
                    "admin_email": settings.admin_email,
                    "email_subject": f"{label} - {context['cliente_nome']} - {context['data_agendamento']}",
                },
                webhook_url=settings.n8n_webhook_url,
            )
            result["admin_email_sent"] = sent
            if error:
                result["errors"].append(f"Admin email: {error}")
        except Exception as e:
            result["errors"].append(f"Admin email: {str(e)}")
            logger.error(f"❌ Failed to send admin email for booking {booking.id}: {e}")

    # Client WhatsApp
    if settings.send_whatsapp and client and client.phone:
        try:
            template = templates.get("whatsapp")
            message = (
                render_template(template.content, context)
                if template
                else default_whatsapp_message(notification_type, context)
            )
            sent, error = await send_whatsapp(settings, barbershop, client.phone, message, payload)
            result["whatsapp_sent"] = sent
            if error:
                result["errors"].append(f"WhatsApp: {error}")
        except Exception as e:
            result["errors"].append(f"WhatsApp: {str(e)}")
            logger.error(f"❌ Failed to send {notification_type} WhatsApp for booking {booking.id}: {e}")

    # In-app feed for the owner
    if notification_type in ("confirmation", "cancellation"):
        create_in_app_notification(
            db,
            user_id=barbershop.owner_id,
            barbershop_id=barbershop.id,
            booking_id=booking.id,
            title=label,
            message=(
                f"{context['cliente_nome']} - {context['servico_nome']} em "
                f"{context['data_agendamento']} às {context['horario_agendamento']}"
            ),
            notification_type="booking",
        )

    logger.info(
        f"📨 {notification_type} notification for booking {booking.id}: "
        f"email={result['email_sent']} whatsapp={result['whatsapp_sent']}"
    )
    return result
