"""
n8n Webhook Service
Posts booking notification payloads to the n8n workflows that deliver
email and WhatsApp messages
"""

import logging
from datetime import datetime, timezone
from typing import Optional

import httpx

from ..config import N8N_EMAIL_WEBHOOK_URL, N8N_WHATSAPP_WEBHOOK_URL
from .http_client import get_async_client

logger = logging.getLogger(__name__)


async def post_webhook(url: str, payload: dict) -> tuple[bool, Optional[str]]:
    """
    POST a JSON payload to a webhook.

    Returns:
        (success, error_message)
    """
    try:
        async with get_async_client() as client:
            response = await client.post(url, json=payload)
        if response.status_code >= 400:
            logger.error(f"❌ Webhook {url} returned HTTP {response.status_code}: {response.text[:200]}")
            return False, f"Webhook returned HTTP {response.status_code}"
        return True, None
    except httpx.HTTPError as e:
        logger.error(f"❌ Webhook {url} request failed: {str(e)}")
        return False, str(e)


async def send_email_webhook(
    barbershop_id: str,
    payload: dict,
    webhook_url: Optional[str] = None,
    is_test: bool = False,
) -> tuple[bool, Optional[str]]:
    """Send an email notification through the n8n email workflow"""
    url = webhook_url or N8N_EMAIL_WEBHOOK_URL
    if not url:
        logger.debug("ℹ️ Email webhook not configured, skipping")
        return False, "Email webhook not configured"

    logger.info(f"📧 Sending email notification{' (TEST)' if is_test else ''} via n8n webhook")
    body = {
        **payload,
        "barbershopId": barbershop_id,
        "isTest": is_test,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    return await post_webhook(url, body)


async def send_whatsapp_webhook(
    barbershop_id: str,
    instance_name: str,
    payload: dict,
    is_test: bool = False,
) -> tuple[bool, Optional[str]]:
    """Send a WhatsApp notification through the n8n WhatsApp workflow"""
    if not N8N_WHATSAPP_WEBHOOK_URL:
        logger.debug("ℹ️ WhatsApp webhook not configured, skipping")
        return False, "WhatsApp webhook not configured"

    logger.info(f"📱 Sending WhatsApp notification{' (TEST)' if is_test else ''} via n8n webhook")
    body = {
        **payload,
        "barbershopId": barbershop_id,
        "instanceName": instance_name,
        "isTest": is_test,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    return await post_webhook(N8N_WHATSAPP_WEBHOOK_URL, body)
