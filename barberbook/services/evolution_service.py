"""Evolution API (WhatsApp gateway) client"""

import logging
from typing import Optional

import httpx

from ..shared.validators import to_whatsapp_number
from .http_client import get_async_client

logger = logging.getLogger(__name__)


def _base_url(api_url: str) -> str:
    return api_url.rstrip("/")


async def get_instance_status(api_url: str, api_key: str, instance_name: str) -> dict:
    """
    Fetch the connection state of a WhatsApp instance.

    Returns:
        Dict with ``state`` ("open", "close", "connecting", "error", ...), and
        ``phone_number`` or ``message`` when available
    """
    url = f"{_base_url(api_url)}/instance/connectionState/{instance_name}"
    try:
        async with get_async_client() as client:
            response = await client.get(url, headers={"apikey": api_key})
    except httpx.HTTPError as e:
        logger.error(f"❌ Evolution API connection error: {str(e)}")
        return {"state": "error", "message": "Could not reach the WhatsApp gateway"}

    if response.status_code == 404:
        return {"state": "error", "message": "Instance not found"}
    if response.status_code >= 400:
        logger.error(f"❌ Evolution API status check failed: HTTP {response.status_code}")
        return {"state": "error", "message": "Failed to check instance status"}

    data = response.json()
    instance = data.get("instance") or {}
    phone_number = None
    if instance.get("owner"):
        phone_number = instance["owner"].split("@")[0]

    return {
        "state": data.get("state") or instance.get("state") or "unknown",
        "phone_number": phone_number,
    }


async def send_text_message(
    api_url: str, api_key: str, instance_name: str, phone: str, message: str
) -> tuple[bool, Optional[str]]:
    """
    Send a WhatsApp text message through an Evolution instance.

    Returns:
        (success, error_message)
    """
    number = to_whatsapp_number(phone)
    if not number:
        return False, "Invalid phone number"

    url = f"{_base_url(api_url)}/message/sendText/{instance_name}"
    try:
        async with get_async_client() as client:
            response = await client.post(
                url,
                json={"number": number, "text": message},
                headers={"apikey": api_key},
            )
    except httpx.HTTPError as e:
        logger.error(f"❌ Evolution API send failed for {number}: {str(e)}")
        return False, str(e)

    if response.status_code >= 400:
        logger.error(f"❌ Evolution API error: HTTP {response.status_code} {response.text[:200]}")
        return False, f"Gateway returned HTTP {response.status_code}"

    logger.info(f"✅ WhatsApp message sent to {number}")
    return True, None
