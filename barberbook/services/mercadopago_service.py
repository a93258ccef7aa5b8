"""Mercado Pago API client"""

import logging
from typing import Optional

import httpx

from ..config import MERCADOPAGO_ACCESS_TOKEN, MERCADOPAGO_API_URL
from .http_client import get_async_client

logger = logging.getLogger(__name__)


async def get_payment(payment_id: str) -> Optional[dict]:
    """Fetch payment details, None when unavailable"""
    if not MERCADOPAGO_ACCESS_TOKEN:
        logger.error("❌ MERCADOPAGO_ACCESS_TOKEN not configured")
        return None

    try:
        async with get_async_client() as client:
            response = await client.get(
                f"{MERCADOPAGO_API_URL}/v1/payments/{payment_id}",
                headers={"Authorization": f"Bearer {MERCADOPAGO_ACCESS_TOKEN}"},
            )
    except httpx.HTTPError as e:
        logger.error(f"❌ Failed to fetch Mercado Pago payment {payment_id}: {str(e)}")
        return None

    if response.status_code != 200:
        logger.error(f"❌ Failed to fetch payment {payment_id}: HTTP {response.status_code} {response.text[:200]}")
        return None

    return response.json()
