"""AI image gateway client (chat-completions style image generation)"""

import logging

import httpx

from ..config import AI_GATEWAY_API_KEY, AI_GATEWAY_URL, AI_IMAGE_MODEL
from .http_client import get_async_client

logger = logging.getLogger(__name__)

IMAGE_TIMEOUT = 120.0


async def generate_image(prompt: str) -> dict:
    """
    Generate one image from a text prompt.

    Returns:
        Dict with ``status`` ("success", "rate_limited", "payment_required",
        "no_image" or "error"), plus ``image_url`` (a data URL) on success or
        ``message`` otherwise
    """
    if not AI_GATEWAY_API_KEY:
        return {"status": "error", "message": "AI gateway not configured"}

    body = {
        "model": AI_IMAGE_MODEL,
        "messages": [{"role": "user", "content": prompt}],
        "modalities": ["image", "text"],
    }
    try:
        async with get_async_client(timeout=IMAGE_TIMEOUT) as client:
            response = await client.post(
                AI_GATEWAY_URL,
                json=body,
                headers={"Authorization": f"Bearer {AI_GATEWAY_API_KEY}"},
            )
    except httpx.HTTPError as e:
        logger.error(f"❌ AI gateway request failed: {str(e)}")
        return {"status": "error", "message": str(e)}

    if response.status_code == 429:
        logger.warning("⚠️ AI gateway rate limit reached")
        return {"status": "rate_limited", "message": "Rate limit exceeded"}
    if response.status_code == 402:
        logger.warning("⚠️ AI gateway credits exhausted")
        return {"status": "payment_required", "message": "Payment required"}
    if response.status_code != 200:
        logger.error(f"❌ AI gateway error: HTTP {response.status_code} {response.text[:200]}")
        return {"status": "error", "message": f"Gateway returned HTTP {response.status_code}"}

    data = response.json()
    try:
        image_url = data["choices"][0]["message"]["images"][0]["image_url"]["url"]
    except (KeyError, IndexError, TypeError):
        image_url = None

    if not image_url:
        return {"status": "no_image", "message": "No image in gateway response"}
    return {"status": "success", "image_url": image_url}
