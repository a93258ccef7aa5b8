"""Managed auth service admin API client (used only for owner sign-up)"""

import logging
from typing import Optional

import httpx
from fastapi import HTTPException

from ..config import AUTH_SERVICE_ROLE_KEY, AUTH_URL
from .http_client import get_async_client

logger = logging.getLogger(__name__)


async def create_auth_user(
    email: str,
    password: str,
    full_name: Optional[str] = None,
    phone: Optional[str] = None,
) -> str:
    """
    Create a confirmed user in the auth service.

    Returns:
        The new user's id

    Raises:
        HTTPException: 400 when the auth service rejects the user, 502 when unreachable
    """
    if not AUTH_SERVICE_ROLE_KEY:
        logger.error("❌ AUTH_SERVICE_ROLE_KEY not configured")
        raise HTTPException(status_code=500, detail="Auth service not configured")

    payload = {
        "email": email,
        "password": password,
        "email_confirm": True,
        "user_metadata": {"full_name": full_name, "phone": phone},
    }
    headers = {
        "Authorization": f"Bearer {AUTH_SERVICE_ROLE_KEY}",
        "apikey": AUTH_SERVICE_ROLE_KEY,
    }

    try:
        async with get_async_client() as client:
            response = await client.post(f"{AUTH_URL}/admin/users", json=payload, headers=headers)
    except httpx.HTTPError as e:
        logger.error(f"❌ Auth service unreachable: {str(e)}")
        raise HTTPException(status_code=502, detail="Auth service unavailable") from e

    if response.status_code not in [200, 201]:
        try:
            data = response.json()
        except ValueError:
            data = {}
        message = data.get("msg") or data.get("message") or data.get("error") or "Could not create user"
        logger.error(f"❌ Auth user creation failed for {email}: {message}")
        raise HTTPException(status_code=400, detail=message)

    data = response.json()
    user_id = data.get("id") or (data.get("user") or {}).get("id")
    if not user_id:
        logger.error(f"❌ No user id in auth service response: {data}")
        raise HTTPException(status_code=502, detail="Invalid response from auth service")

    logger.info(f"✅ Auth user created: {user_id}")
    return user_id
