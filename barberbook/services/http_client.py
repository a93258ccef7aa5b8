"""Shared async HTTP client factory for outbound integrations"""

from typing import Optional

import httpx

from ..config import HTTP_TIMEOUT

# Swapped for an httpx.MockTransport in tests
_transport: Optional[httpx.AsyncBaseTransport] = None


def get_async_client(timeout: float = HTTP_TIMEOUT) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=timeout, transport=_transport)
