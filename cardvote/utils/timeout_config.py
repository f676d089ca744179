"""Centralized timeout configuration for outbound requests."""
from typing import Optional

import httpx

from config import Settings


def get_external_timeout(settings: Settings) -> httpx.Timeout:
    """Build the httpx timeout used for the banlist feed."""
    return httpx.Timeout(
        connect=settings.external_api_connect_timeout,
        read=settings.external_api_timeout,
        write=settings.external_api_write_timeout,
        pool=5.0,
    )


def get_external_client(
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Get an httpx.AsyncClient configured with the external timeouts."""
    return httpx.AsyncClient(
        timeout=get_external_timeout(settings),
        transport=transport,
        follow_redirects=True,
    )
