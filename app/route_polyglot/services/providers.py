"""
Factory functions for shared infrastructure objects.

Settings are process-wide and cached. HTTP clients are not: each session
owns the client it was built with and closes it when it is done.
"""

from functools import lru_cache
from typing import Optional

import httpx

from route_polyglot.configuration import Settings


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process.

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


def create_http_client(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Create the async HTTP client used for index and phrase set requests.

    Args:
        settings: Settings to read timeout and User-Agent from. Defaults to
            the cached application settings.
        transport: Optional transport override (e.g. ``httpx.MockTransport``).

    Returns:
        httpx.AsyncClient: New client; the caller owns and closes it.
    """
    settings = settings or get_settings()
    return httpx.AsyncClient(
        timeout=settings.http.timeout_seconds,
        headers={
            "User-Agent": settings.http.user_agent,
            "Accept": "application/json",
        },
        transport=transport,
    )
