"""Settings for the recommendation client.

All settings are loaded from environment variables with the
``ALGOLIA_RECOMMEND_`` prefix.  Explicit constructor arguments on
``RecommendClient`` always win over the environment.
"""

from __future__ import annotations

import httpx
from pydantic_settings import BaseSettings

CLIENT_VERSION = "0.1.0"


class Settings(BaseSettings):
    """Recommendation client configuration.

    All fields can be overridden by environment variables prefixed with
    ``ALGOLIA_RECOMMEND_``.  For example, ``ALGOLIA_RECOMMEND_READ_TIMEOUT=10``
    raises the per-attempt read timeout to ten seconds.
    """

    # ── Credentials ─────────────────────────────────────────────────
    APP_ID: str = ""
    API_KEY: str = ""

    # ── Hosts ───────────────────────────────────────────────────────
    HOSTS: list[str] = []  # JSON list; empty means derive from APP_ID

    # ── Per-attempt timeouts (seconds) ──────────────────────────────
    CONNECT_TIMEOUT: float = 2.0
    READ_TIMEOUT: float = 5.0
    WRITE_TIMEOUT: float = 30.0

    # ── Identity ────────────────────────────────────────────────────
    USER_AGENT: str = f"algolia-recommend-py/{CLIENT_VERSION}"

    model_config = {
        "env_prefix": "ALGOLIA_RECOMMEND_",
    }


def get_timeout(settings: Settings) -> httpx.Timeout:
    """Build the per-attempt ``httpx.Timeout`` from Settings.

    Raises ``ValueError`` if any configured timeout is not positive.
    """
    values = {
        "connect": settings.CONNECT_TIMEOUT,
        "read": settings.READ_TIMEOUT,
        "write": settings.WRITE_TIMEOUT,
    }
    for name, value in values.items():
        if value <= 0:
            raise ValueError(f"{name} timeout must be positive, got {value}")

    return httpx.Timeout(
        connect=settings.CONNECT_TIMEOUT,
        read=settings.READ_TIMEOUT,
        write=settings.WRITE_TIMEOUT,
        pool=settings.CONNECT_TIMEOUT,
    )
