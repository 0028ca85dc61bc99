"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .fields import DEFAULT_DETAIL_KEY

DEFAULT_API_BASE = "http://localhost:8080/api/books"
DEFAULT_SESSION_TTL = 1800  # 30 minutes


@dataclass
class Settings:
    api_base: str = DEFAULT_API_BASE
    detail_field: str = DEFAULT_DETAIL_KEY
    api_timeout: float | None = None
    session_ttl: int = DEFAULT_SESSION_TTL
    port: int = 8000
    environment: str = "dev"


def load_settings() -> Settings:
    timeout = os.environ.get("BOOKS_API_TIMEOUT", "")
    return Settings(
        api_base=os.environ.get("BOOKS_API_BASE", DEFAULT_API_BASE).rstrip("/"),
        detail_field=os.environ.get("BOOKS_DETAIL_FIELD", DEFAULT_DETAIL_KEY),
        api_timeout=float(timeout) if timeout else None,
        session_ttl=int(os.environ.get("SESSION_TTL", DEFAULT_SESSION_TTL)),
        port=int(os.environ.get("PORT", "8000")),
        environment=os.environ.get("ENV", "dev"),
    )
