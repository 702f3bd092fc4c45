from __future__ import annotations

from app.core.config import settings


def cors_allowed_origins() -> list[str]:
    return list(settings.allowed_origins)


def cors_allow_credentials() -> bool:
    # Browsers reject a wildcard origin combined with credentials.
    return settings.cors_allow_credentials and "*" not in settings.allowed_origins
