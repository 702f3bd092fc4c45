from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import settings

# Keyed on the socket peer. Behind a reverse proxy run uvicorn with
# --proxy-headers --forwarded-allow-ips=<proxy> so the peer is the real client.
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def rate_limit(limit: str | None = None):
    # Always decorate; limiter.enabled decides at request time whether limits are checked.
    return limiter.limit(limit or settings.rate_limit)
