from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    environment: str
    log_level: str
    sentry_dsn: str | None
    allowed_origins: tuple[str, ...]
    cors_allow_credentials: bool
    rate_limit: str
    rate_limit_enabled: bool
    max_upload_bytes: int
    min_resume_text_chars: int
    resume_preview_chars: int

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


settings = Settings(
    environment=(_get_env("ENVIRONMENT", "development") or "development").strip().lower(),
    log_level=(_get_env("LOG_LEVEL", "INFO") or "INFO").upper(),
    sentry_dsn=_get_env("SENTRY_DSN"),
    allowed_origins=_get_env_list(
        "ALLOWED_ORIGINS",
        [
            "http://localhost:3000",
            "http://localhost:5173",
        ],
    ),
    cors_allow_credentials=_get_env_bool("CORS_ALLOW_CREDENTIALS", True),
    rate_limit=_get_env("RATE_LIMIT", "60/minute") or "60/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    max_upload_bytes=_get_env_int("MAX_UPLOAD_BYTES", 10 * 1024 * 1024),
    min_resume_text_chars=_get_env_int("MIN_RESUME_TEXT_CHARS", 10),
    resume_preview_chars=_get_env_int("RESUME_PREVIEW_CHARS", 500),
)

if settings.max_upload_bytes <= 0:
    raise RuntimeError("MAX_UPLOAD_BYTES must be a positive number of bytes.")
