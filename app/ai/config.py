import os
from dataclasses import dataclass

SUPPORTED_PROVIDERS = ("gemini", "claude", "openai", "huggingface")

# Provider -> (API key variable, default model). Auto-detection walks this order.
PROVIDER_DEFAULTS: dict[str, tuple[str, str]] = {
    "gemini": ("GEMINI_API_KEY", "gemini-2.0-flash"),
    "claude": ("ANTHROPIC_API_KEY", "claude-3-5-sonnet-20241022"),
    "openai": ("OPENAI_API_KEY", "gpt-4o-mini"),
    "huggingface": ("HUGGINGFACE_API_KEY", "microsoft/DialoGPT-large"),
}


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    api_key: str
    timeout_s: float

    @property
    def enabled(self) -> bool:
        return self.provider != "none" and bool(self.api_key)


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


def provider_api_key(provider: str) -> str:
    env_name, _ = PROVIDER_DEFAULTS[provider]
    key = (os.getenv(env_name) or "").strip()
    if not key or _looks_like_placeholder(key):
        return ""
    return key


def detect_provider() -> str:
    for provider in SUPPORTED_PROVIDERS:
        if provider_api_key(provider):
            return provider
    return "none"


def load_ai_config() -> AIConfig:
    enabled = (os.getenv("AI_ENABLED") or "true").strip().lower() in {"1", "true", "yes", "y", "on"}
    provider = (os.getenv("AI_PROVIDER") or "auto").strip().lower()
    timeout_s = float(os.getenv("AI_TIMEOUT_S") or "30")

    if not enabled or provider == "none":
        return AIConfig(provider="none", model="", api_key="", timeout_s=timeout_s)
    if provider == "auto":
        provider = detect_provider()
        if provider == "none":
            return AIConfig(provider="none", model="", api_key="", timeout_s=timeout_s)
    if provider not in PROVIDER_DEFAULTS:
        raise ValueError(f"Unsupported AI_PROVIDER='{provider}'")

    _, default_model = PROVIDER_DEFAULTS[provider]
    model = (os.getenv("AI_MODEL") or default_model).strip()
    return AIConfig(provider=provider, model=model, api_key=provider_api_key(provider), timeout_s=timeout_s)
