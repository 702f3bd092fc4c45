import logging
from functools import lru_cache

from app.ai.config import AIConfig, load_ai_config
from app.ai.types import AIClient

from app.ai.providers.openai_provider import OpenAIProvider
from app.ai.providers.claude_provider import ClaudeProvider
from app.ai.providers.gemini_provider import GeminiProvider
from app.ai.providers.huggingface_provider import HuggingFaceProvider

logger = logging.getLogger(__name__)


def build_ai_client(cfg: AIConfig) -> AIClient | None:
    if cfg.provider == "none":
        return None

    if not cfg.api_key:
        logger.warning("AI_PROVIDER=%s is set but its API key is missing; using heuristic fallbacks.", cfg.provider)
        return None

    if cfg.provider == "openai":
        return OpenAIProvider(model=cfg.model, api_key=cfg.api_key, timeout_s=cfg.timeout_s)

    if cfg.provider == "claude":
        return ClaudeProvider(model=cfg.model, api_key=cfg.api_key, timeout_s=cfg.timeout_s)

    if cfg.provider == "gemini":
        return GeminiProvider(model=cfg.model, api_key=cfg.api_key)

    if cfg.provider == "huggingface":
        return HuggingFaceProvider(model=cfg.model, api_key=cfg.api_key, timeout_s=cfg.timeout_s)

    raise ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")


@lru_cache(maxsize=1)
def get_ai_client() -> AIClient | None:
    return build_ai_client(load_ai_config())
