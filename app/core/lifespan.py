from contextlib import asynccontextmanager
import logging

from app.ai.config import load_ai_config
from app.core.config import settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    logger.info("Environment: %s", settings.environment)
    try:
        ai_config = load_ai_config()
    except ValueError as exc:
        logger.error("AI provider misconfigured: %s", exc)
        raise

    if ai_config.enabled:
        logger.info("AI provider configured: %s (model=%s)", ai_config.provider, ai_config.model)
    else:
        logger.warning("No AI provider configured - using regex extraction and heuristic scoring")
    yield
