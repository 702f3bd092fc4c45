from __future__ import annotations

import json
import logging
import re
import time
from typing import Any, Callable, Sequence, TypeVar

from app.ai.types import AIClient
from app.interview.answer_scorer import clamp_score
from app.schemas.interview import ContactInfo, ScoredAnswer
from app.services.prompts import (
    build_evaluate_prompt,
    build_extract_contact_prompt,
    build_question_prompt,
    build_summary_prompt,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_AI_SCORE = 5
_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")
_INTEGER_RE = re.compile(r"\d+")


def clean_ai_output(text: str) -> str:
    """Removes markdown-style ```json fences from model output."""
    text = re.sub(r"^```(?:json)?\s*", "", (text or "").strip())
    text = re.sub(r"\s*```$", "", text.strip())
    return text.strip()


async def _call(
    client: AIClient | None,
    operation: str,
    prompt: str,
    parse: Callable[[str], T | None],
) -> T | None:
    if client is None:
        return None

    started = time.perf_counter()
    try:
        raw = await client.generate(prompt)
        result = parse(clean_ai_output(raw))
    except Exception as exc:  # noqa: BLE001 - heuristic fallback is expected
        logger.warning(
            "ai_call_failed provider=%s operation=%s prompt_len=%s: %s",
            getattr(client, "name", "unknown"),
            operation,
            len(prompt),
            exc,
        )
        return None

    logger.info(
        json.dumps(
            {
                "event": "ai_call",
                "provider": getattr(client, "name", "unknown"),
                "operation": operation,
                "usable": result is not None,
                "latency_ms": int((time.perf_counter() - started) * 1000),
            }
        )
    )
    return result


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    if not text or text.lower() == "null":
        return None
    return text


def parse_contact_json(text: str) -> ContactInfo | None:
    match = _JSON_OBJECT_RE.search(text)
    if not match:
        return None
    payload = json.loads(match.group(0))
    if not isinstance(payload, dict):
        return None
    return ContactInfo(
        name=_optional_text(payload.get("name")),
        email=_optional_text(payload.get("email")),
        phone=_optional_text(payload.get("phone")),
    )


def parse_score(text: str) -> int:
    match = _INTEGER_RE.search(text)
    return clamp_score(int(match.group(0)) if match else DEFAULT_AI_SCORE)


def _non_blank(text: str) -> str | None:
    return text.strip() or None


async def ai_extract_contact_info(client: AIClient | None, resume_text: str) -> ContactInfo | None:
    return await _call(client, "extract_contact", build_extract_contact_prompt(resume_text), parse_contact_json)


async def ai_generate_question(
    client: AIClient | None,
    difficulty: str,
    question_number: int,
    topic: str,
) -> str | None:
    logger.debug("ai_generate_question difficulty=%s number=%s", difficulty, question_number)
    return await _call(client, "generate_question", build_question_prompt(difficulty, topic), _non_blank)


async def ai_evaluate_answer(
    client: AIClient | None,
    question: str,
    answer: str,
    difficulty: str,
) -> int | None:
    return await _call(client, "evaluate_answer", build_evaluate_prompt(question, answer, difficulty), parse_score)


async def ai_generate_summary(
    client: AIClient | None,
    name: str,
    answers: Sequence[ScoredAnswer],
) -> str | None:
    return await _call(client, "generate_summary", build_summary_prompt(name, answers), _non_blank)
