from __future__ import annotations

import logging
import re

from app.schemas.interview import ContactInfo

logger = logging.getLogger(__name__)

NAME_LINE_WINDOW = 10
NAME_MAX_CHARS = 50

# Two to four capitalized words; a lone word such as a "Resume" heading is never a name.
_NAME_RE = re.compile(r"^[A-Z][a-z]+(\s[A-Z][a-z]+){1,3}$")
_EMAIL_RE = re.compile(r"[\w.-]+@[\w.-]+\.\w+", re.ASCII)
_PHONE_RE = re.compile(r"(\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}", re.ASCII)


def _first_match(pattern: re.Pattern[str], text: str) -> str | None:
    match = pattern.search(text)
    return match.group(0) if match else None


def extract_name(resume_text: str, *, max_lines: int = NAME_LINE_WINDOW) -> str | None:
    """Return the first of the leading non-blank lines that looks like a person's name."""
    lines = [line for line in (resume_text or "").split("\n") if line.strip()]
    for line in lines[:max_lines]:
        candidate = line.strip()
        if len(candidate) < NAME_MAX_CHARS and _NAME_RE.match(candidate):
            return candidate
    return None


def extract_contact_info(resume_text: str, *, max_name_lines: int = NAME_LINE_WINDOW) -> ContactInfo:
    text = resume_text or ""
    logger.debug("regex_extraction text_len=%s", len(text))
    info = ContactInfo(
        name=extract_name(text, max_lines=max_name_lines),
        email=_first_match(_EMAIL_RE, text),
        phone=_first_match(_PHONE_RE, text),
    )
    logger.debug("regex_extraction result=%s", info.model_dump())
    return info
