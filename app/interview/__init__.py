from .answer_scorer import (
    DIFFICULTIES,
    MAX_SCORE,
    TECHNICAL_KEYWORDS,
    clamp_score,
    count_technical_keywords,
    score_answer,
)
from .contact_extractor import extract_contact_info, extract_name
from .question_bank import DEFAULT_TOPIC, QUESTION_BANK, pick_question
from .summary_composer import CandidateSummaryResult, TierAverage, compose_summary

__all__ = [
    "DIFFICULTIES",
    "MAX_SCORE",
    "TECHNICAL_KEYWORDS",
    "clamp_score",
    "count_technical_keywords",
    "score_answer",
    "extract_contact_info",
    "extract_name",
    "DEFAULT_TOPIC",
    "QUESTION_BANK",
    "pick_question",
    "CandidateSummaryResult",
    "TierAverage",
    "compose_summary",
]
