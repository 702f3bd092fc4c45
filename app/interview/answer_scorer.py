from __future__ import annotations

from typing import get_args

from app.schemas.interview import Difficulty

MAX_SCORE = 10
KEYWORD_BONUS_THRESHOLDS = (3, 5)

# (exclusive word-count upper bound, score); the trailing None bound catches everything else.
_WORD_COUNT_STEPS: dict[str, tuple[tuple[int | None, int], ...]] = {
    "easy": ((10, 3), (30, 6), (50, 8), (None, 9)),
    "medium": ((15, 2), (40, 5), (70, 7), (None, 8)),
    "hard": ((20, 2), (50, 4), (100, 6), (None, 7)),
}

TECHNICAL_KEYWORDS: tuple[str, ...] = (
    "react",
    "node",
    "express",
    "mongodb",
    "api",
    "rest",
    "async",
    "await",
    "promise",
    "function",
    "component",
    "state",
    "props",
    "hook",
    "middleware",
    "database",
    "query",
    "authentication",
    "authorization",
    "jwt",
    "bcrypt",
    "virtual dom",
    "closure",
    "prototype",
    "callback",
    "es6",
    "arrow function",
)

DIFFICULTIES: tuple[str, ...] = get_args(Difficulty)


def clamp_score(value: int) -> int:
    return min(max(int(value), 0), MAX_SCORE)


def count_technical_keywords(answer: str) -> int:
    """Number of distinct lexicon terms present, matched as case-insensitive substrings."""
    lowered = (answer or "").lower()
    return sum(1 for keyword in TECHNICAL_KEYWORDS if keyword in lowered)


def base_score(word_count: int, difficulty: str) -> int:
    steps = _WORD_COUNT_STEPS.get(difficulty)
    if steps is None:
        raise ValueError(f"Unsupported difficulty '{difficulty}'. Expected one of: {', '.join(DIFFICULTIES)}")
    for upper_bound, score in steps:
        if upper_bound is None or word_count < upper_bound:
            return score
    return steps[-1][1]


def score_answer(answer: str, difficulty: str) -> int:
    """
    Heuristic 0-10 score: a per-difficulty step function of the word count, plus one point
    at 3 and another at 5 distinct technical keywords.
    """
    if not answer or not answer.strip():
        return 0

    word_count = len(answer.split())
    score = base_score(word_count, difficulty)

    keyword_count = count_technical_keywords(answer)
    for threshold in KEYWORD_BONUS_THRESHOLDS:
        if keyword_count >= threshold:
            score = min(score + 1, MAX_SCORE)
    return score
