from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from app.interview.answer_scorer import DIFFICULTIES, MAX_SCORE
from app.schemas.interview import ScoredAnswer

DEFAULT_CANDIDATE_NAME = "Candidate"

EXCELLENT_SENTENCE = (
    "Demonstrated excellent technical knowledge and problem-solving abilities. "
    "Strong candidate for the full-stack developer position."
)
GOOD_SENTENCE = "Showed good understanding of fundamental concepts with solid performance. "
GOOD_NEEDS_SYSTEM_DESIGN = "Could benefit from more experience with complex system design."
GOOD_GROWTH_POTENTIAL = "Good potential for growth in the team."
BASIC_SENTENCE = (
    "Demonstrated basic understanding but showed gaps in technical depth. "
    "Consider for junior positions with mentorship."
)
NEEDS_IMPROVEMENT_SENTENCE = (
    "Requires significant improvement in technical fundamentals. "
    "Recommend additional training before full-stack role."
)


def round_half_up(value: float, places: int = 0) -> Decimal:
    """Round the exact binary value of ``value`` with ties away from zero."""
    quantum = Decimal(1).scaleb(-places)
    return Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class TierAverage:
    difficulty: str
    count: int
    average: Decimal | None

    @property
    def value(self) -> float:
        return float(self.average) if self.average is not None else 0.0

    def render(self) -> str:
        return str(self.average) if self.average is not None else "0"


@dataclass(frozen=True)
class CandidateSummaryResult:
    summary_text: str
    average_score: float
    percentage: int
    average_score_percent: float
    total_questions: int
    tier_averages: dict[str, TierAverage] = field(default_factory=dict)


def _tier_average(difficulty: str, answers: Sequence[ScoredAnswer]) -> TierAverage:
    scores = [a.score for a in answers if a.difficulty == difficulty]
    if not scores:
        return TierAverage(difficulty=difficulty, count=0, average=None)
    return TierAverage(
        difficulty=difficulty,
        count=len(scores),
        average=round_half_up(sum(scores) / len(scores), 1),
    )


def _assessment(avg_score: float, hard: TierAverage) -> str:
    if avg_score >= 8:
        return EXCELLENT_SENTENCE
    if avg_score >= 6:
        if hard.value < 5:
            return GOOD_SENTENCE + GOOD_NEEDS_SYSTEM_DESIGN
        return GOOD_SENTENCE + GOOD_GROWTH_POTENTIAL
    if avg_score >= 4:
        return BASIC_SENTENCE
    return NEEDS_IMPROVEMENT_SENTENCE


def compose_summary(name: str | None, answers: Sequence[ScoredAnswer]) -> CandidateSummaryResult:
    if not answers:
        raise ValueError("At least one scored answer is required to compose a summary.")

    total = sum(a.score for a in answers)
    avg_score = total / len(answers)
    percentage = int(round_half_up(avg_score / MAX_SCORE * 100))
    tiers = {difficulty: _tier_average(difficulty, answers) for difficulty in DIFFICULTIES}

    header = (
        f"{name or DEFAULT_CANDIDATE_NAME} scored {percentage}% overall "
        f"(Easy: {tiers['easy'].render()}/10, "
        f"Medium: {tiers['medium'].render()}/10, "
        f"Hard: {tiers['hard'].render()}/10). "
    )
    return CandidateSummaryResult(
        summary_text=header + _assessment(avg_score, tiers["hard"]),
        average_score=avg_score,
        percentage=percentage,
        average_score_percent=float(round_half_up(total / (len(answers) * MAX_SCORE) * 100, 1)),
        total_questions=len(answers),
        tier_averages=tiers,
    )
