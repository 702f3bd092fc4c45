from __future__ import annotations

import json
import logging
from typing import Sequence

from fastapi import Depends

from app.ai.factory import get_ai_client
from app.ai.types import AIClient
from app.core.config import settings
from app.core.errors import InterviewInputError
from app.interview import (
    DEFAULT_TOPIC,
    MAX_SCORE,
    compose_summary,
    extract_contact_info,
    pick_question,
    score_answer,
)
from app.parsing.parse import DocumentDecodeError, UnsupportedDocumentError, decode_resume
from app.schemas.interview import (
    EvaluateResponse,
    QuestionResponse,
    ScoredAnswer,
    SummaryResponse,
    UploadResponse,
)
from app.services.ai_service import (
    ai_evaluate_answer,
    ai_extract_contact_info,
    ai_generate_question,
    ai_generate_summary,
)

logger = logging.getLogger(__name__)


class InterviewService:
    """Request orchestration: AI provider first when configured, deterministic heuristics otherwise."""

    def __init__(self, ai_client: AIClient | None = None, *, topic: str = DEFAULT_TOPIC):
        self._ai = ai_client
        self._topic = topic

    @property
    def ai_enabled(self) -> bool:
        return self._ai is not None

    async def extract_resume_data(self, *, filename: str, content_type: str, content: bytes) -> UploadResponse:
        try:
            parsed = decode_resume(filename=filename, content_type=content_type, content=content)
        except UnsupportedDocumentError as exc:
            raise InterviewInputError(str(exc)) from exc
        except DocumentDecodeError as exc:
            raise InterviewInputError(str(exc), details=exc.details) from exc

        resume_text = parsed.text
        if parsed.char_count < settings.min_resume_text_chars:
            raise InterviewInputError(
                "Could not extract text from resume. Please ensure the file contains readable text."
            )

        regex_info = extract_contact_info(resume_text)
        ai_info = await ai_extract_contact_info(self._ai, resume_text)
        if ai_info is None or ai_info.is_empty():
            contact, method = regex_info, "regex"
        else:
            contact = ai_info.merged_with(regex_info)
            method = "ai" if contact == ai_info else "ai+regex"

        logger.info(
            json.dumps(
                {
                    "event": "resume_extracted",
                    "source_type": parsed.source_type,
                    "chars": parsed.char_count,
                    "method": method,
                    "found": {key: value is not None for key, value in contact.model_dump().items()},
                }
            )
        )
        return UploadResponse(
            data=contact,
            resume_text=resume_text[: settings.resume_preview_chars],
            extraction_method=method,
        )

    async def get_question(self, *, difficulty: str, question_number: int) -> QuestionResponse:
        question = await ai_generate_question(self._ai, difficulty, question_number, self._topic)
        source = "ai"
        if question is None:
            question = pick_question(difficulty, question_number)
            source = "bank"
        logger.info(
            json.dumps(
                {"event": "question_served", "difficulty": difficulty, "number": question_number, "source": source}
            )
        )
        return QuestionResponse(question=question, difficulty=difficulty, source=source)

    async def evaluate_answer(self, *, question: str, answer: str, difficulty: str) -> EvaluateResponse:
        score: int | None = None
        if answer.strip():
            score = await ai_evaluate_answer(self._ai, question, answer, difficulty)
        method = "ai"
        if score is None:
            score = score_answer(answer, difficulty)
            method = "heuristic"
        logger.info(
            json.dumps(
                {
                    "event": "answer_evaluated",
                    "difficulty": difficulty,
                    "answer_len": len(answer),
                    "score": score,
                    "method": method,
                }
            )
        )
        return EvaluateResponse(score=score, max_score=MAX_SCORE, method=method)

    async def generate_candidate_summary(
        self,
        *,
        name: str | None,
        answers: Sequence[ScoredAnswer],
    ) -> SummaryResponse:
        try:
            result = compose_summary(name, answers)
        except ValueError as exc:
            raise InterviewInputError("Invalid candidate data", message=str(exc)) from exc

        summary = await ai_generate_summary(self._ai, name or "Candidate", answers)
        logger.info(
            json.dumps(
                {
                    "event": "summary_generated",
                    "questions": result.total_questions,
                    "average_score": result.average_score_percent,
                    "ai_text": summary is not None,
                }
            )
        )
        return SummaryResponse(
            summary=summary or result.summary_text,
            average_score=result.average_score_percent,
            percentage=result.percentage,
            total_questions=result.total_questions,
        )


def get_interview_service(ai_client: AIClient | None = Depends(get_ai_client)) -> InterviewService:
    return InterviewService(ai_client)
