from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Difficulty = Literal["easy", "medium", "hard"]
ExtractionMethod = Literal["ai", "ai+regex", "regex"]
QuestionSource = Literal["ai", "bank"]
EvaluationMethod = Literal["ai", "heuristic"]


class ContactInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str | None = None
    email: str | None = None
    phone: str | None = None

    def merged_with(self, fallback: ContactInfo) -> ContactInfo:
        return ContactInfo(
            name=self.name or fallback.name,
            email=self.email or fallback.email,
            phone=self.phone or fallback.phone,
        )

    def is_empty(self) -> bool:
        return not (self.name or self.email or self.phone)


class ScoredAnswer(BaseModel):
    difficulty: Difficulty
    score: int = Field(ge=0, le=10)
    question: str | None = None
    answer: str | None = None


class QuestionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    difficulty: Difficulty
    question_number: int = Field(default=0, ge=0, alias="questionNumber")


class EvaluateRequest(BaseModel):
    question: str = Field(min_length=1, max_length=5000)
    answer: str = Field(max_length=20000)
    difficulty: Difficulty


class CandidateData(BaseModel):
    name: str | None = Field(default=None, max_length=200)
    answers: list[ScoredAnswer] = Field(min_length=1, max_length=100)


class SummaryRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    candidate_data: CandidateData = Field(alias="candidateData")


class UploadResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    data: ContactInfo
    resume_text: str = Field(alias="resumeText")
    extraction_method: ExtractionMethod = Field(alias="extractionMethod")


class QuestionResponse(BaseModel):
    success: bool = True
    question: str
    difficulty: Difficulty
    source: QuestionSource


class EvaluateResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    score: int = Field(ge=0, le=10)
    max_score: int = Field(default=10, alias="maxScore")
    method: EvaluationMethod


class SummaryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    summary: str
    average_score: float = Field(alias="averageScore")
    percentage: int
    total_questions: int = Field(alias="totalQuestions")


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    message: str | None = None
