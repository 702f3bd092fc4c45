from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, File, Request, UploadFile, status

from app.core.config import settings
from app.core.errors import InterviewAPIError, InterviewInputError
from app.core.rate_limit import rate_limit
from app.parsing.models import ALLOWED_UPLOAD_MIMES
from app.schemas.interview import (
    EvaluateRequest,
    EvaluateResponse,
    QuestionRequest,
    QuestionResponse,
    SummaryRequest,
    SummaryResponse,
    UploadResponse,
)
from app.services.interview_service import InterviewService, get_interview_service

router = APIRouter()
logger = logging.getLogger(__name__)

ENDPOINTS = {
    "upload": "POST /api/interview/upload",
    "question": "POST /api/interview/question",
    "evaluate": "POST /api/interview/evaluate",
    "summary": "POST /api/interview/summary",
}

_UPLOAD_CHUNK_BYTES = 1024 * 64


async def _read_upload(file: UploadFile) -> bytes:
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(_UPLOAD_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        if total > settings.max_upload_bytes:
            raise InterviewInputError(
                "File too large",
                message=f"Maximum file size is {settings.max_upload_bytes // (1024 * 1024)}MB",
            )
        chunks.append(chunk)
    return b"".join(chunks)


def _internal_error(error: str, exc: Exception) -> InterviewAPIError:
    logger.exception("%s: %s", error, exc)
    return InterviewAPIError(error, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, message=str(exc))


@router.get("/health", summary="Health Check", description="Check the health status of the interview API.")
async def health_check():
    return {
        "status": "OK",
        "message": "Interview API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "endpoints": ENDPOINTS,
    }


@router.post("/upload", response_model=UploadResponse)
@rate_limit()
async def upload_resume(
    request: Request,
    resume: UploadFile = File(...),
    service: InterviewService = Depends(get_interview_service),
):
    _ = request
    filename = resume.filename or "resume"
    content_type = (resume.content_type or "").split(";")[0].strip().lower()
    logger.info("upload_received file=%s content_type=%s", filename, content_type)

    if content_type not in ALLOWED_UPLOAD_MIMES:
        raise InterviewInputError("Invalid file type", message="Only PDF and DOCX files are allowed")

    content = await _read_upload(resume)
    try:
        return await service.extract_resume_data(filename=filename, content_type=content_type, content=content)
    except InterviewAPIError:
        raise
    except Exception as exc:  # noqa: BLE001 - surfaced as a 500 envelope
        raise _internal_error("Failed to process resume", exc) from exc


@router.post("/question", response_model=QuestionResponse)
@rate_limit()
async def get_question(
    request: Request,
    payload: QuestionRequest,
    service: InterviewService = Depends(get_interview_service),
):
    _ = request
    try:
        return await service.get_question(difficulty=payload.difficulty, question_number=payload.question_number)
    except InterviewAPIError:
        raise
    except Exception as exc:  # noqa: BLE001
        raise _internal_error("Failed to generate question", exc) from exc


@router.post("/evaluate", response_model=EvaluateResponse)
@rate_limit()
async def evaluate_answer(
    request: Request,
    payload: EvaluateRequest,
    service: InterviewService = Depends(get_interview_service),
):
    _ = request
    try:
        return await service.evaluate_answer(
            question=payload.question,
            answer=payload.answer,
            difficulty=payload.difficulty,
        )
    except InterviewAPIError:
        raise
    except Exception as exc:  # noqa: BLE001
        raise _internal_error("Failed to evaluate answer", exc) from exc


@router.post("/summary", response_model=SummaryResponse)
@rate_limit()
async def generate_summary(
    request: Request,
    payload: SummaryRequest,
    service: InterviewService = Depends(get_interview_service),
):
    _ = request
    candidate = payload.candidate_data
    try:
        return await service.generate_candidate_summary(name=candidate.name, answers=candidate.answers)
    except InterviewAPIError:
        raise
    except Exception as exc:  # noqa: BLE001
        raise _internal_error("Failed to generate summary", exc) from exc
