from __future__ import annotations

import json
import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings

logger = logging.getLogger(__name__)

# Route-specific wording for request bodies that fail validation. When a field set is given the
# wording only applies if one of those fields failed; anything else gets the generic error.
VALIDATION_ERRORS: dict[str, tuple[str, frozenset[str] | None]] = {
    "/api/interview/question": ("Invalid difficulty level", frozenset({"difficulty"})),
    "/api/interview/evaluate": ("Missing required fields: question, answer, difficulty", None),
    "/api/interview/summary": ("Invalid candidate data", None),
    "/api/interview/upload": ("No file uploaded", frozenset({"resume"})),
}
GENERIC_VALIDATION_ERROR = "Invalid request"


class InterviewAPIError(Exception):
    def __init__(
        self,
        error: str,
        *,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        message: str | None = None,
        details: str | None = None,
    ):
        super().__init__(message or error)
        self.error = error
        self.status_code = status_code
        self.message = message
        self.details = details

    def to_payload(self) -> dict[str, object]:
        payload: dict[str, object] = {"success": False, "error": self.error}
        if self.message:
            payload["message"] = self.message
        if self.details:
            payload["details"] = self.details
        return payload


class InterviewInputError(InterviewAPIError):
    def __init__(self, error: str, *, message: str | None = None, details: str | None = None):
        super().__init__(error, status_code=status.HTTP_400_BAD_REQUEST, message=message, details=details)


def _validation_message(exc: RequestValidationError) -> str:
    parts: list[str] = []
    for item in exc.errors():
        location = ".".join(str(part) for part in item.get("loc", ()) if part != "body")
        text = str(item.get("msg", "invalid value"))
        parts.append(f"{location}: {text}" if location else text)
    return "; ".join(parts) or "Invalid request body."


async def interview_error_handler(request: Request, exc: InterviewAPIError) -> JSONResponse:
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        json.dumps(
            {
                "event": "request_failed",
                "path": request.url.path,
                "status": exc.status_code,
                "error": exc.error,
            }
        )
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


def _validation_error(path: str, exc: RequestValidationError) -> str:
    error, fields = VALIDATION_ERRORS.get(path, (GENERIC_VALIDATION_ERROR, None))
    if fields is None:
        return error
    failed = {str(item["loc"][1]) for item in exc.errors() if len(item.get("loc", ())) > 1}
    return error if failed & fields else GENERIC_VALIDATION_ERROR


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = _validation_error(request.url.path.rstrip("/"), exc)
    logger.warning(json.dumps({"event": "request_invalid", "path": request.url.path, "error": error}))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": error, "message": _validation_message(exc)},
    )


async def not_found_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": "Not Found", "message": f"Cannot {request.method} {request.url.path}"},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(json.dumps({"event": "request_crashed", "path": request.url.path, "error": str(exc)}))
    content: dict[str, object] = {"success": False, "error": "Server error", "message": str(exc)}
    if settings.is_development:
        content["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InterviewAPIError, interview_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, not_found_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
