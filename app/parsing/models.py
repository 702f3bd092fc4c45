from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
MSWORD_MIME = "application/msword"

# Types accepted by the upload filter; legacy .doc passes here and is rejected by the decoder.
ALLOWED_UPLOAD_MIMES = frozenset({PDF_MIME, DOCX_MIME, MSWORD_MIME})


class ParsedDoc(BaseModel):
    filename: str = ""
    source_type: str
    text: str
    parsing_warnings: list[str] = Field(default_factory=list)
    details: dict[str, Any] = Field(default_factory=dict)

    @field_validator("source_type")
    @classmethod
    def _validate_source_type(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in {"pdf", "docx"}:
            raise ValueError("source_type must be one of: pdf, docx")
        return normalized

    @property
    def char_count(self) -> int:
        return len(self.text.strip())
