from __future__ import annotations

import logging
from io import BytesIO
from zipfile import ZipFile

import defusedxml.ElementTree as ET

from .file_security import validate_upload_signature
from .models import DOCX_MIME, PDF_MIME, ParsedDoc

logger = logging.getLogger(__name__)


class UnsupportedDocumentError(ValueError):
    pass


class DocumentDecodeError(ValueError):
    def __init__(self, message: str, *, details: str = ""):
        super().__init__(message)
        self.details = details


def _source_type_for(content_type: str) -> str:
    mime = (content_type or "").split(";")[0].strip().lower()
    if mime == PDF_MIME:
        return "pdf"
    if mime == DOCX_MIME:
        return "docx"
    raise UnsupportedDocumentError("Invalid file format. Only PDF and DOCX are allowed.")


def _parse_pdf(content: bytes) -> tuple[str, list[str], dict[str, int]]:
    from pypdf import PdfReader

    warnings: list[str] = []
    reader = PdfReader(BytesIO(content))
    text_parts: list[str] = []
    for page in reader.pages:
        page_text = page.extract_text() or ""
        if page_text.strip():
            text_parts.append(page_text)
    if not text_parts:
        warnings.append("No extractable text found in PDF.")
    return "\n".join(text_parts), warnings, {"pages": len(reader.pages)}


def _extract_docx_text_fallback(content: bytes) -> tuple[str, int]:
    with ZipFile(BytesIO(content)) as archive:
        raw = archive.read("word/document.xml")
    root = ET.fromstring(raw)
    paragraphs: list[str] = []
    paragraph_count = 0
    for paragraph in root.iter():
        if not paragraph.tag.endswith("}p"):
            continue
        paragraph_count += 1
        texts = [node.text for node in paragraph.iter() if node.tag.endswith("}t") and node.text]
        if texts:
            paragraphs.append("".join(texts))
    return "\n".join(paragraphs), paragraph_count


def _parse_docx(content: bytes) -> tuple[str, list[str], dict[str, object]]:
    warnings: list[str] = []
    try:
        from docx import Document

        document = Document(BytesIO(content))
        text = "\n".join(p.text for p in document.paragraphs if p.text.strip())
        details: dict[str, object] = {"paragraphs": len(document.paragraphs), "parser": "python-docx"}
    except Exception as exc:  # noqa: BLE001 - raw XML is still readable when python-docx rejects the package
        logger.info("python-docx failed, falling back to raw XML: %s", exc)
        text, paragraph_count = _extract_docx_text_fallback(content)
        details = {"paragraphs": paragraph_count, "parser": "zipxml-fallback"}
    if not text.strip():
        warnings.append("No extractable text found in DOCX.")
    return text, warnings, details


def decode_resume(*, filename: str, content_type: str, content: bytes) -> ParsedDoc:
    """Decode an uploaded PDF or DOCX resume into plain text."""
    source_type = _source_type_for(content_type)
    try:
        validate_upload_signature(source_type=source_type, content=content)
        if source_type == "pdf":
            text, warnings, details = _parse_pdf(content)
        else:
            text, warnings, details = _parse_docx(content)
    except Exception as exc:  # noqa: BLE001 - any decoder failure means an unreadable upload
        logger.warning("document_decode_failed file=%s type=%s: %s", filename, source_type, exc)
        raise DocumentDecodeError(
            "Could not read file. File may be corrupted or password protected.",
            details=str(exc),
        ) from exc

    logger.info("document_decoded file=%s type=%s chars=%s", filename, source_type, len(text))
    return ParsedDoc(
        filename=filename,
        source_type=source_type,
        text=text,
        parsing_warnings=warnings,
        details=details,
    )
