from __future__ import annotations

from io import BytesIO
from zipfile import BadZipFile, ZipFile

PDF_MAGIC = b"%PDF-"
ZIP_MAGICS = (b"PK\x03\x04", b"PK\x05\x06", b"PK\x07\x08")


class SignatureMismatchError(ValueError):
    pass


def _is_zip_payload(content: bytes) -> bool:
    return any(content.startswith(prefix) for prefix in ZIP_MAGICS)


def _zip_has_paths(content: bytes, prefixes: tuple[str, ...]) -> bool:
    try:
        with ZipFile(BytesIO(content)) as archive:
            names = archive.namelist()
        return any(any(name.startswith(prefix) for prefix in prefixes) for name in names)
    except (BadZipFile, OSError):
        return False


def validate_upload_signature(*, source_type: str, content: bytes) -> None:
    if not content:
        raise SignatureMismatchError("Uploaded file is empty.")

    if source_type == "pdf":
        if not content.startswith(PDF_MAGIC):
            raise SignatureMismatchError("File signature does not match .pdf content.")
        return

    if source_type == "docx":
        if not _is_zip_payload(content) or not _zip_has_paths(content, ("word/",)):
            raise SignatureMismatchError("File signature does not match .docx content.")
        return

    raise SignatureMismatchError(f"No signature rule for '{source_type}'.")
