"""Document text extraction with graceful degradation.

Turns raw upload bytes into plain text. Format-specific work is delegated to
the extractor utilities; this module resolves the media type, dispatches and
converts every extraction failure into a fixed advisory text so the rest of
the pipeline can continue. Plain text is decoded leniently. Only an empty
input raises ``DocumentReadError`` here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from resumatch.core.errors import DocumentReadError
from resumatch.core.logging import text_fingerprint
from resumatch.utils.docx_extractor import extract_text_from_docx_bytes
from resumatch.utils.file_validators import (
    FileType,
    resolve_file_type,
    validate_file_signature,
    validate_zip_safety,
)
from resumatch.utils.pdf_extractor import extract_text_from_pdf_bytes
from resumatch.utils.text_normalizer import normalize_text

logger = logging.getLogger(__name__)

PDF_ADVISORY = (
    "PDF text could not be extracted. Please upload a DOCX or plain text file, "
    "or fill in your details manually."
)
DOCX_ADVISORY = (
    "DOCX text could not be extracted. Please upload a plain text file, "
    "or fill in your details manually."
)
DOC_ADVISORY = (
    "DOC format parsing requires specialized libraries. "
    "Please convert to DOCX or fill manually."
)
UNSUPPORTED_ADVISORY = (
    "This file format is not supported. Please upload a PDF, DOCX or plain text file, "
    "or fill in your details manually."
)

ADVISORY_TEXTS = frozenset({PDF_ADVISORY, DOCX_ADVISORY, DOC_ADVISORY, UNSUPPORTED_ADVISORY})


@dataclass(frozen=True)
class ExtractedText:
    """Normalized document text plus how it was obtained."""

    text: str
    file_type: FileType
    advisory: bool = False
    meta: dict = field(default_factory=dict)


def _decode_plain_text(data: bytes) -> str:
    # Stray bytes (e.g. a cp1252 accent) become U+FFFD instead of failing
    text = data.decode("utf-8-sig", errors="replace")
    if "\ufffd" in text:
        logger.warning(
            "extract.lossy_text_decode",
            extra={"replaced": text.count("\ufffd"), "size_bytes": len(data)},
        )
    return text


def _advisory(file_type: FileType, text: str, reason: str) -> ExtractedText:
    logger.warning(
        "extract.advisory",
        extra={"file_type": file_type, "reason": reason},
    )
    return ExtractedText(text=text, file_type=file_type, advisory=True, meta={"reason": reason})


def _extract_pdf(data: bytes) -> ExtractedText:
    if not validate_file_signature(data, "pdf"):
        return _advisory("pdf", PDF_ADVISORY, "invalid_signature")
    try:
        raw, meta = extract_text_from_pdf_bytes(data)
    except Exception as exc:  # noqa: BLE001 - any parser failure degrades to advisory text
        return _advisory("pdf", PDF_ADVISORY, f"{type(exc).__name__}: {exc}")

    text = normalize_text(raw)
    if not text:
        # Image-only PDFs have no text layer (OCR is not attempted)
        return _advisory("pdf", PDF_ADVISORY, "no_text_layer")
    return ExtractedText(text=text, file_type="pdf", meta=meta)


def _extract_docx(data: bytes) -> ExtractedText:
    if not validate_file_signature(data, "docx"):
        return _advisory("docx", DOCX_ADVISORY, "invalid_signature")
    try:
        validate_zip_safety(data)
        raw, meta = extract_text_from_docx_bytes(data)
    except Exception as exc:  # noqa: BLE001 - any parser failure degrades to advisory text
        return _advisory("docx", DOCX_ADVISORY, f"{type(exc).__name__}: {exc}")

    text = normalize_text(raw)
    if not text:
        return _advisory("docx", DOCX_ADVISORY, "empty_document")
    return ExtractedText(text=text, file_type="docx", meta=meta)


def extract_document_text(
    data: bytes,
    media_type: str | None = None,
    file_name: str | None = None,
) -> ExtractedText:
    """Extract best-effort plain text from document bytes.

    Args:
        data: Raw document bytes.
        media_type: Declared MIME type, if known.
        file_name: Original file name, used when the MIME type is unknown.

    Returns:
        ExtractedText: Normalized text, or a fixed advisory text when the
            format is unsupported or unparseable.

    Raises:
        DocumentReadError: If the input is empty.
    """
    if not data:
        raise DocumentReadError(
            code="document_empty",
            message="The uploaded document is empty.",
            details={"size_bytes": 0},
        )

    file_type = resolve_file_type(data, mime_type=media_type, file_name=file_name)

    if file_type == "pdf":
        result = _extract_pdf(data)
    elif file_type == "docx":
        result = _extract_docx(data)
    elif file_type == "doc":
        result = _advisory("doc", DOC_ADVISORY, "legacy_format")
    elif file_type == "unsupported":
        result = _advisory("unsupported", UNSUPPORTED_ADVISORY, "unsupported_format")
    else:
        text = normalize_text(_decode_plain_text(data))
        result = ExtractedText(text=text, file_type="text", meta={"lines": text.count("\n") + 1 if text else 0})

    logger.info(
        "extract.done",
        extra={
            "file_type": result.file_type,
            "advisory": result.advisory,
            "size_bytes": len(data),
            "char_count": len(result.text),
            "text_hash": text_fingerprint(result.text),
        },
    )
    return result
