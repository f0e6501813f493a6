"""Candidate profile construction.

Orchestrates the upload pipeline: text extraction, section segmentation and
field extraction, and describes the source document's format so the
generation step can mirror it. Also builds profiles from manually entered
fields.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from resumatch.core.config import settings
from resumatch.core.logging import text_fingerprint
from resumatch.schemas.profile import (
    CandidateProfile,
    FormatDescriptor,
    ResumeStructure,
    ResumeStyling,
)
from resumatch.services.field_extractor import (
    extract_contact_fields,
    normalize_skills,
    rebuild_bullets,
)
from resumatch.services.section_segmenter import (
    detect_section_names,
    section_body,
    segment_sections,
)
from resumatch.services.text_extraction_service import extract_document_text
from resumatch.utils.vocabulary import BULLET_GLYPHS

logger = logging.getLogger(__name__)

FORMAT_INSTRUCTIONS: tuple[str, ...] = (
    "Maintain original font family and size",
    "Preserve section order and layout",
    "Keep consistent spacing and margins",
    "Use same bullet point style",
    "Maintain color scheme",
)


@dataclass(frozen=True)
class ParsedDocument:
    """Result of running an upload through the extraction pipeline."""

    profile: CandidateProfile
    text: str
    file_type: str
    warnings: list[str] = field(default_factory=list)
    meta: dict = field(default_factory=dict)


def extract_profile_fields(text: str) -> dict[str, str]:
    """Segment normalized text and extract all eight profile fields.

    Missing values are returned as empty strings. Pure: the same text always
    yields the same fields.
    """
    lines = text.split("\n")
    spans = segment_sections(lines)
    contact = extract_contact_fields(lines, text)

    return {
        "full_name": contact.full_name or "",
        "email": contact.email or "",
        "phone": contact.phone or "",
        "location": contact.location or "",
        "summary": section_body(lines, spans.get("summary")),
        "experience": rebuild_bullets(section_body(lines, spans.get("experience"))),
        "skills": normalize_skills(section_body(lines, spans.get("skills"))),
        "education": rebuild_bullets(section_body(lines, spans.get("education"))),
    }


def profile_from_text(text: str) -> CandidateProfile:
    """Build a profile (without format descriptor) from normalized text."""
    return CandidateProfile(**extract_profile_fields(text))


def describe_format(
    text: str,
    file_type: str,
    file_name: str | None = None,
    file_size: int | None = None,
) -> FormatDescriptor:
    """Describe the structure and styling of an uploaded document."""
    sections = detect_section_names(text)
    return FormatDescriptor(
        file_type=file_type,
        file_name=file_name,
        file_size=file_size,
        structure=ResumeStructure(sections=sections, has_headers=bool(sections)),
        styling=ResumeStyling(
            has_bullets=any(glyph in text for glyph in BULLET_GLYPHS + "*-"),
            has_numbers=bool(re.search(r"\d", text)),
        ),
    )


def _build_warnings(text: str, advisory: bool) -> list[str]:
    warnings: list[str] = []
    if advisory:
        warnings.append(
            "Text could not be extracted from this document format. "
            "Please fill in your details manually or upload another format."
        )
    elif len(text) < settings.app.min_profile_chars:
        warnings.append(
            "Very little text extracted. The document may be image-based (OCR is not supported)."
        )
    return warnings


def parse_resume_bytes(
    data: bytes,
    media_type: str | None = None,
    file_name: str | None = None,
) -> ParsedDocument:
    """Run uploaded document bytes through the full extraction pipeline.

    Args:
        data: Raw document bytes.
        media_type: Declared MIME type of the upload, if any.
        file_name: Original file name, if any.

    Returns:
        ParsedDocument: Profile (with format descriptor), normalized text and
            extraction warnings.

    Raises:
        DocumentReadError: If the bytes cannot be read or decoded at all.
    """
    logger.info(
        "parse.start",
        extra={"mime_type": media_type, "size_bytes": len(data)},
    )

    extracted = extract_document_text(data, media_type=media_type, file_name=file_name)

    fields = {} if extracted.advisory else extract_profile_fields(extracted.text)
    descriptor = describe_format(
        extracted.text,
        file_type=media_type or extracted.file_type,
        file_name=file_name,
        file_size=len(data),
    )
    profile = CandidateProfile(**fields, format_descriptor=descriptor)
    warnings = _build_warnings(extracted.text, extracted.advisory)

    logger.info(
        "parse.success",
        extra={
            "file_type": extracted.file_type,
            "char_count": len(extracted.text),
            "text_hash": text_fingerprint(extracted.text),
            "fields_found": sorted(k for k, v in fields.items() if v),
            "warnings_count": len(warnings),
        },
    )

    return ParsedDocument(
        profile=profile,
        text=extracted.text,
        file_type=extracted.file_type,
        warnings=warnings,
        meta=extracted.meta,
    )


def build_manual_profile(**fields: str) -> CandidateProfile:
    """Profile from user-typed fields; blanks become "<Field> not found"."""
    return CandidateProfile(**fields)


def preserve_resume_format(descriptor: FormatDescriptor, content: dict[str, Any]) -> dict[str, Any]:
    """Attach format-preservation instructions for the generation step."""
    return {
        **content,
        "format_instructions": {
            **descriptor.model_dump(),
            "preserve_structure": True,
            "maintain_styling": True,
            "instructions": list(FORMAT_INSTRUCTIONS),
        },
    }
