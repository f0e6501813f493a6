"""Pydantic schemas for candidate profiles and CV parsing responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Placeholder stored for any field that could not be extracted
SENTINELS: dict[str, str] = {
    "full_name": "Name not found",
    "email": "Email not found",
    "phone": "Phone not found",
    "location": "Location not found",
    "summary": "Summary not found",
    "experience": "Experience not found",
    "skills": "Skills not found",
    "education": "Education not found",
}


def is_sentinel(field: str, value: str) -> bool:
    """True when ``value`` is the not-found placeholder of ``field``."""
    return SENTINELS.get(field) == value


def content_or_empty(field: str, value: str) -> str:
    """Return the field's content, or an empty string for its placeholder."""
    return "" if is_sentinel(field, value) else value


class ResumeStructure(BaseModel):
    """Coarse structure of the source document."""

    sections: list[str] = Field(
        default_factory=list,
        description="Section names whose heading synonyms occur in the document.",
    )
    layout: str = Field(default="single-column", description="Assumed page layout.")
    has_headers: bool = Field(
        default=False, description="True when at least one section heading was seen."
    )


class ResumeStyling(BaseModel):
    """Surface styling hints of the source document."""

    has_bullets: bool = False
    has_numbers: bool = False
    formatting: str = "standard"


class FormatDescriptor(BaseModel):
    """Source-document metadata passed through to document generation.

    Opaque to the scorer: its presence only marks a profile as uploaded.
    """

    file_type: str = Field(..., description="Declared or detected media type of the upload.")
    file_name: str | None = Field(default=None, description="Original file name, if provided.")
    file_size: int | None = Field(default=None, description="Upload size in bytes.")
    structure: ResumeStructure = Field(default_factory=ResumeStructure)
    styling: ResumeStyling = Field(default_factory=ResumeStyling)


class CandidateProfile(BaseModel):
    """Structured candidate resume content.

    Every text field is a non-empty string: blank or missing values are
    replaced by the field's "<Field> not found" placeholder on construction.
    """

    model_config = ConfigDict(frozen=True)

    full_name: str = Field(default=SENTINELS["full_name"])
    email: str = Field(default=SENTINELS["email"])
    phone: str = Field(default=SENTINELS["phone"])
    location: str = Field(default=SENTINELS["location"])
    summary: str = Field(default=SENTINELS["summary"])
    experience: str = Field(default=SENTINELS["experience"])
    skills: str = Field(default=SENTINELS["skills"])
    education: str = Field(default=SENTINELS["education"])
    format_descriptor: FormatDescriptor | None = Field(
        default=None,
        description="Present only for profiles extracted from an uploaded file.",
    )

    @model_validator(mode="before")
    @classmethod
    def _apply_sentinels(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for field, sentinel in SENTINELS.items():
            value = data.get(field)
            if value is None or (isinstance(value, str) and not value.strip()):
                data[field] = sentinel
            elif isinstance(value, str):
                data[field] = value.strip()
        return data

    @property
    def is_from_upload(self) -> bool:
        return self.format_descriptor is not None


class ManualProfileRequest(BaseModel):
    """Candidate details typed in by the user; any field may be left blank."""

    full_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    summary: str = ""
    experience: str = ""
    skills: str = ""
    education: str = ""


class ParseCVResponse(BaseModel):
    """Structured response for a parsed CV upload."""

    profile: CandidateProfile = Field(..., description="Extracted candidate profile.")
    file_type: str = Field(..., description="Resolved file type: pdf, docx, doc, text or unsupported.")
    char_count: int = Field(
        ..., description="Number of characters extracted after normalization."
    )
    preview: str = Field(
        ..., description="First N characters of normalized text (N from config)."
    )
    text: str = Field(..., description="Full extracted and normalized text.")
    warnings: list[str] = Field(
        default_factory=list,
        description="Extraction quality warnings (advisory text, very little text).",
    )
    meta: dict[str, Any] = Field(
        default_factory=dict,
        description="Format-specific metadata (e.g., pages for PDF, paragraphs for DOCX).",
    )
