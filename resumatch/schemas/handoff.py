"""Pydantic schemas for the document-generation hand-off payload."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from resumatch.schemas.job import JobAnalysis
from resumatch.schemas.profile import CandidateProfile


class HandoffOptions(BaseModel):
    format: list[str] = Field(default_factory=lambda: ["pdf", "docx", "html"])
    ats_optimization: bool = True
    keyword_optimization: bool = True
    professional_formatting: bool = True


class JobDescriptionPayload(BaseModel):
    text: str
    analysis: JobAnalysis


class HandoffPayload(BaseModel):
    """Record delivered to the external resume generation workflow."""

    timestamp: str = Field(..., description="ISO-8601 UTC creation time.")
    candidate: dict[str, Any] = Field(
        ..., description="Profile fields, plus format_instructions for uploaded profiles."
    )
    job_description: JobDescriptionPayload
    automation_trigger: str = "resume_generation"
    options: HandoffOptions = Field(default_factory=HandoffOptions)


class HandoffRequest(BaseModel):
    """Request body for hand-off payload assembly."""

    profile: CandidateProfile
    job_description: str = ""
    analysis: JobAnalysis | None = Field(
        default=None,
        description="Existing analysis; computed from job_description when omitted.",
    )
