"""Pydantic schemas for job posting analysis."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

MAX_KEYWORDS = 20
MAX_REQUIREMENTS = 25
MAX_SKILLS_GAP = 10


class JobAnalysis(BaseModel):
    """Keywords, requirement sentences and skill gap of one job posting."""

    keywords: list[str] = Field(
        default_factory=list,
        max_length=MAX_KEYWORDS,
        description="Ranked, deduplicated job keywords.",
    )
    requirements: list[str] = Field(
        default_factory=list,
        max_length=MAX_REQUIREMENTS,
        description="Requirement and responsibility sentences in posting order.",
    )
    skills_gap: list[str] = Field(
        default_factory=list,
        max_length=MAX_SKILLS_GAP,
        description="Keywords not covered by the candidate's skills, in rank order.",
    )

    @model_validator(mode="after")
    def _gap_within_keywords(self) -> "JobAnalysis":
        unknown = [gap for gap in self.skills_gap if gap not in self.keywords]
        if unknown:
            raise ValueError(f"skills_gap entries missing from keywords: {unknown}")
        return self


class AnalyzeJobRequest(BaseModel):
    """Request body for job posting analysis."""

    job_description: str = Field(
        default="",
        description="Job posting text (multi-line). Empty text yields an empty analysis.",
    )
    candidate_skills: str = Field(
        default="",
        description="Candidate skills separated by commas, semicolons, newlines or bullets.",
    )
