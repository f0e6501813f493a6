"""Pydantic schemas for ATS compatibility reports."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, computed_field

from resumatch.schemas.job import JobAnalysis
from resumatch.schemas.profile import CandidateProfile

Status = Literal["good", "warning", "poor"]


def status_for_score(score: float) -> Status:
    """Map a score to its traffic-light status (>=80 good, >=60 warning)."""
    if score >= 80:
        return "good"
    if score >= 60:
        return "warning"
    return "poor"


class CategoryScore(BaseModel):
    """Score of one ATS category with the statistics behind it."""

    score: int = Field(..., ge=0, le=100)
    details: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status(self) -> Status:
        return status_for_score(self.score)


class ATSCategories(BaseModel):
    keywords: CategoryScore
    formatting: CategoryScore
    sections: CategoryScore
    readability: CategoryScore


class ATSReport(BaseModel):
    """Weighted ATS compatibility assessment of a profile against a job."""

    overall: int = Field(..., ge=0, le=100, description="Weighted overall score.")
    summary: str = Field(..., description="One-line rationale for the overall score.")
    categories: ATSCategories

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status(self) -> Status:
        return status_for_score(self.overall)


class ScoreRequest(BaseModel):
    """Request body for ATS scoring."""

    profile: CandidateProfile
    analysis: JobAnalysis
