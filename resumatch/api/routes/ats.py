from fastapi import APIRouter

from resumatch.schemas.ats import ATSReport, ScoreRequest
from resumatch.services.ats_scorer import score_profile

router = APIRouter(tags=["ATS"])


@router.post("/ats/score", response_model=ATSReport)
def score_ats(body: ScoreRequest) -> ATSReport:
    """Score a candidate profile's ATS compatibility against a job analysis."""
    return score_profile(body.profile, body.analysis)
