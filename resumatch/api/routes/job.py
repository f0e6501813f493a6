import logging

from fastapi import APIRouter

from resumatch.core.config import settings
from resumatch.schemas.job import AnalyzeJobRequest, JobAnalysis
from resumatch.services.job_analyzer import analyze_job_description

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Job"])


@router.post("/job/analyze", response_model=JobAnalysis)
def analyze_job(body: AnalyzeJobRequest) -> JobAnalysis:
    """Extract keywords, requirements and the candidate's skill gap from a job posting.

    Postings longer than the configured maximum are truncated before analysis.
    """
    job_text = body.job_description
    max_chars = settings.app.max_job_desc_chars
    if len(job_text) > max_chars:
        logger.info(
            "job.truncated",
            extra={"char_count": len(job_text), "max_chars": max_chars},
        )
        job_text = job_text[:max_chars]
    return analyze_job_description(job_text, body.candidate_skills)
