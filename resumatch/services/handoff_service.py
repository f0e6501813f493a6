"""Assembly of the payload handed to the external resume generation workflow.

Delivery itself (webhooks, automation platforms) happens outside this
service; only the payload shape is defined here.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from resumatch.schemas.handoff import HandoffPayload, JobDescriptionPayload
from resumatch.schemas.job import JobAnalysis
from resumatch.schemas.profile import CandidateProfile, content_or_empty
from resumatch.services.job_analyzer import analyze_job_description
from resumatch.services.profile_service import preserve_resume_format

logger = logging.getLogger(__name__)


def build_handoff_payload(
    profile: CandidateProfile,
    job_description: str,
    analysis: JobAnalysis | None = None,
) -> HandoffPayload:
    """Build the resume generation hand-off payload.

    The job analysis is computed from ``job_description`` when not supplied.
    Uploaded profiles carry format-preservation instructions.
    """
    if analysis is None:
        analysis = analyze_job_description(
            job_description, content_or_empty("skills", profile.skills)
        )

    candidate = profile.model_dump(exclude={"format_descriptor"})
    if profile.format_descriptor is not None:
        candidate = preserve_resume_format(profile.format_descriptor, candidate)

    payload = HandoffPayload(
        timestamp=datetime.now(timezone.utc).isoformat(),
        candidate=candidate,
        job_description=JobDescriptionPayload(text=job_description, analysis=analysis),
    )

    logger.info(
        "handoff.built",
        extra={
            "automation_trigger": payload.automation_trigger,
            "keyword_count": len(analysis.keywords),
            "from_upload": profile.is_from_upload,
        },
    )
    return payload
