from fastapi import APIRouter

from resumatch.schemas.handoff import HandoffPayload, HandoffRequest
from resumatch.services.handoff_service import build_handoff_payload

router = APIRouter(tags=["Handoff"])


@router.post("/handoff", response_model=HandoffPayload)
def build_handoff(body: HandoffRequest) -> HandoffPayload:
    """Assemble the payload for the external resume generation workflow."""
    return build_handoff_payload(body.profile, body.job_description, body.analysis)
