from fastapi import APIRouter, File, UploadFile

from resumatch.core.config import settings
from resumatch.core.file_validation import read_upload_file_limited
from resumatch.schemas.profile import CandidateProfile, ManualProfileRequest, ParseCVResponse
from resumatch.services.profile_service import build_manual_profile, parse_resume_bytes

router = APIRouter(tags=["CV"])


@router.post("/cv/parse", response_model=ParseCVResponse)
async def parse_cv(cv_file: UploadFile = File(...)) -> ParseCVResponse:
    """Parse an uploaded resume into a candidate profile.

    Accepts PDF, DOCX or plain text. Unsupported or unparseable formats still
    return a profile (all placeholders) together with a warning.

    Raises:
        DocumentReadError: 422 when the upload cannot be read or decoded.
        HTTPException: 413 when the upload exceeds the size limit.
    """
    file_bytes = await read_upload_file_limited(cv_file)
    parsed = parse_resume_bytes(
        file_bytes,
        media_type=cv_file.content_type,
        file_name=cv_file.filename,
    )
    return ParseCVResponse(
        profile=parsed.profile,
        file_type=parsed.file_type,
        char_count=len(parsed.text),
        preview=parsed.text[:settings.app.text_preview_chars],
        text=parsed.text,
        warnings=parsed.warnings,
        meta=parsed.meta,
    )


@router.post("/cv/manual", response_model=CandidateProfile)
def manual_profile(body: ManualProfileRequest) -> CandidateProfile:
    """Build a candidate profile from manually entered fields."""
    return build_manual_profile(**body.model_dump())
