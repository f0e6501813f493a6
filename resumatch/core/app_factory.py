"""Application factory for the FastAPI app."""

from __future__ import annotations

from fastapi import FastAPI

from resumatch.api.routes import ats_router, cv_router, handoff_router, health_router, job_router
from resumatch.core.config import settings
from resumatch.core.exception_handlers import setup_exception_handlers
from resumatch.core.logging import configure_logging
from resumatch.core.middleware import request_id_middleware


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        Configured FastAPI app with middleware, handlers and routers.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="Resumatch API",
        description=(
            "Extracts a structured candidate profile from an uploaded resume (PDF, DOCX "
            "or plain text), analyzes job postings for keywords, requirements and skill "
            "gaps, and scores ATS compatibility of a profile against a posting."
        ),
        version="0.1.0",
    )

    app.middleware("http")(request_id_middleware)

    setup_exception_handlers(app)

    app.include_router(cv_router, prefix="/v1")
    app.include_router(job_router, prefix="/v1")
    app.include_router(ats_router, prefix="/v1")
    app.include_router(handoff_router, prefix="/v1")
    app.include_router(health_router)

    return app
