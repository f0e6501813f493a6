from __future__ import annotations

from resumatch.api.routes.ats import router as ats_router
from resumatch.api.routes.cv import router as cv_router
from resumatch.api.routes.handoff import router as handoff_router
from resumatch.api.routes.health import router as health_router
from resumatch.api.routes.job import router as job_router

__all__ = ["ats_router", "cv_router", "handoff_router", "health_router", "job_router"]
