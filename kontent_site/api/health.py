"""Health check endpoint."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from kontent_site.api.deps import get_settings
from kontent_site.config import Settings

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    version: str
    repository: str
    draft_available: bool


@router.get("/api/health", response_model=HealthResponse)
async def health_check(
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
    """Health check endpoint for monitoring and load balancers.

    Reports configuration only; it does not call the content repository.
    """
    configured = bool(settings.kontent_environment_id)
    return HealthResponse(
        status="ok" if configured else "degraded",
        version="0.1.0",
        repository="configured" if configured else "unconfigured",
        draft_available=bool(settings.kontent_preview_api_key and settings.kontent_preview_secret),
    )
