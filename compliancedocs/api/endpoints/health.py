"""Health check endpoint. No dependencies; used for liveness probes."""

from fastapi import APIRouter

from compliancedocs.core.config import get_settings
from compliancedocs.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return ok with the running app name and version."""
    settings = get_settings()
    return HealthResponse(status="ok", app=settings.app_name, version=settings.app_version)
