"""Health check endpoint. No dependencies; used for liveness probes."""

from fastapi import APIRouter

from app.core.config import get_settings
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return ok status and whether the SQL backend is configured."""
    settings = get_settings()
    return HealthResponse(
        version=settings.app_version,
        database_configured=bool(settings.database_url),
    )
