"""Health check routes."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends

from livestock_api.config import Settings
from livestock_api.models.health import HealthCheckResponse
from livestock_api.models.responses import ApiResponse
from livestock_api.services import get_app_settings

router = APIRouter(tags=["health"])


@router.get("/", response_model=ApiResponse)
async def root() -> ApiResponse:
    return ApiResponse(message="API is running")


@router.get("/healthz", response_model=HealthCheckResponse)
async def health_check(settings: Settings = Depends(get_app_settings)) -> HealthCheckResponse:
    """Health check endpoint.

    Returns:
        HealthCheckResponse with server time and version information
    """
    return HealthCheckResponse(
        ok=True,
        time=datetime.now(UTC),
        version=settings.app_version,
        environment=settings.environment,
    )
