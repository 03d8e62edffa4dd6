"""
Health check endpoint for monitoring.
"""
from datetime import datetime, timezone
from fastapi import APIRouter, Request

from app.config import settings
from app.schemas.correction import HealthResponse
from app.utils.logger import get_logger

logger = get_logger("health")
router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Report service liveness and whether the correction provider is configured"
)
async def health_check(request: Request) -> HealthResponse:
    """
    Health check endpoint.

    Liveness only: never calls the completion service, so it stays 200
    even when the provider is unconfigured.
    """
    configured = getattr(request.app.state, "correction_service", None) is not None
    if not configured:
        logger.warning("Health check: correction provider not configured")

    return HealthResponse(
        status="healthy",
        correction_provider=settings.CORRECTION_PROVIDER,
        configured=configured,
        timestamp=datetime.now(timezone.utc).isoformat()
    )
