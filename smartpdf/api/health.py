from fastapi import APIRouter

from smartpdf.core.logging import configure_logging
from smartpdf.models import HealthResponse

router = APIRouter(prefix="/api", tags=["Health"])

logger = configure_logging("health")


@router.get("/health", response_model=HealthResponse, summary="Liveness check")
async def health_check() -> HealthResponse:
    logger.debug("Health check invoked")
    return HealthResponse(status="ok", message="Server is running")
