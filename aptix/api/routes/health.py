"""
Health Check Routes - Liveness endpoint for load balancers and orchestrators.

The health check confirms the API process is responsive. It does not
touch the document store or the generation provider.
"""
from fastapi import APIRouter

from aptix import __version__
from aptix.core.logging_config import get_logger
from aptix.models.agent import HealthResponse

logger = get_logger(__name__)

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check endpoint",
    description="Returns 200 with status, version and the current time while the service is running.",
)
async def health_check() -> HealthResponse:
    logger.debug("Health check requested")
    return HealthResponse(status="healthy", version=__version__)
