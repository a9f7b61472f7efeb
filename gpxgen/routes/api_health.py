"""
API Routes for service health
"""

from fastapi import APIRouter

from gpxgen import __version__
from gpxgen.api.models.gpx import HealthStatus

router = APIRouter()


@router.get("/health", response_model=HealthStatus)
async def health_check():
    """
    Simple health check endpoint for load balancers.

    Returns:
        Simple OK status
    """
    return HealthStatus(status="ok", version=__version__)
