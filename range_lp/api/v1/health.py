"""
Health Check Endpoints
"""
from fastapi import APIRouter
from datetime import datetime

from range_lp.api.schemas import HealthCheckResponse
from range_lp.config import settings

router = APIRouter()


@router.get("/health", response_model=HealthCheckResponse)
async def health_check():
    """
    Health check endpoint

    Returns the current health status of the API.
    """
    return HealthCheckResponse(
        status="healthy",
        version=settings.API_VERSION,
        graph_configured=bool(settings.GRAPH_API_KEY),
        timestamp=datetime.utcnow()
    )
