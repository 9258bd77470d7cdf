"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shared.config import get_settings
from shared.rate_limiter import RateLimiter

from ..dependencies import get_rate_limiter

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    rate_limit_buckets: int


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(
    limiter: RateLimiter = Depends(get_rate_limiter),
) -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports the number of live rate-limit buckets as a memory gauge.
    """
    return ReadinessResponse(status="ready", rate_limit_buckets=len(limiter))
