"""Service banner and health check routes."""

import time

from fastapi import APIRouter

from app.api.schemas import HealthResponse, HomeResponse

router = APIRouter(tags=["home"])


@router.get("/", response_model=HomeResponse)
async def home() -> HomeResponse:
    """Service banner with the current time in epoch milliseconds."""
    return HomeResponse(
        message="Welcome to Bookstore API",
        status="running",
        timestamp=int(time.time() * 1000),
    )


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness check."""
    return HealthResponse(status="UP")
