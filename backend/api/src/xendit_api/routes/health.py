"""Health check endpoints."""

import datetime as dt

from fastapi import APIRouter

from xendit_api.models.common import HealthResponse, PingResponse
from xendit_medusa import __version__

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness check; does not call the gateway."""
    return HealthResponse(version=__version__)


@router.get("/ping", response_model=PingResponse)
async def ping() -> PingResponse:
    return PingResponse(timestamp=dt.datetime.now(dt.UTC).isoformat())
