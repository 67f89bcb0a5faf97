"""Health check endpoint — no auth required."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter

from src.api.models.schemas import HealthResponse
from src.core.constants import MSG_HEALTH

router = APIRouter(tags=["health"])


@router.get("/", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="OK",
        message=MSG_HEALTH,
        timestamp=datetime.now(timezone.utc),
    )
