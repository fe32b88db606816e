"""Health check."""

from __future__ import annotations

from fastapi import APIRouter, Request

from hoverreveal.config import VERSION
from hoverreveal.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=VERSION,
        scene_loaded=request.app.state.scene is not None,
    )
