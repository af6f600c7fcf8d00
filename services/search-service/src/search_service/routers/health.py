from __future__ import annotations

from fastapi import APIRouter, Request

from ..schemas import HealthResponse


router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        env=request.app.state.settings.app_env,
        providers=request.app.state.aggregator.providers,
    )
