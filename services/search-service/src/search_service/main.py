from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from .aggregator import SearchAggregator
from .config import Settings
from .observability import configure_logging, metrics_response, observability_middleware
from .routers import health as health_router
from .routers import search as search_router
from .trends import TrendsClient


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.settings = settings
        app.state.http_client = httpx.AsyncClient(
            timeout=settings.provider_timeout_seconds,
            transport=transport,
        )
        app.state.aggregator = SearchAggregator.from_settings(app.state.http_client, settings)
        app.state.trends_client = TrendsClient(app.state.http_client, settings)
        try:
            yield
        finally:
            await app.state.http_client.aclose()

    app = FastAPI(title="Search Service", version="0.1.0", lifespan=lifespan)
    app.middleware("http")(observability_middleware)

    app.include_router(search_router.router)
    app.include_router(health_router.router)

    @app.get("/metrics")
    async def metrics():
        return metrics_response()

    return app


configure_logging("search-service")
app = create_app()
