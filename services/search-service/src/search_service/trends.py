from __future__ import annotations

import logging
from typing import Any

import httpx

from .config import Settings


logger = logging.getLogger(__name__)


class TrendsClient:
    """Daily search trends from SerpAPI's ``google_trends`` engine, passed through as-is."""

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings) -> None:
        self._http_client = http_client
        self._settings = settings

    async def fetch(self) -> Any:
        params = {
            "engine": "google_trends",
            "api_key": self._settings.serpapi_key,
            "data_type": "TIMESERIES",
            "geo": self._settings.trends_geo,
        }
        try:
            response = await self._http_client.get(
                f"{self._settings.serpapi_base_url.rstrip('/')}/search.json",
                params=params,
                headers={"Accept": "application/json"},
            )
            response.raise_for_status()
            data = response.json()
        except Exception as exc:
            logger.warning(
                "trends_fetch_failed error_type=%s error=%s",
                type(exc).__name__,
                str(exc),
            )
            return []
        trends = data.get("daily_trends") if isinstance(data, dict) else None
        return trends or []
