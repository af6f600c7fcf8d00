from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, List

import httpx

from ..config import Settings
from ..observability import observe_provider_call
from ..schemas import ResultType, SearchResult


logger = logging.getLogger(__name__)


class SourceClient:
    """One external provider mapped onto :class:`SearchResult`.

    Subclasses implement ``_search``; ``search`` never raises. Any failure is logged
    and the provider contributes no results.
    """

    name: str = ""
    result_type: ResultType = "web"

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings) -> None:
        self._http_client = http_client
        self._settings = settings

    async def search(self, query: str) -> List[SearchResult]:
        try:
            results = await self._search(query)
        except Exception as exc:
            logger.warning(
                "provider_search_failed provider=%s error_type=%s error=%s",
                self.name,
                type(exc).__name__,
                str(exc),
                extra={"provider": self.name},
            )
            observe_provider_call(self.name, None)
            return []
        observe_provider_call(self.name, len(results))
        return results

    async def _search(self, query: str) -> List[SearchResult]:
        raise NotImplementedError

    async def _get_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        response = await self._http_client.get(url, params=params, headers=headers)
        response.raise_for_status()
        return response.json()

    async def _get_text(self, url: str, params: dict[str, Any] | None = None) -> str:
        response = await self._http_client.get(url, params=params)
        response.raise_for_status()
        return response.text

    def _result(self, **fields: Any) -> SearchResult:
        return SearchResult(source=self.name, type=self.result_type, **fields)


def as_dict(value: object) -> dict[str, Any]:
    if isinstance(value, dict):
        return value
    return {}


def as_list(value: object) -> List[Any]:
    if isinstance(value, list):
        return value
    return []


def as_str(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def as_number(value: object) -> float:
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return value
    return 0


def author_names(value: object) -> List[str]:
    names: List[str] = []
    for item in as_list(value):
        if isinstance(item, dict):
            names.append(as_str(item.get("name")).strip())
        elif isinstance(item, str):
            names.append(item.strip())
    return names


def locale_date(moment: datetime) -> str:
    """Render a date the way en-US ``toLocaleDateString`` does, e.g. ``3/7/2024``."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return f"{moment.month}/{moment.day}/{moment.year}"


def locale_date_from_iso(value: str) -> str:
    value = value.strip()
    if not value:
        return ""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return locale_date(datetime.fromisoformat(value))
    except ValueError:
        return ""


def locale_date_from_timestamp(value: object) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return ""
    return locale_date(datetime.fromtimestamp(value, tz=timezone.utc))
