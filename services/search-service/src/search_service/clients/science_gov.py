from __future__ import annotations

from typing import List

from ..schemas import SearchResult
from .base import SourceClient, as_dict, as_list, as_str


class ScienceGovClient(SourceClient):
    name = "Science.gov"
    # Queried with the web providers, but its records are research output.
    result_type = "research"

    async def _search(self, query: str) -> List[SearchResult]:
        params = {"query": query, "api_key": self._settings.sciencegov_api_key}
        data = await self._get_json(
            f"{self._settings.sciencegov_base_url.rstrip('/')}/api/v1/search", params
        )

        results: List[SearchResult] = []
        for item in as_list(as_dict(data).get("results")):
            item = as_dict(item)
            results.append(
                self._result(
                    title=as_str(item.get("title")),
                    abstract=as_str(item.get("description")),
                    authors=[as_str(author) for author in as_list(item.get("authors"))],
                    url=as_str(item.get("link")),
                    published=as_str(item.get("publicationDate")),
                    agency=as_str(item.get("agency")),
                    content_type=as_str(item.get("contentType")),
                )
            )
        return results
