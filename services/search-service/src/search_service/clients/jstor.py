from __future__ import annotations

from typing import List

from ..schemas import SearchResult
from .base import SourceClient, as_dict, as_list, as_str, author_names


class JstorClient(SourceClient):
    name = "JSTOR"
    result_type = "web"

    async def _search(self, query: str) -> List[SearchResult]:
        params = {
            "Query": query,
            "limit": str(self._settings.results_per_provider),
            "apikey": self._settings.jstor_api_key,
        }
        data = await self._get_json(
            f"{self._settings.jstor_base_url.rstrip('/')}/api/search-results", params
        )

        results: List[SearchResult] = []
        for item in as_list(as_dict(data).get("items")):
            item = as_dict(item)
            results.append(
                self._result(
                    title=as_str(item.get("title")),
                    abstract=as_str(item.get("abstract")),
                    authors=author_names(item.get("authors")),
                    url=as_str(item.get("stableUrl")),
                    published=as_str(item.get("publicationDate")),
                    journal=as_str(as_dict(item.get("journal")).get("name")),
                    publisher=as_str(item.get("publisher")),
                )
            )
        return results
