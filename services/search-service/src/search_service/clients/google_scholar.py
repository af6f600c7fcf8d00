from __future__ import annotations

from typing import List

from ..schemas import SearchResult
from .base import SourceClient, as_dict, as_list, as_number, as_str, author_names


class GoogleScholarClient(SourceClient):
    """Google Scholar through SerpAPI's ``google_scholar`` engine."""

    name = "Google Scholar"
    result_type = "web"

    async def _search(self, query: str) -> List[SearchResult]:
        params = {
            "engine": "google_scholar",
            "q": query,
            "api_key": self._settings.serpapi_key,
            "num": str(self._settings.results_per_provider),
        }
        data = await self._get_json(
            f"{self._settings.serpapi_base_url.rstrip('/')}/search.json",
            params,
            headers={"Accept": "application/json"},
        )

        results: List[SearchResult] = []
        for item in as_list(as_dict(data).get("organic_results")):
            item = as_dict(item)
            publication_info = as_dict(item.get("publication_info"))
            cited_by = as_dict(as_dict(item.get("inline_links")).get("cited_by"))
            results.append(
                self._result(
                    title=as_str(item.get("title")),
                    abstract=as_str(item.get("snippet")) or as_str(publication_info.get("summary")),
                    authors=author_names(publication_info.get("authors")),
                    url=as_str(item.get("link")),
                    published=as_str(publication_info.get("year")),
                    citations=as_number(cited_by.get("total")),
                    venue=as_str(publication_info.get("venue")),
                )
            )
        return results
