from __future__ import annotations

from typing import List
from urllib.parse import quote

from ..schemas import SearchResult
from .base import SourceClient, as_dict, as_list, as_str


CATEGORY_PREFIX = "Category:"
# Unreserved URI characters left as-is in fallback page urls.
TITLE_SAFE_CHARS = "-_.!~*'()"


class WikipediaClient(SourceClient):
    name = "Wikipedia"
    result_type = "web"

    async def _search(self, query: str) -> List[SearchResult]:
        page_ids = await self._search_page_ids(query)
        if not page_ids:
            return []

        params = {
            "action": "query",
            "format": "json",
            "pageids": "|".join(page_ids),
            "prop": "extracts|info|categories|links",
            "exintro": "1",
            "explaintext": "1",
            "inprop": "url",
            "cllimit": "5",
            "pllimit": "5",
            "origin": "*",
        }
        data = await self._get_json(self._api_url(), params)

        results: List[SearchResult] = []
        for page in as_dict(as_dict(as_dict(data).get("query")).get("pages")).values():
            page = as_dict(page)
            title = as_str(page.get("title"))
            results.append(
                self._result(
                    title=title,
                    abstract=as_str(page.get("extract")),
                    authors=[],
                    url=as_str(page.get("fullurl"))
                    or f"https://en.wikipedia.org/wiki/{quote(title, safe=TITLE_SAFE_CHARS)}",
                    published="",
                    categories=[
                        as_str(as_dict(category).get("title")).replace(CATEGORY_PREFIX, "", 1)
                        for category in as_list(page.get("categories"))
                    ],
                )
            )
        return results

    async def _search_page_ids(self, query: str) -> List[str]:
        params = {
            "action": "query",
            "format": "json",
            "list": "search",
            "srsearch": query,
            "srlimit": str(self._settings.results_per_provider),
            "origin": "*",
        }
        data = await self._get_json(self._api_url(), params)
        hits = as_list(as_dict(as_dict(data).get("query")).get("search"))
        return [as_str(as_dict(hit).get("pageid")) for hit in hits]

    def _api_url(self) -> str:
        return f"{self._settings.wikipedia_base_url.rstrip('/')}/w/api.php"
