from __future__ import annotations

from typing import List

from ..schemas import SearchResult
from .base import SourceClient, as_dict, as_list, as_number, as_str


class DigitalCommonsClient(SourceClient):
    name = "Digital Commons Network"
    result_type = "web"

    async def _search(self, query: str) -> List[SearchResult]:
        data = await self._get_json(
            f"{self._settings.digital_commons_base_url.rstrip('/')}/api/search/articles",
            {"q": query},
        )

        results: List[SearchResult] = []
        for item in as_list(as_dict(data).get("results")):
            item = as_dict(item)
            results.append(
                self._result(
                    title=as_str(item.get("title")),
                    abstract=as_str(item.get("description")),
                    authors=[as_str(author) for author in as_list(item.get("authors"))],
                    url=as_str(item.get("url")),
                    published=as_str(item.get("published_date")),
                    institution=as_str(item.get("institution")),
                    downloads=as_number(item.get("download_count")),
                )
            )
        return results
