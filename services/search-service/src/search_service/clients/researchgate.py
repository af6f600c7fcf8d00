from __future__ import annotations

from typing import List

from ..schemas import SearchResult
from .base import SourceClient, as_dict, as_list, as_number, as_str, author_names


class ResearchGateClient(SourceClient):
    name = "ResearchGate"
    result_type = "research"

    async def _search(self, query: str) -> List[SearchResult]:
        base_url = self._settings.researchgate_base_url.rstrip("/")
        data = await self._get_json(
            f"{base_url}/api/search",
            {"q": query, "type": "publication"},
        )

        results: List[SearchResult] = []
        for item in as_list(as_dict(data).get("items")):
            item = as_dict(item)
            results.append(
                self._result(
                    title=as_str(item.get("title")),
                    abstract=as_str(item.get("abstract")),
                    authors=author_names(item.get("authors")),
                    url=f"https://www.researchgate.net{as_str(item.get('path'))}",
                    published=as_str(item.get("publishedDate")),
                    citations=as_number(item.get("citationCount")),
                    reads=as_number(item.get("readCount")),
                )
            )
        return results
