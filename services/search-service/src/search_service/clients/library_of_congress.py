from __future__ import annotations

from typing import List

from ..schemas import SearchResult
from .base import SourceClient, as_dict, as_list, as_str, author_names


class LibraryOfCongressClient(SourceClient):
    name = "Library of Congress"
    result_type = "research"

    async def _search(self, query: str) -> List[SearchResult]:
        params = {
            "q": query,
            "fo": "json",
            "c": str(self._settings.results_per_provider),
        }
        # loc.gov is keyless; the key is only forwarded when one is configured.
        if self._settings.loc_api_key:
            params["api_key"] = self._settings.loc_api_key
        data = await self._get_json(f"{self._settings.loc_base_url.rstrip('/')}/search/", params)

        results: List[SearchResult] = []
        for item in as_list(as_dict(data).get("results")):
            item = as_dict(item)
            description = as_list(item.get("description"))
            original_format = as_list(item.get("original_format"))
            results.append(
                self._result(
                    title=as_str(item.get("title")),
                    abstract=as_str(description[0]) if description else "",
                    authors=author_names(item.get("contributors")),
                    url=as_str(item.get("url")),
                    published=as_str(item.get("date")),
                    format=as_str(original_format[0]) if original_format else "",
                    subjects=as_list(item.get("subject")),
                )
            )
        return results
