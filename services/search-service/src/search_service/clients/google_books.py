from __future__ import annotations

from typing import List

from ..schemas import SearchResult
from .base import SourceClient, as_dict, as_list, as_str


class GoogleBooksClient(SourceClient):
    name = "Google Books"
    result_type = "web"

    async def _search(self, query: str) -> List[SearchResult]:
        params = {
            "q": query,
            "key": self._settings.google_books_key,
            "maxResults": str(self._settings.results_per_provider),
        }
        data = await self._get_json(
            f"{self._settings.google_books_base_url.rstrip('/')}/volumes", params
        )

        results: List[SearchResult] = []
        for item in as_list(as_dict(data).get("items")):
            volume = as_dict(as_dict(item).get("volumeInfo"))
            results.append(
                self._result(
                    title=as_str(volume.get("title")),
                    abstract=as_str(volume.get("description")),
                    authors=[as_str(author) for author in as_list(volume.get("authors"))],
                    url=as_str(volume.get("infoLink")),
                    published=as_str(volume.get("publishedDate")),
                    publisher=as_str(volume.get("publisher")),
                    categories=as_list(volume.get("categories")),
                    page_count=volume.get("pageCount"),
                    preview_link=volume.get("previewLink"),
                )
            )
        return results
