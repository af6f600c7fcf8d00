from __future__ import annotations

from typing import List

from ..schemas import SearchResult
from .base import SourceClient, as_dict, as_list, as_str, author_names


class PubMedClient(SourceClient):
    name = "PubMed"
    result_type = "research"

    async def _search(self, query: str) -> List[SearchResult]:
        ids = await self._esearch(query)
        if not ids:
            return []
        return await self._esummary(ids)

    async def _esearch(self, query: str) -> List[str]:
        params = {
            "db": "pubmed",
            "term": query,
            "retmax": str(self._settings.results_per_provider),
            "retmode": "json",
            "api_key": self._settings.ncbi_api_key,
        }
        data = await self._get_json(self._url("esearch.fcgi"), params)
        idlist = as_dict(as_dict(data).get("esearchresult")).get("idlist")
        return [as_str(item) for item in as_list(idlist)]

    async def _esummary(self, ids: List[str]) -> List[SearchResult]:
        params = {
            "db": "pubmed",
            "id": ",".join(ids),
            "retmode": "json",
            "api_key": self._settings.ncbi_api_key,
        }
        data = await self._get_json(self._url("esummary.fcgi"), params)

        results: List[SearchResult] = []
        # "uids" is a plain list alongside the per-article records.
        for item in as_dict(as_dict(data).get("result")).values():
            if not isinstance(item, dict) or not item.get("uid"):
                continue
            uid = as_str(item.get("uid"))
            results.append(
                self._result(
                    title=as_str(item.get("title")),
                    abstract=as_str(item.get("abstract")),
                    authors=author_names(item.get("authors")),
                    url=f"https://pubmed.ncbi.nlm.nih.gov/{uid}/",
                    published=as_str(item.get("pubdate")),
                    journal=as_str(item.get("fulljournalname")),
                    pmid=uid,
                )
            )
        return results

    def _url(self, path: str) -> str:
        return f"{self._settings.pubmed_base_url.rstrip('/')}/{path}"
