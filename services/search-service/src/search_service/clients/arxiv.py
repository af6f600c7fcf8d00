from __future__ import annotations

import html
import re
from typing import List

from ..schemas import SearchResult
from .base import SourceClient, locale_date_from_iso


_TITLE_RE = re.compile(r"<title>(.*?)</title>", re.DOTALL)
_SUMMARY_RE = re.compile(r"<summary>(.*?)</summary>", re.DOTALL)
_AUTHOR_RE = re.compile(r"<author>(.*?)</author>", re.DOTALL)
_NAME_RE = re.compile(r"<name>(.*?)</name>", re.DOTALL)
_ID_RE = re.compile(r"<id>(.*?)</id>")
_PUBLISHED_RE = re.compile(r"<published>(.*?)</published>")
_WHITESPACE_RE = re.compile(r"\s+")


class ArxivClient(SourceClient):
    name = "arXiv"
    result_type = "research"

    async def _search(self, query: str) -> List[SearchResult]:
        params = {
            "search_query": f"all:{query}",
            "start": "0",
            "max_results": str(self._settings.results_per_provider),
            "sortBy": "relevance",
            "sortOrder": "descending",
        }
        xml_text = await self._get_text(
            f"{self._settings.arxiv_base_url.rstrip('/')}/query", params
        )
        return [self._parse_entry(entry) for entry in xml_text.split("<entry>")[1:]]

    def _parse_entry(self, entry: str) -> SearchResult:
        authors = []
        for block in _AUTHOR_RE.findall(entry):
            match = _NAME_RE.search(block)
            authors.append(html.unescape(match.group(1)).strip() if match else "")
        return self._result(
            title=_collapse(_first(_TITLE_RE, entry)),
            abstract=_collapse(_first(_SUMMARY_RE, entry)),
            authors=authors,
            url=_first(_ID_RE, entry),
            published=locale_date_from_iso(_first(_PUBLISHED_RE, entry)),
        )


def _first(pattern: re.Pattern[str], text: str) -> str:
    match = pattern.search(text)
    return match.group(1) if match else ""


def _collapse(value: str) -> str:
    return _WHITESPACE_RE.sub(" ", html.unescape(value)).strip()
