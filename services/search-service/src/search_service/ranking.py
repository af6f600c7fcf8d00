from __future__ import annotations

from typing import Dict, Iterable, List

from .schemas import SearchResult


TITLE_MATCH_WEIGHT = 3.0
ABSTRACT_MATCH_WEIGHT = 2.0
RESEARCH_TYPE_WEIGHT = 2.0
WIKIPEDIA_SOURCE_WEIGHT = 1.5
CITATIONS_DIVISOR = 100.0
CITATIONS_CAP = 2.0
AUTHORS_WEIGHT = 0.5


def deduplicate(results: Iterable[SearchResult]) -> List[SearchResult]:
    """Collapse results sharing a url.

    The last record seen for a url wins, at the position where that url first
    appeared.
    """
    by_url: Dict[str, SearchResult] = {}
    for result in results:
        by_url[result.url] = result
    return list(by_url.values())


def score_result(result: SearchResult, query: str) -> float:
    query_lower = query.lower()
    score = 0.0
    if query_lower in result.title.lower():
        score += TITLE_MATCH_WEIGHT
    if query_lower in result.abstract.lower():
        score += ABSTRACT_MATCH_WEIGHT
    if result.type == "research":
        score += RESEARCH_TYPE_WEIGHT
    if result.source == "Wikipedia":
        score += WIKIPEDIA_SOURCE_WEIGHT
    if result.citations:
        score += min(result.citations / CITATIONS_DIVISOR, CITATIONS_CAP)
    if result.authors:
        score += AUTHORS_WEIGHT
    return score


def rank_results(results: Iterable[SearchResult], query: str) -> List[SearchResult]:
    # sorted() is stable with reverse=True: equal scores keep their input order.
    return sorted(results, key=lambda result: score_result(result, query), reverse=True)
