from __future__ import annotations

import pytest

from search_service import ranking
from search_service.ranking import deduplicate, rank_results, score_result
from search_service.schemas import SearchResult


def _result(url: str, **fields) -> SearchResult:
    fields.setdefault("source", "JSTOR")
    fields.setdefault("type", "web")
    return SearchResult(url=url, **fields)


def test_bare_web_result_scores_zero() -> None:
    assert score_result(_result("u"), "neural") == 0


@pytest.mark.parametrize(
    ("fields", "expected"),
    [
        ({"title": "Intro to NEURAL nets"}, ranking.TITLE_MATCH_WEIGHT),
        ({"abstract": "about Neural things"}, ranking.ABSTRACT_MATCH_WEIGHT),
        ({"type": "research"}, ranking.RESEARCH_TYPE_WEIGHT),
        ({"source": "Wikipedia"}, ranking.WIKIPEDIA_SOURCE_WEIGHT),
        ({"authors": ["A"]}, ranking.AUTHORS_WEIGHT),
        ({"citations": 50}, 0.5),
        ({"citations": 5000}, ranking.CITATIONS_CAP),
        ({"citations": 0}, 0),
    ],
)
def test_each_signal_contributes_its_weight(fields, expected) -> None:
    assert score_result(_result("u", **fields), "neural") == pytest.approx(expected)


def test_signals_add_up() -> None:
    result = _result(
        "u",
        title="Neural networks",
        abstract="neural networks everywhere",
        type="research",
        authors=["Ada"],
        citations=100,
    )
    assert score_result(result, "Neural Networks") == pytest.approx(3 + 2 + 2 + 1 + 0.5)


def test_query_is_matched_as_a_whole_substring() -> None:
    result = _result("u", title="networks of neural cells")
    assert score_result(result, "neural networks") == 0


def test_deduplicate_keeps_last_record_at_first_position() -> None:
    first = _result("https://a", title="from first provider")
    other = _result("https://b")
    later = _result("https://a", title="from later provider")

    unique = deduplicate([first, other, later])

    assert [result.url for result in unique] == ["https://a", "https://b"]
    assert unique[0] is later


def test_deduplicated_urls_are_unique() -> None:
    results = [_result(f"https://x/{index % 3}") for index in range(10)]
    urls = [result.url for result in deduplicate(results)]
    assert len(urls) == len(set(urls)) == 3


def test_rank_results_sorts_descending() -> None:
    low = _result("low")
    high = _result("high", title="neural", type="research")
    middle = _result("middle", source="Wikipedia")

    ranked = rank_results([low, high, middle], "neural")

    assert [result.url for result in ranked] == ["high", "middle", "low"]


def test_rank_results_keeps_input_order_for_ties() -> None:
    results = [_result(f"tie-{index}", authors=["A"]) for index in range(5)]
    ranked = rank_results(results, "nothing")
    assert [result.url for result in ranked] == [f"tie-{index}" for index in range(5)]


def test_research_bonus_outranks_equal_web_result() -> None:
    web = _result("web", title="neural")
    research = _result("research", title="neural", type="research", source="arXiv")
    ranked = rank_results([web, research], "neural")
    assert [result.url for result in ranked] == ["research", "web"]
