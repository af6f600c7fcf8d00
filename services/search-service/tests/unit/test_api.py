from __future__ import annotations

import dataclasses

import httpx
import pytest
from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from search_service.main import create_app
from search_service.routers.search import SEARCH_PATH


CORS_ORIGIN = "Access-Control-Allow-Origin"
CORS_HEADERS = "Access-Control-Allow-Headers"


def _down(request: httpx.Request) -> httpx.Response:
    return httpx.Response(503, json={"error": "unavailable"})


def _client(settings, handler=_down) -> TestClient:
    app = create_app(settings, transport=httpx.MockTransport(handler))
    return TestClient(app)


def test_preflight_returns_cors_headers_and_empty_body(settings) -> None:
    with _client(settings) as client:
        response = client.options(SEARCH_PATH)

    assert response.status_code == 200
    assert response.content == b""
    assert response.headers[CORS_ORIGIN] == "*"
    assert response.headers[CORS_HEADERS] == "authorization, x-client-info, apikey, content-type"


def test_trends_are_passed_through(settings) -> None:
    daily = [{"query": "solar eclipse"}, {"query": "protein folding"}]

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["engine"] == "google_trends"
        assert request.url.params["geo"] == "US"
        assert request.url.params["data_type"] == "TIMESERIES"
        return httpx.Response(200, json={"daily_trends": daily})

    with _client(settings, handler) as client:
        response = client.post(SEARCH_PATH, json={"type": "trends"})

    assert response.status_code == 200
    assert response.json() == {"trends": daily}
    assert response.headers[CORS_ORIGIN] == "*"


def test_trends_payload_is_not_reshaped(settings) -> None:
    daily = {"date": "20241019", "searches": [{"query": "aurora"}]}

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"daily_trends": daily})

    with _client(settings, handler) as client:
        response = client.post(SEARCH_PATH, json={"type": "trends"})

    assert response.status_code == 200
    assert response.json() == {"trends": daily}


def test_trends_failure_returns_empty_list(settings) -> None:
    with _client(settings) as client:
        response = client.post(SEARCH_PATH, json={"type": "trends", "query": "ignored"})

    assert response.status_code == 200
    assert response.json() == {"trends": []}


def test_all_providers_down_still_returns_ok(settings) -> None:
    with _client(settings) as client:
        response = client.post(SEARCH_PATH, json={"query": "anything"})

    assert response.status_code == 200
    assert response.json() == {"papers": []}


def test_research_search_returns_localized_arxiv_result(settings, arxiv_feed) -> None:
    hosts: set[str] = set()

    def handler(request: httpx.Request) -> httpx.Response:
        hosts.add(request.url.host)
        if request.url.host == "export.arxiv.org":
            return httpx.Response(200, text=arxiv_feed)
        return _down(request)

    with _client(settings, handler) as client:
        response = client.post(SEARCH_PATH, json={"query": "neural networks", "type": "research"})

    assert response.status_code == 200
    papers = response.json()["papers"]
    assert hosts == {
        "export.arxiv.org",
        "eutils.ncbi.nlm.nih.gov",
        "www.loc.gov",
        "www.researchgate.net",
    }
    assert papers[0]["title"] == "Neural Networks for X"
    assert papers[0]["source"] == "arXiv"
    assert papers[0]["type"] == "research"
    assert papers[0]["published"] == "3/7/2024"
    assert "citations" not in papers[0]
    assert all(paper["type"] == "research" for paper in papers)


def test_web_search_dedups_and_ranks(settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        host = request.url.host
        if host == "en.wikipedia.org" and request.url.params.get("list") == "search":
            return httpx.Response(200, json={"query": {"search": [{"pageid": 1}]}})
        if host == "en.wikipedia.org":
            return httpx.Response(
                200,
                json={
                    "query": {
                        "pages": {
                            "1": {
                                "title": "Graphene",
                                "fullurl": "https://shared.example/graphene",
                            }
                        }
                    }
                },
            )
        if host == "www.jstor.org":
            return httpx.Response(
                200,
                json={
                    "items": [
                        {"title": "Graphene", "stableUrl": "https://shared.example/graphene"},
                        {"title": "Other", "stableUrl": "https://www.jstor.org/stable/2"},
                    ]
                },
            )
        if host == "www.googleapis.com":
            return httpx.Response(
                200,
                json={
                    "items": [
                        {
                            "volumeInfo": {
                                "title": "Graphene handbook",
                                "authors": ["Geim A"],
                                "infoLink": "https://books.example/graphene",
                            }
                        }
                    ]
                },
            )
        return _down(request)

    with _client(settings, handler) as client:
        response = client.post(SEARCH_PATH, json={"query": "graphene", "type": "web"})

    papers = response.json()["papers"]
    urls = [paper["url"] for paper in papers]
    assert len(urls) == len(set(urls)) == 3
    assert urls[0] == "https://books.example/graphene"
    shared = next(paper for paper in papers if paper["url"] == "https://shared.example/graphene")
    assert shared["source"] == "JSTOR"


def test_unknown_type_searches_everything(settings) -> None:
    hosts: set[str] = set()

    def handler(request: httpx.Request) -> httpx.Response:
        hosts.add(request.url.host)
        return _down(request)

    with _client(settings, handler) as client:
        response = client.post(SEARCH_PATH, json={"query": "x", "type": "everything"})

    assert response.status_code == 200
    assert "export.arxiv.org" in hosts
    assert "www.jstor.org" in hosts


@pytest.mark.parametrize(
    "body",
    [b"{not json", b"", b"[1, 2]", b'{"type": "web"}'],
    ids=["malformed", "empty", "not-an-object", "missing-query"],
)
def test_bad_request_body_returns_error_shape(settings, body) -> None:
    with _client(settings) as client:
        response = client.post(
            SEARCH_PATH,
            content=body,
            headers={"Content-Type": "application/json"},
        )

    assert response.status_code == 500
    payload = response.json()
    assert payload["error"] == "Failed to fetch results"
    assert payload["details"]
    assert response.headers[CORS_ORIGIN] == "*"


def test_bearer_token_required_when_configured(settings) -> None:
    secured = dataclasses.replace(settings, service_token="shared-secret")

    with _client(secured) as client:
        missing = client.post(SEARCH_PATH, json={"type": "trends"})
        wrong = client.post(
            SEARCH_PATH,
            json={"type": "trends"},
            headers={"Authorization": "Bearer nope"},
        )
        ok = client.post(
            SEARCH_PATH,
            json={"type": "trends"},
            headers={"Authorization": "Bearer shared-secret"},
        )
        preflight = client.options(SEARCH_PATH)

    assert missing.status_code == 401
    assert missing.json()["error"] == "Unauthorized"
    assert wrong.status_code == 401
    assert ok.status_code == 200
    assert preflight.status_code == 200


def test_health_lists_providers(settings) -> None:
    with _client(settings) as client:
        response = client.get("/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "healthy"
    assert len(payload["providers"]) == 11


def test_metrics_count_provider_calls(settings) -> None:
    with _client(settings) as client:
        client.post(SEARCH_PATH, json={"query": "x", "type": "research"})
        response = client.get("/metrics")

    assert response.status_code == 200
    errors = REGISTRY.get_sample_value(
        "provider_calls_total",
        {"service": "search-service", "provider": "arXiv", "outcome": "error"},
    )
    assert errors is not None and errors >= 1
    assert response.headers.get("X-Request-ID")
