from __future__ import annotations

import dataclasses
from typing import Callable

import httpx
import pytest

from search_service.config import Settings


ARXIV_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title type="html">ArXiv Query: search_query=all:neural networks</title>
  <id>http://arxiv.org/api/feed</id>
  <entry>
    <id>http://arxiv.org/abs/2403.04567v1</id>
    <published>2024-03-07T18:00:00Z</published>
    <title>Neural Networks
      for X</title>
    <summary>  We study neural networks
      applied to X &amp; Y.
    </summary>
    <author>
      <name>Ada Lovelace</name>
    </author>
    <author>
      <name>Alan Turing</name>
    </author>
  </entry>
  <entry>
    <id>http://arxiv.org/abs/2401.00001v2</id>
    <published>not a date</published>
    <title>Second paper</title>
    <summary>Nothing to see.</summary>
  </entry>
</feed>
"""


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    return dataclasses.replace(
        Settings(),
        service_token="",
        serpapi_key="serp-key",
        google_books_key="books-key",
        loc_api_key="",
        ncbi_api_key="ncbi-key",
        sciencegov_api_key="sg-key",
        reddit_client_id="reddit-id",
        reddit_client_secret="reddit-secret",
        jstor_api_key="jstor-key",
        results_per_provider=10,
        trends_geo="US",
    )


@pytest.fixture
def arxiv_feed() -> str:
    return ARXIV_FEED


@pytest.fixture
def make_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory
