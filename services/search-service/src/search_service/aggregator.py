from __future__ import annotations

import asyncio
import logging
from typing import List, Sequence

import httpx

from .clients.arxiv import ArxivClient
from .clients.base import SourceClient
from .clients.digital_commons import DigitalCommonsClient
from .clients.google_books import GoogleBooksClient
from .clients.google_scholar import GoogleScholarClient
from .clients.jstor import JstorClient
from .clients.library_of_congress import LibraryOfCongressClient
from .clients.pubmed import PubMedClient
from .clients.reddit import RedditClient
from .clients.researchgate import ResearchGateClient
from .clients.science_gov import ScienceGovClient
from .clients.wikipedia import WikipediaClient
from .config import Settings
from .ranking import deduplicate, rank_results
from .schemas import SearchResult


logger = logging.getLogger(__name__)

RESEARCH_CLIENTS = (
    ArxivClient,
    PubMedClient,
    LibraryOfCongressClient,
    ResearchGateClient,
)
WEB_CLIENTS = (
    WikipediaClient,
    GoogleScholarClient,
    GoogleBooksClient,
    DigitalCommonsClient,
    RedditClient,
    ScienceGovClient,
    JstorClient,
)


class SearchAggregator:
    def __init__(
        self,
        research_clients: Sequence[SourceClient],
        web_clients: Sequence[SourceClient],
    ) -> None:
        self._research_clients = list(research_clients)
        self._web_clients = list(web_clients)

    @classmethod
    def from_settings(cls, http_client: httpx.AsyncClient, settings: Settings) -> "SearchAggregator":
        return cls(
            research_clients=[client_cls(http_client, settings) for client_cls in RESEARCH_CLIENTS],
            web_clients=[client_cls(http_client, settings) for client_cls in WEB_CLIENTS],
        )

    @property
    def providers(self) -> List[str]:
        return [client.name for client in self.clients_for("all")]

    def clients_for(self, search_type: str) -> List[SourceClient]:
        if search_type == "research":
            return list(self._research_clients)
        if search_type == "web":
            return list(self._web_clients)
        return self._research_clients + self._web_clients

    async def gather(self, query: str, search_type: str = "all") -> List[SearchResult]:
        """Run the selected providers concurrently and concatenate in declaration order."""
        clients = self.clients_for(search_type)
        batches = await asyncio.gather(*(client.search(query) for client in clients))
        combined: List[SearchResult] = []
        for batch in batches:
            combined.extend(batch)
        return combined

    async def search(self, query: str, search_type: str = "all") -> List[SearchResult]:
        combined = await self.gather(query, search_type)
        unique = deduplicate(combined)
        logger.info(
            "search_completed type=%s providers=%s combined=%s unique=%s",
            search_type,
            len(self.clients_for(search_type)),
            len(combined),
            len(unique),
        )
        return rank_results(unique, query)
