from __future__ import annotations

from typing import List

import httpx

from ..schemas import SearchResult
from .base import (
    SourceClient,
    as_dict,
    as_list,
    as_number,
    as_str,
    locale_date_from_timestamp,
)


class RedditClient(SourceClient):
    """Reddit link search behind an app-only OAuth token.

    Each search fetches a fresh client-credentials token; nothing is cached
    between requests.
    """

    name = "Reddit"
    result_type = "web"

    async def _search(self, query: str) -> List[SearchResult]:
        token = await self._fetch_token()
        data = await self._get_json(
            f"{self._settings.reddit_base_url.rstrip('/')}/search",
            {
                "q": query,
                "type": "link",
                "sort": "relevance",
                "limit": str(self._settings.results_per_provider),
            },
            headers={
                "Authorization": f"Bearer {token}",
                "User-Agent": self._settings.reddit_user_agent,
            },
        )

        results: List[SearchResult] = []
        for child in as_list(as_dict(as_dict(data).get("data")).get("children")):
            post = as_dict(as_dict(child).get("data"))
            results.append(
                self._result(
                    title=as_str(post.get("title")),
                    abstract=as_str(post.get("selftext")),
                    authors=[as_str(post.get("author"))],
                    url=f"https://reddit.com{as_str(post.get('permalink'))}",
                    published=locale_date_from_timestamp(post.get("created_utc")),
                    subreddit=as_str(post.get("subreddit_name_prefixed")),
                    score=as_number(post.get("score")),
                    comments=as_number(post.get("num_comments")),
                )
            )
        return results

    async def _fetch_token(self) -> str:
        response = await self._http_client.post(
            f"{self._settings.reddit_auth_url.rstrip('/')}/api/v1/access_token",
            data={"grant_type": "client_credentials"},
            auth=httpx.BasicAuth(
                self._settings.reddit_client_id, self._settings.reddit_client_secret
            ),
        )
        response.raise_for_status()
        return as_str(as_dict(response.json()).get("access_token"))
