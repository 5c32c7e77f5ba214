"""Web search provider client (Serper) with deterministic mock fallback."""

from __future__ import annotations

import logging
import re

import httpx

from ..config import DEFAULT_SEARCH_URL
from ..errors import RateLimited, UpstreamUnavailable
from ..types import SearchHit
from ..utils.retry import RetryConfig, retry_async

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


class WebSearchClient:
    """Searches the web via Serper; falls back to mock results.

    search() never raises: a missing API key or any upstream failure yields
    mock_search_results(query), which depends only on the query string.
    """

    def __init__(
        self,
        api_key: str = "",
        url: str = DEFAULT_SEARCH_URL,
        timeout: float = 10.0,
        retry: RetryConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._url = url
        self._timeout = timeout
        self._retry = retry or RetryConfig(max_attempts=2, backoff_base=0.5)
        self._client = client

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def search(self, query: str, count: int = 5) -> list[SearchHit]:
        if self._api_key:
            try:
                logger.info("Searching with Serper API")
                return await retry_async(self._search_serper, query, count, config=self._retry)
            except (UpstreamUnavailable, httpx.HTTPError) as e:
                logger.error(f"Serper search failed: {e}")

        logger.info("Using mock search results")
        return mock_search_results(query, count)

    async def _search_serper(self, query: str, count: int) -> list[SearchHit]:
        body = {"q": query, "num": count, "gl": "us", "hl": "en"}
        headers = {"X-API-KEY": self._api_key, "Content-Type": "application/json"}

        if self._client is not None:
            resp = await self._client.post(self._url, json=body, headers=headers, timeout=self._timeout)
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(self._url, json=body, headers=headers)

        if resp.status_code == 429:
            raise RateLimited("Serper rate limit exceeded")
        if resp.status_code >= 400:
            raise UpstreamUnavailable(
                f"Serper returned {resp.status_code}", status_code=resp.status_code
            )

        try:
            organic = resp.json().get("organic") or []
            return [
                SearchHit(
                    title=item.get("title", ""),
                    url=item.get("link", ""),
                    snippet=item.get("snippet", ""),
                )
                for item in organic
                if item.get("link")
            ]
        except (ValueError, AttributeError, TypeError) as e:
            raise UpstreamUnavailable(f"Malformed Serper response: {e}") from e


def mock_search_results(query: str, count: int = 5) -> list[SearchHit]:
    """Three canned results derived only from the query string."""
    slug = _WHITESPACE.sub("-", query.lower())
    hits = [
        SearchHit(
            title=f"Understanding {query} - Comprehensive Guide",
            url=f"https://example.com/{slug}",
            snippet=f"A detailed exploration of {query} covering all the essential aspects you need to know.",
        ),
        SearchHit(
            title=f"{query}: Best Practices and Tips",
            url=f"https://example.org/best-practices-{slug}",
            snippet=f"Learn the best practices and expert tips for {query} in this comprehensive guide.",
        ),
        SearchHit(
            title=f"The Ultimate Guide to {query}",
            url=f"https://example.net/ultimate-guide-{slug}",
            snippet=f"Everything you need to know about {query} from basics to advanced concepts.",
        ),
    ]
    return hits[:count]
