"""Tool search orchestration: cache -> merge -> rank -> render."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..clients.reader import ReaderClient
from ..config import BrooBotConfig
from ..data import AI_TOOLS
from ..errors import InternalError, InvalidArgument
from ..types import SearchOptions, ToolRecord, ToolSearchResult
from ..utils.helpers import utc_now_iso
from .cache import FreshnessCache
from .formatter import RecommendationFormatter
from .scorer import RelevanceScorer
from .scraper import ScrapeFetcher

logger = logging.getLogger(__name__)


class ToolSearchService:
    """Public entry point of the tool recommendation pipeline.

    The candidate pool is the scraped snapshot followed by the static
    dataset, so fresh entries win score ties. A failing scrape only
    shrinks the pool to the static dataset.
    """

    def __init__(
        self,
        cache: FreshnessCache,
        dataset: Sequence[ToolRecord] = AI_TOOLS,
        scorer: Optional[RelevanceScorer] = None,
        formatter: Optional[RecommendationFormatter] = None,
    ) -> None:
        self._cache = cache
        self._dataset = list(dataset)
        self._scorer = scorer or RelevanceScorer()
        self._formatter = formatter or RecommendationFormatter()

    @property
    def cache(self) -> FreshnessCache:
        return self._cache

    async def search(
        self,
        query: Any,
        options: Optional[SearchOptions] = None,
    ) -> ToolSearchResult:
        """Rank tools for query and render the recommendation text.

        Raises:
            InvalidArgument: query is missing, empty or not a string
            InternalError: ranking or rendering failed unexpectedly
        """
        if not isinstance(query, str) or not query:
            raise InvalidArgument("Query string is required")
        if options is None:
            options = SearchOptions()

        scraped = await self._cache.get()
        pool = _unique_by_id([*scraped, *self._dataset])
        logger.info(
            f"Searching {len(pool)} tools ({len(scraped)} scraped + "
            f"{len(self._dataset)} static) for \"{query}\""
        )

        try:
            results = self._scorer.rank(query, pool, options)
            message = self._formatter.render(query, results)
        except Exception as e:
            raise InternalError(f"Ranking failed: {e}") from e

        if results:
            top = results[0]
            logger.info(f"Top result: {top.name} (score: {top.relevance_score:.1f})")

        return ToolSearchResult(
            query=query,
            results=results,
            formatted_message=message,
            options=options,
        )


def _unique_by_id(tools: Sequence[ToolRecord]) -> list[ToolRecord]:
    seen: set[str] = set()
    unique = []
    for tool in tools:
        if tool.id in seen:
            continue
        seen.add(tool.id)
        unique.append(tool)
    return unique


def to_response(result: ToolSearchResult) -> dict[str, Any]:
    """JSON body of POST /api/tools/search."""
    return {
        "query": result.query,
        "tools": [tool.to_dict() for tool in result.results],
        "message": result.formatted_message,
        "totalFound": len(result.results),
        "metadata": {
            "searchedAt": utc_now_iso(),
            "filters": result.options.to_filters(),
        },
    }


def create_tool_search_service(config: BrooBotConfig) -> ToolSearchService:
    """Wire reader -> fetcher -> cache -> service from configuration."""
    reader = ReaderClient(base_url=config.reader_url, timeout=config.scrape_timeout)
    fetcher = ScrapeFetcher(reader=reader, listing_url=config.listing_url)
    cache = FreshnessCache(fetcher, ttl=config.cache_ttl)
    return ToolSearchService(cache)
