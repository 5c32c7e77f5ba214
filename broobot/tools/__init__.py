"""AI tool recommendation: live scraping, caching, scoring, rendering.

Public API::

    from broobot.tools import create_tool_search_service, SearchOptions

    service = create_tool_search_service(config)
    result = await service.search("free coding assistant", SearchOptions(limit=3))
    print(result.formatted_message)

Sources:
  - Static:  broobot.data.AI_TOOLS
  - Scraped: https://theresanaiforthat.com/s/free/ via the r.jina.ai reader (cached 24h)
"""

from ..types import SearchOptions
from .cache import CacheEntry, FreshnessCache
from .formatter import RecommendationFormatter, no_matches_message, render
from .scorer import RelevanceScorer, rank, score_tool
from .scraper import ScrapeFetcher, extract_fallback, parse, parse_listing
from .service import ToolSearchService, create_tool_search_service, to_response

__all__ = [
    "SearchOptions",
    "CacheEntry",
    "FreshnessCache",
    "RecommendationFormatter",
    "no_matches_message",
    "render",
    "RelevanceScorer",
    "rank",
    "score_tool",
    "ScrapeFetcher",
    "extract_fallback",
    "parse",
    "parse_listing",
    "ToolSearchService",
    "create_tool_search_service",
    "to_response",
]
