"""
BrooBot: conversational backend with three chat modes.

Modes:
    buddy              general assistant chat
    ai_tool_assistant  AI tool recommendations (live scraped + curated)
    deep_research      web research synthesis with cited sources

Basic Usage:
    import asyncio
    from broobot import BrooBotConfig, SearchOptions, create_tool_search_service

    async def main():
        service = create_tool_search_service(BrooBotConfig.from_env())
        result = await service.search("free coding assistant", SearchOptions(limit=3))
        print(result.formatted_message)

    asyncio.run(main())

Web Server:
    python -m broobot.web --port 3001
"""

__version__ = "1.0.0"

from .config import BrooBotConfig
from .errors import BrooBotError, InternalError, InvalidArgument, RateLimited, UpstreamUnavailable
from .tools import (
    FreshnessCache,
    RecommendationFormatter,
    RelevanceScorer,
    ScrapeFetcher,
    ToolSearchService,
    create_tool_search_service,
)
from .types import (
    ChatMode,
    ScoredToolRecord,
    SearchOptions,
    TierInfo,
    ToolRecord,
    ToolSearchResult,
)

__all__ = [
    "__version__",
    "BrooBotConfig",
    "BrooBotError",
    "InternalError",
    "InvalidArgument",
    "RateLimited",
    "UpstreamUnavailable",
    "FreshnessCache",
    "RecommendationFormatter",
    "RelevanceScorer",
    "ScrapeFetcher",
    "ToolSearchService",
    "create_tool_search_service",
    "ChatMode",
    "ScoredToolRecord",
    "SearchOptions",
    "TierInfo",
    "ToolRecord",
    "ToolSearchResult",
]
