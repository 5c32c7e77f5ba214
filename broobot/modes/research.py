"""Deep research mode: search, scrape, synthesize.

Pipeline::

    WebSearchClient.search(query)         -> SearchHit list (mock on failure)
    ReaderClient.fetch_as_text(hit.url)   -> ScrapedSource (snippet on failure)
    CompletionClient.complete(prompt)     -> Markdown report (mock without key)

When anything fails and no real provider is available, or the provider
is rate limited, a complete mock report is returned instead.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from ..clients.completion import CompletionClient
from ..clients.reader import ReaderClient
from ..clients.search import WebSearchClient, mock_search_results
from ..errors import BrooBotError, RateLimited, UpstreamUnavailable
from ..types import ScrapedSource, SearchHit

logger = logging.getLogger(__name__)

MAX_SOURCE_CHARS = 5000
MAX_PROMPT_SOURCE_CHARS = 3000
MIN_SOURCE_CHARS = 100
EXCERPT_CHARS = 200


class ResearchFailed(UpstreamUnavailable):
    """No usable sources could be collected."""


def build_synthesis_prompt(query: str, sources: list[ScrapedSource]) -> str:
    blocks = []
    for i, source in enumerate(sources, start=1):
        content = source.content[:MAX_PROMPT_SOURCE_CHARS]
        if len(source.content) > MAX_PROMPT_SOURCE_CHARS:
            content += "\n...(content truncated)"
        blocks.append(f"\n## Source {i}: {source.title}\nURL: {source.url}\n\n{content}\n")
    sources_text = "\n\n---\n\n".join(blocks)

    return f"""Research Query: "{query}"

You are a research assistant. Synthesize the following sources into a comprehensive research report.

Sources:
{sources_text}

Create a well-structured research report with:

1. **Executive Summary** (2-3 sentences highlighting key findings)
2. **Key Findings** (4-6 bullet points of main discoveries)
3. **Detailed Analysis** (2-4 paragraphs exploring the topic in depth)
4. **Insights & Implications** (1-2 paragraphs on what this means)
5. **Conclusion** (1 paragraph summarizing everything)
6. **Sources** (numbered list of all sources used)

Throughout the report, cite sources using [1], [2], etc. Format in clean Markdown."""


def mock_synthesis(query: str, sources: list[ScrapedSource]) -> str:
    listing = "\n".join(f"[{i}] {s.title} ({s.url})" for i, s in enumerate(sources, start=1))
    total_chars = sum(len(s.content) for s in sources)
    return f"""# Research Report: {query}

**[MOCK MODE - API KEY REQUIRED]** Real synthesis requires Claude API.

## Sources Found

{listing}

## Content Collected

Successfully scraped {len(sources)} sources with a total of {total_chars} characters of content.

To get AI-synthesized research, set ANTHROPIC_API_KEY and restart the server."""


def mock_research(query: str) -> dict[str, Any]:
    """Full canned research result, a function of the query only."""
    hits = mock_search_results(query, 3)
    report = f"""# Research Report: {query}

**[MOCK MODE]** This is a mock research report. To enable real research:
1. Set ANTHROPIC_API_KEY
2. (Optional) Set SERPER_API_KEY for better search results
3. Restart the backend server

## Executive Summary

This research explores {query} and its various aspects. The findings indicate that this is an important topic with multiple dimensions worth exploring.

## Key Findings

- {query} is a complex topic with multiple perspectives
- There are various approaches to understanding {query}
- Expert opinions vary on different aspects of {query}
- Recent developments have added new dimensions to {query}

## Detailed Analysis

The topic of {query} has gained significant attention in recent times. Multiple factors contribute to its importance and relevance in today's context.

Research indicates that {query} encompasses various elements that need to be considered holistically. The interconnected nature of these elements makes it essential to approach the topic systematically.

## Insights & Implications

Understanding {query} has practical implications for various stakeholders. The insights gained from this research can inform decision-making and strategy development.

## Conclusion

{query} remains an important area for continued exploration and research. The complexity of the topic necessitates ongoing investigation and analysis.

## Sources

[1] Understanding {query} - Comprehensive Guide (example.com)
[2] {query}: Best Practices and Tips (example.org)
[3] The Ultimate Guide to {query} (example.net)

---

**Note:** This is a mock report. Configure Claude API for real research synthesis."""

    return {
        "query": query,
        "report": report,
        "sources": [{"title": h.title, "url": h.url, "excerpt": h.snippet} for h in hits],
        "metadata": {
            "sourcesScraped": len(hits),
            "model": "mock",
            "isMock": True,
            "usage": {"input_tokens": 0, "output_tokens": 0},
            "cost": 0,
        },
    }


class DeepResearch:
    """Research pipeline for the deep_research chat mode."""

    def __init__(
        self,
        search: WebSearchClient,
        reader: ReaderClient,
        client: Optional[CompletionClient] = None,
        mock_mode: bool = False,
    ) -> None:
        self._search = search
        self._reader = reader
        self._client = client
        self._mock_mode = mock_mode

    async def perform(self, query: str, max_sources: int = 5) -> dict[str, Any]:
        """Run the full pipeline.

        Raises:
            BrooBotError: a real provider is configured and failed for a
                reason other than rate limiting
        """
        try:
            logger.info(f"Starting research for: \"{query}\"")
            hits = await self._search.search(query, max_sources)
            if not hits:
                raise ResearchFailed("No search results found")

            logger.info(f"Scraping {len(hits)} sources")
            sources = await self.scrape_sources(hits)
            if not sources:
                raise ResearchFailed("Failed to scrape any content")

            logger.info("Synthesizing research")
            report, model, usage, cost = await self._synthesize(query, sources)
        except BrooBotError as e:
            logger.error(f"Research failed: {e}")
            if self._client is None or self._mock_mode or isinstance(e, RateLimited):
                logger.info("Falling back to mock research")
                return mock_research(query)
            raise

        logger.info("Research completed successfully")
        return {
            "query": query,
            "report": report,
            "sources": [
                {"title": s.title, "url": s.url, "excerpt": s.content[:EXCERPT_CHARS] + "..."}
                for s in sources
            ],
            "metadata": {
                "sourcesScraped": len(sources),
                "model": model,
                "usage": usage,
                "cost": cost,
            },
        }

    async def scrape_sources(self, hits: list[SearchHit]) -> list[ScrapedSource]:
        """Scrape all hits concurrently; keep sources with enough content."""
        scraped = await asyncio.gather(*[self._scrape_one(hit) for hit in hits])
        return [s for s in scraped if s.content and len(s.content) > MIN_SOURCE_CHARS]

    async def _scrape_one(self, hit: SearchHit) -> ScrapedSource:
        try:
            content = await self._reader.fetch_as_text(hit.url)
        except UpstreamUnavailable as e:
            logger.warning(f"Scrape failed for {hit.url}: {e}")
            return ScrapedSource(title=hit.title, url=hit.url, content=hit.snippet, success=False)

        logger.debug(f"Scraped {hit.url} ({len(content)} chars)")
        return ScrapedSource(title=hit.title, url=hit.url, content=content[:MAX_SOURCE_CHARS])

    async def _synthesize(
        self, query: str, sources: list[ScrapedSource]
    ) -> tuple[str, str, dict[str, int], float]:
        if self._client is None or self._mock_mode:
            return mock_synthesis(query, sources), "mock", {"input_tokens": 0, "output_tokens": 0}, 0

        completion = await self._client.complete(
            [{"role": "user", "content": build_synthesis_prompt(query, sources)}],
            model_tier="quality",
            max_tokens=4096,
            temperature=0.3,
        )
        return completion.text, completion.model, completion.usage.to_dict(), completion.cost_usd
