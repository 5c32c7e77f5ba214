"""Keyword relevance scoring for tool recommendations.

Every candidate accumulates points from independent signals:

    exact name match            +50
    partial name match          +30  (only when not exact)
    category contains query     +25
    subcategory overlap         +15  per subcategory
    tag equals a query word     +12  per tag
    tag/word containment        +6   per (tag, word) pair
    use case contains a word    +4   per (use case, word) pair
    description contains word   +3   per word
    free tool, "free" asked     +15
    free tool                   +20
    scraped (fresh) tool        +10
    rating                      +0.5 x rating

Only the relative order of scores is meaningful.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..types import ScoredToolRecord, SearchOptions, ToolRecord, with_score

logger = logging.getLogger(__name__)

MIN_WORD_LENGTH = 3

EXACT_NAME_POINTS = 50
PARTIAL_NAME_POINTS = 30
CATEGORY_POINTS = 25
SUBCATEGORY_POINTS = 15
TAG_EXACT_POINTS = 12
TAG_PARTIAL_POINTS = 6
USE_CASE_POINTS = 4
DESCRIPTION_POINTS = 3
FREE_KEYWORD_POINTS = 15
FREE_TOOL_POINTS = 20
SCRAPED_POINTS = 10
RATING_WEIGHT = 0.5


def query_words(query_lower: str) -> list[str]:
    """Whitespace-split words longer than two characters."""
    return [w for w in query_lower.split() if len(w) >= MIN_WORD_LENGTH]


def score_tool(tool: ToolRecord, query_lower: str, words: Sequence[str]) -> float:
    """Additive relevance score of one candidate."""
    score = 0.0

    if query_lower:
        name = tool.name.lower()
        if name == query_lower:
            score += EXACT_NAME_POINTS
        elif query_lower in name:
            score += PARTIAL_NAME_POINTS

        if query_lower in tool.category.lower():
            score += CATEGORY_POINTS

        for sub in tool.subcategories:
            sub_lower = sub.lower()
            if sub_lower in query_lower or query_lower in sub_lower:
                score += SUBCATEGORY_POINTS

    for tag in tool.tags:
        tag_lower = tag.lower()
        if tag_lower in words:
            score += TAG_EXACT_POINTS
        for word in words:
            if word in tag_lower or tag_lower in word:
                score += TAG_PARTIAL_POINTS

    for use_case in tool.use_cases:
        use_case_lower = use_case.lower()
        for word in words:
            if word in use_case_lower:
                score += USE_CASE_POINTS

    description = tool.description.lower()
    for word in words:
        if word in description:
            score += DESCRIPTION_POINTS

    if tool.is_free and "free" in words:
        score += FREE_KEYWORD_POINTS
    if tool.is_free:
        score += FREE_TOOL_POINTS
    if tool.is_scraped:
        score += SCRAPED_POINTS

    score += (tool.rating or 0.0) * RATING_WEIGHT
    return score


def rank(
    query: str,
    pool: Sequence[ToolRecord],
    options: Optional[SearchOptions] = None,
) -> list[ScoredToolRecord]:
    """Score, filter, sort and truncate the candidate pool.

    Pure and deterministic. Ties keep input order, so entries placed
    earlier in the pool win equal scores. A blank query carries no
    relevance evidence and yields no results.
    """
    if options is None:
        options = SearchOptions()

    query_lower = query.strip().lower()
    if not query_lower:
        return []
    words = query_words(query_lower)

    results = [with_score(tool, score_tool(tool, query_lower, words)) for tool in pool]
    results = [r for r in results if r.relevance_score > 0]

    if options.free_only:
        results = [r for r in results if r.is_free]
    if options.min_rating and options.min_rating > 0:
        results = [r for r in results if (r.rating or 0.0) >= options.min_rating]
    if options.categories:
        allowed = set(options.categories)
        results = [r for r in results if r.category in allowed]

    results.sort(key=lambda r: r.relevance_score, reverse=True)
    total = len(results)
    results = results[: max(options.limit, 0)]

    logger.debug(f"Ranked {total} matching tools, returning top {len(results)}")
    return results


class RelevanceScorer:
    """Object wrapper around rank() for dependency injection."""

    def rank(
        self,
        query: str,
        pool: Sequence[ToolRecord],
        options: Optional[SearchOptions] = None,
    ) -> list[ScoredToolRecord]:
        return rank(query, pool, options)
