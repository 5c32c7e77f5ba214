"""Markdown rendering of ranked tool recommendations."""

from __future__ import annotations

import math
from typing import Sequence

from ..types import ScoredToolRecord

SOURCE_SITE = "theresanaiforthat.com"
TIP_LINE = "💡 **Tip:** Click any link above to visit the tool directly!"


def no_matches_message(query: str) -> str:
    return (
        f"I couldn't find any AI tools matching \"{query}\". Try:\n"
        "- Being more specific (e.g., \"image generation\" instead of \"images\")\n"
        "- Using different keywords\n"
        "- Asking about a tool category (e.g., \"writing tools\", \"coding assistants\")"
    )


def stars(rating: float) -> str:
    return "⭐" * max(math.floor(rating or 0), 0)


def _render_tool(index: int, tool: ScoredToolRecord) -> str:
    badge = "🟢 **FREE**" if tool.is_free else "🔵 **PAID**"
    price = f" ({tool.paid_tier.price})" if tool.paid_tier and tool.paid_tier.price else ""
    latest = " 🆕 **LATEST**" if tool.is_scraped else ""

    lines = [
        f"### {index}. {tool.name} {badge}{price}{latest}\n",
        f"{tool.description}\n\n",
        f"**Best for:** {', '.join(tool.use_cases[:3])}\n",
        f"**Rating:** {stars(tool.rating)} {tool.rating:g}/5\n",
        f"**Link:** [Visit {tool.name}]({tool.url})\n\n",
    ]
    if tool.free_tier and tool.free_tier.features:
        lines.append(f"✨ **Free tier:** {', '.join(tool.free_tier.features[:2])}\n\n")
    if tool.is_scraped:
        lines.append(f"📌 **Source:** Fresh from {SOURCE_SITE}\n\n")
    lines.append("---\n\n")
    return "".join(lines)


def render(query: str, tools: Sequence[ScoredToolRecord]) -> str:
    """Recommendation report for ranked tools, or the no-matches guidance."""
    if not tools:
        return no_matches_message(query)

    parts = [f"Based on your request for **\"{query}\"**, here are the best AI tools I found:\n\n"]
    parts.extend(_render_tool(i, tool) for i, tool in enumerate(tools, start=1))
    parts.append(TIP_LINE)
    return "".join(parts)


class RecommendationFormatter:
    """Object wrapper around render() for dependency injection."""

    def render(self, query: str, tools: Sequence[ScoredToolRecord]) -> str:
        return render(query, tools)
