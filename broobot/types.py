"""
BrooBot type definitions.

This module contains the public types shared by the tool search pipeline,
the chat modes and the web layer.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional


class ChatMode(Enum):
    """Supported chat modes."""
    BUDDY = "buddy"
    AI_TOOL_ASSISTANT = "ai_tool_assistant"
    DEEP_RESEARCH = "deep_research"


@dataclass
class TierInfo:
    """Pricing and feature info for a free or paid tier."""
    features: List[str] = field(default_factory=list)
    price: Optional[str] = None
    model: Optional[str] = None
    limitations: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"features": list(self.features)}
        if self.price is not None:
            data["price"] = self.price
        if self.model is not None:
            data["model"] = self.model
        if self.limitations is not None:
            data["limitations"] = self.limitations
        return data


@dataclass
class ToolRecord:
    """A recommendation candidate, either from the static dataset or scraped."""
    id: str
    name: str
    description: str
    category: str
    url: str
    subcategories: List[str] = field(default_factory=list)
    is_free: bool = False
    free_tier: Optional[TierInfo] = None
    paid_tier: Optional[TierInfo] = None
    use_cases: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    rating: float = 0.0
    is_scraped: bool = False
    pros: List[str] = field(default_factory=list)
    cons: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        # Lower-case, first occurrence wins
        self.tags = list(dict.fromkeys(t.lower() for t in self.tags))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the camelCase keys the frontend expects."""
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "subcategories": list(self.subcategories),
            "url": self.url,
            "isFree": self.is_free,
            "useCases": list(self.use_cases),
            "tags": list(self.tags),
            "rating": self.rating,
            "isScraped": self.is_scraped,
        }
        if self.free_tier is not None:
            data["freeTier"] = self.free_tier.to_dict()
        if self.paid_tier is not None:
            data["paidTier"] = self.paid_tier.to_dict()
        if self.pros:
            data["pros"] = list(self.pros)
        if self.cons:
            data["cons"] = list(self.cons)
        return data


@dataclass
class ScoredToolRecord(ToolRecord):
    """A ToolRecord with the relevance score assigned by the scorer."""
    relevance_score: float = 0.0

    @classmethod
    def from_record(cls, record: ToolRecord, score: float) -> "ScoredToolRecord":
        values = {f: getattr(record, f) for f in record.__dataclass_fields__}
        return cls(**values, relevance_score=score)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["relevanceScore"] = self.relevance_score
        return data


@dataclass
class SearchOptions:
    """Ranking options for a tool search."""
    limit: int = 5
    categories: Optional[List[str]] = None
    free_only: bool = False
    min_rating: float = 0.0

    def to_filters(self) -> Dict[str, Any]:
        return {
            "limit": self.limit,
            "freeOnly": self.free_only,
            "minRating": self.min_rating,
            "categories": list(self.categories) if self.categories else None,
        }


@dataclass
class ToolSearchResult:
    """Ranked results plus the rendered recommendation text."""
    query: str
    results: List[ScoredToolRecord]
    formatted_message: str
    options: SearchOptions = field(default_factory=SearchOptions)


@dataclass
class TokenUsage:
    """Token accounting returned by the completion provider."""
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total(self) -> int:
        return self.input_tokens + self.output_tokens

    def to_dict(self) -> Dict[str, int]:
        return {"input_tokens": self.input_tokens, "output_tokens": self.output_tokens}


@dataclass
class Completion:
    """Text completion result."""
    text: str
    model: str
    usage: TokenUsage = field(default_factory=TokenUsage)
    cost_usd: float = 0.0


@dataclass
class SearchHit:
    """A single web search result."""
    title: str
    url: str
    snippet: str = ""


@dataclass
class ScrapedSource:
    """Content collected from one research source."""
    title: str
    url: str
    content: str
    success: bool = True


def with_score(record: ToolRecord, score: float) -> ScoredToolRecord:
    """Attach a relevance score to a record without mutating it."""
    if isinstance(record, ScoredToolRecord):
        return replace(record, relevance_score=score)
    return ScoredToolRecord.from_record(record, score)
