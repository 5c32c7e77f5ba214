"""Live listing scraper: theresanaiforthat.com free tools via the reader proxy.

Expected page structure (reader text rendering):
  - One tool per block; the block's first line carries the tool link,
    usually as a Markdown link ``[Tool Name](https://...)``
  - Following lines hold the description and task keywords
  - Headings start with ``#`` and are never tool entries

The layout changes without notice, so parsing is best-effort: when the
block scan finds nothing, every absolute URL on the page becomes a
generic entry named after its domain.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator
from urllib.parse import urlparse

from ..clients.reader import ReaderClient
from ..config import DEFAULT_LISTING_URL
from ..types import TierInfo, ToolRecord
from ..utils.helpers import generate_id

logger = logging.getLogger(__name__)

SCRAPED_CATEGORY = "Free AI Tools"
SCRAPED_RATING = 4.0
MAX_FALLBACK_URLS = 20
MIN_LINE_LENGTH = 10

TOPIC_KEYWORDS = (
    "writing", "coding", "image", "video", "audio", "design",
    "marketing", "research", "productivity", "chatbot", "generation",
    "analytics", "automation", "text", "speech", "translation",
)

# First URL in a line; stops at separators that commonly trail links
_URL_PATTERN = re.compile(r"https?://[^\s,;)\]]+")

# Blind extraction for the fallback path
_ANY_URL_PATTERN = re.compile(r"https?://[^\s]+")
_TRAILING_PUNCT = re.compile(r"[,;]$")

# [Label](https://...) but not ![image](...)
_MD_LINK = re.compile(r"(?<!!)\[([^\]]+)\]\(\s*https?://")

# Metadata header emitted by the reader proxy above the page content
_READER_META = re.compile(r"^(?:Title|URL Source|Published Time|Markdown Content):")

_NAME_STRIP = " \t-*•|:>#"
_MAX_NAME_LENGTH = 60


class _ScanState(Enum):
    AWAITING_CANDIDATE = "awaiting_candidate"
    ACCUMULATING = "accumulating_description"


@dataclass
class _Candidate:
    url: str
    name: str | None
    description: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)


def iter_lines(text: str) -> Iterator[str]:
    """Yield non-empty trimmed lines."""
    for raw in text.splitlines():
        line = raw.strip()
        if line:
            yield line


def extract_url(text: str) -> str:
    match = _URL_PATTERN.search(text)
    return match.group(0) if match else ""


def extract_tags(text: str) -> list[str]:
    """Topic keywords contained in text, in vocabulary order."""
    lower = text.lower()
    return [tag for tag in TOPIC_KEYWORDS if tag in lower]


def name_from_url(url: str) -> str | None:
    """Capitalized first domain label, ``www.`` stripped. None if underivable."""
    try:
        host = urlparse(url).hostname
    except ValueError:
        return None
    if not host:
        return None
    if host.startswith("www."):
        host = host[4:]
    label = host.split(".")[0]
    if not label:
        return None
    return label[:1].upper() + label[1:]


def resolve_name(line: str, url: str) -> str | None:
    """Tool name from a Markdown link label, leading text, or the domain."""
    link = _MD_LINK.search(line)
    if link:
        label = link.group(1).strip(_NAME_STRIP)
        if label:
            return label[:_MAX_NAME_LENGTH]

    leading = line.split(url, 1)[0].strip(_NAME_STRIP + "()[]!")
    if 1 < len(leading) <= _MAX_NAME_LENGTH:
        return leading

    return name_from_url(url)


def _starts_candidate(line: str) -> bool:
    return not line.startswith("#") and _URL_PATTERN.search(line) is not None


def _scraped_record(
    name: str,
    url: str,
    description: str,
    use_cases: list[str],
    tags: list[str],
) -> ToolRecord:
    return ToolRecord(
        id=generate_id("scraped"),
        name=name,
        description=description,
        category=SCRAPED_CATEGORY,
        subcategories=["Free", "Trending"],
        url=url,
        is_free=True,
        free_tier=TierInfo(features=["Free tier available"]),
        use_cases=use_cases,
        tags=["free", "latest", *tags],
        rating=SCRAPED_RATING,
        is_scraped=True,
    )


def _flush(candidate: _Candidate) -> ToolRecord:
    topics = list(dict.fromkeys(candidate.tags))
    description = " ".join(candidate.description).strip()
    return _scraped_record(
        name=candidate.name or "Unknown Tool",
        url=candidate.url,
        description=description or "AI tool from theresanaiforthat.com",
        use_cases=topics[:5] or ["AI automation", "Productivity"],
        tags=topics,
    )


def parse_listing(text: str) -> list[ToolRecord]:
    """Block scan of the reader text into scraped tool records."""
    tools: list[ToolRecord] = []
    state = _ScanState.AWAITING_CANDIDATE
    current: _Candidate | None = None

    for line in iter_lines(text):
        if len(line) < MIN_LINE_LENGTH or _READER_META.match(line):
            continue

        if _starts_candidate(line):
            if current is not None and current.name:
                tools.append(_flush(current))
            url = extract_url(line)
            current = _Candidate(url=url, name=resolve_name(line, url))
            state = _ScanState.ACCUMULATING
        elif state is _ScanState.ACCUMULATING and current is not None:
            current.description.append(line)
            current.tags.extend(extract_tags(line))

    if current is not None and current.name:
        tools.append(_flush(current))

    return tools


def extract_fallback(text: str) -> list[ToolRecord]:
    """One generic record per absolute URL in text, capped at MAX_FALLBACK_URLS."""
    tools: list[ToolRecord] = []
    for raw_url in _ANY_URL_PATTERN.findall(text)[:MAX_FALLBACK_URLS]:
        url = _TRAILING_PUNCT.sub("", raw_url)
        name = name_from_url(url)
        if not name:
            continue
        tools.append(
            _scraped_record(
                name=name,
                url=url,
                description="Free AI tool from theresanaiforthat.com",
                use_cases=["AI automation", "Productivity"],
                tags=["ai"],
            )
        )
    return tools


def parse(text: str) -> list[ToolRecord]:
    """Parse reader text; never raises."""
    try:
        tools = parse_listing(text)
        if not tools:
            tools = extract_fallback(text)
    except Exception as e:
        logger.error(f"Listing parse error: {e}")
        return []
    return tools


class ScrapeFetcher:
    """Fetches the free-tools listing and parses it into ToolRecords."""

    def __init__(
        self,
        reader: ReaderClient | None = None,
        listing_url: str = DEFAULT_LISTING_URL,
    ) -> None:
        self._reader = reader or ReaderClient()
        self._listing_url = listing_url

    @property
    def listing_url(self) -> str:
        return self._listing_url

    async def fetch_latest(self) -> list[ToolRecord]:
        """Scrape the listing. Any failure yields an empty list."""
        logger.info(f"Fetching latest free AI tools from {self._listing_url}")
        try:
            text = await self._reader.fetch_as_text(self._listing_url)
        except Exception as e:
            logger.error(f"Failed to scrape tools: {e}")
            return []

        tools = parse(text)
        logger.info(f"Scraped {len(tools)} free AI tools")
        return tools
