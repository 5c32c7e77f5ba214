"""Unit tests for the listing scraper: block scan, fallback, fetcher.

Uses a reader-text snapshot from tests/fixtures/ for deterministic testing.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from broobot.errors import UpstreamUnavailable
from broobot.tools.scraper import (
    MAX_FALLBACK_URLS,
    SCRAPED_CATEGORY,
    ScrapeFetcher,
    extract_fallback,
    extract_tags,
    extract_url,
    iter_lines,
    name_from_url,
    parse,
    parse_listing,
    resolve_name,
)

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def listing_text() -> str:
    return (FIXTURES / "free_tools.txt").read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Line helpers
# ---------------------------------------------------------------------------


class TestHelpers:
    def test_iter_lines_skips_blank(self) -> None:
        """Blank lines are skipped and lines stripped."""
        assert list(iter_lines("  a  \n\n   \nb\n")) == ["a", "b"]

    def test_extract_url_stops_at_paren(self) -> None:
        """URLs end at a closing parenthesis."""
        assert extract_url("[Tool](https://tool.ai/x) more") == "https://tool.ai/x"

    def test_extract_url_none(self) -> None:
        """No URL gives an empty string."""
        assert extract_url("no link here") == ""

    def test_extract_tags_vocabulary_order(self) -> None:
        """Tags follow vocabulary order, case-insensitively."""
        assert extract_tags("Video and IMAGE generation") == ["image", "video", "generation"]

    def test_name_from_url_strips_www(self) -> None:
        """Names derive from the host without www."""
        assert name_from_url("https://www.pixelcut.ai/app") == "Pixelcut"

    def test_name_from_url_without_host(self) -> None:
        """A URL without a host gives None."""
        assert name_from_url("https://:80/path") is None

    def test_resolve_name_prefers_markdown_label(self) -> None:
        """A markdown link label is the name."""
        line = "1. [Writesonic](https://writesonic.com/)"
        assert resolve_name(line, "https://writesonic.com/") == "Writesonic"

    def test_resolve_name_leading_text(self) -> None:
        """Text before the URL is the name."""
        line = "Voicemaker - https://voicemaker.in/"
        assert resolve_name(line, "https://voicemaker.in/") == "Voicemaker"

    def test_resolve_name_falls_back_to_domain(self) -> None:
        """Otherwise the domain is the name."""
        line = "https://www.gamma.app/ presentation builder"
        assert resolve_name(line, "https://www.gamma.app/") == "Gamma"


# ---------------------------------------------------------------------------
# Block scan
# ---------------------------------------------------------------------------


class TestParseListing:
    def test_parses_fixture_blocks(self, listing_text: str) -> None:
        """Each tool block becomes one record."""
        tools = parse_listing(listing_text)
        assert [t.name for t in tools] == ["Writesonic", "Pixelcut", "Voicemaker"]

    def test_reader_header_is_not_a_tool(self, listing_text: str) -> None:
        """Reader preamble lines are skipped."""
        urls = [t.url for t in parse_listing(listing_text)]
        assert "https://theresanaiforthat.com/s/free/" not in urls

    def test_urls(self, listing_text: str) -> None:
        """Record URLs come from the block start lines."""
        urls = [t.url for t in parse_listing(listing_text)]
        assert urls == [
            "https://writesonic.com/",
            "https://www.pixelcut.ai/",
            "https://voicemaker.in/",
        ]

    def test_description_accumulates_following_lines(self, listing_text: str) -> None:
        """Following lines build the description."""
        writesonic = parse_listing(listing_text)[0]
        assert writesonic.description == (
            "AI writing assistant for blog posts and marketing copy. Task: Writing"
        )

    def test_short_lines_ignored(self, listing_text: str) -> None:
        """Short lines are not added to the description."""
        voicemaker = parse_listing(listing_text)[2]
        assert voicemaker.description == "Convert text to speech with natural sounding voices."

    def test_tags_forced_and_deduplicated(self, listing_text: str) -> None:
        """free and latest are always tagged first."""
        writesonic = parse_listing(listing_text)[0]
        assert writesonic.tags == ["free", "latest", "writing", "marketing"]
        assert writesonic.use_cases == ["writing", "marketing"]

    def test_scraped_record_shape(self, listing_text: str) -> None:
        """Scraped records carry the fixed shape."""
        for tool in parse_listing(listing_text):
            assert tool.is_free is True
            assert tool.is_scraped is True
            assert tool.rating == 4.0
            assert tool.category == SCRAPED_CATEGORY
            assert tool.subcategories == ["Free", "Trending"]
            assert tool.free_tier is not None
            assert tool.free_tier.features == ["Free tier available"]
            assert tool.id.startswith("scraped_")

    def test_ids_unique(self, listing_text: str) -> None:
        """Every record has a distinct id."""
        ids = [t.id for t in parse_listing(listing_text)]
        assert len(set(ids)) == len(ids)

    def test_default_description_and_use_cases(self) -> None:
        """Blocks without text get default values."""
        tools = parse_listing("[Lonely Tool](https://lonely.ai/)")
        assert len(tools) == 1
        assert tools[0].description == "AI tool from theresanaiforthat.com"
        assert tools[0].use_cases == ["AI automation", "Productivity"]

    def test_heading_never_starts_candidate(self) -> None:
        """Heading lines never start a tool."""
        assert parse_listing("## Trending https://trending.ai/tools") == []


# ---------------------------------------------------------------------------
# Fallback extraction
# ---------------------------------------------------------------------------


class TestFallback:
    def test_one_record_per_url(self) -> None:
        """Fallback emits one record per URL."""
        tools = extract_fallback("see https://alpha.ai, and https://www.beta.io;")
        assert [t.name for t in tools] == ["Alpha", "Beta"]
        assert [t.url for t in tools] == ["https://alpha.ai", "https://www.beta.io"]

    def test_capped(self) -> None:
        """Fallback output is capped."""
        text = " ".join(f"https://tool{i}.ai/" for i in range(MAX_FALLBACK_URLS + 5))
        assert len(extract_fallback(text)) == MAX_FALLBACK_URLS

    def test_skips_underivable_names(self) -> None:
        """URLs without a name are skipped."""
        tools = extract_fallback("https://:80/x https://ok.ai/")
        assert [t.name for t in tools] == ["Ok"]

    def test_generic_record(self) -> None:
        """Fallback records use the generic description."""
        tool = extract_fallback("https://alpha.ai/")[0]
        assert tool.description == "Free AI tool from theresanaiforthat.com"
        assert tool.tags == ["free", "latest", "ai"]
        assert tool.is_scraped is True


class TestParse:
    def test_empty_string(self) -> None:
        """Empty input gives no tools."""
        assert parse("") == []

    def test_no_urls(self) -> None:
        """Text without URLs gives no tools."""
        assert parse("Just some text\nwith several lines\nbut nothing linked") == []

    def test_structured_result_wins(self, listing_text: str) -> None:
        """Block scan results take priority."""
        assert len(parse(listing_text)) == 3

    def test_headings_only_uses_fallback(self) -> None:
        """With no blocks, fallback extraction is used."""
        text = "# Top picks https://alpha.ai/ https://beta.ai/\n## More https://gamma.ai/"
        tools = parse(text)
        assert [t.name for t in tools] == ["Alpha", "Beta", "Gamma"]


# ---------------------------------------------------------------------------
# Fetcher
# ---------------------------------------------------------------------------


def _reader(text: str | None = None, error: Exception | None = None) -> MagicMock:
    reader = MagicMock()
    if error is not None:
        reader.fetch_as_text = AsyncMock(side_effect=error)
    else:
        reader.fetch_as_text = AsyncMock(return_value=text)
    return reader


class TestScrapeFetcher:
    @pytest.mark.asyncio
    async def test_fetch_latest(self, listing_text: str) -> None:
        """The fetcher reads the listing through the reader."""
        reader = _reader(listing_text)
        fetcher = ScrapeFetcher(reader=reader, listing_url="https://example.com/free/")

        tools = await fetcher.fetch_latest()

        assert len(tools) == 3
        reader.fetch_as_text.assert_awaited_once_with("https://example.com/free/")

    @pytest.mark.asyncio
    async def test_upstream_failure_yields_empty(self) -> None:
        """Reader failures yield an empty list."""
        fetcher = ScrapeFetcher(reader=_reader(error=UpstreamUnavailable("down", 503)))
        assert await fetcher.fetch_latest() == []

    @pytest.mark.asyncio
    async def test_unexpected_failure_yields_empty(self) -> None:
        """Unexpected errors yield an empty list."""
        fetcher = ScrapeFetcher(reader=_reader(error=RuntimeError("boom")))
        assert await fetcher.fetch_latest() == []

    def test_default_listing_url(self) -> None:
        """The default listing URL is the free tools page."""
        assert ScrapeFetcher(reader=_reader("")).listing_url == (
            "https://theresanaiforthat.com/s/free/"
        )
