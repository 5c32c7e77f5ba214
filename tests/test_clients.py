"""Tests for upstream clients: reader proxy, web search, completions, retry."""

from __future__ import annotations

import json

import httpx
import pytest

from broobot.clients.completion import (
    CompletionClient,
    calculate_cost,
    create_completion_client,
)
from broobot.clients.reader import ReaderClient, extract_content
from broobot.clients.search import WebSearchClient, mock_search_results
from broobot.config import BrooBotConfig
from broobot.errors import RateLimited, UpstreamUnavailable
from broobot.types import TokenUsage
from broobot.utils.retry import RetryConfig, retry_async

MODELS = {"fast": "claude-fast", "quality": "claude-quality"}
NO_WAIT = RetryConfig(max_attempts=3, backoff_base=0.0)


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


# ---------------------------------------------------------------------------
# Reader proxy
# ---------------------------------------------------------------------------


class TestReaderClient:
    def test_proxy_url_encodes_target(self) -> None:
        """The target URL is percent-encoded into the proxy path."""
        reader = ReaderClient()
        assert reader.proxy_url("https://theresanaiforthat.com/s/free/") == (
            "https://r.jina.ai/https%3A%2F%2Ftheresanaiforthat.com%2Fs%2Ffree%2F"
        )

    @pytest.mark.asyncio
    async def test_fetch_plain_text(self) -> None:
        """A plain-text reader response is returned as-is."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["headers"] = request.headers
            return httpx.Response(200, text="[Tool](https://tool.ai/)")

        reader = ReaderClient(base_url="https://reader.test", client=_client(handler))
        text = await reader.fetch_as_text("https://example.com/list")

        assert text == "[Tool](https://tool.ai/)"
        assert seen["url"].startswith("https://reader.test/https%3A%2F%2Fexample.com")
        assert seen["headers"]["Accept"] == "application/json"
        assert seen["headers"]["X-Return-Format"] == "text"

    @pytest.mark.asyncio
    async def test_fetch_json_envelope(self) -> None:
        """Content is unwrapped from a JSON envelope."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"code": 200, "data": {"content": "page text"}})

        reader = ReaderClient(client=_client(handler))
        assert await reader.fetch_as_text("https://example.com/") == "page text"

    @pytest.mark.asyncio
    async def test_http_error(self) -> None:
        """HTTP errors become UpstreamUnavailable with the status code."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="unavailable")

        reader = ReaderClient(client=_client(handler))
        with pytest.raises(UpstreamUnavailable) as exc_info:
            await reader.fetch_as_text("https://example.com/")
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_transport_error(self) -> None:
        """Transport errors become UpstreamUnavailable without a status."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        reader = ReaderClient(client=_client(handler))
        with pytest.raises(UpstreamUnavailable) as exc_info:
            await reader.fetch_as_text("https://example.com/")
        assert exc_info.value.status_code is None


class TestExtractContent:
    def test_plain(self) -> None:
        """Non-JSON text passes through."""
        assert extract_content("just text") == "just text"

    def test_top_level_content(self) -> None:
        """A top-level content field is extracted."""
        assert extract_content(json.dumps({"content": "abc"})) == "abc"

    def test_nested_content(self) -> None:
        """data.content is extracted."""
        assert extract_content(json.dumps({"data": {"content": "xyz"}})) == "xyz"

    def test_invalid_json_returned_as_is(self) -> None:
        """Broken JSON is returned unchanged."""
        assert extract_content("{not json") == "{not json"

    def test_unknown_shape_returned_as_is(self) -> None:
        """JSON without content is returned unchanged."""
        body = json.dumps({"data": {"title": "t"}})
        assert extract_content(body) == body


# ---------------------------------------------------------------------------
# Web search
# ---------------------------------------------------------------------------


class TestMockSearchResults:
    def test_three_deterministic_hits(self) -> None:
        """Mock results depend only on the query."""
        hits = mock_search_results("AI Agents")
        assert [h.url for h in hits] == [
            "https://example.com/ai-agents",
            "https://example.org/best-practices-ai-agents",
            "https://example.net/ultimate-guide-ai-agents",
        ]
        assert mock_search_results("AI Agents") == hits

    def test_count_caps(self) -> None:
        """count limits the number of mock hits."""
        assert len(mock_search_results("x", 2)) == 2


class TestWebSearchClient:
    @pytest.mark.asyncio
    async def test_without_key_uses_mock(self) -> None:
        """No API key means mock results."""
        client = WebSearchClient()
        assert not client.is_configured
        assert await client.search("rust async") == mock_search_results("rust async")

    @pytest.mark.asyncio
    async def test_serper_results(self) -> None:
        """Serper organic results map to SearchHits."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["key"] = request.headers["X-API-KEY"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"organic": [
                {"title": "A", "link": "https://a.example/", "snippet": "first"},
                {"title": "No link"},
                {"title": "B", "link": "https://b.example/"},
            ]})

        client = WebSearchClient(api_key="serper", client=_client(handler), retry=NO_WAIT)
        hits = await client.search("llm agents", count=3)

        assert [h.url for h in hits] == ["https://a.example/", "https://b.example/"]
        assert hits[0].snippet == "first"
        assert seen["key"] == "serper"
        assert seen["body"]["q"] == "llm agents"
        assert seen["body"]["num"] == 3

    @pytest.mark.asyncio
    async def test_rate_limit_falls_back_without_retry(self) -> None:
        """A 429 falls back to mock results at once."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(429)

        client = WebSearchClient(api_key="serper", client=_client(handler), retry=NO_WAIT)
        hits = await client.search("topic")

        assert hits == mock_search_results("topic")
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_transport_errors_retried_then_mock(self) -> None:
        """Transport errors are retried before falling back."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            raise httpx.ConnectError("refused", request=request)

        client = WebSearchClient(api_key="serper", client=_client(handler), retry=NO_WAIT)
        hits = await client.search("topic")

        assert hits == mock_search_results("topic")
        assert len(calls) == NO_WAIT.max_attempts

    @pytest.mark.asyncio
    async def test_non_json_body_falls_back(self) -> None:
        """A 200 with an HTML body should yield mock results."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>oops</html>")

        client = WebSearchClient(api_key="serper", client=_client(handler), retry=NO_WAIT)

        assert await client.search("python", 3) == mock_search_results("python", 3)

    @pytest.mark.asyncio
    async def test_malformed_organic_items_fall_back(self) -> None:
        """Non-object entries in organic should yield mock results."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"organic": ["x"]})

        client = WebSearchClient(api_key="serper", client=_client(handler), retry=NO_WAIT)

        assert await client.search("python", 3) == mock_search_results("python", 3)

    @pytest.mark.asyncio
    async def test_non_object_payload_falls_back(self) -> None:
        """A JSON list instead of an object should yield mock results."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=[1, 2, 3])

        client = WebSearchClient(api_key="serper", client=_client(handler), retry=NO_WAIT)

        assert await client.search("python") == mock_search_results("python")


# ---------------------------------------------------------------------------
# Completion provider
# ---------------------------------------------------------------------------


def _completion_response(text: str = "Hello there") -> httpx.Response:
    return httpx.Response(200, json={
        "content": [{"type": "text", "text": text}],
        "usage": {"input_tokens": 1000, "output_tokens": 2000},
    })


class TestCompletionClient:
    def test_calculate_cost(self) -> None:
        """Cost is computed from per-million token prices."""
        usage = TokenUsage(input_tokens=1000, output_tokens=2000)
        assert calculate_cost(usage, "fast") == pytest.approx(0.00275)
        assert calculate_cost(usage, "quality") == pytest.approx(0.033)

    def test_unknown_tier(self) -> None:
        """An unknown model tier raises ValueError."""
        with pytest.raises(ValueError):
            CompletionClient("sk", MODELS).model_for("turbo")

    @pytest.mark.asyncio
    async def test_complete(self) -> None:
        """complete() sends the request and parses the reply."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["headers"] = request.headers
            seen["body"] = json.loads(request.content)
            return _completion_response()

        client = CompletionClient("sk-test", MODELS, client=_client(handler))
        result = await client.complete(
            [{"role": "user", "content": "Hi"}],
            system_prompt="Be nice",
            model_tier="fast",
        )

        assert result.text == "Hello there"
        assert result.model == "claude-fast"
        assert result.usage.total == 3000
        assert result.cost_usd == pytest.approx(0.00275)
        assert seen["headers"]["x-api-key"] == "sk-test"
        assert seen["headers"]["anthropic-version"]
        assert seen["body"]["system"] == "Be nice"
        assert seen["body"]["model"] == "claude-fast"

    @pytest.mark.asyncio
    async def test_rate_limited(self) -> None:
        """A 429 raises RateLimited."""
        client = CompletionClient(
            "sk", MODELS, client=_client(lambda request: httpx.Response(429))
        )
        with pytest.raises(RateLimited) as exc_info:
            await client.complete([{"role": "user", "content": "Hi"}])
        assert exc_info.value.status_code == 429

    @pytest.mark.asyncio
    async def test_server_error(self) -> None:
        """A 5xx raises UpstreamUnavailable."""
        client = CompletionClient(
            "sk", MODELS, client=_client(lambda request: httpx.Response(500, text="oops"))
        )
        with pytest.raises(UpstreamUnavailable) as exc_info:
            await client.complete([{"role": "user", "content": "Hi"}])
        assert not isinstance(exc_info.value, RateLimited)
        assert exc_info.value.status_code == 500

    def test_factory(self) -> None:
        """No client is built without a key or in mock mode."""
        assert create_completion_client(BrooBotConfig()) is None
        assert create_completion_client(
            BrooBotConfig(anthropic_api_key="sk", mock_mode=True)
        ) is None
        client = create_completion_client(BrooBotConfig(anthropic_api_key="sk"))
        assert client is not None
        assert client.model_for("quality") == "claude-3-sonnet-20240229"


# ---------------------------------------------------------------------------
# Retry helper
# ---------------------------------------------------------------------------


class TestRetryAsync:
    @pytest.mark.asyncio
    async def test_succeeds_after_transient_failures(self) -> None:
        """Transient errors are retried until success."""
        attempts = []
        retried = []

        async def flaky():
            attempts.append(1)
            if len(attempts) < 3:
                raise ConnectionError("flaky")
            return "ok"

        result = await retry_async(
            flaky, config=NO_WAIT, on_retry=lambda n, exc: retried.append(n)
        )

        assert result == "ok"
        assert retried == [1, 2]

    @pytest.mark.asyncio
    async def test_gives_up(self) -> None:
        """The last error is raised after max attempts."""
        async def broken():
            raise ConnectionError("down")

        with pytest.raises(ConnectionError):
            await retry_async(broken, config=NO_WAIT)

    @pytest.mark.asyncio
    async def test_non_retryable_raised_immediately(self) -> None:
        """Non-retryable errors are not retried."""
        attempts = []

        async def limited():
            attempts.append(1)
            raise RateLimited()

        with pytest.raises(RateLimited):
            await retry_async(limited, config=NO_WAIT)
        assert len(attempts) == 1
