"""Text-completion provider client (Anthropic Messages API over httpx).

Usage::

    client = create_completion_client(config)
    if client is not None:
        result = await client.complete(
            [{"role": "user", "content": "Hello"}],
            system_prompt="You are BrooBot",
            model_tier="fast",
        )
        print(result.text, result.usage.total, result.cost_usd)

Tiers map to configured model names: ``fast`` serves buddy chat,
``quality`` serves research synthesis.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import DEFAULT_ANTHROPIC_URL, BrooBotConfig
from ..errors import RateLimited, UpstreamUnavailable
from ..types import Completion, TokenUsage

logger = logging.getLogger(__name__)

ANTHROPIC_VERSION = "2023-06-01"

# USD per 1M tokens (input, output)
TIER_PRICING: dict[str, tuple[float, float]] = {
    "fast": (0.25, 1.25),
    "quality": (3.0, 15.0),
}


def calculate_cost(usage: TokenUsage, model_tier: str) -> float:
    input_price, output_price = TIER_PRICING.get(model_tier, TIER_PRICING["quality"])
    return (usage.input_tokens * input_price + usage.output_tokens * output_price) / 1_000_000


class CompletionClient:
    """Minimal async client for the Anthropic Messages API."""

    def __init__(
        self,
        api_key: str,
        models: dict[str, str],
        url: str = DEFAULT_ANTHROPIC_URL,
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._models = models
        self._url = url
        self._timeout = timeout
        self._client = client

    def model_for(self, model_tier: str) -> str:
        try:
            return self._models[model_tier]
        except KeyError:
            raise ValueError(f"Unknown model tier: {model_tier}") from None

    async def complete(
        self,
        messages: list[dict[str, str]],
        system_prompt: str = "",
        model_tier: str = "fast",
        max_tokens: int = 2048,
        temperature: float = 0.7,
    ) -> Completion:
        """Request one completion.

        Raises:
            RateLimited: provider answered 429
            UpstreamUnavailable: any other transport or HTTP failure
        """
        model = self.model_for(model_tier)
        body: dict[str, Any] = {
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": messages,
        }
        if system_prompt:
            body["system"] = system_prompt

        try:
            if self._client is not None:
                resp = await self._client.post(
                    self._url, json=body, headers=self._headers(), timeout=self._timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    resp = await client.post(self._url, json=body, headers=self._headers())
        except httpx.HTTPError as e:
            raise UpstreamUnavailable(f"Completion request failed: {e}") from e

        if resp.status_code == 429:
            raise RateLimited("Completion provider rate limit exceeded")
        if resp.status_code >= 400:
            raise UpstreamUnavailable(
                f"Completion provider returned {resp.status_code}: {resp.text[:200]}",
                status_code=resp.status_code,
            )

        payload = resp.json()
        text = "".join(
            block.get("text", "")
            for block in payload.get("content", [])
            if block.get("type") == "text"
        )
        raw_usage = payload.get("usage") or {}
        usage = TokenUsage(
            input_tokens=raw_usage.get("input_tokens", 0),
            output_tokens=raw_usage.get("output_tokens", 0),
        )
        cost = calculate_cost(usage, model_tier)
        logger.info(f"Completion ({model}) cost ${cost:.4f}, tokens {usage.total}")
        return Completion(text=text, model=model, usage=usage, cost_usd=cost)

    def _headers(self) -> dict[str, str]:
        return {
            "x-api-key": self._api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "content-type": "application/json",
        }


def create_completion_client(config: BrooBotConfig) -> CompletionClient | None:
    """Build a client, or None when no key is configured or mock mode is on."""
    if not config.llm_enabled:
        return None
    return CompletionClient(
        api_key=config.anthropic_api_key,
        models=config.models,
        url=config.anthropic_url,
        timeout=config.llm_timeout,
    )
