"""Read-as-text scrape proxy client (r.jina.ai).

The proxy renders any page as plain text::

    GET https://r.jina.ai/<url-encoded target>

Depending on the Accept header it answers with plain text or a JSON
envelope ``{"data": {"content": ...}}``; both are handled.
"""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import quote

import httpx

from ..config import DEFAULT_READER_URL
from ..errors import UpstreamUnavailable

logger = logging.getLogger(__name__)


class ReaderClient:
    """Fetches a remote page through the reader proxy."""

    def __init__(
        self,
        base_url: str = DEFAULT_READER_URL,
        timeout: float = 15.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/") + "/"
        self._timeout = timeout
        self._client = client

    def proxy_url(self, target_url: str) -> str:
        return self._base_url + quote(target_url, safe="")

    async def fetch_as_text(self, target_url: str) -> str:
        """Return the page text. Raises UpstreamUnavailable on any failure."""
        try:
            if self._client is not None:
                resp = await self._get(self._client, target_url)
            else:
                async with httpx.AsyncClient(
                    timeout=self._timeout, follow_redirects=True
                ) as client:
                    resp = await self._get(client, target_url)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise UpstreamUnavailable(
                f"Reader proxy returned {e.response.status_code} for {target_url}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamUnavailable(f"Reader proxy failed for {target_url}: {e}") from e

        return extract_content(resp.text)

    async def _get(self, client: httpx.AsyncClient, target_url: str) -> httpx.Response:
        return await client.get(
            self.proxy_url(target_url),
            headers=self._headers(),
            timeout=self._timeout,
        )

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "X-Return-Format": "text",
            "User-Agent": "BrooBot/1.0 ToolScraper",
        }


def extract_content(body: str) -> str:
    """Pull the page text out of a reader response body."""
    stripped = body.lstrip()
    if not stripped.startswith("{"):
        return body
    try:
        payload: Any = json.loads(stripped)
    except ValueError:
        return body
    if not isinstance(payload, dict):
        return body

    data = payload.get("data")
    if isinstance(data, dict) and isinstance(data.get("content"), str):
        return data["content"]
    if isinstance(payload.get("content"), str):
        return payload["content"]
    return body
