"""In-memory freshness cache for scraped tools.

States: EMPTY -> FRESH -> STALE -> FRESH. A failed refresh leaves the
previous snapshot in place, so a STALE cache keeps serving last-known-good
data instead of an empty list.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol

from ..types import ToolRecord

logger = logging.getLogger(__name__)

DEFAULT_TTL = 24 * 60 * 60


class ToolFetcher(Protocol):
    async def fetch_latest(self) -> list[ToolRecord]: ...


@dataclass
class CacheEntry:
    tools: list[ToolRecord] = field(default_factory=list)
    last_updated_at: Optional[float] = None
    ttl: float = DEFAULT_TTL


class FreshnessCache:
    """Single-process TTL cache around a ToolFetcher.

    Concurrent misses share one in-flight refresh task; every waiter gets
    the snapshot that refresh leaves behind.
    """

    def __init__(
        self,
        fetcher: ToolFetcher,
        ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._fetcher = fetcher
        self._ttl = ttl
        self._clock = clock
        self._entry = CacheEntry(ttl=ttl)
        self._inflight: Optional[asyncio.Task] = None
        self._refreshes = 0

    @property
    def ttl(self) -> float:
        return self._ttl

    @property
    def refresh_count(self) -> int:
        """Number of fetch attempts made so far."""
        return self._refreshes

    def snapshot(self) -> CacheEntry:
        return self._entry

    def is_fresh(self) -> bool:
        updated = self._entry.last_updated_at
        return updated is not None and (self._clock() - updated) < self._ttl

    async def get(self) -> list[ToolRecord]:
        """Cached tools, refreshing first if stale. Never raises."""
        if self.is_fresh():
            logger.debug("Using cached tools")
            return list(self._entry.tools)

        if self._inflight is None:
            self._inflight = asyncio.create_task(self._refresh())
        # A cancelled caller must not cancel the refresh other callers share
        return await asyncio.shield(self._inflight)

    async def _refresh(self) -> list[ToolRecord]:
        self._refreshes += 1
        try:
            try:
                tools = await self._fetcher.fetch_latest()
            except Exception as e:
                logger.error(f"Tool refresh failed: {e}")
                tools = []

            if tools:
                self._entry = CacheEntry(
                    tools=list(tools),
                    last_updated_at=self._clock(),
                    ttl=self._ttl,
                )
                logger.info(f"Tool cache refreshed with {len(tools)} entries")
            else:
                logger.warning(
                    f"No fresh tools, serving {len(self._entry.tools)} cached entries"
                )
            return list(self._entry.tools)
        finally:
            self._inflight = None

    def invalidate(self) -> None:
        """Mark the snapshot stale; the next get() refreshes."""
        self._entry = CacheEntry(tools=self._entry.tools, ttl=self._ttl)

    def reset(self) -> None:
        """Return to the EMPTY state."""
        self._entry = CacheEntry(ttl=self._ttl)
        self._refreshes = 0
