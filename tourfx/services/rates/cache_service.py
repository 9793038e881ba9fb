from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

from tourfx.models.rates import CacheStatus
from .base import RateSource

"""Single-slot exchange rate cache.

Purpose:
    Serve the full USD-based rate map with at most one live fetch per TTL window
    (settings.rates_cache_ttl_seconds, default 1 hour).

Design:
    - Wraps a RateSource. The whole map is one snapshot; a refresh replaces it
      wholesale, never merges.
    - Concurrent callers that miss the cache share one in-flight refresh task
      instead of each hitting the provider. Readers of a fresh snapshot never wait.
    - Instances are constructed explicitly and injected (app factory, tests), so
      several independent caches can coexist.
"""

logger = logging.getLogger("tourfx.rates.cache")

DEFAULT_TTL_SECONDS = 3600


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class RateSnapshot:
    rates: Dict[str, float]
    fetched_at: datetime
    expires_at: datetime

    def is_fresh(self, now: datetime) -> bool:
        return now < self.expires_at


class RateCache:
    """TTL-bound cache in front of a RateSource."""

    def __init__(
        self,
        source: RateSource,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if ttl_seconds <= 0:
            raise ValueError("cache ttl must be positive seconds")
        self._source = source
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock or utcnow
        self._snapshot: Optional[RateSnapshot] = None
        self._inflight: Optional[asyncio.Future[Dict[str, float]]] = None

    @property
    def snapshot(self) -> Optional[RateSnapshot]:
        return self._snapshot

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    # Internal --------------------------------------------------
    async def _refresh(self) -> Dict[str, float]:
        logger.info("fetching fresh exchange rates")
        rates = await self._source.fetch_live()
        now = self._clock()
        self._snapshot = RateSnapshot(rates=rates, fetched_at=now, expires_at=now + self._ttl)
        return rates

    def _release(self, task: asyncio.Future) -> None:
        if self._inflight is task:
            self._inflight = None

    # Public API -----------------------------------------------
    async def get_rates(self) -> Dict[str, float]:
        snapshot = self._snapshot
        if snapshot is not None and snapshot.is_fresh(self._clock()):
            logger.debug("using cached exchange rates")
            return snapshot.rates
        if self._inflight is None:
            task = asyncio.ensure_future(self._refresh())
            task.add_done_callback(self._release)
            self._inflight = task
        # shield: one cancelled caller must not cancel the refresh for the others
        return await asyncio.shield(self._inflight)

    def clear(self) -> None:
        self._snapshot = None
        logger.info("exchange rates cache cleared")

    def status(self) -> CacheStatus:
        snapshot = self._snapshot
        if snapshot is None:
            return CacheStatus(cached=False)
        remaining = max(0.0, (snapshot.expires_at - self._clock()).total_seconds())
        return CacheStatus(
            cached=True,
            expires_in_seconds=math.floor(remaining),
            last_updated=snapshot.fetched_at,
        )
