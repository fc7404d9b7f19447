from __future__ import annotations

import logging
from typing import Any

import httpx

from sl_mcp.domain.entities import Query
from sl_mcp.domain.exceptions import (
    ApiError,
    DepartureNotFoundError,
    SLMcpError,
    UpstreamUnavailableError,
)
from sl_mcp.domain.services import select_next_departure
from sl_mcp.infrastructure import lametric
from sl_mcp.infrastructure.cache import TTLCache
from sl_mcp.infrastructure.sl_client import SLClient
from sl_mcp.infrastructure.time_utils import current_cache_ttl

logger = logging.getLogger(__name__)

THRESHOLD_TTL = 1800  # seconds; one re-fetch per key per window
THRESHOLD_MARKER = 1


class RealTimeDepartureService:
    """Answers next-departure queries from cached or freshly fetched SL data.

    The response cache holds raw API payloads per query key. When a cached
    payload no longer yields a departure, the threshold cache allows exactly
    one live re-fetch per key and THRESHOLD_TTL window; later calls inside the
    window fail straight away instead of hammering the API.
    """

    def __init__(
        self,
        client: SLClient,
        departure_cache: TTLCache,
        threshold_cache: TTLCache,
    ) -> None:
        self._client = client
        self._departure_cache = departure_cache
        self._threshold_cache = threshold_cache

    async def execute(self, query: Query) -> dict[str, Any]:
        """Return a LaMetric payload with the time until the next departure.

        Never raises for missing departures or upstream failures; those are
        rendered as an error payload instead.
        """
        try:
            tokens = await self.next_departure(query)
        except SLMcpError as exc:
            return lametric.create_error(exc, query.transport_mode)
        return lametric.create_response(tokens, query.transport_mode)

    async def next_departure(self, query: Query) -> list[str]:
        """Resolve display tokens for query.

        Steps:
        1. Cache hit: try the cached payload; return on success.
        2. Cached payload unusable and threshold marker set: re-raise.
        3. Cached payload unusable, no marker: set marker, fetch live.
        4. Cache miss: fetch live.

        Raises DepartureNotFoundError subclasses or UpstreamUnavailableError.
        """
        key = query.cache_key()
        cached = self._departure_cache.get(key)
        if cached is None:
            return await self._fetch_and_select(query, key)

        logger.info("Found cached response for key: %s", key)
        try:
            return select_next_departure(cached, query)
        except DepartureNotFoundError as exc:
            if self._threshold_cache.get(key) is not None:
                logger.info("Failed to parse cached data and threshold reached: %s", exc)
                raise
            self._threshold_cache.put(key, THRESHOLD_MARKER, THRESHOLD_TTL)
            logger.info("thresholdCache size: %d", self._threshold_cache.size())
            logger.info("Failed to parse cached data, fetching new data: %s", exc)
            return await self._fetch_and_select(query, key)

    async def _fetch_and_select(self, query: Query, key: str) -> list[str]:
        try:
            data = await self._client.get_real_time_departures(query.site_id)
        except (ApiError, httpx.HTTPError, ValueError) as exc:
            logger.warning("SL request for site %s failed: %s", query.site_id, exc)
            raise UpstreamUnavailableError() from exc

        self._departure_cache.put(key, data, current_cache_ttl())
        logger.info("departureCache size: %d", self._departure_cache.size())
        # No threshold bookkeeping here; a fresh payload without departures fails outright
        return select_next_departure(data, query)
