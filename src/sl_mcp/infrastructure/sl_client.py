from __future__ import annotations

import logging
from typing import Any

import httpx

from sl_mcp.domain.exceptions import ApiError

logger = logging.getLogger(__name__)

BASE_URL = "http://api.sl.se/api2/realtimedeparturesV4.json"
DEFAULT_TIMEOUT = 15.0  # seconds
TIME_WINDOW = 60  # minutes ahead the API should report

# Every mode is always requested so one cached response serves all modes of a stop
ALL_MODES = ("train", "bus", "metro", "tram", "ships")


class SLClient:
    """HTTP client for the SL real-time departures API.

    A single httpx.AsyncClient instance is shared for the process lifetime.
    Caching is left to the caller.
    """

    def __init__(self, http_client: httpx.AsyncClient, api_key: str) -> None:
        self._http = http_client
        self._api_key = api_key

    async def get_real_time_departures(self, site_id: int) -> dict[str, Any]:
        """GET realtimedeparturesV4.json for site_id, 60 minute window, all modes.

        Raises ApiError on non-2xx status. Transport errors from httpx propagate.
        Raises ValueError when the body is not a JSON object.
        A body reporting StatusCode > 0 is logged and returned unchanged.
        """
        params = self._build_params(site_id)
        logger.info(
            "Request: siteid=%s timewindow=%s %s",
            site_id,
            TIME_WINDOW,
            " ".join(f"{m}=true" for m in ALL_MODES),
        )
        response = await self._http.get(BASE_URL, params=params)
        self._raise_for_status(response)
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected response body type: {type(data).__name__}")
        if (data.get("StatusCode") or 0) > 0:
            logger.warning(
                "SL API reported StatusCode %s: %s",
                data.get("StatusCode"),
                data.get("Message"),
            )
        return data

    def _build_params(self, site_id: int) -> dict[str, Any]:
        params: dict[str, Any] = {
            "key": self._api_key,
            "siteid": site_id,
            "timewindow": TIME_WINDOW,
        }
        for mode in ALL_MODES:
            params[mode] = "true"
        return params

    def _raise_for_status(self, response: httpx.Response) -> None:
        """Raise ApiError for non-2xx responses."""
        if response.status_code >= 400:
            raise ApiError(response.status_code)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.aclose()
