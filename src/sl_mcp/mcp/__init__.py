from __future__ import annotations

import os

import httpx
from mcp.server.fastmcp import FastMCP

from sl_mcp.application.departure_service import THRESHOLD_TTL, RealTimeDepartureService
from sl_mcp.infrastructure.cache import TTLCache
from sl_mcp.infrastructure.sl_client import DEFAULT_TIMEOUT, SLClient
from sl_mcp.infrastructure.time_utils import LONG_CACHE_TTL
from sl_mcp.mcp.routes import register_routes
from sl_mcp.mcp.tools import register_tools

API_KEY_ENV = "REAL_TIME_DEPARTURES_V4_KEY"


def create_mcp_app(api_key: str | None = None) -> FastMCP:
    """Create and configure the FastMCP application with all services wired.

    The API key defaults to the REAL_TIME_DEPARTURES_V4_KEY environment variable.
    """
    if api_key is None:
        api_key = os.environ.get(API_KEY_ENV, "")

    departure_cache = TTLCache(default_ttl=LONG_CACHE_TTL)
    threshold_cache = TTLCache(default_ttl=THRESHOLD_TTL)
    http_client = httpx.AsyncClient(timeout=DEFAULT_TIMEOUT, follow_redirects=True)
    sl_client = SLClient(http_client=http_client, api_key=api_key)

    departure_svc = RealTimeDepartureService(
        client=sl_client,
        departure_cache=departure_cache,
        threshold_cache=threshold_cache,
    )

    mcp = FastMCP("SL Departures MCP", stateless_http=True)
    register_tools(mcp, departure_svc)
    register_routes(mcp, departure_svc)
    return mcp
