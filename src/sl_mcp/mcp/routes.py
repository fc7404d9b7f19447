from __future__ import annotations

from mcp.server.fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from sl_mcp.application.departure_service import RealTimeDepartureService
from sl_mcp.domain.entities import Query
from sl_mcp.domain.exceptions import ValidationError
from sl_mcp.infrastructure import lametric
from sl_mcp.mcp.tools import build_query

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _int_param(request: Request, name: str, default: int | None = None) -> int:
    raw = request.query_params.get(name)
    if raw is None or raw == "":
        if default is None:
            raise ValidationError(f"Missing required parameter: {name}")
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"Parameter {name} must be an integer, got {raw!r}")


def parse_query_params(request: Request) -> Query:
    """Build a Query from LaMetric-style query parameters.

    siteId and transportMode are required; lineNumbers is comma-separated.
    Raises ValidationError.
    """
    transport_mode = request.query_params.get("transportMode", "")
    line_numbers = request.query_params.get("lineNumbers", "").split(",")
    return build_query(
        site_id=_int_param(request, "siteId"),
        transport_mode=transport_mode,
        line_numbers=line_numbers,
        journey_direction=_int_param(request, "journeyDirection", 1),
        skip_minutes=_int_param(request, "skipMinutes", 0),
        display_line_number=(
            request.query_params.get("displayLineNumber", "").lower() in _TRUE_VALUES
        ),
    )


def register_routes(mcp: FastMCP, departure_svc: RealTimeDepartureService) -> None:
    """Bind plain HTTP routes polled by LaMetric devices. Called once during server setup."""

    @mcp.custom_route("/lametric", methods=["GET"])
    async def lametric_departure(request: Request) -> JSONResponse:
        """GET /lametric — next departure as LaMetric frames."""
        try:
            query = parse_query_params(request)
        except ValidationError as exc:
            mode = request.query_params.get("transportMode", "")
            return JSONResponse(lametric.create_error(exc, mode), status_code=400)
        payload = await departure_svc.execute(query)
        return JSONResponse(payload)
