from __future__ import annotations

import json
import logging

from mcp import types
from mcp.server.fastmcp import FastMCP

from sl_mcp.application.departure_service import RealTimeDepartureService
from sl_mcp.domain.entities import Query
from sl_mcp.domain.exceptions import ValidationError
from sl_mcp.domain.value_objects import TransportMode

logger = logging.getLogger(__name__)

_RESULT_URI = "mcp://sl-mcp/result"


def _as_resource(json_str: str) -> list[types.EmbeddedResource]:
    """Wrap a JSON string as an embedded resource so the LLM does not narrate it."""
    return [
        types.EmbeddedResource(
            type="resource",
            resource=types.TextResourceContents(
                uri=_RESULT_URI,  # type: ignore[arg-type]
                mimeType="application/json",
                text=json_str,
            ),
        )
    ]


def _error_json(message: str) -> str:
    return json.dumps({"error": message}, ensure_ascii=False)


def _handle_exception(exc: Exception) -> list[types.EmbeddedResource]:
    if isinstance(exc, ValidationError):
        return _as_resource(_error_json(str(exc)))
    logger.exception("Unexpected error in MCP tool: %s", exc)
    return _as_resource(_error_json("An unexpected error occurred."))


def validate_mode(transport_mode: str) -> TransportMode:
    """Return the TransportMode for a case-insensitive name, ValidationError when unknown."""
    lower = transport_mode.strip().lower()
    valid_values = {m.value for m in TransportMode}
    if lower not in valid_values:
        raise ValidationError(f"Unknown transport mode: {transport_mode}")
    return TransportMode(lower)


def build_query(
    site_id: int,
    transport_mode: str,
    line_numbers: list[str] | None = None,
    journey_direction: int = 1,
    skip_minutes: int = 0,
    display_line_number: bool = False,
) -> Query:
    """Validate caller input and build a Query. Raises ValidationError."""
    if site_id <= 0:
        raise ValidationError("site_id must be a positive integer")
    lines = tuple(n for n in (line_numbers or []) if n.strip())
    return Query(
        site_id=site_id,
        transport_mode=validate_mode(transport_mode),
        line_numbers=lines,
        journey_direction=journey_direction,
        skip_minutes=skip_minutes,
        display_line_number=display_line_number,
    )


def register_tools(mcp: FastMCP, departure_svc: RealTimeDepartureService) -> None:
    """Bind all @mcp.tool decorators. Called once during server setup."""

    @mcp.tool()
    async def get_next_departure(
        site_id: int,
        transport_mode: str,
        line_numbers: list[str] | None = None,
        journey_direction: int = 1,
        skip_minutes: int = 0,
        display_line_number: bool = False,
    ) -> list[types.EmbeddedResource]:
        """Get the minutes until the next SL departure from a stop, as LaMetric frames.

        Args:
            site_id: SL site id of the stop, e.g. 9192 for Slussen.
            transport_mode: One of "train", "bus", "metro", "tram", "ships".
            line_numbers: Optional line numbers to include, e.g. ["55", "76"].
                          All lines included when omitted.
            journey_direction: Journey direction as reported by SL (1 or 2).
            skip_minutes: Ignore departures leaving in fewer minutes than this.
                          Negative values admit departures that just left.
            display_line_number: Show the line number next to the minutes.
        """
        try:
            query = build_query(
                site_id,
                transport_mode,
                line_numbers,
                journey_direction,
                skip_minutes,
                display_line_number,
            )
            payload = await departure_svc.execute(query)
            return _as_resource(json.dumps(payload, ensure_ascii=False))
        except Exception as exc:
            return _handle_exception(exc)
