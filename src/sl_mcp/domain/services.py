from __future__ import annotations

from datetime import datetime
from typing import Any

from sl_mcp.domain.entities import DepartureEntry, Query
from sl_mcp.domain.exceptions import NoDeparturesForModeError, NoQualifyingDepartureError
from sl_mcp.domain.value_objects import TransportMode
from sl_mcp.infrastructure.time_utils import minutes_until, parse_sl_datetime


def transport_mode_entries(
    timetable: dict[str, Any], transport_mode: TransportMode | str
) -> list[dict[str, Any]]:
    """Return the raw departure list for transport_mode from an API response.

    Unknown modes, a ResponseData that is not an object and missing, null or
    non-list departure lists all yield an empty list.
    """
    try:
        mode = TransportMode(transport_mode)
    except ValueError:
        return []
    response_data = timetable.get("ResponseData")
    if not isinstance(response_data, dict):
        return []
    entries = response_data.get(mode.response_key)
    if not isinstance(entries, list):
        return []
    return list(entries)


def map_departure_entry(raw: dict[str, Any]) -> DepartureEntry:
    """Map a raw API departure to a DepartureEntry.

    Raises ValueError when ExpectedDateTime or JourneyDirection cannot be read.
    """
    return DepartureEntry(
        line_number=str(raw.get("LineNumber", "")),
        expected=parse_sl_datetime(raw.get("ExpectedDateTime", "")),
        journey_direction=int(raw.get("JourneyDirection", 0)),
        raw=raw,
    )


def find_next_departure(
    entries: list[DepartureEntry], query: Query, now: datetime | None = None
) -> DepartureEntry | None:
    """Return the first departure matching the query, in expected-time order.

    Line numbers filter case-insensitively (no filter when the query has none).
    Direction mismatches are skipped without ending the scan; a departure
    whose minutes_until is below query.skip_minutes is skipped too.
    """
    candidates = entries
    if query.line_numbers:
        wanted = set(query.line_numbers)
        candidates = [e for e in entries if e.line_number.lower() in wanted]

    for entry in sorted(candidates, key=lambda e: e.expected):
        if entry.journey_direction != query.journey_direction:
            continue
        if minutes_until(entry.expected, now) >= query.skip_minutes:
            return entry
    return None


def format_departure_tokens(
    entry: DepartureEntry, query: Query, now: datetime | None = None
) -> list[str]:
    """Render the display tokens for a selected departure.

    ["<m> min"], or with display_line_number the six-token
    [line, "<m> min", line, "<m> min", line, "<m> min"] sequence the
    LaMetric frames rotate through.
    """
    departure_time = f"{minutes_until(entry.expected, now)} min"
    if not query.display_line_number:
        return [departure_time]
    return [entry.line_number, departure_time] * 3


def select_next_departure(
    timetable: dict[str, Any], query: Query, now: datetime | None = None
) -> list[str]:
    """Pick the next qualifying departure for query out of a raw API response.

    Raises NoDeparturesForModeError when the response has no entries for the
    query's transport mode, NoQualifyingDepartureError when none pass the
    filters. Entries that are not objects or have an unreadable
    ExpectedDateTime are ignored.
    """
    raw_entries = transport_mode_entries(timetable, query.transport_mode)
    if not raw_entries:
        raise NoDeparturesForModeError()

    entries: list[DepartureEntry] = []
    for raw in raw_entries:
        try:
            entries.append(map_departure_entry(raw))
        except (AttributeError, TypeError, ValueError):
            continue

    next_departure = find_next_departure(entries, query, now)
    if next_departure is None:
        raise NoQualifyingDepartureError()
    return format_departure_tokens(next_departure, query, now)
