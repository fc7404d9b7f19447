from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sl_mcp.domain.value_objects import TransportMode


@dataclass(frozen=True)
class Query:
    """A next-departure question for one stop, transport mode and direction."""

    site_id: int  # SL site id, e.g. 9192 (Slussen)
    transport_mode: TransportMode
    line_numbers: tuple[str, ...] = ()  # empty tuple means no line filter
    journey_direction: int = 1  # 1 or 2, as reported by the API
    skip_minutes: int = 0  # ignore departures leaving sooner than this
    display_line_number: bool = False

    def __post_init__(self) -> None:
        # Line numbers are matched case-insensitively ("55", "18b")
        object.__setattr__(
            self, "line_numbers", tuple(n.strip().lower() for n in self.line_numbers)
        )

    def cache_key(self) -> str:
        """Return a stable key built from every field of the query."""
        lines = ",".join(sorted(self.line_numbers))
        return (
            f"{self.site_id}:{self.transport_mode.value}:{lines}:"
            f"{self.journey_direction}:{self.skip_minutes}:"
            f"{int(self.display_line_number)}"
        )


@dataclass
class DepartureEntry:
    """A single departure from the SL real-time timetable."""

    line_number: str  # e.g. "55", "43X"; kept verbatim for display
    expected: datetime  # ExpectedDateTime, Europe/Stockholm
    journey_direction: int
    raw: dict[str, Any] = field(default_factory=dict)  # untouched API entry
