from __future__ import annotations

from typing import Any

from sl_mcp.domain.value_objects import TransportMode

# LaMetric icon ids per transport mode
ICONS: dict[TransportMode, str] = {
    TransportMode.TRAIN: "i4599",
    TransportMode.BUS: "i3085",
    TransportMode.METRO: "i4598",
    TransportMode.TRAM: "i4600",
    TransportMode.SHIPS: "i4601",
}
DEFAULT_ICON = "i3085"


def icon_for(transport_mode: TransportMode | str) -> str:
    """Return the LaMetric icon for transport_mode, DEFAULT_ICON when unknown."""
    try:
        return ICONS[TransportMode(transport_mode)]
    except ValueError:
        return DEFAULT_ICON


def create_response(tokens: list[str], transport_mode: TransportMode | str) -> dict[str, Any]:
    """Build a LaMetric frames payload with one frame per display token."""
    icon = icon_for(transport_mode)
    return {
        "frames": [
            {"index": index, "text": text, "icon": icon}
            for index, text in enumerate(tokens)
        ]
    }


def create_error(reason: str | Exception, transport_mode: TransportMode | str) -> dict[str, Any]:
    """Build a single-frame LaMetric payload carrying a failure reason."""
    return {
        "frames": [
            {"index": 0, "text": str(reason), "icon": icon_for(transport_mode)}
        ]
    }
