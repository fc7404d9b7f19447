from __future__ import annotations

from enum import Enum


class TransportMode(str, Enum):
    """Transport modes understood by the SL realtimedeparturesV4 API.

    Using (str, Enum) for Python 3.10 compatibility (StrEnum requires 3.11+).
    """

    TRAIN = "train"
    BUS = "bus"
    METRO = "metro"
    TRAM = "tram"
    SHIPS = "ships"

    @property
    def response_key(self) -> str:
        """Key of this mode's departure list inside ResponseData."""
        return _RESPONSE_KEYS[self]


_RESPONSE_KEYS: dict[TransportMode, str] = {
    TransportMode.TRAIN: "Trains",
    TransportMode.BUS: "Buses",
    TransportMode.METRO: "Metros",
    TransportMode.TRAM: "Trams",
    TransportMode.SHIPS: "Ships",
}
