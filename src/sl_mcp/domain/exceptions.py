from __future__ import annotations


class SLMcpError(Exception):
    """Base exception for all SL departures errors."""


class DepartureNotFoundError(SLMcpError):
    """Raised when a valid timetable holds no usable departure for the query."""


class NoDeparturesForModeError(DepartureNotFoundError):
    """Raised when the timetable has no entries at all for the requested transport mode."""

    def __init__(self, message: str = "inga avgångar för valt färdmedel") -> None:
        super().__init__(message)


class NoQualifyingDepartureError(DepartureNotFoundError):
    """Raised when no entry matches the line, direction and skip-minutes filters."""

    def __init__(self, message: str = "inga avgångar") -> None:
        super().__init__(message)


class UpstreamUnavailableError(SLMcpError):
    """Raised when the SL API could not be reached or answered with garbage."""

    def __init__(self, message: str = "Misslyckades att hämta information från SL") -> None:
        super().__init__(message)


class ApiError(SLMcpError):
    """Raised when the upstream SL API returns an unexpected HTTP error status."""

    def __init__(self, status_code: int, message: str = "") -> None:
        self.status_code = status_code
        super().__init__(message or f"Upstream API error ({status_code})")


class ValidationError(SLMcpError):
    """Raised when input parameters fail validation before any network call."""
