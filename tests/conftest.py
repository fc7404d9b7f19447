"""Shared pytest fixtures for the SL Departures MCP Server test suite."""
from __future__ import annotations

from datetime import datetime

import pytest

from tests.factories import FROZEN_NOW, FROZEN_UTC, FakeClock, make_departure_raw, make_timetable


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sample_timetable_raw() -> dict:  # type: ignore[type-arg]
    """Sample realtimedeparturesV4 response with buses and a metro at Slussen."""
    return make_timetable(
        buses=[
            make_departure_raw("55", "2026-02-24T14:08:00", 1, "Tanto"),
            make_departure_raw("76", "2026-02-24T14:03:00", 1, "Ropsten"),
            make_departure_raw("55", "2026-02-24T14:12:00", 2, "Sofia"),
        ],
        metros=[
            make_departure_raw("13", "2026-02-24T14:04:00", 1, "Ropsten"),
        ],
    )


@pytest.fixture
def frozen_stockholm_time(freezer) -> datetime:  # type: ignore[no-untyped-def]
    """Freeze time to 2026-02-24T14:00:00 in Europe/Stockholm.

    Requires pytest-freezer (freezegun) to be installed.
    """
    freezer.move_to(FROZEN_UTC)
    return FROZEN_NOW
