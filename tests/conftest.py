"""Shared fixtures for the test suite."""

from __future__ import annotations

import itertools
from collections.abc import Callable
from datetime import UTC, datetime

import pytest

from trackerlens.config import AnalysisSettings
from trackerlens.data.categories import StaticCategoryProvider
from trackerlens.models.events import InPageTracking, TrackingEvent

# 2026-01-05 00:00:00 UTC, a Monday.
BASE_TS = int(datetime(2026, 1, 5, tzinfo=UTC).timestamp() * 1000)
HOUR_MS = 60 * 60 * 1000

EventFactory = Callable[..., TrackingEvent]


# ── Event Factories ─────────────────────────────────────────────


@pytest.fixture()
def make_event() -> EventFactory:
    """Build tracking events with sensible defaults and unique ids."""
    counter = itertools.count(1)

    def _make(
        url: str = "https://example.com/",
        domain: str = "tracker.com",
        *,
        tracker_type: str = "advertising",
        risk_level: str = "low",
        timestamp: int = BASE_TS,
        method: str | None = None,
    ) -> TrackingEvent:
        n = next(counter)
        return TrackingEvent(
            id=f"evt-{n}",
            timestamp=timestamp,
            url=url,
            domain=domain,
            tracker_type=tracker_type,
            risk_level=risk_level,
            description=f"event {n}",
            in_page_tracking=InPageTracking(method=method) if method else None,
        )

    return _make


# ── Analysis Fixtures ───────────────────────────────────────────


@pytest.fixture()
def settings() -> AnalysisSettings:
    """Default thresholds, independent of the environment."""
    return AnalysisSettings(
        min_history_events=10,
        min_qualifying_sites=3,
        min_events_per_site=3,
        max_peer_sites=10,
        site_events_limit=500,
        history_events_limit=1000,
        debounce_ms=20,
    )


@pytest.fixture()
def provider() -> StaticCategoryProvider:
    """The bundled category provider."""
    return StaticCategoryProvider()
