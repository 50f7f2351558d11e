"""
Analysis configuration.

Centralises the thresholds and sizes that the engines and the
coordinator use.  Values bind to ``TRACKER_LENS_*`` environment
variables through ``pydantic_settings.BaseSettings``; callers
construct one :class:`AnalysisSettings` and pass it explicitly into
every engine call that needs it.
"""

from __future__ import annotations

import functools

import pydantic
import pydantic_settings

from trackerlens.utils import logger

log = logger.create_logger("Config")

DAY_MS = 24 * 60 * 60 * 1000


class AnalysisSettings(pydantic_settings.BaseSettings):
    """Thresholds and sizes for the analysis engines.

    Attributes:
        min_history_events: Minimum total events before a
            personal-history or peer comparison is attempted.
        min_qualifying_sites: Minimum number of sites (each with at
            least ``min_events_per_site`` events) required for a
            personal-history or peer comparison.
        min_events_per_site: Events a site needs before its score is
            considered reliable enough to enter a comparison.
        max_peer_sites: Cap on peers ranked against the current site.
        site_events_limit: Events fetched when scoring a single site.
        history_events_limit: Events fetched for history and peer
            comparisons.
        timeline_window_ms: Window used by the coordinator's timeline
            recomputation.
        debounce_ms: Quiet interval before a burst of new events
            triggers a recomputation.
    """

    model_config = pydantic_settings.SettingsConfigDict(
        env_prefix="TRACKER_LENS_",
        extra="ignore",
    )

    min_history_events: int = pydantic.Field(default=10, ge=0)
    min_qualifying_sites: int = pydantic.Field(default=3, ge=1)
    min_events_per_site: int = pydantic.Field(default=3, ge=1)
    max_peer_sites: int = pydantic.Field(default=10, ge=1)
    site_events_limit: int = pydantic.Field(default=500, ge=1)
    history_events_limit: int = pydantic.Field(default=1000, ge=1)
    timeline_window_ms: int = pydantic.Field(default=7 * DAY_MS, gt=0)
    debounce_ms: int = pydantic.Field(default=500, ge=0)


@functools.cache
def get_settings() -> AnalysisSettings:
    """Return the process-wide settings loaded from the environment."""
    settings = AnalysisSettings()
    log.debug("Analysis settings loaded", settings.model_dump())
    return settings
