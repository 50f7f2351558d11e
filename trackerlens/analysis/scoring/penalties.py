"""Per-event weights and whole-set penalties.

Each event costs a fixed number of points by risk level.  On top
of that, three penalties apply at most once per event set:
excessive volume, cross-site tracking by several companies, and
persistent (fingerprinting) techniques.
"""

from __future__ import annotations

from collections.abc import Sequence

from trackerlens.models.events import PERSISTENT_METHODS, RISK_LEVELS, RiskLevel, TrackingEvent
from trackerlens.utils import logger, url

log = logger.create_logger("Score-Penalties")

RISK_WEIGHTS: dict[RiskLevel, int] = {
    "critical": 30,
    "high": 18,
    "medium": 10,
    "low": 5,
}

HTTPS_BONUS = 5

# More than this many events triggers the volume penalty.
EXCESSIVE_TRACKING_THRESHOLD = 10
EXCESSIVE_TRACKING_PENALTY = 20

CROSS_SITE_COMPANY_THRESHOLD = 3
CROSS_SITE_PENALTY = 15

PERSISTENT_TRACKING_PENALTY = 20


def normalize_risk_level(event: TrackingEvent) -> RiskLevel:
    """Return the event's risk level, treating unknown values as ``low``."""
    level = event.risk_level
    if level in RISK_LEVELS:
        return level  # type: ignore[return-value]
    log.warn(
        "Unknown risk level, weighting as low",
        {"eventId": event.id, "riskLevel": level, "domain": event.domain},
    )
    return "low"


def count_risk_levels(events: Sequence[TrackingEvent]) -> dict[RiskLevel, int]:
    """Count events per (normalised) risk level."""
    counts: dict[RiskLevel, int] = {"critical": 0, "high": 0, "medium": 0, "low": 0}
    for event in events:
        counts[normalize_risk_level(event)] += 1
    return counts


def risk_deduction(counts: dict[RiskLevel, int]) -> int:
    """Total points lost to per-event risk weights."""
    return sum(RISK_WEIGHTS[level] * n for level, n in counts.items())


def tracker_companies(events: Sequence[TrackingEvent]) -> set[str]:
    """Distinct companies operating the trackers in *events*."""
    return {url.company_key(e.domain) for e in events if e.domain}


def has_persistent_tracking(events: Sequence[TrackingEvent]) -> bool:
    """True when any event used a persistent fingerprinting technique."""
    return any(e.tracking_method in PERSISTENT_METHODS for e in events)
