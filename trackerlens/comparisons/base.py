"""Shared grouping and result helpers for the comparison flavors.

A "site" is the visited hostname of an event's page URL with any
leading ``www.`` removed.  Events whose URL cannot be parsed are
left out of every per-site grouping.
"""

from __future__ import annotations

from collections.abc import Sequence

from trackerlens.analysis import scoring
from trackerlens.models.comparison import ComparisonKind, ComparisonResult, SiteSnapshot
from trackerlens.models.events import TrackingEvent
from trackerlens.utils import logger, url

log = logger.create_logger("Comparison")


def group_by_site(events: Sequence[TrackingEvent]) -> dict[str, list[TrackingEvent]]:
    """Group events by visited site, keys sorted."""
    groups: dict[str, list[TrackingEvent]] = {}
    for event in events:
        site = url.site_key(event.url)
        if site is None:
            continue
        groups.setdefault(site, []).append(event)
    return {site: groups[site] for site in sorted(groups)}


def events_for_site(domain: str, events: Sequence[TrackingEvent]) -> list[TrackingEvent]:
    """Events observed while visiting *domain*."""
    site = url.normalize_site(domain)
    return [e for e in events if url.site_key(e.url) == site]


def site_score(events: Sequence[TrackingEvent]) -> int:
    """Score a site's events the way every comparison does (HTTPS assumed)."""
    return scoring.compute_score(events, is_https=True).score


def qualifying_site_scores(
    groups: dict[str, list[TrackingEvent]],
    min_events: int,
) -> dict[str, int]:
    """Score every site that has at least *min_events* events."""
    return {site: site_score(site_events) for site, site_events in groups.items() if len(site_events) >= min_events}


def percent(part: int, whole: int) -> int:
    """``part / whole`` as a 0-100 integer percentage (0 when *whole* is 0)."""
    if whole <= 0:
        return 0
    return max(0, min(100, round(part / whole * 100)))


def insufficient(
    kind: ComparisonKind,
    domain: str,
    reason: str,
    *,
    score: int | None = None,
    tracker_count: int = 0,
    category: str | None = None,
) -> ComparisonResult:
    """Build the explicit "insufficient data" result for *kind*."""
    log.info("Insufficient data for comparison", {"kind": kind, "domain": domain, "reason": reason})
    return ComparisonResult(
        kind=kind,
        status="insufficient-data",
        current_site=SiteSnapshot(
            domain=url.normalize_site(domain),
            score=score,
            tracker_count=tracker_count,
            category=category,
        ),
        insight=f"Insufficient data: {reason}",
    )
