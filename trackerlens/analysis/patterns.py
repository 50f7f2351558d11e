"""
Higher-order tracking pattern detection.

Two independent detectors run over the full event window on every
pass; neither keeps state between calls:

- **Cross-site**: an advertising or analytics tracker domain whose
  events span at least three distinct visited sites.
- **Fingerprinting**: repeated fingerprinting events concentrated
  on at least one site.

Pattern ids and ``detected_at`` are taken from the newest
contributing event, so identical input always yields identical
patterns.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from trackerlens.models.analysis import AlertSeverity, PatternAlert, TrackerPattern
from trackerlens.models.events import TrackingEvent
from trackerlens.utils import logger, url

log = logger.create_logger("Patterns")

CROSS_SITE_TRACKER_TYPES = frozenset({"advertising", "analytics"})
CROSS_SITE_MIN_SITES = 3
CROSS_SITE_CRITICAL_TRACKERS = 5

FINGERPRINT_MIN_EVENTS = 2
FINGERPRINT_MIN_PER_SITE = 2


# ── Grouping helpers ────────────────────────────────────────────


def _group_by(events: Iterable[TrackingEvent], key) -> dict[str, list[TrackingEvent]]:
    """Group events by a string key, skipping events whose key is ``None``.

    Keys are returned sorted so downstream output does not depend on
    event order.
    """
    groups: dict[str, list[TrackingEvent]] = {}
    for event in events:
        k = key(event)
        if k is None:
            continue
        groups.setdefault(k, []).append(event)
    return {k: groups[k] for k in sorted(groups)}


def _event_site(event: TrackingEvent) -> str | None:
    return url.extract_hostname(event.url)


def _latest(events: Sequence[TrackingEvent]) -> int:
    return max((e.timestamp for e in events), default=0)


# ── Cross-site detection ────────────────────────────────────────


def detect_cross_site(events: Sequence[TrackingEvent]) -> TrackerPattern | None:
    """Find advertising/analytics trackers that follow the user across sites.

    Events with an unparsable ``url`` do not contribute a site.

    Returns:
        One pattern covering every qualifying tracker domain, or
        ``None`` if no tracker reached :data:`CROSS_SITE_MIN_SITES`.
    """
    candidates = [e for e in events if e.tracker_type in CROSS_SITE_TRACKER_TYPES]
    by_tracker = _group_by(candidates, lambda e: e.domain.lower() or None)

    qualifying: dict[str, list[TrackingEvent]] = {}
    site_count: dict[str, int] = {}
    for tracker, tracker_events in by_tracker.items():
        sites = {s for s in (_event_site(e) for e in tracker_events) if s is not None}
        if len(sites) >= CROSS_SITE_MIN_SITES:
            qualifying[tracker] = tracker_events
            site_count[tracker] = len(sites)

    if not qualifying:
        return None

    pattern_events = [e for tracker_events in qualifying.values() for e in tracker_events]
    risk = "critical" if len(qualifying) >= CROSS_SITE_CRITICAL_TRACKERS else "high"
    widest = max(site_count.values())
    detected_at = _latest(pattern_events)

    log.info(
        "Cross-site tracking detected",
        {"trackers": len(qualifying), "maxSites": widest, "riskLevel": risk},
    )

    return TrackerPattern(
        id=f"cross-site-{detected_at}",
        type="cross-site",
        domains=list(qualifying),
        events=pattern_events,
        risk_level=risk,
        description=f"{len(qualifying)} trackers follow you across sites (up to {widest} different sites)",
        detected_at=detected_at,
    )


# ── Fingerprinting detection ────────────────────────────────────


def detect_fingerprinting(events: Sequence[TrackingEvent]) -> TrackerPattern | None:
    """Find repeated fingerprinting attempts on the same site.

    Returns:
        A ``high`` risk pattern whose ``domains`` are the sites with
        at least :data:`FINGERPRINT_MIN_PER_SITE` attempts, or
        ``None``.
    """
    fingerprinting = [e for e in events if e.tracker_type == "fingerprinting"]
    if len(fingerprinting) < FINGERPRINT_MIN_EVENTS:
        return None

    by_site = _group_by(fingerprinting, _event_site)
    hot_sites = {site: site_events for site, site_events in by_site.items() if len(site_events) >= FINGERPRINT_MIN_PER_SITE}
    if not hot_sites:
        return None

    pattern_events = [e for site_events in hot_sites.values() for e in site_events]
    detected_at = _latest(pattern_events)

    log.info(
        "Fingerprinting pattern detected",
        {"attempts": len(pattern_events), "sites": list(hot_sites)},
    )

    return TrackerPattern(
        id=f"fingerprinting-{detected_at}",
        type="fingerprinting",
        domains=list(hot_sites),
        events=pattern_events,
        risk_level="high",
        description=f"{len(pattern_events)} fingerprinting attempts on {len(hot_sites)} site(s)",
        detected_at=detected_at,
    )


# ── Public API ──────────────────────────────────────────────────


def detect_patterns(events: Sequence[TrackingEvent]) -> list[TrackerPattern]:
    """Run every detector and return the patterns found (zero to two)."""
    patterns = [p for p in (detect_cross_site(events), detect_fingerprinting(events)) if p is not None]
    log.debug("Pattern pass complete", {"events": len(events), "patterns": len(patterns)})
    return patterns


_SEVERITY_ORDER: dict[AlertSeverity, int] = {"critical": 0, "warning": 1}

_ALERT_MESSAGES = {
    "cross-site": "Cross-site tracking detected across multiple domains",
    "fingerprinting": "Device fingerprinting attempts detected",
    "behavioral": "Behavioural tracking detected",
    "data-broker": "Data broker activity detected",
}


def build_alerts(patterns: Iterable[TrackerPattern]) -> list[PatternAlert]:
    """Turn patterns into user-facing alerts, critical ones first.

    The sort is stable, so alerts of equal severity keep detector
    order.
    """
    alerts = [
        PatternAlert(
            pattern=p,
            severity="critical" if p.risk_level == "critical" else "warning",
            message=_ALERT_MESSAGES[p.type],
        )
        for p in patterns
    ]
    return sorted(alerts, key=lambda a: _SEVERITY_ORDER[a.severity])
