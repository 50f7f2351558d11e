"""
Temporal analysis of tracking volume.

Events are bucketed by UTC calendar day and, separately, by UTC
hour of day across the whole window.  A day is anomalous when its
count exceeds twice the daily average; above three times the
average it is attributed to a concentrated browsing session.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from datetime import UTC, datetime

from trackerlens.models.analysis import HourlyBucket, SiteActivity, TimelineAnomaly, TimelineReport
from trackerlens.models.events import TrackingEvent
from trackerlens.utils import logger, url

log = logger.create_logger("Timeline")

ANOMALY_FACTOR = 2
CAUSE_FACTOR = 3
CONCENTRATED_SESSION_CAUSE = "possible concentrated browsing session"

_BUSIEST_SITES = 5


def _utc(timestamp_ms: int) -> datetime:
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=UTC)


def _day_start_ms(day: str) -> int:
    start = datetime.fromisoformat(day).replace(tzinfo=UTC)
    return int(start.timestamp() * 1000)


def _in_window(events: Sequence[TrackingEvent], window_ms: int, now_ms: int | None) -> list[TrackingEvent]:
    if not events:
        return []
    anchor = now_ms if now_ms is not None else max(e.timestamp for e in events)
    cutoff = anchor - window_ms
    return [e for e in events if cutoff <= e.timestamp <= anchor]


def _recommendations(report: TimelineReport) -> list[str]:
    recommendations: list[str] = []
    if report.anomalies:
        recommendations.append(
            f"{len(report.anomalies)} tracking spikes detected. Consider batching similar browsing activities."
        )
    peak = report.peak_hour
    if peak is not None and peak.events > 0 and peak.events > report.daily_average * 0.3:
        recommendations.append(
            f"Peak tracking at {peak.hour}:00 UTC. Consider using privacy mode during heavy browsing."
        )
    return recommendations


def analyze_timeline(
    events: Sequence[TrackingEvent],
    window_ms: int,
    now_ms: int | None = None,
) -> TimelineReport:
    """Summarise tracking volume over a time window.

    Args:
        events: Candidate events in any order.
        window_ms: Window length in milliseconds.
        now_ms: End of the window.  Defaults to the newest event's
            timestamp so the result depends only on the input.

    Returns:
        A :class:`TimelineReport`.  Empty input yields a report with
        zero totals, 24 empty hourly slots and no anomalies.
    """
    windowed = _in_window(events, window_ms, now_ms)

    daily: Counter[str] = Counter()
    hourly = [0] * 24
    sites: Counter[str] = Counter()
    for event in windowed:
        moment = _utc(event.timestamp)
        daily[moment.date().isoformat()] += 1
        hourly[moment.hour] += 1
        site = url.site_key(event.url)
        if site is not None:
            sites[site] += 1

    hourly_patterns = [HourlyBucket(hour=h, events=n) for h, n in enumerate(hourly)]
    if not windowed:
        return TimelineReport(hourly_patterns=hourly_patterns)

    days = sorted(daily)
    daily_average = len(windowed) / max(1, len(days))
    # Ties resolve to the earliest day / hour.
    peak_day = max(days, key=lambda d: daily[d])
    lowest_day = min(days, key=lambda d: daily[d])
    peak_hour = max(hourly_patterns, key=lambda b: b.events)

    anomalies: list[TimelineAnomaly] = []
    for day in days:
        count = daily[day]
        if count <= daily_average * ANOMALY_FACTOR:
            continue
        anomalies.append(
            TimelineAnomaly(
                timestamp=_day_start_ms(day),
                day=day,
                description=f"High tracking activity: {count} events",
                event_count=count,
                cause=CONCENTRATED_SESSION_CAUSE if count > daily_average * CAUSE_FACTOR else None,
            )
        )

    busiest = sorted(sites.items(), key=lambda item: (-item[1], item[0]))[:_BUSIEST_SITES]

    report = TimelineReport(
        total_events=len(windowed),
        daily_average=daily_average,
        peak_day=peak_day,
        lowest_day=lowest_day,
        hourly_patterns=hourly_patterns,
        peak_hour=peak_hour,
        anomalies=anomalies,
        busiest_sites=[SiteActivity(site=s, events=n) for s, n in busiest],
    )
    report.recommendations = _recommendations(report)

    log.debug(
        "Timeline analysed",
        {"events": len(windowed), "days": len(days), "anomalies": len(anomalies)},
    )
    return report
