"""Privacy score calculator.

Starts every site at 100 and subtracts linear per-event risk
weights plus the once-only penalties from :mod:`penalties`, then
clamps to 0-100 and grades the result.  The function is pure: the
same events in any order give the same score.
"""

from __future__ import annotations

from collections.abc import Sequence

from trackerlens.analysis.scoring import grading, penalties, recommendations
from trackerlens.models.analysis import PrivacyScore, ScoreBreakdown
from trackerlens.models.events import TrackingEvent
from trackerlens.utils import logger

log = logger.create_logger("PrivacyScore")


def compute_score(events: Sequence[TrackingEvent], is_https: bool = True) -> PrivacyScore:
    """Calculate the privacy score for a set of tracking events.

    Args:
        events: Events observed on the site or in the window being
            scored.  Unknown risk levels are weighted as ``low``.
        is_https: Whether the page was served over HTTPS.

    Returns:
        A :class:`PrivacyScore` with breakdown and recommendations.
    """
    counts = penalties.count_risk_levels(events)
    companies = penalties.tracker_companies(events)
    persistent = penalties.has_persistent_tracking(events)

    breakdown = ScoreBreakdown(
        total_trackers=len(events),
        critical_risk=counts["critical"],
        high_risk=counts["high"],
        medium_risk=counts["medium"],
        low_risk=counts["low"],
        unique_companies=len(companies),
        https_bonus=is_https,
        excessive_tracking_penalty=len(events) > penalties.EXCESSIVE_TRACKING_THRESHOLD,
        cross_site_penalty=len(companies) >= penalties.CROSS_SITE_COMPANY_THRESHOLD,
        persistent_tracking_penalty=persistent,
    )

    raw = 100 - penalties.risk_deduction(counts)
    if breakdown.https_bonus:
        raw += penalties.HTTPS_BONUS
    if breakdown.excessive_tracking_penalty:
        raw -= penalties.EXCESSIVE_TRACKING_PENALTY
    if breakdown.cross_site_penalty:
        raw -= penalties.CROSS_SITE_PENALTY
    if breakdown.persistent_tracking_penalty:
        raw -= penalties.PERSISTENT_TRACKING_PENALTY

    score = grading.clamp_score(raw)
    grade, colour = grading.grade_for(score)

    log.debug(
        "Privacy score calculated",
        {
            "events": len(events),
            "raw": raw,
            "score": score,
            "grade": grade,
            "companies": len(companies),
            "persistent": persistent,
        },
    )

    return PrivacyScore(
        score=score,
        grade=grade,
        color=colour,
        breakdown=breakdown,
        recommendations=recommendations.generate(breakdown, score),
    )
