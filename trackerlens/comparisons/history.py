"""Compare a site against the user's own browsing history."""

from __future__ import annotations

from collections.abc import Sequence

from trackerlens.comparisons import base, suggestions
from trackerlens.config import AnalysisSettings
from trackerlens.data.categories import CategoryProvider
from trackerlens.models.comparison import Baseline, ComparisonResult, SiteSnapshot
from trackerlens.models.events import TrackingEvent
from trackerlens.utils import url

log = base.log

# Score differences below this read as "similar".
_SIMILAR_MARGIN = 5


def _insight(site_score: int, average: float, percentile: int) -> str:
    if abs(site_score - average) < _SIMILAR_MARGIN:
        return "Similar privacy to your usual browsing pattern"
    if site_score > average:
        return f"Better privacy than {percentile}% of sites you visit"
    return f"Lower privacy than {100 - percentile}% of sites you visit"


def compare_to_history(
    domain: str,
    events: Sequence[TrackingEvent],
    settings: AnalysisSettings,
    provider: CategoryProvider | None = None,
) -> ComparisonResult:
    """Place a site's score within the scores of the user's own sites.

    The percentile is the share of the user's qualifying sites that
    score strictly lower than *domain*.

    Args:
        domain: The visited site to compare.
        events: The user's event history (any order).
        settings: Minimum sample thresholds.
        provider: Optional category source used for suggestion wording.

    Returns:
        A ``history`` comparison, or ``insufficient-data`` when the
        history holds fewer than ``min_history_events`` events, the
        site has no events, or fewer than ``min_qualifying_sites``
        sites have ``min_events_per_site`` events each.
    """
    site = url.normalize_site(domain)
    if len(events) < settings.min_history_events:
        return base.insufficient(
            "history",
            site,
            f"need at least {settings.min_history_events} tracking events, have {len(events)}",
        )

    site_events = base.events_for_site(site, events)
    if not site_events:
        return base.insufficient("history", site, "no tracking events recorded for this site")
    score = base.site_score(site_events)

    groups = base.group_by_site(events)
    site_scores = base.qualifying_site_scores(groups, settings.min_events_per_site)
    if len(site_scores) < settings.min_qualifying_sites:
        return base.insufficient(
            "history",
            site,
            f"need at least {settings.min_qualifying_sites} sites with "
            f"{settings.min_events_per_site}+ events, have {len(site_scores)}",
            score=score,
            tracker_count=len(site_events),
        )

    scores = list(site_scores.values())
    average = sum(scores) / len(scores)
    lower = sum(1 for s in scores if s < score)
    percentile = base.percent(lower, len(scores))
    category = provider.categorize(site) if provider is not None else None

    log.info(
        "History comparison",
        {"domain": site, "score": score, "sites": len(scores), "percentile": percentile},
    )

    return ComparisonResult(
        kind="history",
        current_site=SiteSnapshot(
            domain=site,
            score=score,
            tracker_count=len(site_events),
            category=category.name if category else None,
        ),
        baseline=Baseline(
            score=round(average, 1),
            tracker_count=round(sum(len(g) for g in groups.values()) / len(groups), 1),
            category=None,
            sample_size=len(scores),
        ),
        percentile=percentile,
        insight=_insight(score, average, percentile),
        better_than_baseline=score > average,
        improvement_suggestions=suggestions.generate(score, average, "your usual sites", category),
    )
