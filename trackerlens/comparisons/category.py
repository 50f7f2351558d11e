"""Compare a site against the benchmark for its website category."""

from __future__ import annotations

from collections.abc import Sequence

from trackerlens.comparisons import base, suggestions
from trackerlens.data.categories import CategoryProvider
from trackerlens.models.comparison import Baseline, ComparisonResult, SiteSnapshot
from trackerlens.models.events import TrackingEvent
from trackerlens.utils import url

log = base.log


def distribution_percentile(score: int, distribution: Sequence[float]) -> int:
    """Share of the distribution's mass at or below *score*, as 0-100.

    ``distribution[i]`` is the weight of score ``i``.  An empty or
    all-zero distribution has no information and yields 50.
    """
    total = sum(w for w in distribution if w > 0)
    if total <= 0:
        return 50
    upto = min(score, len(distribution) - 1)
    mass = sum(w for w in distribution[: upto + 1] if w > 0)
    return max(0, min(100, round(mass / total * 100)))


def _insight(percentile: int, category_name: str) -> str:
    name = category_name.lower()
    if percentile >= 80:
        return f"Excellent privacy - better than {percentile}% of {name} sites"
    if percentile >= 60:
        return f"Good privacy - above average for {name} sites"
    if percentile >= 40:
        return f"Average privacy for {name} sites"
    if percentile >= 20:
        return f"Below average privacy - worse than {100 - percentile}% of {name} sites"
    return f"Poor privacy - among the worst {100 - percentile}% of {name} sites"


def compare_to_category(
    domain: str,
    events: Sequence[TrackingEvent],
    provider: CategoryProvider,
) -> ComparisonResult:
    """Rank a site's score within its category's score distribution.

    Args:
        domain: The visited site to compare.
        events: Recent events; only those observed on *domain* are used.
        provider: Source of the category and its benchmark.

    Returns:
        A ``category`` comparison, or ``insufficient-data`` when no
        events were recorded for the site.
    """
    site = url.normalize_site(domain)
    category = provider.categorize(site)
    site_events = base.events_for_site(site, events)
    if not site_events:
        return base.insufficient("category", site, "no tracking events recorded for this site", category=category.name)

    score = base.site_score(site_events)
    benchmark = provider.get_benchmark(category.id)
    percentile = distribution_percentile(score, benchmark.distribution)

    log.info(
        "Category comparison",
        {"domain": site, "category": category.id, "score": score, "percentile": percentile},
    )

    return ComparisonResult(
        kind="category",
        current_site=SiteSnapshot(
            domain=site,
            score=score,
            tracker_count=len(site_events),
            category=category.name,
        ),
        baseline=Baseline(
            score=benchmark.average_score,
            tracker_count=benchmark.average_trackers,
            category=category.name,
        ),
        percentile=percentile,
        insight=_insight(percentile, category.name),
        better_than_baseline=score > benchmark.average_score,
        improvement_suggestions=suggestions.generate(
            score,
            benchmark.average_score,
            f"typical {category.name.lower()} sites",
            category,
        ),
    )
