"""Rank a site among the user's other sites in the same category."""

from __future__ import annotations

import math
from collections.abc import Sequence

from trackerlens.comparisons import base, suggestions
from trackerlens.config import AnalysisSettings
from trackerlens.data.categories import CategoryProvider
from trackerlens.models.comparison import Baseline, ComparisonResult, SiteSnapshot
from trackerlens.models.events import TrackingEvent
from trackerlens.utils import url

log = base.log

TOP_FRACTION = 0.3
MIDDLE_FRACTION = 0.7


def _insight(rank: int, population: int, category_name: str) -> str:
    name = category_name.lower()
    if rank == 1:
        return f"Best privacy among {population} similar {name} sites"
    if rank <= math.ceil(population * TOP_FRACTION):
        return f"Top {math.ceil(rank / population * 100)}% privacy among {name} sites"
    if rank <= math.ceil(population * MIDDLE_FRACTION):
        return f"Average privacy ranking among {name} sites"
    return f"Below average privacy - ranks {rank} of {population} {name} sites"


def compare_to_peers(
    domain: str,
    events: Sequence[TrackingEvent],
    provider: CategoryProvider,
    settings: AnalysisSettings,
) -> ComparisonResult:
    """Rank a site's score among peer sites sharing its category.

    Peers are other sites in *events* with the same category and at
    least ``min_events_per_site`` events, capped at
    ``max_peer_sites`` (alphabetical by site).  Rank is 1-based with
    the best score first; peers with an equal score rank ahead of the
    current site.

    Returns:
        A ``peers`` comparison, or ``insufficient-data`` when the
        history is too small, the site has no events, there are no
        peers, or fewer than ``min_qualifying_sites`` sites (the site
        and its peers, each with ``min_events_per_site`` events) can be
        ranked.
    """
    site = url.normalize_site(domain)
    category = provider.categorize(site)
    if len(events) < settings.min_history_events:
        return base.insufficient(
            "peers",
            site,
            f"need at least {settings.min_history_events} tracking events, have {len(events)}",
            category=category.name,
        )

    site_events = base.events_for_site(site, events)
    if not site_events:
        return base.insufficient("peers", site, "no tracking events recorded for this site", category=category.name)
    score = base.site_score(site_events)

    groups = base.group_by_site(events)
    peer_groups = {
        other: other_events
        for other, other_events in groups.items()
        if other != site
        and len(other_events) >= settings.min_events_per_site
        and provider.categorize(other).id == category.id
    }
    peer_sites = list(peer_groups)[: settings.max_peer_sites]
    peer_scores = {other: base.site_score(peer_groups[other]) for other in peer_sites}

    population = len(peer_scores) + 1
    qualifying = len(peer_scores) + (1 if len(site_events) >= settings.min_events_per_site else 0)
    if not peer_scores:
        reason = f"no other {category.name.lower()} sites with {settings.min_events_per_site}+ events"
    elif qualifying < settings.min_qualifying_sites:
        reason = (
            f"need at least {settings.min_qualifying_sites} {category.name.lower()} sites with "
            f"{settings.min_events_per_site}+ events, have {qualifying}"
        )
    else:
        reason = None
    if reason is not None:
        return base.insufficient(
            "peers",
            site,
            reason,
            score=score,
            tracker_count=len(site_events),
            category=category.name,
        )

    rank = 1 + sum(1 for s in peer_scores.values() if s >= score)
    lower = sum(1 for s in peer_scores.values() if s < score)
    percentile = base.percent(lower, len(peer_scores))
    average = sum(peer_scores.values()) / len(peer_scores)
    average_trackers = sum(len(peer_groups[o]) for o in peer_sites) / len(peer_sites)

    log.info(
        "Peer comparison",
        {"domain": site, "category": category.id, "rank": rank, "population": population},
    )

    return ComparisonResult(
        kind="peers",
        current_site=SiteSnapshot(
            domain=site,
            score=score,
            tracker_count=len(site_events),
            category=category.name,
        ),
        baseline=Baseline(
            score=round(average, 1),
            tracker_count=round(average_trackers, 1),
            category=category.name,
            sample_size=len(peer_scores),
        ),
        percentile=percentile,
        insight=_insight(rank, population, category.name),
        better_than_baseline=score > average,
        improvement_suggestions=suggestions.generate(
            score,
            average,
            f"similar {category.name.lower()} sites you visit",
            category,
        ),
        rank=rank,
        population=population,
    )
