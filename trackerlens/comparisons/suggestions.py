"""Improvement suggestions shared by every comparison flavor."""

from __future__ import annotations

from trackerlens.models.comparison import WebsiteCategory

# A site this many points under its baseline counts as worse than typical.
_GAP_THRESHOLD = 10
_LOW_SCORE = 60


def generate(
    site_score: int,
    baseline_score: float,
    baseline_label: str,
    category: WebsiteCategory | None = None,
) -> list[str]:
    """Suggest next steps from the score gap and the category risk profile.

    Args:
        site_score: The current site's score.
        baseline_score: The score it is compared against.
        baseline_label: How the baseline reads in a sentence, e.g.
            ``"typical news & media sites"``.
        category: The site's category, when known.  ``critical`` and
            ``high`` risk profiles get stronger wording.
    """
    suggestions: list[str] = []

    if site_score < baseline_score - _GAP_THRESHOLD:
        suggestions.append(f"This site has more tracking than {baseline_label}")
        suggestions.append("Consider using an ad blocker or privacy-focused browser")

    if category is not None:
        if category.risk_profile == "critical":
            suggestions.append(f"{category.name} sites routinely profile visitors across the web")
            suggestions.append("Block third-party cookies and keep personal details off your profile")
        elif category.risk_profile == "high":
            suggestions.append(f"{category.name} sites often have extensive tracking")
            suggestions.append("Review privacy settings and limit personal information sharing")

    if site_score < _LOW_SCORE:
        suggestions.append("Consider alternatives with better privacy practices")
        suggestions.append("Use incognito/private browsing mode for sensitive activities")

    return suggestions
