"""Templated advice for a computed score.

One sentence per condition that fired, in a fixed priority order:
risk-level mentions first, then cross-site tracking, persistent
tracking, and finally generic volume and transport advice.
"""

from __future__ import annotations

from trackerlens.models.analysis import ScoreBreakdown

# Scores below this get the generic "switch tools" advice.
_LOW_SCORE = 60


def generate(breakdown: ScoreBreakdown, score: int) -> list[str]:
    """Build the ordered recommendation list for a score.

    Args:
        breakdown: The breakdown produced alongside *score*.
        score: The clamped 0-100 score.

    Returns:
        Recommendation sentences, most urgent first.
    """
    recommendations: list[str] = []

    if breakdown.critical_risk > 0:
        recommendations.append(
            f"{breakdown.critical_risk} critical-risk trackers detected. Immediate action recommended."
        )
    if breakdown.high_risk > 0:
        recommendations.append(
            f"{breakdown.high_risk} high-risk trackers detected. Consider using an ad blocker."
        )
    if breakdown.cross_site_penalty:
        recommendations.append(
            f"Cross-site tracking detected ({breakdown.unique_companies} companies). "
            "Your data is being shared across multiple sites."
        )
    if breakdown.persistent_tracking_penalty:
        recommendations.append("Persistent fingerprinting detected. This tracking works even in incognito mode.")
    if breakdown.excessive_tracking_penalty:
        recommendations.append("Excessive tracking detected. This site may be sharing data with many third parties.")
    if not breakdown.https_bonus:
        recommendations.append("Site is not using HTTPS. Your data may be transmitted insecurely.")
    if score < _LOW_SCORE:
        recommendations.append(
            "Consider using privacy-focused browser extensions or switching to a more private browser."
        )
    if breakdown.total_trackers == 0:
        recommendations.append("Great! No trackers detected on this site.")

    return recommendations
