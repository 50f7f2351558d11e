"""Score bands, grades, and trends."""

from __future__ import annotations

from trackerlens.models.analysis import Grade, GradeColor, Trend

# (lower bound, grade, colour), checked top-down.
_GRADE_BANDS: tuple[tuple[int, Grade, GradeColor], ...] = (
    (90, "A", "green"),
    (80, "B", "green"),
    (70, "C", "yellow"),
    (60, "D", "orange"),
)

# Score changes within this many points count as stable.
_TREND_TOLERANCE = 5


def clamp_score(raw: int) -> int:
    """Clamp a running total to the 0-100 score range."""
    return max(0, min(100, raw))


def grade_for(score: int) -> tuple[Grade, GradeColor]:
    """Map a 0-100 score to its letter grade and display colour."""
    for floor, grade, colour in _GRADE_BANDS:
        if score >= floor:
            return grade, colour
    return "F", "red"


def privacy_trend(current: int, previous: int) -> Trend:
    """Compare two scores for the same site or window."""
    difference = current - previous
    if difference > _TREND_TOLERANCE:
        return "improving"
    if difference < -_TREND_TOLERANCE:
        return "declining"
    return "stable"
