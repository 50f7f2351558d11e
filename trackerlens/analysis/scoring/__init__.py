"""Privacy scoring package.

Splits the score into per-event weights and once-only penalties
(:mod:`penalties`), grade bands (:mod:`grading`), and advice
(:mod:`recommendations`).  The public API is :func:`compute_score`.
"""

from __future__ import annotations

from trackerlens.analysis.scoring.calculator import compute_score
from trackerlens.analysis.scoring.grading import grade_for, privacy_trend

__all__ = ["compute_score", "grade_for", "privacy_trend"]
