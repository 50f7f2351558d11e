"""Percentile comparisons against category, personal-history, and peer baselines."""

from __future__ import annotations

from trackerlens.comparisons.category import compare_to_category
from trackerlens.comparisons.history import compare_to_history
from trackerlens.comparisons.peers import compare_to_peers

__all__ = ["compare_to_category", "compare_to_history", "compare_to_peers"]
