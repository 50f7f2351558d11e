"""Pydantic models for website categories and comparison results."""

from __future__ import annotations

from typing import Literal

import pydantic

from trackerlens.utils.serialization import camel_config

ComparisonKind = Literal["category", "history", "peers"]
ComparisonStatus = Literal["ok", "insufficient-data"]
RiskProfile = Literal["low", "medium", "high", "critical"]


class WebsiteCategory(pydantic.BaseModel):
    """A website category as resolved by the category provider."""

    model_config = camel_config()

    id: str
    name: str
    risk_profile: RiskProfile = "medium"
    average_privacy_score: float = 70.0


class CategoryBenchmark(pydantic.BaseModel):
    """Reference statistics for a category.

    ``distribution`` holds 101 non-negative weights, one per
    possible score 0..100.
    """

    model_config = camel_config()

    average_score: float
    average_trackers: float
    distribution: list[float] = pydantic.Field(default_factory=list)


class SiteSnapshot(pydantic.BaseModel):
    """The site being compared."""

    model_config = camel_config()

    domain: str
    score: int | None = None
    tracker_count: int = 0
    category: str | None = None


class Baseline(pydantic.BaseModel):
    """The population the site is compared against."""

    model_config = camel_config()

    score: float | None = None
    tracker_count: float | None = None
    category: str | None = None
    sample_size: int = 0


class ComparisonResult(pydantic.BaseModel):
    """Outcome of comparing a site against one baseline flavor.

    When ``status`` is ``"insufficient-data"`` the percentile is
    ``None``; no percentile is ever guessed from a thin sample.
    """

    model_config = camel_config()

    kind: ComparisonKind
    status: ComparisonStatus = "ok"
    current_site: SiteSnapshot
    baseline: Baseline = pydantic.Field(default_factory=Baseline)
    percentile: int | None = pydantic.Field(default=None, ge=0, le=100)
    insight: str = ""
    better_than_baseline: bool = False
    improvement_suggestions: list[str] = pydantic.Field(default_factory=list)
    rank: int | None = None
    population: int | None = None

    @property
    def insufficient(self) -> bool:
        return self.status == "insufficient-data"
