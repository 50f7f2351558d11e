"""Pydantic models for scores, patterns, and timeline reports."""

from __future__ import annotations

from typing import Literal

import pydantic

from trackerlens.models.events import TrackingEvent
from trackerlens.utils.serialization import camel_config

Grade = Literal["A", "B", "C", "D", "F"]
GradeColor = Literal["green", "yellow", "orange", "red"]
PatternType = Literal["cross-site", "fingerprinting", "behavioral", "data-broker"]
AlertSeverity = Literal["critical", "warning"]
Trend = Literal["improving", "declining", "stable"]


# ── Scoring ─────────────────────────────────────────────────────


class ScoreBreakdown(pydantic.BaseModel):
    """Raw counts and the penalties that fired for a score."""

    model_config = camel_config()

    total_trackers: int = 0
    critical_risk: int = 0
    high_risk: int = 0
    medium_risk: int = 0
    low_risk: int = 0
    unique_companies: int = 0
    https_bonus: bool = False
    excessive_tracking_penalty: bool = False
    cross_site_penalty: bool = False
    persistent_tracking_penalty: bool = False


class PrivacyScore(pydantic.BaseModel):
    """A 0-100 privacy score (higher is better) and its letter grade."""

    model_config = camel_config()

    score: int = pydantic.Field(ge=0, le=100)
    grade: Grade
    color: GradeColor
    breakdown: ScoreBreakdown
    recommendations: list[str] = pydantic.Field(default_factory=list)


# ── Patterns ────────────────────────────────────────────────────


class TrackerPattern(pydantic.BaseModel):
    """A higher-order tracking pattern found across several events."""

    model_config = camel_config(frozen=True)

    id: str
    type: PatternType
    domains: list[str]
    events: list[TrackingEvent]
    risk_level: Literal["low", "medium", "high", "critical"]
    description: str
    detected_at: int


class PatternAlert(pydantic.BaseModel):
    """A user-facing alert raised for a detected pattern."""

    model_config = camel_config(frozen=True)

    pattern: TrackerPattern
    severity: AlertSeverity
    message: str
    actionable: bool = True


# ── Timeline ────────────────────────────────────────────────────


class HourlyBucket(pydantic.BaseModel):
    """Event count for one hour of the day (UTC)."""

    model_config = camel_config()

    hour: int = pydantic.Field(ge=0, le=23)
    events: int = 0


class TimelineAnomaly(pydantic.BaseModel):
    """A day whose tracking volume spiked above the window average."""

    model_config = camel_config()

    timestamp: int
    day: str
    description: str
    event_count: int
    cause: str | None = None


class SiteActivity(pydantic.BaseModel):
    """Event count for one visited site."""

    model_config = camel_config()

    site: str
    events: int


class TimelineReport(pydantic.BaseModel):
    """Volume and temporal distribution of tracking over a window."""

    model_config = camel_config()

    total_events: int = 0
    daily_average: float = 0.0
    peak_day: str | None = None
    lowest_day: str | None = None
    hourly_patterns: list[HourlyBucket] = pydantic.Field(default_factory=list)
    peak_hour: HourlyBucket | None = None
    anomalies: list[TimelineAnomaly] = pydantic.Field(default_factory=list)
    busiest_sites: list[SiteActivity] = pydantic.Field(default_factory=list)
    recommendations: list[str] = pydantic.Field(default_factory=list)
