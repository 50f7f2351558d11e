"""Pydantic models for tracking events delivered by the detection layer."""

from __future__ import annotations

from typing import Literal

import pydantic

from trackerlens.utils.serialization import camel_config

TrackerType = Literal[
    "advertising",
    "analytics",
    "social",
    "fingerprinting",
    "cryptomining",
    "audience-measurement",
    "other",
]

RiskLevel = Literal["low", "medium", "high", "critical"]

RISK_LEVELS: tuple[RiskLevel, ...] = ("low", "medium", "high", "critical")

TrackingMethod = Literal[
    "canvas-fingerprint",
    "font-fingerprint",
    "audio-fingerprint",
    "webgl-fingerprint",
    "webrtc-leak",
    "storage-access",
    "mouse-tracking",
    "form-monitoring",
    "device-api",
    "clipboard-access",
]

# Techniques that survive cookie clearing and private browsing.
PERSISTENT_METHODS: frozenset[str] = frozenset(
    {
        "canvas-fingerprint",
        "font-fingerprint",
        "audio-fingerprint",
        "webgl-fingerprint",
        "webrtc-leak",
    }
)


class InPageTracking(pydantic.BaseModel):
    """Details reported by an in-page probe."""

    model_config = camel_config(frozen=True)

    method: TrackingMethod | None = None
    details: str | None = None


class TrackingEvent(pydantic.BaseModel):
    """A single tracker detection.

    ``risk_level`` is kept as the raw upstream string.  The scoring
    engine treats anything outside :data:`RISK_LEVELS` as ``low``
    and logs a warning instead of rejecting the event.
    """

    model_config = camel_config(frozen=True)

    id: str
    timestamp: int
    url: str
    domain: str
    tracker_type: TrackerType = "other"
    risk_level: str = "low"
    description: str = ""
    in_page_tracking: InPageTracking | None = None

    @property
    def tracking_method(self) -> str | None:
        """The in-page technique, if a probe reported one."""
        if self.in_page_tracking is None:
            return None
        return self.in_page_tracking.method
