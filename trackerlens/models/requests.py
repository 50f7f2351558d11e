"""Request bodies accepted by the HTTP surface."""

from __future__ import annotations

import pydantic

from trackerlens.config import DAY_MS
from trackerlens.models.events import TrackingEvent
from trackerlens.utils.serialization import camel_config


class IngestRequest(pydantic.BaseModel):
    """New events from the detection layer.

    ``page_url`` is the page the user is on now; the debounced score
    is computed for that site.
    """

    model_config = camel_config()

    events: list[TrackingEvent]
    page_url: str | None = None


class ScoreRequest(pydantic.BaseModel):
    model_config = camel_config()

    events: list[TrackingEvent] = pydantic.Field(default_factory=list)
    is_https: bool = True


class PatternsRequest(pydantic.BaseModel):
    model_config = camel_config()

    events: list[TrackingEvent] = pydantic.Field(default_factory=list)


class TimelineRequest(pydantic.BaseModel):
    model_config = camel_config()

    events: list[TrackingEvent] = pydantic.Field(default_factory=list)
    window_ms: int = pydantic.Field(default=7 * DAY_MS, gt=0)
    now_ms: int | None = None
