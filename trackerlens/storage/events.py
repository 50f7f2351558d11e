"""
Event store interface and the bundled in-memory log.

The analysis core only reads events, through
:meth:`EventStore.get_recent_events`.  Any exception raised by a
store is wrapped in :class:`StorageReadError` by :func:`read_events`
so that callers deal with a single error type.  Retrying is the
store's business, not the analyzers'.
"""

from __future__ import annotations

import bisect
from collections.abc import Iterable
from typing import Protocol

from trackerlens.models.events import TrackingEvent
from trackerlens.utils import errors, logger

log = logger.create_logger("EventStore")

DEFAULT_CAPACITY = 5000


class EventStore(Protocol):
    """Read access to the time-ordered tracking event log."""

    async def get_recent_events(self, limit: int) -> list[TrackingEvent]:
        """Return up to *limit* of the newest events, in any order."""
        ...


class InMemoryEventStore:
    """A bounded, time-ordered event log held in memory.

    Events are kept sorted by timestamp; once ``capacity`` is
    exceeded the oldest events are dropped.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._events: list[TrackingEvent] = []
        self._timestamps: list[int] = []

    def __len__(self) -> int:
        return len(self._events)

    @property
    def capacity(self) -> int:
        return self._capacity

    def append(self, event: TrackingEvent) -> None:
        """Insert *event* in timestamp order, evicting the oldest on overflow."""
        index = bisect.bisect_right(self._timestamps, event.timestamp)
        self._timestamps.insert(index, event.timestamp)
        self._events.insert(index, event)
        overflow = len(self._events) - self._capacity
        if overflow > 0:
            del self._events[:overflow]
            del self._timestamps[:overflow]
            log.debug("Evicted oldest events", {"count": overflow})

    def extend(self, events: Iterable[TrackingEvent]) -> int:
        """Append several events; returns how many were added."""
        added = 0
        for event in events:
            self.append(event)
            added += 1
        return added

    async def get_recent_events(self, limit: int) -> list[TrackingEvent]:
        if limit <= 0:
            return []
        return list(reversed(self._events[-limit:]))


async def read_events(store: EventStore, limit: int) -> list[TrackingEvent]:
    """Fetch recent events, normalising store failures.

    Raises:
        StorageReadError: If the store raised for any reason.
    """
    try:
        events = await store.get_recent_events(limit)
    except errors.StorageReadError:
        raise
    except Exception as exc:
        log.error("Event store read failed", {"limit": limit, "error": errors.get_error_message(exc)})
        raise errors.StorageReadError(f"Failed to read events: {errors.get_error_message(exc)}") from exc
    return list(events)
