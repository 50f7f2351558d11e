"""
Analysis coordinator.

Routes queries to the pure engines and keeps the latest result of
each event-driven analyzer (score, patterns, timeline) up to date.

Recomputation is debounced per analyzer: every
:meth:`AnalysisCoordinator.notify_new_events` call bumps that
analyzer's generation counter and re-arms a single
``loop.call_later`` timer, so a burst of N events yields one
computation.  A computation captures the generation it started
under and publishes only if no newer burst arrived while it was
reading from the store; otherwise its result is discarded.
"""

from __future__ import annotations

import asyncio
import contextlib
import dataclasses
import time
from collections.abc import Callable, Sequence
from typing import Any, Literal

from trackerlens import comparisons
from trackerlens.analysis import patterns, scoring, timeline
from trackerlens.comparisons import base as comparison_base
from trackerlens.config import AnalysisSettings, get_settings
from trackerlens.data.categories import CategoryProvider, StaticCategoryProvider
from trackerlens.models.analysis import PatternAlert, PrivacyScore, TimelineReport, TrackerPattern
from trackerlens.models.comparison import ComparisonResult
from trackerlens.models.events import TrackingEvent
from trackerlens.storage.events import EventStore, read_events
from trackerlens.utils import errors, logger, url

log = logger.create_logger("Coordinator")

AnalyzerKind = Literal["score", "patterns", "timeline"]
ANALYZER_KINDS: tuple[AnalyzerKind, ...] = ("score", "patterns", "timeline")

Listener = Callable[[AnalyzerKind, Any], None]


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclasses.dataclass
class _AnalyzerSlot:
    """Debounce and publication state for one analyzer."""

    generation: int = 0
    timer: asyncio.TimerHandle | None = None
    inflight: set[asyncio.Task[None]] = dataclasses.field(default_factory=set)
    result: Any = None
    error: errors.StorageReadError | None = None
    discarded: int = 0


class AnalysisCoordinator:
    """Stable query surface over the analysis engines.

    The synchronous methods (:meth:`compute_score`,
    :meth:`detect_patterns`, :meth:`analyze_timeline`) are thin
    pass-throughs to the pure engines.  The ``compare_*`` coroutines
    read a fresh snapshot from the store for every call and share no
    state with each other.

    Args:
        store: Source of tracking events.
        provider: Category benchmark provider; defaults to the
            bundled :class:`StaticCategoryProvider`.
        settings: Thresholds and sizes; defaults to the environment.
        clock: Returns the current time in epoch milliseconds.
    """

    def __init__(
        self,
        store: EventStore,
        provider: CategoryProvider | None = None,
        settings: AnalysisSettings | None = None,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self._store = store
        self._provider = provider or StaticCategoryProvider()
        self._settings = settings or get_settings()
        self._clock = clock
        self._slots: dict[AnalyzerKind, _AnalyzerSlot] = {kind: _AnalyzerSlot() for kind in ANALYZER_KINDS}
        self._listeners: list[Listener] = []
        self._page_url: str | None = None

    # ── Query surface ───────────────────────────────────────────

    def compute_score(self, events: Sequence[TrackingEvent], is_https: bool = True) -> PrivacyScore:
        return scoring.compute_score(events, is_https)

    def detect_patterns(self, events: Sequence[TrackingEvent]) -> list[TrackerPattern]:
        return patterns.detect_patterns(events)

    def build_alerts(self, found: Sequence[TrackerPattern]) -> list[PatternAlert]:
        return patterns.build_alerts(found)

    def analyze_timeline(
        self,
        events: Sequence[TrackingEvent],
        window_ms: int,
        now_ms: int | None = None,
    ) -> TimelineReport:
        return timeline.analyze_timeline(events, window_ms, now_ms)

    async def compare_to_category(self, domain: str) -> ComparisonResult:
        """Compare *domain* with its category benchmark.

        Raises:
            StorageReadError: If the event store could not be read.
        """
        events = await read_events(self._store, self._settings.site_events_limit)
        return comparisons.compare_to_category(domain, events, self._provider)

    async def compare_to_history(self, domain: str) -> ComparisonResult:
        """Compare *domain* with the user's own browsing history.

        Raises:
            StorageReadError: If the event store could not be read.
        """
        events = await read_events(self._store, self._settings.history_events_limit)
        return comparisons.compare_to_history(domain, events, self._settings, self._provider)

    async def compare_to_peers(self, domain: str) -> ComparisonResult:
        """Rank *domain* among visited sites of the same category.

        Raises:
            StorageReadError: If the event store could not be read.
        """
        events = await read_events(self._store, self._settings.history_events_limit)
        return comparisons.compare_to_peers(domain, events, self._provider, self._settings)

    # ── Event-driven recomputation ──────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener(kind, result)* whenever a result is published.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify_new_events(self, page_url: str | None = None) -> None:
        """Schedule a debounced recomputation of every analyzer.

        Must be called from a running event loop.

        Args:
            page_url: The page the user is currently on.  When given,
                the score analyzer scores that site only and uses the
                URL scheme for the HTTPS bonus.
        """
        if page_url is not None:
            self._page_url = page_url
        loop = asyncio.get_running_loop()
        delay = self._settings.debounce_ms / 1000
        for kind, slot in self._slots.items():
            slot.generation += 1
            if slot.timer is not None:
                slot.timer.cancel()
            slot.timer = loop.call_later(delay, self._start, kind, slot.generation)

    def latest(self, kind: AnalyzerKind) -> Any:
        """The most recently published result for *kind*, or ``None``."""
        return self._slots[kind].result

    def latest_alerts(self) -> list[PatternAlert]:
        """Alerts for the most recently published patterns."""
        return patterns.build_alerts(self._slots["patterns"].result or [])

    def last_error(self, kind: AnalyzerKind) -> errors.StorageReadError | None:
        """The store error from the latest computation of *kind*, if it failed."""
        return self._slots[kind].error

    def discarded_count(self, kind: AnalyzerKind) -> int:
        """How many computations of *kind* were dropped as stale."""
        return self._slots[kind].discarded

    def pending(self) -> bool:
        """True while a timer is armed or a computation is running."""
        return any(
            slot.timer is not None or bool(slot.inflight) for slot in self._slots.values()
        )

    async def flush(self) -> None:
        """Fire armed timers immediately and wait for every computation."""
        for kind, slot in self._slots.items():
            if slot.timer is not None:
                slot.timer.cancel()
                self._start(kind, slot.generation)
        tasks = [task for slot in self._slots.values() for task in slot.inflight]
        if tasks:
            await asyncio.gather(*tasks)

    async def aclose(self) -> None:
        """Cancel armed timers and in-flight computations."""
        for slot in self._slots.values():
            if slot.timer is not None:
                slot.timer.cancel()
                slot.timer = None
            for task in list(slot.inflight):
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task

    # ── Internals ───────────────────────────────────────────────

    def _start(self, kind: AnalyzerKind, generation: int) -> None:
        slot = self._slots[kind]
        slot.timer = None
        if generation != slot.generation:
            return
        task = asyncio.get_running_loop().create_task(self._run(kind, generation))
        slot.inflight.add(task)
        task.add_done_callback(slot.inflight.discard)

    async def _run(self, kind: AnalyzerKind, generation: int) -> None:
        slot = self._slots[kind]
        timer_label = f"{kind}#{generation}"
        log.start_timer(timer_label)
        try:
            result = await self._compute(kind)
        except errors.StorageReadError as exc:
            log.end_timer(timer_label, f"Recomputation of {kind} failed")
            if generation == slot.generation:
                slot.error = exc
                log.warn("Recomputation failed", {"analyzer": kind, "error": errors.get_error_message(exc)})
            return

        log.end_timer(timer_label, f"Recomputed {kind}")
        if generation != slot.generation:
            slot.discarded += 1
            log.debug("Discarding stale result", {"analyzer": kind, "generation": generation, "current": slot.generation})
            return

        slot.result = result
        slot.error = None
        log.debug("Published result", {"analyzer": kind, "generation": generation})
        for listener in list(self._listeners):
            try:
                listener(kind, result)
            except Exception as exc:
                log.error("Listener failed", {"analyzer": kind, "error": errors.get_error_message(exc)})

    async def _compute(self, kind: AnalyzerKind) -> Any:
        if kind == "score":
            events = await read_events(self._store, self._settings.site_events_limit)
            return self._score_current_page(events)
        events = await read_events(self._store, self._settings.history_events_limit)
        if kind == "patterns":
            return patterns.detect_patterns(events)
        return timeline.analyze_timeline(events, self._settings.timeline_window_ms, self._clock())

    def _score_current_page(self, events: list[TrackingEvent]) -> PrivacyScore:
        if self._page_url is None:
            return scoring.compute_score(events, is_https=True)
        site = url.site_key(self._page_url)
        is_https = self._page_url.lower().startswith("https:")
        if site is None:
            return scoring.compute_score(events, is_https=is_https)
        return scoring.compute_score(comparison_base.events_for_site(site, events), is_https=is_https)
