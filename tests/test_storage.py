"""Tests for the in-memory event store and read_events()."""

from __future__ import annotations

import asyncio

import pytest
from conftest import BASE_TS

from trackerlens.storage.events import InMemoryEventStore, read_events
from trackerlens.utils import errors


class _BrokenStore:
    async def get_recent_events(self, limit: int) -> list:
        raise ConnectionError("database unavailable")


class _FailingStore:
    async def get_recent_events(self, limit: int) -> list:
        raise errors.StorageReadError("already wrapped")


class TestInMemoryEventStore:
    """Tests for InMemoryEventStore."""

    def test_rejects_zero_capacity(self) -> None:
        with pytest.raises(ValueError):
            InMemoryEventStore(capacity=0)

    def test_recent_events_newest_first(self, make_event) -> None:
        store = InMemoryEventStore()
        store.extend([make_event(timestamp=BASE_TS + i) for i in (3, 1, 2)])
        events = asyncio.run(store.get_recent_events(10))
        assert [e.timestamp for e in events] == [BASE_TS + 3, BASE_TS + 2, BASE_TS + 1]

    def test_limit(self, make_event) -> None:
        store = InMemoryEventStore()
        store.extend([make_event(timestamp=BASE_TS + i) for i in range(5)])
        events = asyncio.run(store.get_recent_events(2))
        assert [e.timestamp for e in events] == [BASE_TS + 4, BASE_TS + 3]
        assert asyncio.run(store.get_recent_events(0)) == []

    def test_evicts_oldest(self, make_event) -> None:
        store = InMemoryEventStore(capacity=3)
        added = store.extend([make_event(timestamp=BASE_TS + i) for i in range(5)])
        assert added == 5
        assert len(store) == 3
        events = asyncio.run(store.get_recent_events(10))
        assert [e.timestamp for e in events] == [BASE_TS + 4, BASE_TS + 3, BASE_TS + 2]

    def test_out_of_order_inserts_stay_sorted(self, make_event) -> None:
        store = InMemoryEventStore(capacity=2)
        store.extend([make_event(timestamp=BASE_TS + i) for i in (5, 1, 3)])
        events = asyncio.run(store.get_recent_events(10))
        assert [e.timestamp for e in events] == [BASE_TS + 5, BASE_TS + 3]


class TestReadEvents:
    """Tests for read_events()."""

    def test_wraps_store_failures(self) -> None:
        with pytest.raises(errors.StorageReadError, match="database unavailable") as exc_info:
            asyncio.run(read_events(_BrokenStore(), 10))
        assert isinstance(exc_info.value.__cause__, ConnectionError)
        assert exc_info.value.operation == "get_recent_events"

    def test_storage_errors_pass_through(self) -> None:
        with pytest.raises(errors.StorageReadError, match="already wrapped"):
            asyncio.run(read_events(_FailingStore(), 10))

    def test_returns_list(self, make_event) -> None:
        store = InMemoryEventStore()
        store.append(make_event())
        assert len(asyncio.run(read_events(store, 10))) == 1
