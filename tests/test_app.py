"""Tests for the HTTP surface."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from conftest import BASE_TS
from fastapi import testclient

from trackerlens import app as server
from trackerlens.pipeline.coordinator import AnalysisCoordinator
from trackerlens.storage.events import InMemoryEventStore


class _BrokenStore:
    async def get_recent_events(self, limit: int) -> list:
        raise TimeoutError("store timed out")


def _wire_event(n: int, url: str = "https://cnn.com/story", **overrides: object) -> dict[str, object]:
    event: dict[str, object] = {
        "id": f"evt-{n}",
        "timestamp": BASE_TS + n,
        "url": url,
        "domain": "doubleclick.net",
        "trackerType": "advertising",
        "riskLevel": "medium",
        "description": "ad pixel",
    }
    event.update(overrides)
    return event


@pytest.fixture()
def store() -> InMemoryEventStore:
    return InMemoryEventStore()


@pytest.fixture()
def coordinator(store, settings) -> AnalysisCoordinator:
    return AnalysisCoordinator(store, settings=settings)


@pytest.fixture()
def client(store, coordinator) -> Iterator[testclient.TestClient]:
    server.app.dependency_overrides[server.get_store] = lambda: store
    server.app.dependency_overrides[server.get_coordinator] = lambda: coordinator
    with testclient.TestClient(server.app) as test_client:
        yield test_client
    server.app.dependency_overrides.clear()


class TestStatelessRoutes:
    """Routes that analyse the events in the request body."""

    def test_score(self, client) -> None:
        response = client.post("/api/score", json={"events": [_wire_event(1)], "isHttps": False})
        assert response.status_code == 200
        body = response.json()
        assert body["score"] == 90
        assert body["grade"] == "A"
        assert body["breakdown"]["totalTrackers"] == 1
        assert body["breakdown"]["mediumRisk"] == 1

    def test_score_unknown_risk_level_accepted(self, client) -> None:
        response = client.post("/api/score", json={"events": [_wire_event(1, riskLevel="severe")]})
        assert response.status_code == 200
        assert response.json()["breakdown"]["lowRisk"] == 1

    def test_invalid_event_rejected(self, client) -> None:
        response = client.post("/api/score", json={"events": [{"id": "x"}]})
        assert response.status_code == 422

    def test_patterns(self, client) -> None:
        events = [_wire_event(i, url=f"https://site{i}.example/") for i in range(3)]
        response = client.post("/api/patterns", json={"events": events})
        assert response.status_code == 200
        body = response.json()
        assert [p["type"] for p in body["patterns"]] == ["cross-site"]
        assert body["patterns"][0]["riskLevel"] == "high"
        assert body["alerts"][0]["severity"] == "warning"

    def test_timeline(self, client) -> None:
        response = client.post("/api/timeline", json={"events": [], "windowMs": 1000})
        assert response.status_code == 200
        body = response.json()
        assert body["totalEvents"] == 0
        assert len(body["hourlyPatterns"]) == 24


class TestComparisonRoutes:
    """Routes that read from the event store."""

    def test_category(self, client) -> None:
        client.post("/api/events", json={"events": [_wire_event(1)]})
        response = client.get("/api/compare/category/cnn.com")
        assert response.status_code == 200
        body = response.json()
        assert body["kind"] == "category"
        assert body["status"] == "ok"
        assert body["currentSite"]["category"] == "News & Media"

    def test_history_insufficient(self, client) -> None:
        response = client.get("/api/compare/history/cnn.com")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "insufficient-data"
        assert body["percentile"] is None

    @pytest.mark.parametrize("kind", ["category", "history", "peers"])
    def test_storage_failure_is_503(self, settings, kind: str) -> None:
        broken = AnalysisCoordinator(_BrokenStore(), settings=settings)
        server.app.dependency_overrides[server.get_coordinator] = lambda: broken
        try:
            with testclient.TestClient(server.app) as test_client:
                response = test_client.get(f"/api/compare/{kind}/cnn.com")
        finally:
            server.app.dependency_overrides.clear()
        assert response.status_code == 503
        assert "store timed out" in response.json()["detail"]


class TestIngestion:
    """POST /api/events and the debounced results behind /api/latest."""

    def test_nothing_computed_yet(self, client) -> None:
        assert client.get("/api/latest/score").status_code == 404

    def test_unknown_kind(self, client) -> None:
        assert client.get("/api/latest/everything").status_code == 422

    def test_ingest_then_latest(self, client, store, coordinator) -> None:
        events = [_wire_event(i, url=f"https://site{i}.example/") for i in range(3)]
        response = client.post("/api/events", json={"events": events, "pageUrl": "https://site0.example/"})
        assert response.status_code == 202
        assert response.json() == {"accepted": 3, "stored": 3}
        assert len(store) == 3

        client.portal.call(coordinator.flush)

        score = client.get("/api/latest/score").json()
        assert score["breakdown"]["totalTrackers"] == 1
        patterns = client.get("/api/latest/patterns").json()
        assert [p["type"] for p in patterns["patterns"]] == ["cross-site"]
        assert len(patterns["alerts"]) == 1
        timeline = client.get("/api/latest/timeline").json()
        assert "hourlyPatterns" in timeline
