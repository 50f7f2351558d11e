"""
Server entry point, FastAPI app setup and route configuration.

Exposes the coordinator's query surface over HTTP and accepts new
tracking events from the detection layer.  Every response body uses
camelCase keys.
"""

from __future__ import annotations

import contextlib
import os
from collections.abc import AsyncGenerator, Awaitable
from typing import Any, Literal

import dotenv
import fastapi
import uvicorn
from fastapi.middleware import cors

from trackerlens.models.comparison import ComparisonResult
from trackerlens.models.requests import IngestRequest, PatternsRequest, ScoreRequest, TimelineRequest
from trackerlens.pipeline.coordinator import AnalysisCoordinator
from trackerlens.storage.events import InMemoryEventStore
from trackerlens.utils import errors, logger
from trackerlens.utils.serialization import to_camel_case_dict

dotenv.load_dotenv()

log = logger.create_logger("Server")

HOST = os.environ.get("UVICORN_HOST", "0.0.0.0")
PORT = int(os.environ.get("UVICORN_PORT", "3001"))
IS_PRODUCTION = os.environ.get("ENVIRONMENT", "development") == "production"

store = InMemoryEventStore()
coordinator = AnalysisCoordinator(store)


def get_store() -> InMemoryEventStore:
    return store


def get_coordinator() -> AnalysisCoordinator:
    return coordinator


@contextlib.asynccontextmanager
async def lifespan(_app: fastapi.FastAPI) -> AsyncGenerator[None]:
    """Open the run log on startup; cancel pending analysis on shutdown."""
    log_path = logger.start_log_file("server")
    log.section("Tracker Lens Server Started")
    log.info("Environment", {"env": "production" if IS_PRODUCTION else "development", "logFile": log_path})
    try:
        yield
    finally:
        await coordinator.aclose()
        logger.end_log_file()


app = fastapi.FastAPI(title="Tracker Lens Analysis Server", lifespan=lifespan)

# ============================================================================
# Middleware
# ============================================================================

app.add_middleware(
    cors.CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ============================================================================
# Helpers
# ============================================================================


async def _comparison(domain: str, pending: Awaitable[ComparisonResult]) -> dict[str, Any]:
    try:
        result = await pending
    except errors.StorageReadError as exc:
        log.error("Comparison failed", {"domain": domain, "error": errors.get_error_message(exc)})
        raise fastapi.HTTPException(status_code=503, detail=errors.get_error_message(exc)) from exc
    return to_camel_case_dict(result)


# ============================================================================
# API Routes
# ============================================================================


@app.post("/api/events", status_code=202)
async def ingest_events(
    body: IngestRequest,
    event_store: InMemoryEventStore = fastapi.Depends(get_store),
    analysis: AnalysisCoordinator = fastapi.Depends(get_coordinator),
) -> dict[str, Any]:
    """Append new events and schedule a debounced re-analysis."""
    added = event_store.extend(body.events)
    analysis.notify_new_events(body.page_url)
    log.debug("Events ingested", {"added": added, "stored": len(event_store), "pageUrl": body.page_url})
    return {"accepted": added, "stored": len(event_store)}


@app.post("/api/score")
async def score_endpoint(
    body: ScoreRequest,
    analysis: AnalysisCoordinator = fastapi.Depends(get_coordinator),
) -> dict[str, Any]:
    """Score a set of events."""
    return to_camel_case_dict(analysis.compute_score(body.events, body.is_https))


@app.post("/api/patterns")
async def patterns_endpoint(
    body: PatternsRequest,
    analysis: AnalysisCoordinator = fastapi.Depends(get_coordinator),
) -> dict[str, Any]:
    """Detect cross-site and fingerprinting patterns, with alerts."""
    found = analysis.detect_patterns(body.events)
    return {
        "patterns": [to_camel_case_dict(p) for p in found],
        "alerts": [to_camel_case_dict(a) for a in analysis.build_alerts(found)],
    }


@app.post("/api/timeline")
async def timeline_endpoint(
    body: TimelineRequest,
    analysis: AnalysisCoordinator = fastapi.Depends(get_coordinator),
) -> dict[str, Any]:
    """Summarise tracking volume over a window."""
    return to_camel_case_dict(analysis.analyze_timeline(body.events, body.window_ms, body.now_ms))


@app.get("/api/compare/category/{domain}")
async def compare_category_endpoint(
    domain: str,
    analysis: AnalysisCoordinator = fastapi.Depends(get_coordinator),
) -> dict[str, Any]:
    return await _comparison(domain, analysis.compare_to_category(domain))


@app.get("/api/compare/history/{domain}")
async def compare_history_endpoint(
    domain: str,
    analysis: AnalysisCoordinator = fastapi.Depends(get_coordinator),
) -> dict[str, Any]:
    return await _comparison(domain, analysis.compare_to_history(domain))


@app.get("/api/compare/peers/{domain}")
async def compare_peers_endpoint(
    domain: str,
    analysis: AnalysisCoordinator = fastapi.Depends(get_coordinator),
) -> dict[str, Any]:
    return await _comparison(domain, analysis.compare_to_peers(domain))


@app.get("/api/latest/{kind}")
async def latest_endpoint(
    kind: Literal["score", "patterns", "timeline"],
    analysis: AnalysisCoordinator = fastapi.Depends(get_coordinator),
) -> dict[str, Any]:
    """The most recent debounced result for one analyzer.

    Responds 503 when the latest recomputation failed to read the
    store, and 404 when nothing has been computed yet.
    """
    error = analysis.last_error(kind)
    if error is not None:
        raise fastapi.HTTPException(status_code=503, detail=errors.get_error_message(error))
    result = analysis.latest(kind)
    if result is None:
        raise fastapi.HTTPException(status_code=404, detail=f"No {kind} result yet")
    if kind == "patterns":
        return {
            "patterns": [to_camel_case_dict(p) for p in result],
            "alerts": [to_camel_case_dict(a) for a in analysis.latest_alerts()],
        }
    return to_camel_case_dict(result)


# ============================================================================
# Start Server
# ============================================================================


def main() -> None:
    """Entry point for running the server."""
    log.success(f"Server listening on {HOST}:{PORT}")
    uvicorn.run(
        "trackerlens.app:app",
        host=HOST,
        port=PORT,
        reload=not IS_PRODUCTION,
    )


if __name__ == "__main__":
    main()
