"""Tests for trackerlens.config."""

from __future__ import annotations

import pydantic
import pytest

from trackerlens.config import DAY_MS, AnalysisSettings


class TestAnalysisSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("TRACKER_LENS_DEBOUNCE_MS", raising=False)
        settings = AnalysisSettings()
        assert settings.min_history_events == 10
        assert settings.min_qualifying_sites == 3
        assert settings.timeline_window_ms == 7 * DAY_MS
        assert settings.debounce_ms == 500

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TRACKER_LENS_MIN_HISTORY_EVENTS", "25")
        monkeypatch.setenv("TRACKER_LENS_DEBOUNCE_MS", "50")
        settings = AnalysisSettings()
        assert settings.min_history_events == 25
        assert settings.debounce_ms == 50

    def test_rejects_invalid(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            AnalysisSettings(min_qualifying_sites=0)
