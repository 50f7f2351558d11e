"""Tests for trackerlens.utils.logger."""

from __future__ import annotations

import pytest

from trackerlens.utils import logger


class TestLogger:
    def test_line_format(self, capsys: pytest.CaptureFixture[str]) -> None:
        log = logger.create_logger("Test")
        log.info("Hello", {"count": 3})
        err = capsys.readouterr().err
        assert "[Test]" in err
        assert "Hello" in err
        assert "count=" in err

    def test_level_filtering(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        monkeypatch.setenv("TRACKER_LENS_LOG_LEVEL", "warn")
        log = logger.create_logger("Test")
        log.info("hidden-info")
        log.debug("hidden-debug")
        log.warn("shown-warning")
        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "shown-warning" in err

    def test_timer_returns_duration(self) -> None:
        log = logger.create_logger("Test")
        log.start_timer("step")
        assert log.end_timer("step") >= 0

    def test_unknown_timer(self, capsys: pytest.CaptureFixture[str]) -> None:
        log = logger.create_logger("Test")
        assert log.end_timer("never-started") == 0.0
        assert "was not started" in capsys.readouterr().err

    def test_file_logging_disabled_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("TRACKER_LENS_LOG_TO_FILE", raising=False)
        assert logger.start_log_file("run") is None

    def test_file_logging_strips_colour(self, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
        monkeypatch.setenv("TRACKER_LENS_LOG_TO_FILE", "true")
        monkeypatch.chdir(tmp_path)
        path = logger.start_log_file("run")
        assert path is not None
        logger.create_logger("Test").info("to file")
        logger.end_log_file()
        with open(path, encoding="utf-8") as f:
            content = f.read()
        assert "[Test] to file" in content
        assert "\033[" not in content
