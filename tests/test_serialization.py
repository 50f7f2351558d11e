"""Tests for trackerlens.utils.serialization."""

from __future__ import annotations

import pytest

from trackerlens.models.events import InPageTracking, TrackingEvent
from trackerlens.utils.serialization import snake_to_camel, to_camel_case_dict


class TestSnakeToCamel:
    """Tests for snake_to_camel()."""

    @pytest.mark.parametrize(
        ("input_str", "expected"),
        [
            ("risk_level", "riskLevel"),
            ("single", "single"),
            ("in_page_tracking", "inPageTracking"),
            ("a_b_c", "aBC"),
            ("excessive_tracking_penalty", "excessiveTrackingPenalty"),
        ],
    )
    def test_conversion(self, input_str: str, expected: str) -> None:
        assert snake_to_camel(input_str) == expected


class TestWireModels:
    """camelCase aliases on the wire, snake_case in Python."""

    def test_parse_camel_case(self) -> None:
        event = TrackingEvent.model_validate(
            {
                "id": "e1",
                "timestamp": 1,
                "url": "https://example.com/",
                "domain": "t.com",
                "trackerType": "fingerprinting",
                "riskLevel": "high",
                "inPageTracking": {"method": "canvas-fingerprint"},
            }
        )
        assert event.tracker_type == "fingerprinting"
        assert event.tracking_method == "canvas-fingerprint"

    def test_populate_by_name(self) -> None:
        event = TrackingEvent(id="e1", timestamp=1, url="u", domain="d", risk_level="critical")
        assert event.risk_level == "critical"

    def test_dump_uses_aliases(self) -> None:
        event = TrackingEvent(
            id="e1",
            timestamp=1,
            url="u",
            domain="d",
            in_page_tracking=InPageTracking(method="webrtc-leak"),
        )
        dumped = to_camel_case_dict(event)
        assert dumped["riskLevel"] == "low"
        assert dumped["inPageTracking"] == {"method": "webrtc-leak", "details": None}
        assert "risk_level" not in dumped
