"""Tests for trackerlens.utils.url."""

from __future__ import annotations

import pytest

from trackerlens.utils import url


class TestExtractHostname:
    """Tests for extract_hostname()."""

    def test_simple_url(self) -> None:
        assert url.extract_hostname("https://example.com/path") == "example.com"

    def test_port_and_case(self) -> None:
        assert url.extract_hostname("https://Example.COM:8080/path") == "example.com"

    @pytest.mark.parametrize("value", ["", "not a url", "example.com", "http://[::1"])
    def test_unparsable(self, value: str) -> None:
        assert url.extract_hostname(value) is None


class TestSiteKey:
    """Tests for site_key()."""

    def test_strips_www(self) -> None:
        assert url.site_key("https://www.example.com/a") == url.site_key("http://example.com/b") == "example.com"

    def test_keeps_other_subdomains(self) -> None:
        assert url.site_key("https://news.example.com/") == "news.example.com"

    def test_malformed(self) -> None:
        assert url.site_key("::::") is None


class TestNormalizeSite:
    """Tests for normalize_site()."""

    def test_normalizes(self) -> None:
        assert url.normalize_site("  WWW.Example.com ") == "example.com"


class TestCompanyKey:
    """Tests for company_key()."""

    @pytest.mark.parametrize(
        ("domain", "expected"),
        [
            ("analytics.google.com", "google"),
            ("www.google.com", "google"),
            ("connect.facebook.net", "facebook"),
            ("ads.tracker.co.uk", "tracker"),
            ("pixel.adnetwork.com.au", "adnetwork"),
            ("Doubleclick.NET", "doubleclick"),
        ],
    )
    def test_public_suffix(self, domain: str, expected: str) -> None:
        assert url.company_key(domain) == expected

    def test_unknown_suffix_falls_back(self) -> None:
        assert url.company_key("ads.tracker.internal") == "tracker"

    def test_single_label(self) -> None:
        assert url.company_key("localhost") == "localhost"
