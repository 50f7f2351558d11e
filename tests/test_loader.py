"""Tests for trackerlens.data.loader and the static category provider."""

from __future__ import annotations

import re

import pytest

from trackerlens.data import categories, loader


class TestLoadJson:
    def test_categories_file_loads(self) -> None:
        data = loader._load_json(loader.CATEGORIES_FILE)
        assert isinstance(data, dict)
        assert data["default"]["id"] == "general"
        assert len(data["categories"]) > 0

    def test_missing_file_raises(self) -> None:
        with pytest.raises(FileNotFoundError):
            loader._load_json("nonexistent/file.json")


class TestGetCategoryCatalog:
    def test_patterns_are_compiled(self) -> None:
        catalog = loader.get_category_catalog()
        for definition in catalog.categories:
            assert all(isinstance(p, re.Pattern) for p in definition.domain_patterns)

    def test_cached(self) -> None:
        assert loader.get_category_catalog() is loader.get_category_catalog()

    def test_ids_unique(self) -> None:
        ids = [d.category.id for d in loader.get_category_catalog().categories]
        assert len(ids) == len(set(ids))

    def test_parse_minimal_catalog(self) -> None:
        catalog = loader.parse_catalog(
            {
                "default": {"id": "general", "name": "General", "averagePrivacyScore": 70, "averageTrackers": 5},
                "categories": [
                    {
                        "id": "games",
                        "name": "Games",
                        "riskProfile": "high",
                        "averagePrivacyScore": 55,
                        "averageTrackers": 14,
                        "domainPatterns": ["steam\\."],
                        "keywords": ["Arcade"],
                    }
                ],
            }
        )
        games = catalog.categories[0]
        assert games.category.risk_profile == "high"
        assert games.matches_domain("store.steam.com")
        assert games.matches_keyword("retroarcade.net")


class TestStaticCategoryProvider:
    @pytest.mark.parametrize(
        ("domain", "expected"),
        [
            ("www.cnn.com", "news"),
            ("facebook.com", "social-media"),
            ("mit.edu", "education"),
            ("myshop.io", "e-commerce"),
            ("example.com", "general"),
        ],
    )
    def test_categorize(self, provider, domain: str, expected: str) -> None:
        assert provider.categorize(domain).id == expected

    def test_domain_pattern_beats_keyword(self, provider) -> None:
        # "bbc" is a news pattern; "shop" is an e-commerce keyword.
        assert provider.categorize("shop.bbc.co.uk").id == "news"

    def test_benchmark(self, provider) -> None:
        benchmark = provider.get_benchmark("news")
        assert benchmark.average_score == 65
        assert benchmark.average_trackers == pytest.approx(12.3)
        assert len(benchmark.distribution) == 101
        assert max(range(101), key=lambda i: benchmark.distribution[i]) == 65

    def test_unknown_category_uses_default(self, provider) -> None:
        assert provider.get_benchmark("nope").average_score == 70


class TestNormalDistribution:
    def test_shape(self) -> None:
        dist = categories.normal_distribution(50)
        assert len(dist) == 101
        assert dist[50] == max(dist)
        assert dist[40] == pytest.approx(dist[60])
