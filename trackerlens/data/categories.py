"""Category benchmark providers.

The comparison engine only depends on the :class:`CategoryProvider`
protocol.  :class:`StaticCategoryProvider` is the bundled
implementation backed by ``website-categories.json``; benchmark
distributions are a normal curve around the category average.
"""

from __future__ import annotations

import math
from typing import Protocol

from trackerlens.data import loader
from trackerlens.models.comparison import CategoryBenchmark, WebsiteCategory
from trackerlens.utils import url

DISTRIBUTION_STDDEV = 15.0


class CategoryProvider(Protocol):
    """Resolves a site to its category and benchmark."""

    def categorize(self, domain: str) -> WebsiteCategory: ...

    def get_benchmark(self, category_id: str) -> CategoryBenchmark: ...


def normal_distribution(mean: float, stddev: float = DISTRIBUTION_STDDEV) -> list[float]:
    """Density of a normal curve at each score 0..100 (101 slots)."""
    norm = 1.0 / math.sqrt(2 * math.pi * stddev * stddev)
    return [norm * math.exp(-0.5 * ((i - mean) / stddev) ** 2) for i in range(101)]


class StaticCategoryProvider:
    """Category provider backed by a :class:`loader.CategoryCatalog`.

    Domain patterns are checked first across all categories, then
    keywords contained in the domain; anything else falls back to
    the catalog's default category.
    """

    def __init__(self, catalog: loader.CategoryCatalog | None = None) -> None:
        self._catalog = catalog or loader.get_category_catalog()
        self._by_id = {d.category.id: d for d in self._catalog.categories}
        self._by_id.setdefault(self._catalog.default.category.id, self._catalog.default)

    def categorize(self, domain: str) -> WebsiteCategory:
        site = url.normalize_site(domain)
        for definition in self._catalog.categories:
            if definition.matches_domain(site):
                return definition.category
        for definition in self._catalog.categories:
            if definition.matches_keyword(site):
                return definition.category
        return self._catalog.default.category

    def get_benchmark(self, category_id: str) -> CategoryBenchmark:
        definition = self._by_id.get(category_id, self._catalog.default)
        average = definition.category.average_privacy_score
        return CategoryBenchmark(
            average_score=average,
            average_trackers=definition.average_trackers,
            distribution=normal_distribution(average),
        )
