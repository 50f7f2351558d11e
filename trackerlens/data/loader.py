"""
Loader for the bundled website-category reference data.

Reads ``website-categories.json`` (next to this module) once and
compiles each category's domain patterns into regex objects so
that categorisation is a cheap scan on every call.
"""

from __future__ import annotations

import functools
import json
import pathlib
import re
from typing import Any

import pydantic

from trackerlens.models.comparison import WebsiteCategory
from trackerlens.utils import logger

log = logger.create_logger("DataLoader")

# Resolve path to the data directory (same directory as this module)
_DATA_DIR = pathlib.Path(__file__).resolve().parent

CATEGORIES_FILE = "website-categories.json"


class CategoryDefinition(pydantic.BaseModel):
    """A category plus the rules used to recognise its sites."""

    model_config = pydantic.ConfigDict(arbitrary_types_allowed=True)

    category: WebsiteCategory
    average_trackers: float
    domain_patterns: list[re.Pattern[str]] = pydantic.Field(default_factory=list)
    keywords: list[str] = pydantic.Field(default_factory=list)

    def matches_domain(self, domain: str) -> bool:
        return any(p.search(domain) for p in self.domain_patterns)

    def matches_keyword(self, domain: str) -> bool:
        return any(k in domain for k in self.keywords)


class CategoryCatalog(pydantic.BaseModel):
    """Every known category and the fallback for unmatched sites."""

    default: CategoryDefinition
    categories: list[CategoryDefinition]


def _load_json(relative_path: str) -> Any:
    """Load and parse a JSON file relative to the data directory.

    Raises:
        FileNotFoundError: If the JSON file does not exist.
        json.JSONDecodeError: If the file contains invalid JSON.
    """
    full_path = _DATA_DIR / relative_path
    if not full_path.exists():
        raise FileNotFoundError(f"Data file not found: {relative_path}")
    with open(full_path, encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as exc:
            raise json.JSONDecodeError(
                f"Invalid JSON in {relative_path}: {exc.msg}",
                exc.doc,
                exc.pos,
            ) from exc


def _parse_definition(entry: dict[str, Any]) -> CategoryDefinition:
    return CategoryDefinition(
        category=WebsiteCategory.model_validate(entry),
        average_trackers=float(entry.get("averageTrackers", 0.0)),
        domain_patterns=[re.compile(p, re.IGNORECASE) for p in entry.get("domainPatterns", [])],
        keywords=[k.lower() for k in entry.get("keywords", [])],
    )


def parse_catalog(raw: dict[str, Any]) -> CategoryCatalog:
    """Build a catalog from the raw JSON structure."""
    return CategoryCatalog(
        default=_parse_definition(raw["default"]),
        categories=[_parse_definition(entry) for entry in raw.get("categories", [])],
    )


@functools.cache
def get_category_catalog() -> CategoryCatalog:
    """Get the bundled category catalog (lazy loaded and cached)."""
    catalog = parse_catalog(_load_json(CATEGORIES_FILE))
    log.debug("Category catalog loaded", {"categories": len(catalog.categories)})
    return catalog
