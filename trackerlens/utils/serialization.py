"""Shared serialization helpers for camelCase conversion.

Models exchanged with the detection layer and the UI use camelCase
keys (``riskLevel``, ``inPageTracking``).  ``snake_to_camel`` is the
alias generator every model config shares.
"""

from __future__ import annotations

from typing import Any

import pydantic


def snake_to_camel(name: str) -> str:
    """Convert a snake_case string to camelCase.

    Args:
        name: A snake_case identifier such as ``"risk_level"``.

    Returns:
        The camelCase equivalent, e.g. ``"riskLevel"``.
    """
    parts = name.split("_")
    return parts[0] + "".join(w.capitalize() for w in parts[1:])


def camel_config(*, frozen: bool = False) -> pydantic.ConfigDict:
    """Build the model config shared by all wire-facing models."""
    return pydantic.ConfigDict(
        alias_generator=snake_to_camel,
        populate_by_name=True,
        frozen=frozen,
    )


def to_camel_case_dict(obj: pydantic.BaseModel) -> dict[str, Any]:
    """Dump a model to a JSON-ready dict with camelCase keys."""
    return obj.model_dump(by_alias=True, mode="json")
