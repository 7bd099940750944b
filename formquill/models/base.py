"""Helpers for reading loosely typed schema mappings."""

from __future__ import annotations

from typing import Any, Mapping, Optional


def pick(data: Optional[Mapping[str, Any]], *keys: str, default: Any = None) -> Any:
    """Return the first present, non-None value among ``keys``.

    Schemas are authored in camelCase while the models use snake_case, so
    callers list both spellings.
    """
    if not data:
        return default
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return default


def as_float(value: Any, default: float = 0.0) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def as_optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
