"""Stylesheet loading and resolution.

A stylesheet can be given inline as a mapping or as a path to a YAML file.
Whatever is provided is merged over ``DEFAULT_STYLESHEET``, so the resolved
stylesheet is always fully populated. A stylesheet that cannot be read is a
recoverable problem: it is logged and the defaults are used.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import yaml

from ..config import DEFAULT_PAGE_SIZE, PAGE_SIZES
from ..engine.geometry import Margins, Size
from .defaults import DEFAULT_STYLESHEET

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class FontSizes:
    title: float
    heading: float
    body: float
    label: float
    field: float
    header: float
    footer: float


@dataclass(slots=True, frozen=True)
class FontStyles:
    family: str
    bold_family: str
    sizes: FontSizes


@dataclass(slots=True, frozen=True)
class ColorPalette:
    text: str
    heading: str
    label: str
    border: str
    field_background: str
    header: str
    footer: str
    rule: str
    muted: str


@dataclass(slots=True, frozen=True)
class ResolvedStylesheet:
    page_size_name: str
    margins: Margins
    fonts: FontStyles
    colors: ColorPalette

    @property
    def page_size(self) -> Size:
        return Size.from_tuple(page_dimensions(self.page_size_name))

    @property
    def content_width(self) -> float:
        return self.page_size.width - self.margins.left - self.margins.right


def page_dimensions(size: str) -> Tuple[float, float]:
    """Return ``(width, height)`` in points for a named page size."""
    key = (size or "").strip().lower()
    if key not in PAGE_SIZES:
        logger.warning(f"Unknown page size '{size}', using {DEFAULT_PAGE_SIZE}")
        key = DEFAULT_PAGE_SIZE
    return PAGE_SIZES[key]


def merge_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    result = copy.deepcopy(dict(base))
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(result.get(key), Mapping):
            result[key] = merge_dicts(result[key], value)
        elif value is not None:
            result[key] = value
    return result


def load_stylesheet_file(path: Path) -> Optional[Dict[str, Any]]:
    """Read a YAML stylesheet, returning ``None`` when it is unusable."""
    if not path.exists():
        logger.warning(f"Stylesheet not found: {path}")
        return None
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Could not read stylesheet {path}: {e}")
        return None
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        logger.warning(f"Stylesheet {path} must contain a mapping, got {type(data).__name__}")
        return None
    return dict(data)


def resolve_stylesheet(
    source: Union[None, str, Path, Mapping[str, Any]] = None,
    base_path: Optional[Union[str, Path]] = None,
) -> ResolvedStylesheet:
    """Resolve a stylesheet source into a complete stylesheet.

    Args:
        source: ``None``, an inline mapping, or a path to a YAML file
        base_path: Directory relative paths are resolved against

    Returns:
        ResolvedStylesheet with defaults filled in
    """
    overrides: Mapping[str, Any] = {}
    if isinstance(source, Mapping):
        overrides = source
    elif source:
        path = Path(source)
        if not path.is_absolute() and base_path is not None:
            path = Path(base_path) / path
        overrides = load_stylesheet_file(path) or {}

    merged = merge_dicts(DEFAULT_STYLESHEET, overrides)
    return _build(merged)


def default_stylesheet() -> ResolvedStylesheet:
    return _build(copy.deepcopy(DEFAULT_STYLESHEET))


def _section(parent: Mapping[str, Any], key: str, fallback: Mapping[str, Any], where: str) -> Mapping[str, Any]:
    value = parent.get(key)
    if value is None:
        return fallback
    if not isinstance(value, Mapping):
        logger.warning(f"Stylesheet section '{where}' must be a mapping, got {type(value).__name__}; using defaults")
        return fallback
    return value


def _build(data: Dict[str, Any]) -> ResolvedStylesheet:
    defaults = DEFAULT_STYLESHEET
    page = _section(data, "page", defaults["page"], "page")
    fonts = _section(data, "fonts", defaults["fonts"], "fonts")
    sizes = _section(fonts, "sizes", defaults["fonts"]["sizes"], "fonts.sizes")
    colors = _section(data, "colors", defaults["colors"], "colors")

    size_name = str(page.get("size") or DEFAULT_PAGE_SIZE).lower()
    if size_name not in PAGE_SIZES:
        logger.warning(f"Unknown page size '{size_name}', using {DEFAULT_PAGE_SIZE}")
        size_name = DEFAULT_PAGE_SIZE

    margins = page.get("margins")
    if isinstance(margins, (int, float)) and not isinstance(margins, bool):
        margins = {side: margins for side in ("top", "right", "bottom", "left")}
    else:
        margins = _section(page, "margins", {}, "page.margins")
    margins = merge_dicts(defaults["page"]["margins"], margins)

    def number(mapping: Mapping[str, Any], key: str, fallback: Mapping[str, Any]) -> float:
        try:
            return float(mapping.get(key, fallback[key]))
        except (TypeError, ValueError):
            logger.warning(f"Invalid stylesheet value for '{key}': {mapping.get(key)!r}")
            return float(fallback[key])

    def color(*keys: str) -> str:
        for key in keys:
            value = colors.get(key)
            if value:
                return str(value)
        return str(defaults["colors"][keys[0]])

    default_sizes = defaults["fonts"]["sizes"]
    default_margins = defaults["page"]["margins"]
    return ResolvedStylesheet(
        page_size_name=size_name,
        margins=Margins(
            top=number(margins, "top", default_margins),
            bottom=number(margins, "bottom", default_margins),
            left=number(margins, "left", default_margins),
            right=number(margins, "right", default_margins),
        ),
        fonts=FontStyles(
            family=str(fonts.get("family") or defaults["fonts"]["family"]),
            bold_family=str(fonts.get("boldFamily") or fonts.get("bold_family") or defaults["fonts"]["boldFamily"]),
            sizes=FontSizes(**{name: number(sizes, name, default_sizes) for name in default_sizes}),
        ),
        colors=ColorPalette(
            text=color("text"),
            heading=color("heading"),
            label=color("label"),
            border=color("border"),
            field_background=color("fieldBackground", "field_background"),
            header=color("header"),
            footer=color("footer"),
            rule=color("rule"),
            muted=color("muted"),
        ),
    )
