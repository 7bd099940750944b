"""Layout constants and per-call generation options."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

from .version import __version__

if TYPE_CHECKING:
    from .engine.text_metrics import WidthEstimator


LINE_HEIGHT_FACTOR = 1.3

PAGE_SIZES = {
    "letter": (612.0, 792.0),
    "a4": (595.28, 841.89),
}
DEFAULT_PAGE_SIZE = "letter"

# Header baseline sits above the top margin, footer baseline below the bottom margin.
HEADER_OFFSET = 20.0
HEADER_RULE_GAP = 6.0
FOOTER_OFFSET = 25.0
FOOTER_SEPARATOR_GAP = 6.0
SOCIAL_ICON_SIZE = 16.0
SOCIAL_ICON_GAP = 8.0

TITLE_SPACING_AFTER = 18.0
BLOCK_SPACING = 8.0
LIST_INDENT = 16.0
TABLE_CELL_PADDING = 4.0
DIVIDER_SPACING = 10.0

FIELD_DEFAULT_SIZES = {
    "text": (200.0, 20.0),
    "textarea": (300.0, 60.0),
    "checkbox": (12.0, 12.0),
    "radio": (12.0, 12.0),
    "dropdown": (150.0, 20.0),
    "signature": (200.0, 40.0),
}
FIELD_LABEL_GAP = 4.0
RADIO_OPTION_SPACING = 8.0
SIGNATURE_DATE_WIDTH = 100.0
SIGNATURE_DATE_GAP = 20.0

PDF_CREATOR = "formquill"
PDF_PRODUCER = f"formquill {__version__} (reportlab)"

StylesheetSource = Union[None, str, Path, Mapping[str, Any]]


@dataclass(slots=True)
class GenerationOptions:
    """Caller-supplied knobs for a single generation call.

    Attributes:
        stylesheet: Inline mapping or path to a YAML stylesheet. Overrides the
            stylesheet named in the form metadata.
        base_path: Directory that relative stylesheet, image and logo paths
            are resolved against.
        estimator: Text width strategy; the approximate estimator is used when
            omitted.
        icon_dir: Directory holding ``<platform>.png`` social icons.
        today: Date substituted for ``{{date}}``; defaults to the current day.
    """

    stylesheet: StylesheetSource = None
    base_path: Optional[Union[str, Path]] = None
    estimator: Optional["WidthEstimator"] = None
    icon_dir: Optional[Union[str, Path]] = None
    today: Optional[date] = None

    def resolve_base_path(self) -> Path:
        return Path(self.base_path) if self.base_path else Path.cwd()
