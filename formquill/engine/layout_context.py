"""Mutable layout state owned by one generation call.

The context records every drawing decision as a ``Placement`` (plain data
that each backend translates into its own primitives) together with the
``DrawnElement`` bounding box used for overlap diagnostics. Page handles are
opaque to the engine; a backend supplies a factory that creates them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ..exceptions import LayoutError
from ..styles.stylesheet import ResolvedStylesheet
from .geometry import Margins, Rect, Size
from .text_metrics import ApproximateWidthEstimator, WidthEstimator

logger = logging.getLogger(__name__)

PageFactory = Callable[[int, Size], Any]
PageDecorator = Callable[["LayoutContext", int], None]


@dataclass(slots=True)
class Cursor:
    x: float
    y: float


@dataclass(slots=True)
class DrawnElement:
    """Bounding box of something drawn on a physical page."""

    page: int
    x: float
    y: float
    width: float
    height: float
    label: str

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)


@dataclass(slots=True)
class Placement:
    """A backend-neutral drawing instruction.

    ``kind`` selects the primitive (``text``, ``line``, ``table_row``,
    ``image``, ``social``, ``watermark``, ``field_widget``); ``payload``
    carries the primitive's parameters.
    """

    kind: str
    page: int
    rect: Rect
    payload: Dict[str, Any] = field(default_factory=dict)

    @property
    def role(self) -> str:
        return self.payload.get("role", "")


@dataclass(slots=True)
class FlowPage:
    """Page handle for backends that only need the page index."""

    index: int
    size: Size


class LayoutContext:
    """Cursor, pages and recorded output of a single generation call."""

    def __init__(
        self,
        document: Any,
        stylesheet: ResolvedStylesheet,
        total_pages: int,
        page_factory: Optional[PageFactory] = None,
        estimator: Optional[WidthEstimator] = None,
    ) -> None:
        self.document = document
        self.stylesheet = stylesheet
        self.page_size: Size = stylesheet.page_size
        self.margins: Margins = stylesheet.margins
        self.page_factory: PageFactory = page_factory or FlowPage
        self.estimator: WidthEstimator = estimator or ApproximateWidthEstimator()
        self.pages: List[Any] = []
        for index in range(max(1, total_pages)):
            self.pages.append(self._create_page(index))
        self.current_page = 0
        self.cursor = Cursor(self.margins.left, self.content_top)
        self.drawn_elements: List[DrawnElement] = []
        self.placements: List[Placement] = []
        self.content_baseline: Optional[float] = None
        self._decorators: List[PageDecorator] = []

    @property
    def content_top(self) -> float:
        return self.page_size.height - self.margins.top

    @property
    def content_bottom(self) -> float:
        return self.margins.bottom

    @property
    def content_width(self) -> float:
        return self.page_size.width - self.margins.left - self.margins.right

    @property
    def remaining_space(self) -> float:
        return self.cursor.y - self.content_bottom

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def _create_page(self, index: int) -> Any:
        try:
            return self.page_factory(index, self.page_size)
        except Exception as e:
            raise LayoutError(f"Failed to create page {index}", str(e)) from e

    def add_page_decorator(self, decorator: PageDecorator, start_page: int = 0) -> None:
        """Apply ``decorator`` to existing pages from ``start_page`` and to pages added later."""

        def guarded(ctx: "LayoutContext", index: int) -> None:
            if index >= start_page:
                decorator(ctx, index)

        self._decorators.append(guarded)
        for index in range(len(self.pages)):
            guarded(self, index)

    def append_page(self) -> int:
        index = len(self.pages)
        self.pages.append(self._create_page(index))
        logger.debug(f"Appended physical page {index}")
        for decorator in self._decorators:
            decorator(self, index)
        return index

    def reset_cursor(self) -> None:
        self.cursor = Cursor(self.margins.left, self.content_top)

    def place(
        self,
        kind: str,
        page: int,
        x: float,
        y: float,
        width: float,
        height: float,
        label: str,
        track: bool = True,
        **payload: Any,
    ) -> Placement:
        """Record a drawing instruction and its bounding box.

        Background layers (cover image, watermark) pass ``track=False`` so
        they are drawn but excluded from overlap diagnostics.
        """
        rect = Rect(x, y, width, height)
        placement = Placement(kind=kind, page=page, rect=rect, payload=payload)
        self.placements.append(placement)
        if track:
            self.drawn_elements.append(DrawnElement(page, rect.x, rect.y, rect.width, rect.height, label))
        return placement

    def placements_for_page(self, page: int) -> List[Placement]:
        return [placement for placement in self.placements if placement.page == page]

    def text_width(self, text: str, font_size: float, font_name: Optional[str] = None) -> float:
        return self.estimator(text, font_size, font_name)


def initialize_layout(
    document: Any,
    stylesheet: ResolvedStylesheet,
    total_pages: int,
    page_factory: Optional[PageFactory] = None,
    estimator: Optional[WidthEstimator] = None,
) -> LayoutContext:
    """Create a layout context with ``total_pages`` pages and the cursor at the top margin."""
    ctx = LayoutContext(document, stylesheet, total_pages, page_factory, estimator)
    logger.debug(
        f"Initialized layout: {ctx.page_count} pages of {ctx.page_size.width}x{ctx.page_size.height}pt"
    )
    return ctx


def next_page(ctx: LayoutContext) -> int:
    """Advance to the following physical page, creating it when needed."""
    if ctx.current_page + 1 >= len(ctx.pages):
        ctx.append_page()
    ctx.current_page += 1
    ctx.reset_cursor()
    return ctx.current_page


def ensure_space(ctx: LayoutContext, height: float) -> bool:
    """Move to the next page when ``height`` does not fit below the cursor.

    A block taller than a whole page is left on the current page when that
    page is still empty, so it is never pushed forward indefinitely.

    Returns:
        True if a page break happened
    """
    if ctx.cursor.y - height >= ctx.content_bottom:
        return False
    if ctx.cursor.y >= ctx.content_top:
        return False
    next_page(ctx)
    return True
