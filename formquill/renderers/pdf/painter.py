"""Translates layout placements into reportlab canvas calls."""

from __future__ import annotations

import io
import logging
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Set

from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen.canvas import Canvas

from ...engine.layout_context import Placement
from ...engine.placeholder_resolver import resolve_page_variables
from ...media.images import LoadedImage
from ..render_utils import to_color
from .fields import PdfFieldPainter

logger = logging.getLogger(__name__)

FALLBACK_FONT = "Helvetica"
FALLBACK_BOLD_FONT = "Helvetica-Bold"


class PdfPainter:
    """Paints one physical page at a time onto a reportlab canvas.

    Args:
        canvas: Target canvas positioned on the page being painted
        icons: Social icons by platform; platforms without an icon get a text label only
    """

    def __init__(self, canvas: Canvas, icons: Optional[Mapping[str, LoadedImage]] = None) -> None:
        self.canvas = canvas
        self.icons = dict(icons or {})
        self.fields = PdfFieldPainter(canvas)
        self._missing_fonts: Set[str] = set()
        self._painters: Dict[str, Callable[[Placement], None]] = {
            "text": self._text,
            "line": self._line,
            "table_row": self._table_row,
            "image": self._image,
            "watermark": self._watermark,
            "social": self._social,
            "field_widget": self._field_widget,
        }
        self.page_number = 1
        self.page_total = 1

    def paint_page(self, placements: Iterable[Placement], page_number: int, page_total: int) -> None:
        """Paint ``placements`` with ``{{page}}``/``{{pages}}`` resolved to the given numbers."""
        self.page_number = page_number
        self.page_total = page_total
        for placement in placements:
            painter = self._painters.get(placement.kind)
            if painter is None:
                logger.warning(f"Unsupported placement kind '{placement.kind}'")
                continue
            painter(placement)

    def _font(self, name: Optional[str], bold: bool = False) -> str:
        fallback = FALLBACK_BOLD_FONT if bold else FALLBACK_FONT
        if not name:
            return fallback
        if name in pdfmetrics.standardFonts or name in pdfmetrics.getRegisteredFontNames():
            return name
        if name not in self._missing_fonts:
            self._missing_fonts.add(name)
            logger.warning(f"Font '{name}' is not available to reportlab, using {fallback}")
        return fallback

    def _resolve(self, payload: Dict[str, Any]) -> str:
        text = payload.get("text", "")
        if payload.get("page_template"):
            return resolve_page_variables(text, self.page_number, self.page_total)
        return text

    def _text(self, placement: Placement) -> None:
        payload = placement.payload
        canvas = self.canvas
        text = self._resolve(payload)
        size = payload.get("size", 10)
        canvas.setFont(self._font(payload.get("font")), size)
        canvas.setFillColor(to_color(payload.get("color"), "#333333"))
        align = payload.get("align", "left")
        anchor = payload.get("anchor_x", placement.rect.x)
        baseline = placement.rect.y
        if align == "center":
            canvas.drawCentredString(anchor, baseline, text)
        elif align == "right":
            canvas.drawRightString(anchor, baseline, text)
        else:
            canvas.drawString(placement.rect.x, baseline, text)
        marker = payload.get("marker")
        if marker:
            canvas.drawString(payload.get("marker_x", placement.rect.x), baseline, marker)

    def _line(self, placement: Placement) -> None:
        payload = placement.payload
        canvas = self.canvas
        canvas.setStrokeColor(to_color(payload.get("color"), "#cccccc"))
        canvas.setLineWidth(payload.get("thickness", 0.5))
        canvas.line(payload["x1"], payload["y1"], payload["x2"], payload["y2"])

    def _table_row(self, placement: Placement) -> None:
        payload = placement.payload
        canvas = self.canvas
        rect = placement.rect
        size = payload.get("size", 9)
        padding = payload.get("padding", 4)
        step = payload.get("line_height", size * 1.3)
        border = to_color(payload.get("border_color"), "#cccccc")

        if payload.get("fill"):
            canvas.setFillColor(to_color(payload["fill"], "#f0f0f0"))
            canvas.rect(rect.x, rect.y, rect.width, rect.height, stroke=0, fill=1)

        canvas.setStrokeColor(border)
        canvas.setLineWidth(0.5)
        if payload.get("grid", True):
            canvas.rect(rect.x, rect.y, rect.width, rect.height, stroke=1, fill=0)
            x = rect.x
            for width in payload["col_widths"][:-1]:
                x += width
                canvas.line(x, rect.y, x, rect.top)
        else:
            canvas.setLineWidth(0.5 if payload.get("header") else 0.25)
            canvas.line(rect.x, rect.y, rect.right, rect.y)

        canvas.setFont(self._font(payload.get("font"), bold=bool(payload.get("header"))), size)
        canvas.setFillColor(to_color(payload.get("color"), "#333333"))
        x = rect.x
        for lines, width in zip(payload["cells"], payload["col_widths"]):
            baseline = rect.top - padding - size
            for line in lines:
                canvas.drawString(x + padding, baseline, line)
                baseline -= step
            x += width

    def _image(self, placement: Placement) -> None:
        payload = placement.payload
        image: LoadedImage = payload["image"]
        rect = placement.rect
        canvas = self.canvas
        canvas.saveState()
        if payload.get("opacity") is not None:
            canvas.setFillAlpha(payload["opacity"])
        canvas.drawImage(
            ImageReader(io.BytesIO(image.data)),
            rect.x,
            rect.y,
            width=rect.width,
            height=rect.height,
            preserveAspectRatio=True,
            anchor=payload.get("anchor", "c"),
            mask="auto",
        )
        canvas.restoreState()

    def _watermark(self, placement: Placement) -> None:
        payload = placement.payload
        canvas = self.canvas
        rect = placement.rect
        canvas.saveState()
        canvas.setFillColor(to_color(payload.get("color"), "#cccccc", alpha=payload.get("opacity", 0.15)))
        canvas.setFillAlpha(payload.get("opacity", 0.15))
        center = rect.center
        canvas.translate(center.x, center.y)
        canvas.rotate(payload.get("angle", 45))
        canvas.setFont(self._font(payload.get("font"), bold=True), payload.get("size", 72))
        canvas.drawCentredString(0, 0, payload.get("text", ""))
        canvas.restoreState()

    def _social(self, placement: Placement) -> None:
        payload = placement.payload
        canvas = self.canvas
        rect = placement.rect
        icon_size = payload.get("icon_size", rect.height)
        icon = self.icons.get(payload.get("platform", ""))
        if icon is not None:
            canvas.drawImage(
                ImageReader(io.BytesIO(icon.data)), rect.x, rect.y, width=icon_size, height=icon_size,
                preserveAspectRatio=True, mask="auto",
            )
        size = payload.get("size", 8)
        canvas.setFont(self._font(payload.get("font")), size)
        canvas.setFillColor(to_color(payload.get("color"), "#666666"))
        canvas.drawString(rect.x + icon_size + 3, rect.y + (icon_size - size) / 2, payload.get("text", ""))
        canvas.linkURL(payload["url"], (rect.x, rect.y, rect.right, rect.top), relative=0, thickness=0)

    def _field_widget(self, placement: Placement) -> None:
        self.fields.paint(placement.rect, placement.payload)
