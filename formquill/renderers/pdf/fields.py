"""AcroForm widgets drawn from ``field_widget`` placements."""

from __future__ import annotations

import logging
from typing import Any, Dict

from reportlab.pdfgen.canvas import Canvas

from ...engine.geometry import Rect
from ..render_utils import to_color

logger = logging.getLogger(__name__)

WIDGET_FONT = "Helvetica"


def _flags(*flags: str) -> str:
    return " ".join(flag for flag in flags if flag)


class PdfFieldPainter:
    """Creates interactive form widgets on the canvas's current page."""

    def __init__(self, canvas: Canvas) -> None:
        self.canvas = canvas
        self._painters = {
            "textfield": self._textfield,
            "checkbox": self._checkbox,
            "radio": self._radio,
            "choice": self._choice,
            "signature": self._signature,
        }

    def paint(self, rect: Rect, payload: Dict[str, Any]) -> None:
        painter = self._painters.get(payload.get("widget", ""))
        if painter is None:
            logger.warning(f"No PDF widget for '{payload.get('widget')}'")
            return
        painter(rect, payload)

    def _colors(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "borderColor": to_color(payload.get("border_color"), "#999999"),
            "fillColor": to_color(payload.get("fill_color"), "#ffffff"),
            "textColor": to_color(payload.get("text_color"), "#333333"),
        }

    def _textfield(self, rect: Rect, payload: Dict[str, Any]) -> None:
        self.canvas.acroForm.textfield(
            name=payload["name"],
            tooltip=payload.get("tooltip"),
            value=payload.get("value") or "",
            x=rect.x,
            y=rect.y,
            width=rect.width,
            height=rect.height,
            fontName=WIDGET_FONT,
            fontSize=payload.get("font_size"),
            borderWidth=1,
            forceBorder=True,
            maxlen=payload.get("max_length") or None,
            fieldFlags=_flags(
                "multiline" if payload.get("multiline") else "",
                "required" if payload.get("required") else "",
            ),
            **self._colors(payload),
        )

    def _checkbox(self, rect: Rect, payload: Dict[str, Any]) -> None:
        self.canvas.acroForm.checkbox(
            name=payload["name"],
            tooltip=payload.get("tooltip"),
            checked=bool(payload.get("checked")),
            x=rect.x,
            y=rect.y,
            size=rect.width,
            buttonStyle="check",
            borderWidth=1,
            forceBorder=True,
            fieldFlags="required" if payload.get("required") else "",
            **self._colors(payload),
        )

    def _radio(self, rect: Rect, payload: Dict[str, Any]) -> None:
        self.canvas.acroForm.radio(
            name=payload["name"],
            tooltip=payload.get("tooltip"),
            value=payload.get("value") or f"option{payload.get('option_index', 0)}",
            selected=bool(payload.get("selected")),
            x=rect.x,
            y=rect.y,
            size=rect.width,
            buttonStyle="circle",
            shape="circle",
            borderWidth=1,
            forceBorder=True,
            fieldFlags=_flags("noToggleToOff", "radio", "required" if payload.get("required") else ""),
            **self._colors(payload),
        )

    def _choice(self, rect: Rect, payload: Dict[str, Any]) -> None:
        options = list(payload.get("options") or []) or [""]
        value = payload.get("value") or ""
        if value not in options:
            value = options[0]
        self.canvas.acroForm.choice(
            name=payload["name"],
            tooltip=payload.get("tooltip"),
            value=value,
            options=options,
            x=rect.x,
            y=rect.y,
            width=rect.width,
            height=rect.height,
            fontName=WIDGET_FONT,
            fontSize=payload.get("font_size"),
            borderWidth=1,
            forceBorder=True,
            fieldFlags=_flags("combo", "required" if payload.get("required") else ""),
            **self._colors(payload),
        )

    def _signature(self, rect: Rect, payload: Dict[str, Any]) -> None:
        # reportlab has no signature widget: draw the signing box and line.
        canvas = self.canvas
        canvas.saveState()
        canvas.setStrokeColor(to_color(payload.get("border_color"), "#999999"))
        canvas.setLineWidth(0.5)
        canvas.rect(rect.x, rect.y, rect.width, rect.height, stroke=1, fill=0)
        canvas.setLineWidth(1)
        canvas.line(rect.x + 8, rect.y + 10, rect.right - 8, rect.y + 10)
        canvas.setFillColor(to_color(payload.get("border_color"), "#999999"))
        canvas.setFont(WIDGET_FONT, 8)
        canvas.drawString(rect.x + 8, rect.y + 13, "X")
        canvas.restoreState()
