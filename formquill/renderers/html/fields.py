"""Absolutely positioned form controls for the HTML output."""

from __future__ import annotations

import logging
from html import escape
from typing import Callable, Dict, List

from ...engine.geometry import Rect, points_to_px
from ...engine.layout_context import Placement

logger = logging.getLogger(__name__)


def position_style(rect: Rect, page_height: float, sized: bool = True) -> str:
    """CSS box for ``rect``; PDF y grows upwards, CSS top grows downwards."""
    top = page_height - rect.y - rect.height
    style = [f"left: {points_to_px(rect.x):.2f}px", f"top: {points_to_px(top):.2f}px"]
    if sized:
        style.append(f"width: {points_to_px(rect.width):.2f}px")
        style.append(f"height: {points_to_px(rect.height):.2f}px")
    return "; ".join(style)


class HtmlFieldRenderer:
    """Turns ``field_widget`` and field label placements into HTML controls."""

    def __init__(self, page_height: float) -> None:
        self.page_height = page_height
        self._widgets: Dict[str, Callable[[Placement], str]] = {
            "textfield": self._textfield,
            "checkbox": self._checkbox,
            "radio": self._radio,
            "choice": self._choice,
            "signature": self._signature,
        }

    def render(self, placements: List[Placement]) -> str:
        parts: List[str] = []
        for placement in placements:
            if placement.kind == "field_widget":
                handler = self._widgets.get(placement.payload.get("widget", ""))
                if handler is None:
                    logger.warning(f"No HTML control for widget '{placement.payload.get('widget')}'")
                    continue
                parts.append(handler(placement))
            elif placement.role == "field_label":
                parts.append(self._label(placement))
        if not parts:
            return ""
        return '<div class="field-layer">' + "".join(parts) + "</div>"

    def _style(self, placement: Placement, sized: bool = True) -> str:
        style = position_style(placement.rect, self.page_height, sized)
        font_size = placement.payload.get("font_size")
        if font_size:
            style += f"; font-size: {points_to_px(font_size):.2f}px"
        return style

    def _common(self, placement: Placement) -> str:
        payload = placement.payload
        attrs = [f'name="{escape(payload.get("name", ""))}"', f'title="{escape(payload.get("tooltip", ""))}"']
        if payload.get("required"):
            attrs.append("required")
        return " ".join(attrs)

    def _textfield(self, placement: Placement) -> str:
        payload = placement.payload
        value = escape(payload.get("value") or "")
        style = self._style(placement)
        if payload.get("multiline"):
            return f'<textarea class="form-field" {self._common(placement)} style="{style}">{value}</textarea>'
        max_length = payload.get("max_length")
        limit = f' maxlength="{int(max_length)}"' if max_length else ""
        return (
            f'<input type="text" class="form-field" {self._common(placement)} value="{value}"{limit} '
            f'style="{style}" />'
        )

    def _checkbox(self, placement: Placement) -> str:
        checked = " checked" if placement.payload.get("checked") else ""
        return (
            f'<input type="checkbox" class="form-field" {self._common(placement)}{checked} '
            f'style="{self._style(placement)}" />'
        )

    def _radio(self, placement: Placement) -> str:
        payload = placement.payload
        checked = " checked" if payload.get("selected") else ""
        return (
            f'<input type="radio" class="form-field" {self._common(placement)} '
            f'value="{escape(str(payload.get("value", "")))}"{checked} style="{self._style(placement)}" />'
        )

    def _choice(self, placement: Placement) -> str:
        payload = placement.payload
        current = payload.get("value", "")
        options = "".join(
            f'<option value="{escape(option)}"{" selected" if option == current else ""}>{escape(option)}</option>'
            for option in payload.get("options", [])
        )
        return f'<select class="form-field" {self._common(placement)} style="{self._style(placement)}">{options}</select>'

    def _signature(self, placement: Placement) -> str:
        name = escape(placement.payload.get("name", ""))
        return f'<div class="signature-box" data-field="{name}" style="{position_style(placement.rect, self.page_height)}"></div>'

    def _label(self, placement: Placement) -> str:
        payload = placement.payload
        return (
            f'<span class="field-label" style="{position_style(placement.rect, self.page_height, sized=False)}">'
            f"{escape(payload.get('text', ''))}</span>"
        )
