"""Geometry of form field widgets and their labels.

``place_fields`` turns schema fields into ``field_widget`` and ``text``
placements on their physical pages. Backends only paint what is placed here,
so a widget sits at the same coordinates in every output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from ..config import (
    FIELD_DEFAULT_SIZES,
    FIELD_LABEL_GAP,
    RADIO_OPTION_SPACING,
    SIGNATURE_DATE_GAP,
    SIGNATURE_DATE_WIDTH,
)
from ..layout.pagination_manager import PageMapping
from ..models.fields import NormalizedFormField
from .field_positions import resolve_field_positions
from .geometry import Rect
from .layout_context import LayoutContext

logger = logging.getLogger(__name__)

LABEL_INLINE_GAP = 6.0


@dataclass(slots=True)
class PlacedField:
    """A field after position resolution and page mapping."""

    index: int
    field: NormalizedFormField
    page: int
    rect: Rect


def field_size(field: NormalizedFormField) -> tuple:
    default_width, default_height = FIELD_DEFAULT_SIZES.get(field.type, (200.0, 20.0))
    width = field.width if field.width is not None else default_width
    height = field.height if field.height is not None else default_height
    if field.type in ("checkbox", "radio") and field.width is not None and field.height is None:
        height = width
    return width, height


class FieldPlacer:
    """Places widgets for one context; one method per field type."""

    def __init__(self, ctx: LayoutContext, skip_labels: bool = False) -> None:
        self.ctx = ctx
        self.skip_labels = skip_labels
        sheet = ctx.stylesheet
        self.label_font = sheet.fonts.family
        self.label_size = sheet.fonts.sizes.label
        self.label_color = sheet.colors.label
        self._handlers: Dict[str, Callable[[NormalizedFormField, int, int], Rect]] = {
            "text": self._place_text,
            "textarea": self._place_text,
            "checkbox": self._place_checkbox,
            "radio": self._place_radio,
            "dropdown": self._place_dropdown,
            "signature": self._place_signature,
        }

    def supports(self, field_type: str) -> bool:
        return field_type in self._handlers

    def place(self, field: NormalizedFormField, page: int, index: int) -> Rect:
        return self._handlers[field.type](field, page, index)

    def _style(self, field: NormalizedFormField) -> dict:
        sheet = self.ctx.stylesheet
        return {
            "border_color": sheet.colors.border,
            "fill_color": sheet.colors.field_background,
            "text_color": sheet.colors.text,
            "font_size": field.font_size or sheet.fonts.sizes.field,
        }

    def _widget(self, field: NormalizedFormField, page: int, index: int, widget: str, rect: Rect, **extra) -> Rect:
        self.ctx.place(
            "field_widget",
            page,
            rect.x,
            rect.y,
            rect.width,
            rect.height,
            f"field:{field.name}",
            widget=widget,
            name=field.name,
            field_type=field.type,
            tooltip=field.label or field.name,
            required=field.required,
            field_index=index,
            role="field",
            **{**self._style(field), **extra},
        )
        return rect

    def _label(self, field: NormalizedFormField, page: int, index: int, text: str, x: float, baseline: float, suffix: str = "label") -> Optional[Rect]:
        if not text:
            return None
        width = self.ctx.text_width(text, self.label_size, self.label_font)
        self.ctx.place(
            "text",
            page,
            x,
            baseline,
            width,
            self.label_size,
            f"field:{field.name}:{suffix}",
            text=text,
            font=self.label_font,
            size=self.label_size,
            color=self.label_color,
            align="left",
            anchor_x=x,
            role="field_label",
            field_index=index,
        )
        return Rect(x, baseline, width, self.label_size)

    def _place_text(self, field: NormalizedFormField, page: int, index: int) -> Rect:
        width, height = field_size(field)
        rect = Rect(field.position.x, field.position.y, width, height)
        self._widget(
            field, page, index, "textfield", rect,
            value="" if field.default is None else str(field.default),
            multiline=field.multiline or field.type == "textarea",
            max_length=field.max_length,
        )
        if not self.skip_labels:
            label = self._label(field, page, index, field.display_label, rect.x, rect.top + FIELD_LABEL_GAP)
            if label:
                rect = rect.union(label)
        return rect

    def _place_checkbox(self, field: NormalizedFormField, page: int, index: int) -> Rect:
        size, _ = field_size(field)
        rect = Rect(field.position.x, field.position.y, size, size)
        self._widget(field, page, index, "checkbox", rect, checked=field.is_checked)
        label = self._label(
            field, page, index, field.display_label, rect.right + LABEL_INLINE_GAP,
            rect.y + max(0.0, (size - self.label_size) / 2),
        )
        return rect.union(label) if label else rect

    def _place_radio(self, field: NormalizedFormField, page: int, index: int) -> Rect:
        size, _ = field_size(field)
        x, y = field.position.x, field.position.y
        bounds: Optional[Rect] = None
        selected = "" if field.default is None else str(field.default)
        for option_index, option in enumerate(field.options):
            option_y = y - option_index * (size + RADIO_OPTION_SPACING)
            rect = Rect(x, option_y, size, size)
            self._widget(
                field, page, index, "radio", rect,
                value=option.value, selected=option.value == selected, option_index=option_index,
            )
            label = self._label(
                field, page, index, option.label, rect.right + LABEL_INLINE_GAP,
                option_y + max(0.0, (size - self.label_size) / 2), suffix=f"option{option_index}",
            )
            rect = rect.union(label) if label else rect
            bounds = rect if bounds is None else bounds.union(rect)
        if bounds is None:
            logger.warning(f"Radio field '{field.name}' has no options")
            bounds = Rect(x, y, size, size)
        group_label = self._label(field, page, index, field.display_label, x, y + size + FIELD_LABEL_GAP)
        return bounds.union(group_label) if group_label else bounds

    def _place_dropdown(self, field: NormalizedFormField, page: int, index: int) -> Rect:
        width, height = field_size(field)
        rect = Rect(field.position.x, field.position.y, width, height)
        options = [option.label for option in field.options]
        value = "" if field.default is None else str(field.default)
        if not value and options:
            value = options[0]
        self._widget(field, page, index, "choice", rect, options=options, value=value)

        text = field.display_label
        if not text:
            return rect
        label_width = self.ctx.text_width(text, self.label_size, self.label_font)
        label_x = rect.x - label_width - LABEL_INLINE_GAP
        if label_x >= self.ctx.margins.left:
            label = self._label(field, page, index, text, label_x, rect.y + max(0.0, (height - self.label_size) / 2))
        else:
            label = self._label(field, page, index, text, rect.x, rect.top + FIELD_LABEL_GAP)
        return rect.union(label) if label else rect

    def _place_signature(self, field: NormalizedFormField, page: int, index: int) -> Rect:
        width, height = field_size(field)
        rect = Rect(field.position.x, field.position.y, width, height)
        self._widget(field, page, index, "signature", rect)
        bounds = rect
        label = self._label(field, page, index, field.display_label or "Signature", rect.x, rect.top + FIELD_LABEL_GAP)
        if label:
            bounds = bounds.union(label)
        if field.include_date:
            date_rect = Rect(rect.right + SIGNATURE_DATE_GAP, rect.y, SIGNATURE_DATE_WIDTH, FIELD_DEFAULT_SIZES["text"][1])
            self.ctx.place(
                "field_widget",
                page,
                date_rect.x,
                date_rect.y,
                date_rect.width,
                date_rect.height,
                f"field:{field.name}_date",
                widget="textfield",
                name=f"{field.name}_date",
                field_type="text",
                tooltip="Date",
                required=field.required,
                field_index=index,
                role="field",
                value="",
                multiline=False,
                max_length=None,
                **self._style(field),
            )
            date_label = self._label(field, page, index, "Date", date_rect.x, date_rect.top + FIELD_LABEL_GAP, suffix="date_label")
            bounds = bounds.union(date_rect)
            if date_label:
                bounds = bounds.union(date_label)
        return bounds


def place_fields(
    ctx: LayoutContext,
    fields: Sequence[NormalizedFormField],
    mapping: PageMapping,
    skip_labels: bool = False,
) -> List[PlacedField]:
    """Resolve, map and place every supported field.

    Args:
        ctx: Layout context whose ``content_baseline`` is already recorded
        fields: Fields in schema order
        mapping: Logical to physical page mapping
        skip_labels: Omit text/textarea labels because the static content
            already labels them

    Returns:
        Placed fields in schema order; unknown field types are left out
    """
    baseline = ctx.content_baseline if ctx.content_baseline is not None else ctx.cursor.y
    placer = FieldPlacer(ctx, skip_labels=skip_labels)
    placed: List[PlacedField] = []
    last_index = ctx.page_count - 1

    for index, (field, resolved) in enumerate(zip(fields, resolve_field_positions(fields, baseline))):
        if not placer.supports(field.type):
            logger.warning(f"Unknown field type '{field.type}' for field '{field.name}', skipping")
            continue
        page = mapping.physical_index(field.page, last_index)
        if field.page - 1 + mapping.page_offset > last_index:
            logger.debug(f"Field '{field.name}' on page {field.page} clamped to physical page {page}")
        rect = placer.place(resolved, page, index)
        placed.append(PlacedField(index=index, field=resolved, page=page, rect=rect))

    logger.debug(f"Placed {len(placed)} of {len(fields)} fields")
    return placed
