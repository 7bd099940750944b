"""Form fields as flowing DOCX blocks.

Word has no absolute positioning in the text flow, so fields are emitted in
reading order (physical page, then top to bottom, then left to right) and the
vertical gaps of the fixed layout become paragraph spacing.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Sequence

from ...engine.field_layout import PlacedField, field_size
from ...engine.geometry import points_to_twips
from ...models.fields import NormalizedFormField
from ...styles.stylesheet import ResolvedStylesheet
from ..render_utils import docx_color
from .blocks import Block, Border, Paragraph, Table, TableCell, TableRow, TextRun

logger = logging.getLogger(__name__)

CHECKED_BOX = "☒"
EMPTY_BOX = "☐"
SELECTED_RADIO = "◉"
EMPTY_RADIO = "○"
DROPDOWN_ARROW = "▾"
FIRST_FIELD_SPACING = 12.0

FONT_ALIASES = {
    "Helvetica": "Arial",
    "Helvetica-Bold": "Arial",
    "Times-Roman": "Times New Roman",
    "Times-Bold": "Times New Roman",
    "Courier": "Courier New",
    "Courier-Bold": "Courier New",
}


def docx_font(name: str) -> str:
    return FONT_ALIASES.get(name, name)


def reading_order(placed: Sequence[PlacedField]) -> List[PlacedField]:
    return sorted(placed, key=lambda item: (item.page, -item.rect.top, item.rect.x, item.index))


class DocxFieldBuilder:
    """Builds the blocks for one field at a time."""

    def __init__(self, stylesheet: ResolvedStylesheet, skip_labels: bool = False) -> None:
        self.stylesheet = stylesheet
        self.skip_labels = skip_labels
        self.font = docx_font(stylesheet.fonts.family)
        self.label_size = int(stylesheet.fonts.sizes.label * 2)
        self.field_size = int(stylesheet.fonts.sizes.field * 2)
        self.label_color = docx_color(stylesheet.colors.label)
        self.text_color = docx_color(stylesheet.colors.text)
        self.border_color = docx_color(stylesheet.colors.border)
        self._builders: Dict[str, Callable[[NormalizedFormField, int], List[Block]]] = {
            "text": self._text,
            "textarea": self._textarea,
            "checkbox": self._checkbox,
            "radio": self._radio,
            "dropdown": self._dropdown,
            "signature": self._signature,
        }

    def build(self, field: NormalizedFormField, indent: int) -> List[Block]:
        builder = self._builders.get(field.type)
        if builder is None:
            logger.debug(f"No DOCX rendering for field type '{field.type}'")
            return []
        return builder(field, indent)

    def _label(self, text: str, indent: int) -> Paragraph:
        return Paragraph(
            runs=[TextRun(text=text, font=self.font, size=self.label_size, bold=True, color=self.label_color)],
            indent_left=indent,
            spacing_after=points_to_twips(2),
            keep_next=True,
        )

    def _value_run(self, text: str) -> TextRun:
        return TextRun(text=text, font=self.font, size=self.field_size, color=self.text_color)

    def _box_table(self, text: str, width: float, height: float, indent: int) -> Table:
        width_twips = points_to_twips(width)
        return Table(
            rows=[TableRow(
                cells=[TableCell(paragraphs=[Paragraph(runs=[self._value_run(text)] if text else [])])],
                height=points_to_twips(height),
            )],
            column_widths=[width_twips],
            border_color=self.border_color,
            indent=indent,
        )

    def _text(self, field: NormalizedFormField, indent: int) -> List[Block]:
        blocks: List[Block] = []
        if field.display_label and not self.skip_labels:
            blocks.append(self._label(field.display_label, indent))
        value = "" if field.default is None else str(field.default)
        width, height = field_size(field)
        blocks.append(self._box_table(value, width, height, indent))
        return blocks

    def _textarea(self, field: NormalizedFormField, indent: int) -> List[Block]:
        return self._text(field, indent)

    def _checkbox(self, field: NormalizedFormField, indent: int) -> List[Block]:
        box = CHECKED_BOX if field.is_checked else EMPTY_BOX
        return [Paragraph(
            runs=[
                TextRun(text=f"{box} ", font=self.font, size=self.field_size + 4, color=self.text_color),
                TextRun(text=field.display_label, font=self.font, size=self.label_size, color=self.label_color),
            ],
            indent_left=indent,
        )]

    def _radio(self, field: NormalizedFormField, indent: int) -> List[Block]:
        blocks: List[Block] = []
        if field.display_label:
            blocks.append(self._label(field.display_label, indent))
        selected = "" if field.default is None else str(field.default)
        for option in field.options:
            marker = SELECTED_RADIO if option.value == selected else EMPTY_RADIO
            blocks.append(Paragraph(
                runs=[
                    TextRun(text=f"{marker} ", font=self.font, size=self.field_size + 2, color=self.text_color),
                    TextRun(text=option.label, font=self.font, size=self.label_size, color=self.label_color),
                ],
                indent_left=indent,
                spacing_after=points_to_twips(2),
            ))
        return blocks

    def _dropdown(self, field: NormalizedFormField, indent: int) -> List[Block]:
        blocks: List[Block] = []
        if field.display_label:
            blocks.append(self._label(field.display_label, indent))
        options = [option.label for option in field.options]
        value = "" if field.default is None else str(field.default)
        if not value:
            value = options[0] if options else ""
        width, height = field_size(field)
        blocks.append(self._box_table(f"{value} {DROPDOWN_ARROW}".strip(), width, height, indent))
        if options:
            blocks.append(Paragraph(
                runs=[TextRun(
                    text=f"Options: {' / '.join(options)}",
                    font=self.font,
                    size=max(self.label_size - 4, 12),
                    italic=True,
                    color=self.label_color,
                )],
                indent_left=indent,
            ))
        return blocks

    def _signature(self, field: NormalizedFormField, indent: int) -> List[Block]:
        width, height = field_size(field)
        blocks: List[Block] = [self._label(field.display_label or "Signature", indent)]
        runs = [TextRun(text="X", font=self.font, size=self.field_size, color=self.border_color)]
        if field.include_date:
            runs.append(TextRun(text="\tDate: ____________", font=self.font, size=self.label_size, color=self.label_color))
        blocks.append(Paragraph(
            runs=runs,
            indent_left=indent,
            spacing_before=points_to_twips(max(0.0, height - 14)),
            border_bottom=Border(color=self.border_color, size=6),
            tab_stops=[("left", indent + points_to_twips(width + 20))] if field.include_date else [],
        ))
        return blocks


def build_field_blocks(
    placed: Sequence[PlacedField],
    stylesheet: ResolvedStylesheet,
    content_top: float,
    skip_labels: bool = False,
) -> List[Block]:
    """Convert placed fields into flowing blocks in reading order.

    Args:
        placed: Fields with resolved positions and physical pages
        stylesheet: Resolved stylesheet
        content_top: Y of the top margin, used for the first field on a new page
        skip_labels: Omit text/textarea labels as in the fixed layout

    Returns:
        Blocks ready to append to the content section
    """
    builder = DocxFieldBuilder(stylesheet, skip_labels=skip_labels)
    margin_left = stylesheet.margins.left
    blocks: List[Block] = []
    previous: Optional[PlacedField] = None

    for item in reading_order(placed):
        field_blocks = builder.build(item.field, points_to_twips(max(0.0, item.rect.x - margin_left)))
        if not field_blocks:
            continue

        page_break = previous is not None and item.page != previous.page
        if previous is None:
            gap = FIRST_FIELD_SPACING
        elif page_break:
            gap = max(0.0, content_top - item.rect.top)
        else:
            gap = max(0.0, previous.rect.bottom - item.rect.top)

        first = field_blocks[0]
        if isinstance(first, Paragraph):
            first.spacing_before += points_to_twips(gap)
            first.page_break_before = page_break
        else:
            field_blocks.insert(0, Paragraph(spacing_after=points_to_twips(gap), page_break_before=page_break))
        blocks.extend(field_blocks)
        previous = item

    return blocks
