"""Cover page layout for the fixed-canvas PDF.

The cover is always physical page 0. It is laid out in three layers: an
optional faded background image, the content (logo, title, subtitle,
metadata, revision history, legal text) and an optional diagonal watermark
on top.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from ...engine.layout_context import LayoutContext
from ...engine.layout_engine import place_line, place_text
from ...engine.line_breaker import wrap_text
from ...media.images import load_image
from ...models.cover import CoverPage, RevisionEntry
from ...models.form import FormMetadata
from ..render_utils import truncate

logger = logging.getLogger(__name__)

COVER_PAGE = 0
TITLE_SIZE = 28
TITLE_COLOR = "#1a1a2e"
SUBTITLE_SIZE = 16
SUBTITLE_COLOR = "#444444"
META_SIZE = 10
META_LABEL_COLOR = "#333333"
META_VALUE_COLOR = "#444444"
META_LINE_SPACING = 16
META_INDENT = 40
META_VALUE_OFFSET = 160
LOGO_MAX_WIDTH = 150
LOGO_MAX_HEIGHT = 80
COVER_IMAGE_OPACITY = 0.15
LEGAL_SIZE = 8
LEGAL_COLOR = "#888888"
LEGAL_BOTTOM_OFFSET = 60
WATERMARK_SIZE = 72
WATERMARK_COLOR = "#cccccc"
WATERMARK_OPACITY = 0.15
WATERMARK_ANGLE = 45

REVISION_HEADERS = ("Version", "Date", "Author", "Description")
REVISION_COLUMN_RATIOS = (0.12, 0.18, 0.22, 0.48)
REVISION_FONT_SIZE = 8
REVISION_ROW_HEIGHT = 14
REVISION_HEADER_HEIGHT = 16
REVISION_HEADER_FILL = "#f0f0f0"


def layout_cover_page(
    ctx: LayoutContext,
    form: FormMetadata,
    cover: CoverPage,
    base_path: Optional[Union[str, Path]] = None,
) -> None:
    """Place the cover page content on physical page 0."""
    sheet = ctx.stylesheet
    page_width = ctx.page_size.width
    page_height = ctx.page_size.height
    margins = ctx.margins
    content_width = page_width - margins.left - margins.right
    regular = sheet.fonts.family
    bold = sheet.fonts.bold_family

    if cover.cover_image:
        image = load_image(cover.cover_image, base_path, "Cover image")
        if image:
            ctx.place(
                "image", COVER_PAGE, 0, 0, page_width, page_height, "cover:image", track=False,
                image=image, opacity=COVER_IMAGE_OPACITY, anchor="n",
            )

    cursor_y = page_height - margins.top

    if cover.logo:
        logo = load_image(cover.logo, base_path, "Logo")
        if logo:
            ctx.place(
                "image", COVER_PAGE, (page_width - LOGO_MAX_WIDTH) / 2, cursor_y - LOGO_MAX_HEIGHT,
                LOGO_MAX_WIDTH, LOGO_MAX_HEIGHT, "cover:logo", image=logo, anchor="c",
            )
            cursor_y -= LOGO_MAX_HEIGHT + 20

    for line in wrap_text(form.title, content_width, TITLE_SIZE, ctx.estimator):
        place_text(
            ctx, COVER_PAGE, line, page_width / 2, cursor_y - TITLE_SIZE, bold, TITLE_SIZE,
            TITLE_COLOR, "cover:title", align="center", role="cover_title",
        )
        cursor_y -= TITLE_SIZE * 1.3
    cursor_y -= 5

    if cover.subtitle:
        for line in wrap_text(cover.subtitle, content_width, SUBTITLE_SIZE, ctx.estimator):
            place_text(
                ctx, COVER_PAGE, line, page_width / 2, cursor_y - SUBTITLE_SIZE, regular, SUBTITLE_SIZE,
                SUBTITLE_COLOR, "cover:subtitle", align="center", role="cover_subtitle",
            )
            cursor_y -= SUBTITLE_SIZE * 1.3
        cursor_y -= 10

    cursor_y -= 5
    place_line(
        ctx, COVER_PAGE, margins.left + META_INDENT, cursor_y, page_width - margins.right - META_INDENT,
        sheet.colors.rule, 1, "cover:rule", role="cover_rule",
    )
    cursor_y -= 20

    label_x = margins.left + META_INDENT
    value_x = margins.left + META_VALUE_OFFSET
    for label, value in cover.metadata_rows(form.version, form.author):
        baseline = cursor_y - META_SIZE
        place_text(
            ctx, COVER_PAGE, f"{label}:", label_x, baseline, bold, META_SIZE, META_LABEL_COLOR,
            "cover:meta_label", role="cover_meta_label",
        )
        place_text(
            ctx, COVER_PAGE, value, value_x, baseline, regular, META_SIZE, META_VALUE_COLOR,
            "cover:meta_value", role="cover_meta_value",
        )
        cursor_y -= META_LINE_SPACING

    if cover.revision_history:
        cursor_y -= 10
        cursor_y = _layout_revision_history(
            ctx, cover.revision_history, cursor_y, margins.left + META_INDENT,
            content_width - 2 * META_INDENT,
        )

    legal_y = margins.bottom + LEGAL_BOTTOM_OFFSET
    for text in reversed(cover.legal_lines()):
        width = ctx.text_width(text, LEGAL_SIZE, regular)
        x = max(margins.left, (page_width - width) / 2)
        place_text(
            ctx, COVER_PAGE, text, x, legal_y, regular, LEGAL_SIZE, LEGAL_COLOR, "cover:legal",
            role="cover_legal",
        )
        legal_y += LEGAL_SIZE * 1.5

    if cover.watermark:
        ctx.place(
            "watermark", COVER_PAGE, 0, 0, page_width, page_height, "cover:watermark", track=False,
            text=cover.watermark, font=bold, size=WATERMARK_SIZE, color=WATERMARK_COLOR,
            opacity=WATERMARK_OPACITY, angle=WATERMARK_ANGLE,
        )
    logger.debug(f"Cover page laid out, content ends at y={cursor_y:.1f}")


def _layout_revision_history(
    ctx: LayoutContext,
    history: List[RevisionEntry],
    cursor_y: float,
    start_x: float,
    table_width: float,
) -> float:
    sheet = ctx.stylesheet
    col_widths = [table_width * ratio for ratio in REVISION_COLUMN_RATIOS]

    place_text(
        ctx, COVER_PAGE, "Revision History", start_x, cursor_y - 9, sheet.fonts.bold_family, 9,
        META_LABEL_COLOR, "cover:revision_title", role="cover_revision_title",
    )
    cursor_y -= 14

    rows = [(list(REVISION_HEADERS), True, REVISION_HEADER_HEIGHT)]
    for entry in history:
        values = [entry.version, entry.date, entry.author, entry.description]
        cells = [
            truncate(value, int(width // (REVISION_FONT_SIZE * 0.45)))
            for value, width in zip(values, col_widths)
        ]
        rows.append((cells, False, REVISION_ROW_HEIGHT))

    for row_index, (cells, is_header, height) in enumerate(rows):
        ctx.place(
            "table_row",
            COVER_PAGE,
            start_x,
            cursor_y - height,
            table_width,
            height,
            "cover:revision_row",
            cells=[[cell] for cell in cells],
            col_widths=col_widths,
            header=is_header,
            font=sheet.fonts.bold_family if is_header else sheet.fonts.family,
            size=REVISION_FONT_SIZE,
            line_height=REVISION_FONT_SIZE * 1.3,
            padding=4,
            color=META_LABEL_COLOR if is_header else META_VALUE_COLOR,
            border_color=sheet.colors.rule if is_header else "#dddddd",
            fill=REVISION_HEADER_FILL if is_header else None,
            grid=False,
            role="revision_row",
            row=row_index,
        )
        cursor_y -= height
    return cursor_y
