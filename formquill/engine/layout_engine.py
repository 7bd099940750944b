"""Flow layout of header, footer, title and static content.

Every function here mutates a ``LayoutContext``: it places plain-data
instructions and advances the cursor. Nothing here knows how a backend draws.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from ..config import (
    BLOCK_SPACING,
    DIVIDER_SPACING,
    FOOTER_OFFSET,
    FOOTER_SEPARATOR_GAP,
    HEADER_OFFSET,
    HEADER_RULE_GAP,
    LINE_HEIGHT_FACTOR,
    LIST_INDENT,
    SOCIAL_ICON_GAP,
    SOCIAL_ICON_SIZE,
    TABLE_CELL_PADDING,
    TITLE_SPACING_AFTER,
)
from ..layout.footer import PAGE_NUMBER_TEMPLATE, SOCIAL_PLATFORM_LABELS, ResolvedFooter
from ..models.content import ContentElement
from ..styles.stylesheet import FontSizes
from .layout_context import LayoutContext, ensure_space
from .line_breaker import wrap_text
from .placeholder_resolver import has_page_variables, resolve_page_variables

logger = logging.getLogger(__name__)

TABLE_HEADER_FILL = "#f0f0f0"


def line_height(font_size: float) -> float:
    return font_size * LINE_HEIGHT_FACTOR


def place_text(
    ctx: LayoutContext,
    page: int,
    text: str,
    anchor_x: float,
    baseline: float,
    font: str,
    size: float,
    color: str,
    label: str,
    align: str = "left",
    **extra,
):
    """Place one line of text aligned on ``anchor_x``.

    For ``center`` the anchor is the line's midpoint and for ``right`` its
    right edge. The recorded box spans baseline to baseline + size.
    """
    measured = resolve_page_variables(text, 1, 1) if extra.get("page_template") else text
    width = ctx.text_width(measured, size, font)
    if align == "center":
        x = anchor_x - width / 2
    elif align == "right":
        x = anchor_x - width
    else:
        x = anchor_x
    return ctx.place(
        "text",
        page,
        x,
        baseline,
        width,
        size,
        label,
        text=text,
        font=font,
        size=size,
        color=color,
        align=align,
        anchor_x=anchor_x,
        **extra,
    )


def place_line(
    ctx: LayoutContext,
    page: int,
    x1: float,
    y: float,
    x2: float,
    color: str,
    thickness: float,
    label: str,
    **extra,
):
    return ctx.place(
        "line",
        page,
        x1,
        y,
        x2 - x1,
        thickness,
        label,
        x1=x1,
        y1=y,
        x2=x2,
        y2=y,
        color=color,
        thickness=thickness,
        **extra,
    )


# ---------------------------------------------------------------------------
# Page decorations
# ---------------------------------------------------------------------------


def draw_header(ctx: LayoutContext, title: str, page_number: bool = True, start_page: int = 0) -> None:
    """Place the running header on every page from ``start_page`` on.

    Args:
        ctx: Layout context
        title: Text shown on the left of the header
        page_number: Whether to show ``Page {{page}} of {{pages}}`` on the right
        start_page: First physical index to decorate (the cover page is skipped)
    """
    sheet = ctx.stylesheet
    size = sheet.fonts.sizes.header
    baseline = ctx.page_size.height - ctx.margins.top + HEADER_OFFSET
    right_edge = ctx.page_size.width - ctx.margins.right

    def decorate(context: LayoutContext, index: int) -> None:
        if title:
            place_text(
                context, index, title, context.margins.left, baseline,
                sheet.fonts.family, size, sheet.colors.header, "header:title",
                role="header_title",
            )
        if page_number:
            place_text(
                context, index, PAGE_NUMBER_TEMPLATE, right_edge, baseline,
                sheet.fonts.family, size, sheet.colors.header, "header:page",
                align="right", role="header_page", page_template=True,
            )
        place_line(
            context, index, context.margins.left, baseline - HEADER_RULE_GAP, right_edge,
            sheet.colors.rule, 0.5, "header:rule", role="header_rule",
        )

    ctx.add_page_decorator(decorate, start_page)


def draw_footer(ctx: LayoutContext, footer: ResolvedFooter, start_page: int = 0) -> None:
    """Place the resolved footer on every page from ``start_page`` on."""
    if not footer.enabled:
        logger.debug("Footer disabled, nothing to place")
        return

    sheet = ctx.stylesheet
    size = sheet.fonts.sizes.footer
    font = sheet.fonts.family
    color = sheet.colors.footer
    baseline = ctx.margins.bottom - FOOTER_OFFSET
    left_edge = ctx.margins.left
    right_edge = ctx.page_size.width - ctx.margins.right
    slots = (
        (footer.left, left_edge, "left"),
        (footer.center, ctx.page_size.width / 2, "center"),
        (footer.right, right_edge, "right"),
    )
    social_y = baseline - SOCIAL_ICON_SIZE - 4 if footer.has_text else baseline

    def decorate(context: LayoutContext, index: int) -> None:
        for text, anchor, align in slots:
            if not text:
                continue
            place_text(
                context, index, text, anchor, baseline, font, size, color, f"footer:{align}",
                align=align, role=f"footer_{align}", page_template=has_page_variables(text),
            )
        if footer.separator.enabled:
            place_line(
                context, index, left_edge, baseline + size + FOOTER_SEPARATOR_GAP, right_edge,
                footer.separator.color, footer.separator.thickness, "footer:separator",
                role="footer_separator",
            )
        if footer.social_links:
            _place_social_links(context, index, footer, social_y, font, size, color)

    ctx.add_page_decorator(decorate, start_page)


def _place_social_links(ctx: LayoutContext, page: int, footer: ResolvedFooter, y: float, font: str, size: float, color: str) -> None:
    entries = []
    for platform, url in footer.social_links.items():
        label = SOCIAL_PLATFORM_LABELS.get(platform, platform)
        width = SOCIAL_ICON_SIZE + 3 + ctx.text_width(label, size, font)
        entries.append((platform, url, label, width))

    total = sum(entry[3] for entry in entries) + SOCIAL_ICON_GAP * (len(entries) - 1)
    x = (ctx.page_size.width - total) / 2
    for platform, url, label, width in entries:
        ctx.place(
            "social",
            page,
            x,
            y,
            width,
            SOCIAL_ICON_SIZE,
            f"footer:social:{platform}",
            platform=platform,
            url=url,
            text=label,
            font=font,
            size=size,
            color=color,
            icon_size=SOCIAL_ICON_SIZE,
            role="footer_social",
        )
        x += width + SOCIAL_ICON_GAP


# ---------------------------------------------------------------------------
# Flow content
# ---------------------------------------------------------------------------


def draw_title(ctx: LayoutContext, title: str, centered: bool = True) -> float:
    """Place the form title at the cursor and record the content baseline."""
    sheet = ctx.stylesheet
    size = sheet.fonts.sizes.title
    font = sheet.fonts.bold_family
    step = line_height(size)
    for line in wrap_text(title, ctx.content_width, size, ctx.estimator):
        ensure_space(ctx, step)
        anchor = ctx.page_size.width / 2 if centered else ctx.margins.left
        place_text(
            ctx, ctx.current_page, line, anchor, ctx.cursor.y - size, font, size,
            sheet.colors.heading, "content:title", align="center" if centered else "left",
            role="title", block=-1,
        )
        ctx.cursor.y -= step
    ctx.cursor.y -= TITLE_SPACING_AFTER
    ctx.content_baseline = ctx.cursor.y
    logger.debug(f"Title placed, content baseline at y={ctx.cursor.y:.1f} on page {ctx.current_page}")
    return ctx.content_baseline


def draw_schema_content(ctx: LayoutContext, elements: Sequence[ContentElement]) -> float:
    """Flow the schema's static content blocks and record the content baseline."""
    for index, element in enumerate(elements):
        handler = _CONTENT_HANDLERS.get(element.type)
        if handler is None:
            logger.warning(f"Unknown content type '{element.type}', skipping")
            continue
        handler(ctx, element, index)
    ctx.content_baseline = ctx.cursor.y
    logger.debug(
        f"Placed {len(elements)} content blocks, baseline at y={ctx.cursor.y:.1f} on page {ctx.current_page}"
    )
    return ctx.content_baseline


def heading_size(ctx: LayoutContext, level: int) -> float:
    return heading_size_for(ctx.stylesheet.fonts.sizes, level)


def heading_size_for(sizes: FontSizes, level: int) -> float:
    if level <= 1:
        return sizes.heading + 4
    if level == 2:
        return sizes.heading
    return max(sizes.body, sizes.heading - 2)


def _flow_lines(
    ctx: LayoutContext,
    lines: Iterable[str],
    x: float,
    size: float,
    font: str,
    color: str,
    label: str,
    align: str = "left",
    width: Optional[float] = None,
    **extra,
) -> None:
    step = line_height(size)
    width = width if width is not None else ctx.content_width
    if align == "center":
        anchor = x + width / 2
    elif align == "right":
        anchor = x + width
    else:
        anchor = x
    for line_index, line in enumerate(lines):
        ensure_space(ctx, step)
        place_text(
            ctx, ctx.current_page, line, anchor, ctx.cursor.y - size, font, size, color, label,
            align=align, line=line_index, **extra,
        )
        ctx.cursor.y -= step


def _layout_heading(ctx: LayoutContext, element: ContentElement, index: int) -> None:
    sheet = ctx.stylesheet
    size = heading_size(ctx, element.level)
    if ctx.cursor.y < ctx.content_top:
        ctx.cursor.y -= BLOCK_SPACING
    lines = wrap_text(element.text, ctx.content_width, size, ctx.estimator)
    _flow_lines(
        ctx, lines, ctx.margins.left, size, sheet.fonts.bold_family, sheet.colors.heading,
        "content:heading", align=element.align, role="heading", block=index, level=element.level,
    )
    ctx.cursor.y -= BLOCK_SPACING / 2


def _layout_paragraph(ctx: LayoutContext, element: ContentElement, index: int) -> None:
    sheet = ctx.stylesheet
    size = sheet.fonts.sizes.body
    lines = wrap_text(element.text, ctx.content_width, size, ctx.estimator)
    _flow_lines(
        ctx, lines, ctx.margins.left, size, sheet.fonts.family, sheet.colors.text,
        "content:paragraph", align=element.align, role="paragraph", block=index,
    )
    ctx.cursor.y -= BLOCK_SPACING


def _layout_list(ctx: LayoutContext, element: ContentElement, index: int) -> None:
    sheet = ctx.stylesheet
    size = sheet.fonts.sizes.body
    text_x = ctx.margins.left + LIST_INDENT
    width = ctx.content_width - LIST_INDENT
    for item_index, item in enumerate(element.items):
        marker = f"{item_index + 1}." if element.ordered else "•"
        lines = wrap_text(item, width, size, ctx.estimator)
        step = line_height(size)
        for line_index, line in enumerate(lines):
            ensure_space(ctx, step)
            extra = {"marker": marker, "marker_x": ctx.margins.left} if line_index == 0 else {}
            place_text(
                ctx, ctx.current_page, line, text_x, ctx.cursor.y - size, sheet.fonts.family, size,
                sheet.colors.text, "content:list_item", role="list_item", block=index,
                item=item_index, ordered=element.ordered, line=line_index, **extra,
            )
            ctx.cursor.y -= step
    ctx.cursor.y -= BLOCK_SPACING


def _layout_table(ctx: LayoutContext, element: ContentElement, index: int) -> None:
    sheet = ctx.stylesheet
    size = max(sheet.fonts.sizes.body - 1, 6)
    column_count = max([len(element.headers)] + [len(row) for row in element.rows])
    if column_count == 0:
        return
    column_width = ctx.content_width / column_count
    col_widths: List[float] = [column_width] * column_count
    step = line_height(size)

    rows = []
    if element.headers:
        rows.append((element.headers, True))
    rows.extend((row, False) for row in element.rows)

    for row_index, (cells, is_header) in enumerate(rows):
        padded = list(cells) + [""] * (column_count - len(cells))
        wrapped = [
            wrap_text(cell, column_width - 2 * TABLE_CELL_PADDING, size, ctx.estimator)
            for cell in padded
        ]
        row_height = max(1, max(len(lines) for lines in wrapped)) * step + 2 * TABLE_CELL_PADDING
        ensure_space(ctx, row_height)
        ctx.place(
            "table_row",
            ctx.current_page,
            ctx.margins.left,
            ctx.cursor.y - row_height,
            ctx.content_width,
            row_height,
            "content:table_row",
            cells=wrapped,
            col_widths=col_widths,
            header=is_header,
            font=sheet.fonts.bold_family if is_header else sheet.fonts.family,
            size=size,
            line_height=step,
            padding=TABLE_CELL_PADDING,
            color=sheet.colors.text,
            border_color=sheet.colors.rule,
            fill=TABLE_HEADER_FILL if is_header else None,
            role="table_row",
            block=index,
            row=row_index,
        )
        ctx.cursor.y -= row_height
    ctx.cursor.y -= BLOCK_SPACING


def _layout_divider(ctx: LayoutContext, element: ContentElement, index: int) -> None:
    ensure_space(ctx, DIVIDER_SPACING * 2)
    y = ctx.cursor.y - DIVIDER_SPACING
    place_line(
        ctx, ctx.current_page, ctx.margins.left, y, ctx.page_size.width - ctx.margins.right,
        ctx.stylesheet.colors.rule, 0.75, "content:divider", role="divider", block=index,
    )
    ctx.cursor.y -= DIVIDER_SPACING * 2


def _layout_spacer(ctx: LayoutContext, element: ContentElement, index: int) -> None:
    ensure_space(ctx, element.height)
    ctx.cursor.y -= element.height


_CONTENT_HANDLERS = {
    "heading": _layout_heading,
    "paragraph": _layout_paragraph,
    "text": _layout_paragraph,
    "list": _layout_list,
    "table": _layout_table,
    "divider": _layout_divider,
    "spacer": _layout_spacer,
}
