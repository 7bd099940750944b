"""The layout sequence shared by all backends."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from ..layout.footer import ResolvedFooter
from ..layout.pagination_manager import PageMapping
from ..models.form import ParsedFormSchema
from .field_layout import PlacedField, place_fields
from .layout_context import LayoutContext, next_page
from .layout_engine import draw_footer, draw_header, draw_schema_content, draw_title

logger = logging.getLogger(__name__)

CoverLayout = Callable[[LayoutContext], None]


def layout_document(
    schema: ParsedFormSchema,
    ctx: LayoutContext,
    mapping: PageMapping,
    footer: ResolvedFooter,
    cover_layout: Optional[CoverLayout] = None,
) -> List[PlacedField]:
    """Lay out a whole form and return the placed fields.

    Order: cover page, header and footer, static content (or the bare title),
    then fields relative to the recorded content baseline. Backends that
    render the cover themselves pass no ``cover_layout``; the cover page
    index is still reserved.
    """
    if schema.cover_page is not None:
        if cover_layout is not None:
            cover_layout(ctx)
        next_page(ctx)

    draw_header(ctx, schema.form.title, page_number=True, start_page=mapping.decoration_start)
    draw_footer(ctx, footer, start_page=mapping.decoration_start)

    if schema.has_content:
        draw_schema_content(ctx, schema.content)
    else:
        draw_title(ctx, schema.form.title)

    placed = place_fields(ctx, schema.fields, mapping, skip_labels=schema.has_content)
    logger.debug(f"Layout finished: {ctx.page_count} physical pages, {len(placed)} fields")
    return placed
