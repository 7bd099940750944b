"""Page-container HTML generation.

Each physical page of the shared layout pass becomes a ``div.page``: running
header, content grouped back into semantic elements, an absolutely
positioned field layer and the footer with its page variables resolved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from html import escape
from typing import Dict, List, Optional, Tuple

from ...config import GenerationOptions
from ...engine.document_layout import layout_document
from ...engine.geometry import points_to_px
from ...engine.layout_context import DrawnElement, Placement, initialize_layout
from ...engine.layout_validator import OverlapDiagnostic, detect_overlaps
from ...engine.placeholder_resolver import resolve_page_variables
from ...layout.footer import resolve_footer_config
from ...layout.pagination_manager import PageMapping
from ...media.icons import load_social_icons
from ...media.images import LoadedImage
from ...models.form import ParsedFormSchema
from ...styles.stylesheet import resolve_stylesheet
from .coverpage import render_cover_page
from .fields import HtmlFieldRenderer
from .styles import build_css

logger = logging.getLogger(__name__)

CONTENT_ROLES = ("title", "heading", "paragraph", "list_item", "table_row", "divider")

ContentGroup = Tuple[Tuple[str, object], List[Placement]]


@dataclass(slots=True)
class GeneratedHtml:
    html: str
    css: str
    field_count: int
    page_count: int
    drawn_elements: List[DrawnElement] = field(default_factory=list)
    title: str = ""

    @property
    def overlaps(self) -> List[OverlapDiagnostic]:
        return detect_overlaps(self.drawn_elements)

    def to_document(self, lang: str = "en") -> str:
        """Wrap the page markup in a standalone HTML document with embedded CSS."""
        return "\n".join(
            [
                "<!DOCTYPE html>",
                f'<html lang="{escape(lang)}">',
                "<head>",
                '<meta charset="utf-8" />',
                f"<title>{escape(self.title or 'Form')}</title>",
                "<style>",
                self.css,
                "</style>",
                "</head>",
                "<body>",
                self.html,
                "</body>",
                "</html>",
            ]
        )


def group_content(placements: List[Placement]) -> List[ContentGroup]:
    """Consecutive content placements of the same block, in placement order."""
    groups: List[ContentGroup] = []
    for placement in placements:
        if placement.role not in CONTENT_ROLES:
            continue
        key = (placement.role, placement.payload.get("block"))
        if groups and groups[-1][0] == key:
            groups[-1][1].append(placement)
        else:
            groups.append((key, [placement]))
    return groups


def _joined(placements: List[Placement]) -> str:
    return escape(" ".join(p.payload.get("text", "") for p in placements))


def _align_attr(placement: Placement) -> str:
    align = placement.payload.get("align", "left")
    return f' style="text-align: {align}"' if align in ("center", "right") else ""


def render_content_group(role: str, placements: List[Placement]) -> str:
    first = placements[0]
    if role == "title":
        return f'<h1 class="form-title">{_joined(placements)}</h1>'
    if role == "heading":
        level = min(max(int(first.payload.get("level", 1)), 1), 4)
        return f"<h{level}{_align_attr(first)}>{_joined(placements)}</h{level}>"
    if role == "paragraph":
        return f"<p{_align_attr(first)}>{_joined(placements)}</p>"
    if role == "list_item":
        items: Dict[int, List[Placement]] = {}
        for placement in placements:
            items.setdefault(placement.payload.get("item", 0), []).append(placement)
        ordered = bool(first.payload.get("ordered"))
        tag = "ol" if ordered else "ul"
        start = f' start="{min(items) + 1}"' if ordered and min(items) > 0 else ""
        body = "".join(f"<li>{_joined(lines)}</li>" for lines in items.values())
        return f"<{tag}{start}>{body}</{tag}>"
    if role == "table_row":
        rows = []
        for placement in placements:
            cell_tag = "th" if placement.payload.get("header") else "td"
            cells = "".join(
                f"<{cell_tag}>{escape(' '.join(lines))}</{cell_tag}>"
                for lines in placement.payload.get("cells", [])
            )
            rows.append(f"<tr>{cells}</tr>")
        return f"<table>{''.join(rows)}</table>"
    if role == "divider":
        return "<hr />"
    return ""


class HtmlPageRenderer:
    """Renders one physical content page from its placements."""

    def __init__(self, page_height: float, icons: Optional[Dict[str, LoadedImage]] = None) -> None:
        self.fields = HtmlFieldRenderer(page_height)
        self.icons = icons or {}

    def render(self, placements: List[Placement], page_number: int, page_total: int) -> str:
        by_role: Dict[str, List[Placement]] = {}
        for placement in placements:
            by_role.setdefault(placement.role, []).append(placement)

        def text(role: str) -> str:
            found = by_role.get(role)
            if not found:
                return ""
            return escape(resolve_page_variables(found[0].payload.get("text", ""), page_number, page_total))

        parts = [f'<div class="page" data-page="{page_number}">']
        if "header_title" in by_role or "header_page" in by_role:
            parts.append(
                f'<header><span class="header-title">{text("header_title")}</span>'
                f'<span class="header-page">{text("header_page")}</span></header>'
            )

        content = [render_content_group(key[0], group) for key, group in group_content(placements)]
        parts.append('<main class="content">' + "".join(content) + "</main>")

        field_layer = self.fields.render(placements)
        if field_layer:
            parts.append(field_layer)

        footer = self._footer(by_role, text)
        if footer:
            parts.append(footer)
        parts.append("</div>")
        return "\n".join(parts)

    def _footer(self, by_role: Dict[str, List[Placement]], text) -> str:
        parts: List[str] = []
        slots = ("footer_left", "footer_center", "footer_right")
        if any(role in by_role for role in slots):
            separator = by_role.get("footer_separator")
            attrs = ' class="footer-row"'
            if separator:
                payload = separator[0].payload
                width = max(points_to_px(payload.get("thickness", 0.5)), 1)
                attrs = (
                    f' class="footer-row separated" style="border-top-width: {width:.2f}px; '
                    f'border-top-color: {escape(payload.get("color", "#cccccc"))}"'
                )
            parts.append(
                f"<div{attrs}>"
                f'<span class="footer-left">{text("footer_left")}</span>'
                f'<span class="footer-center">{text("footer_center")}</span>'
                f'<span class="footer-right">{text("footer_right")}</span>'
                "</div>"
            )
        social = by_role.get("footer_social")
        if social:
            links = []
            for placement in social:
                payload = placement.payload
                icon = self.icons.get(payload.get("platform", ""))
                image = (
                    f'<img src="{icon.data_uri()}" alt="{escape(payload.get("platform", ""))}" />'
                    if icon is not None else ""
                )
                links.append(
                    f'<a href="{escape(payload.get("url", ""))}" target="_blank" rel="noopener">'
                    f'{image}<span>{escape(payload.get("text", ""))}</span></a>'
                )
            parts.append('<div class="footer-social">' + "".join(links) + "</div>")
        if not parts:
            return ""
        return "<footer>" + "".join(parts) + "</footer>"


def generate_html(schema: ParsedFormSchema, options: Optional[GenerationOptions] = None) -> GeneratedHtml:
    """Render ``schema`` as page-container HTML.

    Args:
        schema: Parsed form schema
        options: Stylesheet override, base path, width estimator, icon directory

    Returns:
        GeneratedHtml; ``to_document()`` gives a standalone document
    """
    options = options or GenerationOptions()
    base_path = options.resolve_base_path()
    stylesheet = resolve_stylesheet(options.stylesheet or schema.form.stylesheet, base_path)
    mapping = PageMapping(schema.form.pages, schema.has_cover_page)
    footer = resolve_footer_config(schema.footer, schema.form, options.today)

    ctx = initialize_layout(None, stylesheet, mapping.total_physical_pages, estimator=options.estimator)
    placed = layout_document(schema, ctx, mapping, footer)

    renderer = HtmlPageRenderer(stylesheet.page_size.height, load_social_icons(footer.social_links, options.icon_dir))
    logical_total = mapping.logical_total(ctx.page_count)
    pages: List[str] = []
    for index in range(ctx.page_count):
        if index < mapping.page_offset and schema.cover_page is not None:
            pages.append(render_cover_page(schema.form, schema.cover_page, base_path))
            continue
        pages.append(renderer.render(ctx.placements_for_page(index), mapping.logical_number(index), logical_total))

    logger.info(f"Generated HTML '{schema.form.title}': {ctx.page_count} pages, {len(placed)} fields")
    return GeneratedHtml(
        html='<div class="document">\n' + "\n".join(pages) + "\n</div>",
        css=build_css(stylesheet, include_cover=schema.has_cover_page),
        field_count=len(placed),
        page_count=ctx.page_count,
        drawn_elements=list(ctx.drawn_elements),
        title=schema.form.title,
    )
