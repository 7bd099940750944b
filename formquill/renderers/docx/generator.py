"""Flowable DOCX generation.

The shared layout pass still runs so that field order, page assignment and
drawn elements agree with the other backends; the DOCX output itself is a
sequence of sections with flowing blocks that Word paginates on its own.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ...config import GenerationOptions
from ...engine.document_layout import layout_document
from ...engine.geometry import points_to_twips
from ...engine.layout_context import DrawnElement, initialize_layout
from ...engine.layout_engine import heading_size_for
from ...engine.layout_validator import OverlapDiagnostic, detect_overlaps
from ...layout.footer import SOCIAL_PLATFORM_LABELS, ResolvedFooter, resolve_footer_config
from ...layout.pagination_manager import PageMapping
from ...media.icons import load_social_icons
from ...media.images import LoadedImage
from ...models.content import ContentElement
from ...models.form import ParsedFormSchema
from ...styles.stylesheet import ResolvedStylesheet, resolve_stylesheet
from ..render_utils import docx_color
from .blocks import (
    Block,
    Border,
    DocxSection,
    HeaderFooter,
    HyperlinkRun,
    ImageRun,
    Paragraph,
    SectionProperties,
    Table,
    TableCell,
    TableRow,
    TextRun,
)
from .coverpage import build_cover_section
from .fields import build_field_blocks, docx_font
from .writer import DocxPackageWriter

logger = logging.getLogger(__name__)

_PAGE_VARIABLE = re.compile(r"(\{\{page\}\}|\{\{pages\}\})")
FIELD_CODES = {"{{page}}": "PAGE", "{{pages}}": "SECTIONPAGES"}
SOCIAL_ICON_SIZE = 12


@dataclass(slots=True)
class GeneratedDocx:
    sections: List[DocxSection]
    field_count: int
    page_count: int
    drawn_elements: List[DrawnElement] = field(default_factory=list)
    title: str = ""
    author: Optional[str] = None

    @property
    def overlaps(self) -> List[OverlapDiagnostic]:
        return detect_overlaps(self.drawn_elements)

    def to_bytes(self) -> bytes:
        return DocxPackageWriter(self.sections, title=self.title, author=self.author).to_bytes()


def template_runs(text: str, font: str, size: int, color: str) -> List[TextRun]:
    """Split header/footer text so ``{{page}}``/``{{pages}}`` become Word fields."""
    runs: List[TextRun] = []
    for chunk in _PAGE_VARIABLE.split(text):
        if not chunk:
            continue
        code = FIELD_CODES.get(chunk)
        runs.append(TextRun(text="1" if code else chunk, font=font, size=size, color=color, field_code=code))
    return runs


def section_properties(
    stylesheet: ResolvedStylesheet,
    header: Optional[HeaderFooter] = None,
    footer: Optional[HeaderFooter] = None,
    page_number_start: Optional[int] = None,
) -> SectionProperties:
    size = stylesheet.page_size
    margins = stylesheet.margins
    return SectionProperties(
        page_width=points_to_twips(size.width),
        page_height=points_to_twips(size.height),
        margins={
            "top": points_to_twips(margins.top),
            "right": points_to_twips(margins.right),
            "bottom": points_to_twips(margins.bottom),
            "left": points_to_twips(margins.left),
            "header": points_to_twips(max(margins.top - 30, 12)),
            "footer": points_to_twips(max(margins.bottom - 40, 12)),
        },
        header=header,
        footer=footer,
        page_number_start=page_number_start,
    )


def build_header(title: str, stylesheet: ResolvedStylesheet) -> HeaderFooter:
    font = docx_font(stylesheet.fonts.family)
    size = int(stylesheet.fonts.sizes.header * 2)
    color = docx_color(stylesheet.colors.header)
    runs: List = []
    if title:
        runs.append(TextRun(text=title, font=font, size=size, color=color))
    runs.append(TextRun(text="\t", font=font, size=size))
    runs.extend(template_runs("Page {{page}} of {{pages}}", font, size, color))
    return HeaderFooter(blocks=[Paragraph(
        runs=runs,
        tab_stops=[("right", points_to_twips(stylesheet.content_width))],
        border_bottom=Border(color=docx_color(stylesheet.colors.rule), size=4),
    )])


def build_footer(
    footer: ResolvedFooter,
    stylesheet: ResolvedStylesheet,
    icons: Optional[Dict[str, LoadedImage]] = None,
) -> Optional[HeaderFooter]:
    """Footer story with left/center/right slots on tab stops and a social links row."""
    if not footer.enabled:
        return None
    icons = icons or {}
    font = docx_font(stylesheet.fonts.family)
    size = int(stylesheet.fonts.sizes.footer * 2)
    color = docx_color(stylesheet.colors.footer)
    width = points_to_twips(stylesheet.content_width)
    blocks: List[Block] = []

    if footer.has_text:
        runs: List = []
        runs.extend(template_runs(footer.left, font, size, color))
        runs.append(TextRun(text="\t", font=font, size=size))
        runs.extend(template_runs(footer.center, font, size, color))
        runs.append(TextRun(text="\t", font=font, size=size))
        runs.extend(template_runs(footer.right, font, size, color))
        separator = footer.separator
        blocks.append(Paragraph(
            runs=runs,
            tab_stops=[("center", width // 2), ("right", width)],
            border_top=(
                Border(color=docx_color(separator.color), size=max(2, int(separator.thickness * 8)))
                if separator.enabled else None
            ),
        ))

    if footer.social_links:
        runs = []
        for index, (platform, url) in enumerate(footer.social_links.items()):
            if index:
                runs.append(TextRun(text="   ", font=font, size=size))
            children: List = []
            icon = icons.get(platform)
            if icon is not None:
                children.append(ImageRun(
                    data=icon.data, extension=icon.extension, width=SOCIAL_ICON_SIZE,
                    height=SOCIAL_ICON_SIZE, description=platform,
                ))
                children.append(TextRun(text=" ", font=font, size=size))
            children.append(TextRun(
                text=SOCIAL_PLATFORM_LABELS.get(platform, platform), font=font, size=size, color=color,
            ))
            runs.append(HyperlinkRun(url=url, runs=children))
        blocks.append(Paragraph(runs=runs, alignment="center", spacing_before=points_to_twips(4)))

    return HeaderFooter(blocks=blocks)


class DocxContentBuilder:
    """Translates static content elements into DOCX blocks."""

    def __init__(self, stylesheet: ResolvedStylesheet) -> None:
        self.stylesheet = stylesheet
        self.font = docx_font(stylesheet.fonts.family)
        self.body_size = int(stylesheet.fonts.sizes.body * 2)
        self.text_color = docx_color(stylesheet.colors.text)
        self.heading_color = docx_color(stylesheet.colors.heading)

    def title(self, text: str) -> Paragraph:
        return Paragraph(
            runs=[TextRun(
                text=text, font=self.font, size=int(self.stylesheet.fonts.sizes.title * 2),
                bold=True, color=self.heading_color,
            )],
            alignment="center",
            spacing_after=points_to_twips(18),
        )

    def build(self, elements: List[ContentElement]) -> List[Block]:
        blocks: List[Block] = []
        handlers = {
            "heading": self._heading,
            "paragraph": self._paragraph,
            "text": self._paragraph,
            "list": self._list,
            "table": self._table,
            "divider": self._divider,
            "spacer": self._spacer,
        }
        for element in elements:
            handler = handlers.get(element.type)
            if handler is None:
                logger.debug(f"No DOCX rendering for content type '{element.type}'")
                continue
            blocks.extend(handler(element))
        return blocks

    def _alignment(self, element: ContentElement) -> Optional[str]:
        return element.align if element.align in ("center", "right") else None

    def _heading(self, element: ContentElement) -> List[Block]:
        size = heading_size_for(self.stylesheet.fonts.sizes, element.level)
        return [Paragraph(
            runs=[TextRun(text=element.text, font=self.font, size=int(size * 2), bold=True, color=self.heading_color)],
            alignment=self._alignment(element),
            spacing_before=points_to_twips(8),
            spacing_after=points_to_twips(4),
            keep_next=True,
        )]

    def _paragraph(self, element: ContentElement) -> List[Block]:
        return [Paragraph(
            runs=[TextRun(text=element.text, font=self.font, size=self.body_size, color=self.text_color)],
            alignment=self._alignment(element),
            spacing_after=points_to_twips(8),
        )]

    def _list(self, element: ContentElement) -> List[Block]:
        blocks: List[Block] = []
        indent = points_to_twips(16)
        for index, item in enumerate(element.items):
            marker = f"{index + 1}." if element.ordered else "•"
            blocks.append(Paragraph(
                runs=[TextRun(text=f"{marker}\t{item}", font=self.font, size=self.body_size, color=self.text_color)],
                indent_left=indent,
                indent_hanging=indent,
                tab_stops=[("left", indent)],
                spacing_after=points_to_twips(2),
            ))
        if blocks:
            blocks[-1].spacing_after = points_to_twips(8)
        return blocks

    def _table(self, element: ContentElement) -> List[Block]:
        column_count = max([len(element.headers)] + [len(row) for row in element.rows])
        if column_count == 0:
            return []
        width = points_to_twips(self.stylesheet.content_width) // column_count
        size = max(self.body_size - 2, 12)
        rows: List[TableRow] = []

        def cells(values, bold: bool, shading: Optional[str]) -> List[TableCell]:
            padded = list(values) + [""] * (column_count - len(values))
            return [
                TableCell(
                    paragraphs=[Paragraph(runs=[TextRun(text=value, font=self.font, size=size, bold=bold, color=self.text_color)])],
                    shading=shading,
                )
                for value in padded
            ]

        if element.headers:
            rows.append(TableRow(cells=cells(element.headers, True, "F0F0F0"), header=True))
        rows.extend(TableRow(cells=cells(row, False, None)) for row in element.rows)
        return [
            Table(rows=rows, column_widths=[width] * column_count, border_color=docx_color(self.stylesheet.colors.rule)),
            Paragraph(spacing_after=points_to_twips(4)),
        ]

    def _divider(self, element: ContentElement) -> List[Block]:
        return [Paragraph(
            spacing_before=points_to_twips(6),
            spacing_after=points_to_twips(10),
            border_bottom=Border(color=docx_color(self.stylesheet.colors.rule), size=6),
        )]

    def _spacer(self, element: ContentElement) -> List[Block]:
        return [Paragraph(spacing_after=points_to_twips(element.height))]


def generate_docx(schema: ParsedFormSchema, options: Optional[GenerationOptions] = None) -> GeneratedDocx:
    """Render ``schema`` as flowing DOCX sections.

    Args:
        schema: Parsed form schema
        options: Stylesheet override, base path, width estimator, icon directory

    Returns:
        GeneratedDocx; call ``to_bytes()`` for the ``.docx`` package
    """
    options = options or GenerationOptions()
    base_path = options.resolve_base_path()
    stylesheet = resolve_stylesheet(options.stylesheet or schema.form.stylesheet, base_path)
    mapping = PageMapping(schema.form.pages, schema.has_cover_page)
    footer = resolve_footer_config(schema.footer, schema.form, options.today)

    ctx = initialize_layout(None, stylesheet, mapping.total_physical_pages, estimator=options.estimator)
    placed = layout_document(schema, ctx, mapping, footer)

    sections: List[DocxSection] = []
    if schema.cover_page is not None:
        sections.append(build_cover_section(
            schema.form, schema.cover_page, stylesheet, section_properties(stylesheet), base_path,
        ))

    content = DocxContentBuilder(stylesheet)
    blocks: List[Block] = content.build(schema.content) if schema.has_content else [content.title(schema.form.title)]
    blocks.extend(build_field_blocks(placed, stylesheet, ctx.content_top, skip_labels=schema.has_content))

    icons = load_social_icons(footer.social_links, options.icon_dir)
    sections.append(DocxSection(
        properties=section_properties(
            stylesheet,
            header=build_header(schema.form.title, stylesheet),
            footer=build_footer(footer, stylesheet, icons),
            page_number_start=1 if schema.has_cover_page else None,
        ),
        blocks=blocks,
    ))

    logger.info(
        f"Generated DOCX '{schema.form.title}': {len(sections)} sections, {len(placed)} fields, "
        f"~{ctx.page_count} pages"
    )
    return GeneratedDocx(
        sections=sections,
        field_count=len(placed),
        page_count=ctx.page_count,
        drawn_elements=list(ctx.drawn_elements),
        title=schema.form.title,
        author=schema.form.author,
    )
