"""Cover page section for the flowable DOCX output."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from ...engine.geometry import points_to_twips
from ...media.images import load_image
from ...models.cover import CoverPage
from ...models.form import FormMetadata
from ...styles.stylesheet import ResolvedStylesheet
from .blocks import (
    Block,
    Border,
    DocxSection,
    ImageRun,
    Paragraph,
    Table,
    TableCell,
    TableRow,
    TextRun,
)

logger = logging.getLogger(__name__)

COVER_FONT = "Arial"
REVISION_HEADERS = ("Version", "Date", "Author", "Description")
REVISION_COLUMN_RATIOS = (0.12, 0.18, 0.22, 0.48)
COVER_IMAGE_HEIGHT = 200
LOGO_WIDTH = 150
LOGO_HEIGHT = 80
META_INDENT = 40


def _run(text: str, size_pt: float, color: str, bold: bool = False) -> TextRun:
    return TextRun(text=text, font=COVER_FONT, size=int(size_pt * 2), bold=bold, color=color)


def _image_paragraph(
    image_path: str,
    base_path: Optional[Union[str, Path]],
    width: float,
    height: float,
    description: str,
) -> Optional[Paragraph]:
    image = load_image(image_path, base_path, description)
    if image is None:
        return None
    return Paragraph(
        runs=[ImageRun(data=image.data, extension=image.extension, width=width, height=height, description=description)],
        alignment="center",
        spacing_after=points_to_twips(10),
    )


def build_cover_section(
    form: FormMetadata,
    cover: CoverPage,
    stylesheet: ResolvedStylesheet,
    section_properties,
    base_path: Optional[Union[str, Path]] = None,
) -> DocxSection:
    """Build the cover as its own section without header or footer.

    Args:
        form: Form metadata (title, version, author)
        cover: Cover page content
        stylesheet: Resolved stylesheet for page geometry
        section_properties: Page size and margins shared with the content section
        base_path: Directory image paths are resolved against

    Returns:
        DocxSection holding the cover blocks
    """
    blocks: List[Block] = []
    content_width = stylesheet.content_width

    if cover.cover_image:
        paragraph = _image_paragraph(cover.cover_image, base_path, content_width, COVER_IMAGE_HEIGHT, "Cover image")
        if paragraph:
            blocks.append(paragraph)

    if cover.logo:
        paragraph = _image_paragraph(cover.logo, base_path, LOGO_WIDTH, LOGO_HEIGHT, "Logo")
        if paragraph:
            blocks.append(paragraph)

    blocks.append(Paragraph(spacing_after=points_to_twips(20)))
    blocks.append(Paragraph(
        runs=[_run(form.title, 28, "1A1A2E", bold=True)],
        alignment="center",
        spacing_after=points_to_twips(8),
    ))

    if cover.subtitle:
        blocks.append(Paragraph(
            runs=[_run(cover.subtitle, 16, "444444")],
            alignment="center",
            spacing_after=points_to_twips(16),
        ))

    blocks.append(Paragraph(
        spacing_before=points_to_twips(10),
        spacing_after=points_to_twips(20),
        border_bottom=Border(color="CCCCCC", size=4),
    ))

    for label, value in cover.metadata_rows(form.version, form.author):
        blocks.append(Paragraph(
            runs=[_run(f"{label}: ", 10, "333333", bold=True), _run(value, 10, "444444")],
            spacing_after=points_to_twips(4),
            indent_left=points_to_twips(META_INDENT),
        ))

    if cover.revision_history:
        blocks.append(Paragraph(spacing_before=points_to_twips(16)))
        blocks.append(Paragraph(
            runs=[_run("Revision History", 9, "333333", bold=True)],
            indent_left=points_to_twips(META_INDENT),
            spacing_after=points_to_twips(6),
        ))
        table_width = points_to_twips(content_width - 2 * META_INDENT)
        widths = [int(table_width * ratio) for ratio in REVISION_COLUMN_RATIOS]
        rows = [TableRow(
            cells=[
                TableCell(paragraphs=[Paragraph(runs=[_run(header, 8, "333333", bold=True)])], shading="F0F0F0")
                for header in REVISION_HEADERS
            ],
            header=True,
        )]
        for entry in cover.revision_history:
            values = (entry.version, entry.date, entry.author, entry.description)
            rows.append(TableRow(cells=[
                TableCell(paragraphs=[Paragraph(runs=[_run(value, 8, "444444")])]) for value in values
            ]))
        blocks.append(Table(
            rows=rows,
            column_widths=widths,
            border_color="DDDDDD",
            indent=points_to_twips(META_INDENT),
        ))

    legal = cover.legal_lines()
    if legal:
        blocks.append(Paragraph(spacing_before=points_to_twips(40)))
        for text in legal:
            blocks.append(Paragraph(
                runs=[_run(text, 8, "888888")],
                alignment="center",
                spacing_after=points_to_twips(4),
            ))

    if cover.watermark:
        logger.debug("Cover watermark is not rendered in DOCX output")

    return DocxSection(properties=section_properties, blocks=blocks)
