"""Fixed-canvas PDF generation.

Layout runs first and records placements for every physical page; pages are
then painted in order onto one reportlab canvas, since a canvas cannot go
back to an earlier page once ``showPage`` has been called.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from reportlab.pdfgen.canvas import Canvas

from ...config import PDF_CREATOR, PDF_PRODUCER, GenerationOptions
from ...engine.geometry import Size
from ...engine.document_layout import layout_document
from ...engine.layout_context import DrawnElement, initialize_layout
from ...engine.layout_validator import LayoutValidator, OverlapDiagnostic, detect_overlaps
from ...exceptions import CompilationError, RenderingError
from ...layout.footer import resolve_footer_config
from ...layout.pagination_manager import PageMapping
from ...media.icons import load_social_icons
from ...models.form import ParsedFormSchema
from ...styles.stylesheet import resolve_stylesheet
from .coverpage import layout_cover_page
from .painter import PdfPainter

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PdfPage:
    """Page handle of the PDF backend."""

    index: int
    size: Size


@dataclass(slots=True)
class GeneratedPdf:
    bytes: bytes
    field_count: int
    page_count: int
    drawn_elements: List[DrawnElement] = field(default_factory=list)

    @property
    def overlaps(self) -> List[OverlapDiagnostic]:
        return detect_overlaps(self.drawn_elements)


def generate_pdf(schema: ParsedFormSchema, options: Optional[GenerationOptions] = None) -> GeneratedPdf:
    """Render ``schema`` as a fillable PDF.

    Args:
        schema: Parsed form schema
        options: Stylesheet override, base path, width estimator, icon directory

    Returns:
        GeneratedPdf with the document bytes, the number of rendered fields,
        the physical page count and every drawn element

    Raises:
        RenderingError: The canvas could not be created
        CompilationError: The document could not be painted or serialised
    """
    options = options or GenerationOptions()
    base_path = options.resolve_base_path()
    stylesheet = resolve_stylesheet(options.stylesheet or schema.form.stylesheet, base_path)
    mapping = PageMapping(schema.form.pages, schema.has_cover_page)
    page_size = stylesheet.page_size

    buffer = io.BytesIO()
    try:
        canvas = Canvas(buffer, pagesize=(page_size.width, page_size.height))
    except Exception as e:
        raise RenderingError("Failed to create PDF canvas", str(e)) from e

    canvas.setTitle(schema.form.title)
    if schema.form.author:
        canvas.setAuthor(schema.form.author)
    if schema.form.description:
        canvas.setSubject(schema.form.description)
    canvas.setCreator(PDF_CREATOR)
    canvas.setProducer(PDF_PRODUCER)

    ctx = initialize_layout(canvas, stylesheet, mapping.total_physical_pages, PdfPage, options.estimator)
    footer = resolve_footer_config(schema.footer, schema.form, options.today)
    placed = layout_document(
        schema, ctx, mapping, footer,
        cover_layout=lambda context: layout_cover_page(context, schema.form, schema.cover_page, base_path),
    )
    field_count = len(placed)

    painter = PdfPainter(canvas, load_social_icons(footer.social_links, options.icon_dir))
    logical_total = mapping.logical_total(ctx.page_count)
    try:
        for index in range(ctx.page_count):
            painter.paint_page(ctx.placements_for_page(index), mapping.logical_number(index), logical_total)
            canvas.showPage()
        canvas.save()
    except Exception as e:
        logger.error(f"PDF serialisation failed: {e}")
        raise CompilationError("Failed to write PDF", str(e)) from e

    validator = LayoutValidator(ctx.drawn_elements, ctx.page_count)
    validator.validate()
    summary = validator.get_summary()
    logger.info(
        f"Generated PDF '{schema.form.title}': {ctx.page_count} pages, {field_count} fields, "
        f"{summary['overlaps']} overlaps"
    )
    return GeneratedPdf(
        bytes=buffer.getvalue(),
        field_count=field_count,
        page_count=ctx.page_count,
        drawn_elements=list(ctx.drawn_elements),
    )
