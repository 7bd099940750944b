"""
FormQuill - form schema layout engine with PDF, DOCX and HTML output.

Usage:
    >>> from formquill import generate_pdf
    >>> result = generate_pdf({"form": {"title": "Intake", "pages": 1}, "fields": []})
    >>> result.page_count
    1
"""

from .api import ensure_schema, generate_docx, generate_html, generate_pdf
from .config import GenerationOptions
from .exceptions import (
    CompilationError,
    FormQuillError,
    LayoutError,
    MediaError,
    RenderingError,
    SchemaError,
)
from .models import (
    ContentElement,
    CoverPage,
    FooterConfig,
    FormMetadata,
    NormalizedFormField,
    ParsedFormSchema,
)
from .renderers.docx import GeneratedDocx
from .renderers.html import GeneratedHtml
from .renderers.pdf import GeneratedPdf
from .version import __version__

__all__ = [
    "__version__",
    "generate_pdf",
    "generate_docx",
    "generate_html",
    "ensure_schema",
    "GenerationOptions",
    "GeneratedPdf",
    "GeneratedDocx",
    "GeneratedHtml",
    "ParsedFormSchema",
    "FormMetadata",
    "NormalizedFormField",
    "ContentElement",
    "CoverPage",
    "FooterConfig",
    "FormQuillError",
    "SchemaError",
    "LayoutError",
    "RenderingError",
    "MediaError",
    "CompilationError",
]
