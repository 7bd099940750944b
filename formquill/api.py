"""
Public entry points.

Each function accepts either a ``ParsedFormSchema`` or the mapping produced
by loading a schema document, plus optional ``GenerationOptions``.
"""

from typing import Any, Mapping, Optional, Union

from .config import GenerationOptions
from .exceptions import SchemaError
from .models.form import ParsedFormSchema
from .renderers.docx import GeneratedDocx
from .renderers.docx import generate_docx as _generate_docx
from .renderers.html import GeneratedHtml
from .renderers.html import generate_html as _generate_html
from .renderers.pdf import GeneratedPdf
from .renderers.pdf import generate_pdf as _generate_pdf

SchemaSource = Union[ParsedFormSchema, Mapping[str, Any]]


def ensure_schema(schema: SchemaSource) -> ParsedFormSchema:
    """Return ``schema`` as a ``ParsedFormSchema``, ingesting mappings."""
    if isinstance(schema, ParsedFormSchema):
        return schema
    if isinstance(schema, Mapping):
        return ParsedFormSchema.from_dict(schema)
    raise SchemaError("Unsupported schema input", type(schema).__name__)


def generate_pdf(schema: SchemaSource, options: Optional[GenerationOptions] = None) -> GeneratedPdf:
    """Generate a fillable PDF."""
    return _generate_pdf(ensure_schema(schema), options)


def generate_docx(schema: SchemaSource, options: Optional[GenerationOptions] = None) -> GeneratedDocx:
    """Generate a flowing DOCX document."""
    return _generate_docx(ensure_schema(schema), options)


def generate_html(schema: SchemaSource, options: Optional[GenerationOptions] = None) -> GeneratedHtml:
    """Generate page-container HTML."""
    return _generate_html(ensure_schema(schema), options)
