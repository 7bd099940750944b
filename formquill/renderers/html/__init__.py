"""Page-container HTML backend."""

from .generator import GeneratedHtml, generate_html

__all__ = ["GeneratedHtml", "generate_html"]
