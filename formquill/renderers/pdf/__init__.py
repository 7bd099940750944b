"""Fixed-canvas PDF backend."""

from .generator import GeneratedPdf, generate_pdf

__all__ = ["GeneratedPdf", "generate_pdf"]
