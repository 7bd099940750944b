"""DOCX backend."""

from .generator import GeneratedDocx, generate_docx

__all__ = ["GeneratedDocx", "generate_docx"]
