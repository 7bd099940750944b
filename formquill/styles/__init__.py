"""Stylesheet resolution."""

from .stylesheet import ResolvedStylesheet, default_stylesheet, page_dimensions, resolve_stylesheet

__all__ = ["ResolvedStylesheet", "default_stylesheet", "page_dimensions", "resolve_stylesheet"]
