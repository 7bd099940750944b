"""Text width estimation strategies.

Layout never measures real glyph metrics by default: every backend agrees on
the approximate rule ``len(text) * font_size * 0.5`` so that the PDF, DOCX and
HTML outputs paginate the same way. ``ReportLabWidthEstimator`` can be injected
where tighter PDF-only wrapping is wanted.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from reportlab.pdfbase import pdfmetrics


AVERAGE_CHAR_WIDTH_FACTOR = 0.5


def estimate_width(text: str, font_size: float) -> float:
    """Approximate rendered width of ``text`` in points."""
    return len(text) * font_size * AVERAGE_CHAR_WIDTH_FACTOR


class WidthEstimator(ABC):
    """Strategy that maps a string and font size to a width in points."""

    @abstractmethod
    def width(self, text: str, font_size: float, font_name: str | None = None) -> float:
        raise NotImplementedError

    def __call__(self, text: str, font_size: float, font_name: str | None = None) -> float:
        return self.width(text, font_size, font_name)


class ApproximateWidthEstimator(WidthEstimator):
    """Character-count heuristic shared by all backends."""

    def __init__(self, factor: float = AVERAGE_CHAR_WIDTH_FACTOR) -> None:
        self.factor = factor

    def width(self, text: str, font_size: float, font_name: str | None = None) -> float:
        return len(text) * font_size * self.factor


class ReportLabWidthEstimator(WidthEstimator):
    """Measures with reportlab's built-in font metrics."""

    def __init__(self, default_font: str = "Helvetica") -> None:
        self.default_font = default_font

    def width(self, text: str, font_size: float, font_name: str | None = None) -> float:
        return float(pdfmetrics.stringWidth(text, font_name or self.default_font, font_size))
