"""Greedy word wrapping on top of a width estimator."""

from __future__ import annotations

import logging
from typing import List, Optional

from .text_metrics import ApproximateWidthEstimator, WidthEstimator

logger = logging.getLogger(__name__)


class LineBreaker:
    """Simple greedy line breaker.

    Words are whitespace-delimited and never split: a word wider than the
    available width is placed alone on its own line.
    """

    def __init__(self, estimator: Optional[WidthEstimator] = None, font_name: Optional[str] = None) -> None:
        self.estimator = estimator or ApproximateWidthEstimator()
        self.font_name = font_name

    def break_text(self, text: str, max_width: float, font_size: float) -> List[str]:
        if not text:
            return []

        lines: List[str] = []
        current_line = ""

        for word in text.split():
            candidate = f"{current_line} {word}" if current_line else word
            if self.estimator(candidate, font_size, self.font_name) > max_width and current_line:
                lines.append(current_line)
                current_line = word
            else:
                current_line = candidate

        if current_line:
            lines.append(current_line)

        if len(lines) > 1:
            logger.debug(f"Wrapped {len(text)} chars into {len(lines)} lines at max_width={max_width:.1f}")
        return lines


def wrap_text(
    text: str,
    max_width: float,
    font_size: float,
    estimator: Optional[WidthEstimator] = None,
) -> List[str]:
    """Split ``text`` into lines no wider than ``max_width``.

    Args:
        text: Source text; any run of whitespace separates words
        max_width: Available width in points
        font_size: Font size in points
        estimator: Width strategy, approximate by default

    Returns:
        Ordered lines. Empty or whitespace-only input yields an empty list.
    """
    return LineBreaker(estimator).break_text(text, max_width, font_size)
