"""Overlap diagnostics for drawn elements.

Overlaps are reported, never fixed: generation always completes and callers
decide what to do with the findings.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

from .layout_context import DrawnElement

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class OverlapDiagnostic:
    page: int
    first: str
    second: str

    def __str__(self) -> str:
        return f"page {self.page}: '{self.first}' overlaps '{self.second}'"


def detect_overlaps(elements: Iterable[DrawnElement]) -> List[OverlapDiagnostic]:
    """Report every pair of elements on the same page whose boxes intersect.

    Boxes that only share an edge are not reported. Each unordered pair is
    reported once, in drawing order.
    """
    by_page: Dict[int, List[DrawnElement]] = defaultdict(list)
    for element in elements:
        by_page[element.page].append(element)

    diagnostics: List[OverlapDiagnostic] = []
    for page in sorted(by_page):
        page_elements = by_page[page]
        for i, first in enumerate(page_elements):
            first_rect = first.rect
            for second in page_elements[i + 1:]:
                if first_rect.intersects(second.rect):
                    diagnostics.append(OverlapDiagnostic(page, first.label, second.label))
    return diagnostics


class LayoutValidator:
    """Validates drawn elements of a finished layout."""

    def __init__(self, elements: Sequence[DrawnElement], page_count: int = 0) -> None:
        self.elements = list(elements)
        self.page_count = page_count
        self.errors: List[str] = []
        self.warnings: List[str] = []
        self.overlaps: List[OverlapDiagnostic] = []

    def validate(self) -> Tuple[bool, List[str], List[str]]:
        """
        Run all checks.

        Returns:
            Tuple (is_valid, errors, warnings)
        """
        self.errors.clear()
        self.warnings.clear()

        self._validate_pages()
        self.overlaps = detect_overlaps(self.elements)
        self.warnings.extend(str(diagnostic) for diagnostic in self.overlaps)
        for diagnostic in self.overlaps:
            logger.debug(f"Overlap on {diagnostic}")

        return len(self.errors) == 0, self.errors.copy(), self.warnings.copy()

    def _validate_pages(self) -> None:
        if not self.page_count:
            return
        for element in self.elements:
            if element.page < 0 or element.page >= self.page_count:
                self.errors.append(f"'{element.label}' is on page {element.page}, outside 0..{self.page_count - 1}")

    def get_summary(self) -> Dict[str, int]:
        return {
            "elements": len(self.elements),
            "errors": len(self.errors),
            "warnings": len(self.warnings),
            "overlaps": len(self.overlaps),
        }
