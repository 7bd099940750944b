"""Logical to physical page mapping.

Schema pages are numbered from 1 and never include the cover page. When a
cover page is present it occupies physical index 0 and every logical page is
shifted by one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True, frozen=True)
class PageMapping:
    declared_pages: int
    has_cover_page: bool = False

    @property
    def page_offset(self) -> int:
        return 1 if self.has_cover_page else 0

    @property
    def total_physical_pages(self) -> int:
        return max(1, self.declared_pages) + self.page_offset

    @property
    def decoration_start(self) -> int:
        """First physical index that receives header and footer."""
        return self.page_offset

    def physical_index(self, logical_page: int, last_index: Optional[int] = None) -> int:
        """Map a 1-based logical page to a 0-based physical index.

        Args:
            logical_page: Page number as authored in the schema
            last_index: Highest valid physical index; defaults to the declared
                page count plus cover

        Returns:
            Physical index clamped into ``[page_offset, last_index]``
        """
        if last_index is None:
            last_index = self.total_physical_pages - 1
        index = min(logical_page - 1 + self.page_offset, last_index)
        return max(index, min(self.page_offset, last_index))

    def logical_number(self, physical_index: int) -> int:
        """Page number shown to the reader for a content page."""
        return physical_index - self.page_offset + 1

    def logical_total(self, physical_pages: int) -> int:
        return max(1, physical_pages - self.page_offset)
