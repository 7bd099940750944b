"""Flowable word-processor block model.

These dataclasses are the DOCX backend's output: section properties plus an
ordered sequence of paragraphs and tables. ``DocxPackageWriter`` serialises
them into WordprocessingML. Sizes follow Word's units: font sizes in
half-points, spacing and indents in twips, image extents in points.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union


@dataclass(slots=True)
class TextRun:
    text: str = ""
    font: str = "Arial"
    size: int = 22
    bold: bool = False
    italic: bool = False
    color: Optional[str] = None
    field_code: Optional[str] = None


@dataclass(slots=True)
class ImageRun:
    data: bytes
    extension: str
    width: float
    height: float
    description: str = ""


@dataclass(slots=True)
class HyperlinkRun:
    url: str
    runs: List[Union[TextRun, ImageRun]] = field(default_factory=list)


Run = Union[TextRun, ImageRun, HyperlinkRun]


@dataclass(slots=True)
class Border:
    color: str = "CCCCCC"
    size: int = 4
    style: str = "single"
    space: int = 1


@dataclass(slots=True)
class Paragraph:
    runs: List[Run] = field(default_factory=list)
    alignment: Optional[str] = None
    spacing_before: int = 0
    spacing_after: int = 0
    indent_left: int = 0
    indent_hanging: int = 0
    tab_stops: List[Tuple[str, int]] = field(default_factory=list)
    border_top: Optional[Border] = None
    border_bottom: Optional[Border] = None
    page_break_before: bool = False
    keep_next: bool = False
    shading: Optional[str] = None

    @property
    def text(self) -> str:
        parts = []
        for run in self.runs:
            if isinstance(run, TextRun):
                parts.append(run.text)
            elif isinstance(run, HyperlinkRun):
                parts.extend(child.text for child in run.runs if isinstance(child, TextRun))
        return "".join(parts)


@dataclass(slots=True)
class TableCell:
    paragraphs: List[Paragraph] = field(default_factory=list)
    shading: Optional[str] = None
    width: Optional[int] = None


@dataclass(slots=True)
class TableRow:
    cells: List[TableCell] = field(default_factory=list)
    height: Optional[int] = None
    header: bool = False


@dataclass(slots=True)
class Table:
    rows: List[TableRow] = field(default_factory=list)
    column_widths: List[int] = field(default_factory=list)
    border_color: str = "DDDDDD"
    borders: bool = True
    indent: int = 0


Block = Union[Paragraph, Table]


@dataclass(slots=True)
class HeaderFooter:
    blocks: List[Block] = field(default_factory=list)


@dataclass(slots=True)
class SectionProperties:
    page_width: int
    page_height: int
    margins: Dict[str, int]
    header: Optional[HeaderFooter] = None
    footer: Optional[HeaderFooter] = None
    page_number_start: Optional[int] = None
    vertical_align: Optional[str] = None


@dataclass(slots=True)
class DocxSection:
    properties: SectionProperties
    blocks: List[Block] = field(default_factory=list)

    @property
    def paragraphs(self) -> List[Paragraph]:
        return [block for block in self.blocks if isinstance(block, Paragraph)]
