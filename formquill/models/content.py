"""Static content blocks drawn above the form fields."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping

from .base import as_float, as_text, pick


CONTENT_TYPES = ("heading", "paragraph", "text", "list", "table", "divider", "spacer")


@dataclass(slots=True)
class ContentElement:
    type: str
    text: str = ""
    level: int = 1
    items: List[str] = field(default_factory=list)
    ordered: bool = False
    headers: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)
    height: float = 0.0
    align: str = "left"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ContentElement":
        element_type = as_text(data.get("type")).strip().lower() or "paragraph"
        rows = data.get("rows") or []
        return cls(
            type=element_type,
            text=as_text(pick(data, "text", "content")),
            level=int(pick(data, "level", default=1) or 1),
            items=[as_text(item) for item in (data.get("items") or [])],
            ordered=bool(data.get("ordered", False)),
            headers=[as_text(cell) for cell in (pick(data, "headers", "columns", default=[]) or [])],
            rows=[[as_text(cell) for cell in row] for row in rows if isinstance(row, (list, tuple))],
            height=as_float(data.get("height"), 12.0 if element_type == "spacer" else 0.0),
            align=as_text(data.get("align")) or "left",
        )
