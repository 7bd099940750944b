"""Resolution of ``{{name}}`` template variables in header and footer text."""

from __future__ import annotations

import re
from datetime import date
from typing import Any, Dict, Mapping, Optional


STATIC_VARIABLES = ("title", "version", "author", "date")
PAGE_VARIABLES = ("page", "pages")


def format_date(value: date) -> str:
    """Short numeric date used for ``{{date}}`` (``M/D/YYYY``)."""
    return f"{value.month}/{value.day}/{value.year}"


class PlaceholderResolver:
    """Resolve ``{{ key }}`` placeholders from a mapping of known values.

    Placeholders whose key is not in ``values`` are left untouched so that a
    later pass (per-page numbering) can fill them in.
    """

    _pattern = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}")

    def __init__(self, values: Optional[Mapping[str, Any]] = None) -> None:
        self.values: Dict[str, Any] = dict(values or {})

    def resolve_text(self, text: str) -> str:
        if not text or "{{" not in text:
            return text

        def replacer(match: re.Match[str]) -> str:
            key = match.group(1)
            if key in self.values:
                return str(self.values[key])
            return match.group(0)

        return self._pattern.sub(replacer, text)


def static_values(form: Any, today: Optional[date] = None) -> Dict[str, str]:
    return {
        "title": getattr(form, "title", "") or "",
        "version": getattr(form, "version", "") or "",
        "author": getattr(form, "author", "") or "",
        "date": format_date(today or date.today()),
    }


def resolve_static_variables(text: str, form: Any, today: Optional[date] = None) -> str:
    """Substitute ``{{title}}``, ``{{version}}``, ``{{author}}`` and ``{{date}}``."""
    if not text:
        return text
    return PlaceholderResolver(static_values(form, today)).resolve_text(text)


def resolve_page_variables(text: str, page: int, total: int) -> str:
    """Substitute ``{{page}}`` and ``{{pages}}`` for one rendered page."""
    if not text:
        return text
    return PlaceholderResolver({"page": page, "pages": total}).resolve_text(text)


def has_page_variables(text: str) -> bool:
    return any(f"{{{{{name}}}}}" in (text or "") for name in PAGE_VARIABLES)
