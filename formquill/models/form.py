"""Form metadata and the parsed schema container."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from ..exceptions import SchemaError
from .base import as_text, pick
from .content import ContentElement
from .cover import CoverPage
from .fields import NormalizedFormField
from .footer import FooterConfig


@dataclass(slots=True)
class FormMetadata:
    title: str = ""
    version: Optional[str] = None
    author: Optional[str] = None
    description: Optional[str] = None
    pages: int = 1
    stylesheet: Optional[Union[str, Dict[str, Any]]] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "FormMetadata":
        data = data or {}
        version = data.get("version")
        author = data.get("author")
        try:
            pages = int(data.get("pages", 1) or 1)
        except (TypeError, ValueError) as e:
            raise SchemaError("Invalid page count", str(data.get("pages"))) from e
        return cls(
            title=as_text(data.get("title")),
            version=as_text(version) if version is not None else None,
            author=as_text(author) if author is not None else None,
            description=as_text(data.get("description")) if data.get("description") else None,
            pages=max(1, pages),
            stylesheet=data.get("stylesheet"),
        )


@dataclass(slots=True)
class ParsedFormSchema:
    form: FormMetadata
    fields: List[NormalizedFormField] = field(default_factory=list)
    content: List[ContentElement] = field(default_factory=list)
    cover_page: Optional[CoverPage] = None
    footer: Optional[FooterConfig] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ParsedFormSchema":
        """Ingest an already-parsed schema document.

        The form-level keys may sit under ``form`` or at the top level. Footer
        and cover page may be given at either level as well.
        """
        if not isinstance(data, Mapping):
            raise SchemaError("Schema document must be a mapping")

        form_data = data.get("form") if isinstance(data.get("form"), Mapping) else data
        fields = [
            NormalizedFormField.from_dict(item, index)
            for index, item in enumerate(data.get("fields") or [])
        ]
        content = [
            ContentElement.from_dict(item)
            for item in (pick(data, "content", "schema", default=[]) or [])
            if isinstance(item, Mapping)
        ]
        return cls(
            form=FormMetadata.from_dict(form_data),
            fields=fields,
            content=content,
            cover_page=CoverPage.from_dict(pick(form_data, "cover_page", "coverPage", default=pick(data, "cover_page", "coverPage"))),
            footer=FooterConfig.from_dict(pick(form_data, "footer", default=data.get("footer"))),
        )

    @property
    def has_cover_page(self) -> bool:
        return self.cover_page is not None

    @property
    def has_content(self) -> bool:
        return bool(self.content)
