"""Cover page metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Tuple

from .base import as_text, pick


@dataclass(slots=True)
class RevisionEntry:
    version: str = ""
    date: str = ""
    author: str = ""
    description: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RevisionEntry":
        return cls(
            version=as_text(data.get("version")),
            date=as_text(data.get("date")),
            author=as_text(data.get("author")),
            description=as_text(pick(data, "description", "changes")),
        )


@dataclass(slots=True)
class CoverPage:
    subtitle: Optional[str] = None
    logo: Optional[str] = None
    cover_image: Optional[str] = None
    watermark: Optional[str] = None
    organization: Optional[str] = None
    department: Optional[str] = None
    document_number: Optional[str] = None
    document_type: Optional[str] = None
    status: Optional[str] = None
    classification: Optional[str] = None
    date: Optional[str] = None
    effective_date: Optional[str] = None
    review_date: Optional[str] = None
    prepared_by: Optional[str] = None
    reviewed_by: Optional[str] = None
    approved_by: Optional[str] = None
    revision_history: List[RevisionEntry] = field(default_factory=list)
    copyright: Optional[str] = None
    disclaimer: Optional[str] = None
    distribution_statement: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> Optional["CoverPage"]:
        if data is None or data is False:
            return None
        if data is True:
            return cls()
        if not isinstance(data, Mapping):
            return None

        def text(*keys: str) -> Optional[str]:
            value = pick(data, *keys)
            return as_text(value) if value is not None else None

        history = pick(data, "revision_history", "revisionHistory", default=[]) or []
        return cls(
            subtitle=text("subtitle"),
            logo=text("logo"),
            cover_image=text("cover_image", "coverImage"),
            watermark=text("watermark"),
            organization=text("organization"),
            department=text("department"),
            document_number=text("document_number", "documentNumber"),
            document_type=text("document_type", "documentType"),
            status=text("status"),
            classification=text("classification"),
            date=text("date"),
            effective_date=text("effective_date", "effectiveDate"),
            review_date=text("review_date", "reviewDate"),
            prepared_by=text("prepared_by", "preparedBy"),
            reviewed_by=text("reviewed_by", "reviewedBy"),
            approved_by=text("approved_by", "approvedBy"),
            revision_history=[RevisionEntry.from_dict(entry) for entry in history if isinstance(entry, Mapping)],
            copyright=text("copyright"),
            disclaimer=text("disclaimer"),
            distribution_statement=text("distribution_statement", "distributionStatement"),
        )

    def metadata_rows(self, version: Optional[str] = None, author: Optional[str] = None) -> List[Tuple[str, str]]:
        """Label/value rows shown under the cover title, in display order."""
        candidates = [
            ("Organization", self.organization),
            ("Department", self.department),
            ("Document #", self.document_number),
            ("Type", self.document_type),
            ("Status", self.status),
            ("Classification", self.classification),
            ("Date", self.date),
            ("Effective Date", self.effective_date),
            ("Review Date", self.review_date),
            ("Version", version),
            ("Author", author),
            ("Prepared By", self.prepared_by),
            ("Reviewed By", self.reviewed_by),
            ("Approved By", self.approved_by),
        ]
        return [(label, value) for label, value in candidates if value]

    def legal_lines(self) -> List[str]:
        return [text for text in (self.copyright, self.disclaimer, self.distribution_statement) if text]
