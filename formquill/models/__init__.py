"""Schema data model."""

from .content import CONTENT_TYPES, ContentElement
from .cover import CoverPage, RevisionEntry
from .fields import FIELD_TYPES, FieldOption, FieldPosition, NormalizedFormField
from .footer import SOCIAL_PLATFORMS, FooterConfig, FooterSeparatorConfig, FooterSocialLinks
from .form import FormMetadata, ParsedFormSchema

__all__ = [
    "CONTENT_TYPES",
    "ContentElement",
    "CoverPage",
    "RevisionEntry",
    "FIELD_TYPES",
    "FieldOption",
    "FieldPosition",
    "NormalizedFormField",
    "SOCIAL_PLATFORMS",
    "FooterConfig",
    "FooterSeparatorConfig",
    "FooterSocialLinks",
    "FormMetadata",
    "ParsedFormSchema",
]
