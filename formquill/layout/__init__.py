"""Footer resolution and page mapping."""

from .footer import SOCIAL_PLATFORM_LABELS, ResolvedFooter, ResolvedFooterSeparator, resolve_footer_config
from .pagination_manager import PageMapping

__all__ = [
    "SOCIAL_PLATFORM_LABELS",
    "ResolvedFooter",
    "ResolvedFooterSeparator",
    "resolve_footer_config",
    "PageMapping",
]
