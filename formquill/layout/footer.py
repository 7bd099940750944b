"""Footer resolution shared by every backend.

``resolve_footer_config`` folds the authoring shorthands (``text``,
``copyright``, ``show_page_numbers`` ...) into three text slots with static
template variables already substituted. ``{{page}}`` and ``{{pages}}`` are
kept verbatim and resolved per page by the renderers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Optional

from ..engine.placeholder_resolver import resolve_static_variables
from ..models.footer import SOCIAL_PLATFORMS, FooterConfig
from ..models.form import FormMetadata

logger = logging.getLogger(__name__)


SOCIAL_PLATFORM_LABELS = {
    "youtube": "YouTube",
    "x": "X",
    "facebook": "Facebook",
    "linkedin": "LinkedIn",
    "github": "GitHub",
    "website": "Website",
}

PAGE_NUMBER_TEMPLATE = "Page {{page}} of {{pages}}"
DEFAULT_SEPARATOR_COLOR = "#cccccc"
DEFAULT_SEPARATOR_THICKNESS = 0.5


@dataclass(slots=True, frozen=True)
class ResolvedFooterSeparator:
    enabled: bool = False
    color: str = DEFAULT_SEPARATOR_COLOR
    thickness: float = DEFAULT_SEPARATOR_THICKNESS


@dataclass(slots=True, frozen=True)
class ResolvedFooter:
    enabled: bool
    left: str = ""
    center: str = ""
    right: str = ""
    separator: ResolvedFooterSeparator = field(default_factory=ResolvedFooterSeparator)
    social_links: Dict[str, str] = field(default_factory=dict)

    @property
    def has_text(self) -> bool:
        return bool(self.left or self.center or self.right)


def resolve_footer_config(
    footer: Optional[FooterConfig],
    form: FormMetadata,
    today: Optional[date] = None,
) -> ResolvedFooter:
    """Resolve footer configuration into a normalized footer.

    Args:
        footer: Footer options from the schema; ``None`` selects the legacy
            behaviour of showing only the form version
        form: Form metadata supplying ``{{title}}``, ``{{version}}`` and
            ``{{author}}``
        today: Date used for ``{{date}}``

    Returns:
        ResolvedFooter whose ``enabled`` flag is false when nothing would be drawn
    """
    if footer is None:
        center = f"Version {form.version}" if form.version else ""
        return ResolvedFooter(enabled=bool(form.version), center=center)

    if footer.enabled is False:
        return ResolvedFooter(enabled=False)

    left = footer.left or ""
    center = footer.center or ""
    right = footer.right or ""

    if footer.text and not center:
        center = footer.text

    if footer.copyright and not left:
        left = footer.copyright

    if footer.show_page_numbers and not right:
        right = PAGE_NUMBER_TEMPLATE

    if footer.show_version and form.version:
        version_text = f"Version {form.version}"
        center = f"{center} - {version_text}" if center else version_text

    if footer.show_date:
        date_text = "{{date}}"
        if not left and not footer.copyright:
            left = date_text
        elif not right and not footer.show_page_numbers:
            right = date_text
        else:
            center = f"{center} | {date_text}" if center else date_text

    left = resolve_static_variables(left, form, today)
    center = resolve_static_variables(center, form, today)
    right = resolve_static_variables(right, form, today)

    social_links: Dict[str, str] = {}
    for platform in SOCIAL_PLATFORMS:
        url = getattr(footer.social_links, platform, None)
        if url:
            social_links[platform] = url

    separator = footer.separator
    resolved_separator = ResolvedFooterSeparator(
        enabled=bool(separator.enabled) if separator and separator.enabled is not None else False,
        color=separator.color if separator and separator.color else DEFAULT_SEPARATOR_COLOR,
        thickness=(
            separator.thickness
            if separator and separator.thickness is not None
            else DEFAULT_SEPARATOR_THICKNESS
        ),
    )

    enabled = bool(left or center or right or social_links)
    logger.debug(f"Resolved footer: enabled={enabled} left={left!r} center={center!r} right={right!r}")
    return ResolvedFooter(
        enabled=enabled,
        left=left,
        center=center,
        right=right,
        separator=resolved_separator,
        social_links=social_links,
    )
