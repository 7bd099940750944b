"""Footer configuration as authored in the schema."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .base import as_float, as_text, pick


SOCIAL_PLATFORMS = ("youtube", "x", "facebook", "linkedin", "github", "website")


@dataclass(slots=True)
class FooterSeparatorConfig:
    enabled: Optional[bool] = None
    color: Optional[str] = None
    thickness: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Any) -> "FooterSeparatorConfig":
        if isinstance(data, bool):
            return cls(enabled=data)
        if not isinstance(data, Mapping):
            return cls()
        thickness = pick(data, "thickness", "width")
        return cls(
            enabled=pick(data, "enabled"),
            color=pick(data, "color"),
            thickness=as_float(thickness) if thickness is not None else None,
        )


@dataclass(slots=True)
class FooterSocialLinks:
    youtube: Optional[str] = None
    x: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    website: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "FooterSocialLinks":
        if not isinstance(data, Mapping):
            return cls()
        values = {}
        for platform in SOCIAL_PLATFORMS:
            value = data.get(platform)
            if platform == "x" and value is None:
                value = data.get("twitter")
            values[platform] = str(value) if value else None
        return cls(**values)


@dataclass(slots=True)
class FooterConfig:
    """Footer options; every field is optional and resolved later."""

    enabled: Optional[bool] = None
    left: Optional[str] = None
    center: Optional[str] = None
    right: Optional[str] = None
    text: Optional[str] = None
    copyright: Optional[str] = None
    show_page_numbers: bool = False
    show_version: bool = False
    show_date: bool = False
    separator: Optional[FooterSeparatorConfig] = None
    social_links: FooterSocialLinks = field(default_factory=FooterSocialLinks)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> Optional["FooterConfig"]:
        if data is None:
            return None
        if not isinstance(data, Mapping):
            return None
        separator = pick(data, "separator")
        enabled = pick(data, "enabled")
        return cls(
            enabled=bool(enabled) if enabled is not None else None,
            left=_optional_text(data.get("left")),
            center=_optional_text(data.get("center")),
            right=_optional_text(data.get("right")),
            text=_optional_text(data.get("text")),
            copyright=_optional_text(data.get("copyright")),
            show_page_numbers=bool(pick(data, "show_page_numbers", "showPageNumbers", default=False)),
            show_version=bool(pick(data, "show_version", "showVersion", default=False)),
            show_date=bool(pick(data, "show_date", "showDate", default=False)),
            separator=FooterSeparatorConfig.from_dict(separator) if separator is not None else None,
            social_links=FooterSocialLinks.from_dict(pick(data, "social_links", "socialLinks", "social")),
        )


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return as_text(value)
