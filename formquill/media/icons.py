"""Social platform icons for footers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

from ..models.footer import SOCIAL_PLATFORMS
from .images import LoadedImage, load_image

logger = logging.getLogger(__name__)

DEFAULT_ICON_DIR = Path(__file__).resolve().parent.parent / "assets" / "icons"


def resolve_icon_path(platform: str, icon_dir: Optional[Union[str, Path]] = None) -> Optional[Path]:
    if platform not in SOCIAL_PLATFORMS:
        return None
    path = Path(icon_dir or DEFAULT_ICON_DIR) / f"{platform}.png"
    return path if path.exists() else None


def load_social_icon(platform: str, icon_dir: Optional[Union[str, Path]] = None) -> Optional[LoadedImage]:
    """Return the PNG icon for ``platform`` or None when it is not available."""
    path = resolve_icon_path(platform, icon_dir)
    if path is None:
        logger.debug(f"No icon for social platform '{platform}'")
        return None
    return load_image(path, description=f"{platform} icon")


def load_social_icon_bytes(platform: str, icon_dir: Optional[Union[str, Path]] = None) -> Optional[bytes]:
    icon = load_social_icon(platform, icon_dir)
    return icon.data if icon else None


def load_social_icon_base64(platform: str, icon_dir: Optional[Union[str, Path]] = None) -> Optional[str]:
    icon = load_social_icon(platform, icon_dir)
    return icon.data_uri() if icon else None


def load_social_icons(platforms: Iterable[str], icon_dir: Optional[Union[str, Path]] = None) -> Dict[str, LoadedImage]:
    icons: Dict[str, LoadedImage] = {}
    for platform in platforms:
        icon = load_social_icon(platform, icon_dir)
        if icon is not None:
            icons[platform] = icon
    return icons
