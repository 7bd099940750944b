"""Image and icon loading."""

from .icons import load_social_icon, load_social_icon_base64, load_social_icon_bytes, load_social_icons
from .images import LoadedImage, load_image, read_image

__all__ = [
    "LoadedImage",
    "load_image",
    "read_image",
    "load_social_icon",
    "load_social_icon_base64",
    "load_social_icon_bytes",
    "load_social_icons",
]
