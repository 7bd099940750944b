"""Loading of logo, cover and icon images.

A missing or undecodable image never stops generation: the problem is logged
and the caller simply omits the image.
"""

from __future__ import annotations

import base64
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from PIL import Image, UnidentifiedImageError

from ..exceptions import MediaError

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = {"png": "image/png", "jpeg": "image/jpeg", "gif": "image/gif"}


@dataclass(slots=True, frozen=True)
class LoadedImage:
    path: Path
    data: bytes
    format: str

    @property
    def mime_type(self) -> str:
        return SUPPORTED_FORMATS.get(self.format, "application/octet-stream")

    @property
    def extension(self) -> str:
        return "jpg" if self.format == "jpeg" else self.format

    def data_uri(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


def resolve_image_path(image_path: Union[str, Path], base_path: Optional[Union[str, Path]] = None) -> Path:
    path = Path(image_path)
    if not path.is_absolute() and base_path is not None:
        path = Path(base_path) / path
    return path


def read_image(image_path: Union[str, Path], base_path: Optional[Union[str, Path]] = None) -> LoadedImage:
    """Read and verify an image file.

    Raises:
        MediaError: The file is missing, unreadable or not a supported raster image
    """
    resolved = resolve_image_path(image_path, base_path)
    if not resolved.exists():
        raise MediaError("Image not found", str(resolved))

    try:
        data = resolved.read_bytes()
        with Image.open(io.BytesIO(data)) as image:
            image_format = (image.format or "").lower()
            image.verify()
    except (OSError, UnidentifiedImageError, SyntaxError) as e:
        raise MediaError(f"Cannot decode image {resolved}", str(e)) from e

    if image_format not in SUPPORTED_FORMATS:
        raise MediaError(f"Unsupported image format '{image_format}'", str(resolved))

    return LoadedImage(path=resolved, data=data, format=image_format)


def load_image(
    image_path: Union[str, Path],
    base_path: Optional[Union[str, Path]] = None,
    description: str = "Image",
) -> Optional[LoadedImage]:
    """Like ``read_image`` but logs the problem and returns None instead of raising.

    Args:
        image_path: Absolute path or path relative to ``base_path``
        base_path: Directory relative paths are resolved against
        description: Name used in warnings ("Logo", "Cover image" ...)
    """
    try:
        return read_image(image_path, base_path)
    except MediaError as e:
        logger.warning(f"{description} skipped: {e}")
        return None
