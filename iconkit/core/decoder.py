"""Source image loading."""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from iconkit.core.errors import DecodeFailure, SourceNotFound
from iconkit.models.icon_models import SourceImage

logger = logging.getLogger(__name__)


def load_source(source_path: str | Path) -> SourceImage:
    """Decode the source raster into an RGBA buffer.

    Raises:
        SourceNotFound: the path does not exist or is not a file.
        DecodeFailure: Pillow cannot identify or decode the file, or it is empty.
    """
    path = Path(source_path)
    if not path.is_file():
        raise SourceNotFound(f"Source image not found: {path}", path, "read")

    try:
        with Image.open(path) as img:
            img.load()
            rgba = img.convert("RGBA")
    except UnidentifiedImageError as e:
        raise DecodeFailure(f"Unsupported image format: {e}", path, "decode") from e
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeFailure(f"Corrupt image: {e}", path, "decode") from e

    if rgba.width == 0 or rgba.height == 0:
        raise DecodeFailure("Source image has no pixels", path, "decode")

    if rgba.width != rgba.height:
        logger.warning(
            "Source %s is not square (%dx%d); it will be center-cropped",
            path.name, rgba.width, rgba.height,
        )
    elif rgba.width < 1024:
        logger.info("Source %s is %dpx; large sizes will be upscaled", path.name, rgba.width)

    return SourceImage(image=rgba, path=path)
