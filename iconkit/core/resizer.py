"""
Resizer
Lanczos resampling to an exact square canvas with transparent content padding.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple

from PIL import Image

from iconkit.core.masker import apply_mask
from iconkit.core.types import MaskStyle
from iconkit.models.icon_models import IconSpec


RESAMPLE_FILTER = Image.Resampling.LANCZOS


def crop_center_square(img: Image.Image) -> Image.Image:
    w, h = img.size
    if w == h:
        return img
    side = min(w, h)
    left = (w - side) // 2
    top = (h - side) // 2
    return img.crop((left, top, left + side, top + side))


def content_geometry(size: int, content_fraction: float) -> Tuple[int, int]:
    """Return (content_size, padding) for a canvas of ``size`` pixels.

    Padding is the left/top offset; any odd remainder goes to the right/bottom.
    """
    content_size = max(1, min(size, int(round(size * content_fraction))))
    padding = (size - content_size) // 2
    return content_size, padding


def render_icon(
    source: Image.Image,
    size: int,
    content_fraction: float = 1.0,
    mask_style: MaskStyle = MaskStyle.NONE,
    radius_factor: Optional[float] = None,
) -> Image.Image:
    """Render ``source`` onto a transparent ``size`` x ``size`` RGBA canvas.

    The artwork is resampled to the content size, masked, then pasted at the
    padding offset. The result is always exactly the requested size.
    """
    if size <= 0:
        raise ValueError(f"Icon size must be positive, got {size}")

    square = crop_center_square(source.convert("RGBA") if source.mode != "RGBA" else source)
    content_size, padding = content_geometry(size, content_fraction)

    content = square.resize((content_size, content_size), RESAMPLE_FILTER)
    content = apply_mask(content, mask_style, radius_factor)

    if content_size == size:
        return content

    canvas = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    # No paste mask: the content's alpha is copied verbatim
    canvas.paste(content, (padding, padding))
    return canvas


def render_specs(
    source: Image.Image,
    specs: Iterable[IconSpec],
    radius_factors: Optional[Dict[MaskStyle, float]] = None,
) -> Dict[int, Image.Image]:
    """Render every spec once, keyed by pixel size."""
    radius_factors = radius_factors or {}
    rendered: Dict[int, Image.Image] = {}
    for spec in specs:
        if spec.size in rendered:
            raise ValueError(f"Duplicate size {spec.size} for platform {spec.platform.value}")
        rendered[spec.size] = render_icon(
            source,
            spec.size,
            spec.content_fraction,
            spec.mask_style,
            radius_factors.get(spec.mask_style),
        )
    return rendered
