"""
Geometric Masker
Rounded-rect / squircle corner mask with a one-pixel anti-aliasing band.
"""

from __future__ import annotations

import numpy as np
from PIL import Image

from iconkit.constants import MaskRadius
from iconkit.core.types import MaskStyle


DEFAULT_RADIUS_FACTORS = {
    MaskStyle.SQUIRCLE: MaskRadius.SQUIRCLE,
    MaskStyle.ROUNDED_RECT: MaskRadius.ROUNDED_RECT,
}


def corner_radius(content_size: int, style: MaskStyle, radius_factor: float | None = None) -> float:
    """Corner radius in pixels for a content area of the given size."""
    if style == MaskStyle.NONE:
        return 0.0
    factor = radius_factor if radius_factor is not None else DEFAULT_RADIUS_FACTORS[style]
    return content_size * factor


def _corner_distance(length: int, radius: float) -> np.ndarray:
    """Distance of each pixel center past the straight edge into a corner zone (0 on the edges)."""
    centers = np.arange(length, dtype=np.float64) + 0.5
    return np.maximum(np.maximum(radius - centers, centers - (length - radius)), 0.0)


def alpha_factors(width: int, height: int, radius: float) -> np.ndarray:
    """Per-pixel alpha multiplier (height x width) for the rounded boundary."""
    factors = np.ones((height, width), dtype=np.float64)
    if radius <= 0:
        return factors

    dx = _corner_distance(width, radius)[np.newaxis, :]
    dy = _corner_distance(height, radius)[:, np.newaxis]
    dist = np.sqrt(dx * dx + dy * dy)
    corner = (dx > 0) & (dy > 0)

    outside = corner & (dist > radius)
    band = corner & (dist > radius - 1) & (dist <= radius)

    factors[outside] = 0.0
    factors[band] = np.clip(radius - dist[band], 0.0, 1.0)
    return factors


def apply_mask(
    image: Image.Image,
    style: MaskStyle,
    radius_factor: float | None = None,
) -> Image.Image:
    """Return a copy of an RGBA image with its corners masked.

    Dimensions and color channels are untouched; only alpha is attenuated.
    """
    if style == MaskStyle.NONE:
        return image.copy()

    rgba = image if image.mode == "RGBA" else image.convert("RGBA")
    radius = corner_radius(min(rgba.size), style, radius_factor)

    alpha = np.asarray(rgba.getchannel("A"), dtype=np.float64)
    factors = alpha_factors(rgba.width, rgba.height, radius)
    masked = np.rint(alpha * factors).astype(np.uint8)

    result = rgba.copy()
    result.putalpha(Image.fromarray(masked))
    return result
