"""Test canvas rendering."""

import pytest
from PIL import Image

from iconkit.core.resizer import content_geometry, crop_center_square, render_icon, render_specs
from iconkit.core.types import MaskStyle, Platform
from iconkit.models.icon_models import IconSpec


@pytest.mark.parametrize("size", [16, 24, 32, 48, 64, 128, 167, 256, 512, 1024])
@pytest.mark.parametrize("fraction", [1.0, 0.9, 0.82])
def test_output_is_exact_size(opaque_image, size, fraction):
    out = render_icon(opaque_image(300), size, fraction, MaskStyle.SQUIRCLE)
    assert out.size == (size, size)
    assert out.mode == "RGBA"


def test_content_geometry():
    assert content_geometry(256, 0.82) == (210, 23)
    assert content_geometry(100, 0.9) == (90, 5)
    assert content_geometry(48, 1.0) == (48, 0)
    assert content_geometry(1, 0.5) == (1, 0)


def test_macos_squircle_corner_and_center(opaque_image):
    """512px opaque source, macOS squircle at 256px."""
    out = render_icon(opaque_image(512), 256, 0.82, MaskStyle.SQUIRCLE)

    assert out.getpixel((0, 0))[3] == 0
    assert out.getpixel((128, 128))[3] == 255


def test_padding_is_transparent(opaque_image):
    out = render_icon(opaque_image(100), 100, 0.9, MaskStyle.NONE)

    assert out.getpixel((2, 50))[3] == 0
    assert out.getpixel((97, 50))[3] == 0
    assert out.getpixel((50, 50))[3] == 255
    assert out.getpixel((5, 50))[3] == 255


def test_non_square_source_is_center_cropped():
    img = Image.new("RGBA", (300, 100), (0, 0, 0, 255))
    img.paste((255, 0, 0, 255), (100, 0, 200, 100))

    square = crop_center_square(img)
    assert square.size == (100, 100)
    assert square.getpixel((50, 50)) == (255, 0, 0, 255)

    out = render_icon(img, 64)
    assert out.size == (64, 64)
    assert out.getpixel((32, 32))[:3] == (255, 0, 0)


def test_invalid_size_rejected(opaque_image):
    with pytest.raises(ValueError):
        render_icon(opaque_image(10), 0)


def test_render_specs_keys_by_size(opaque_image):
    specs = [IconSpec(16, Platform.WINDOWS), IconSpec(32, Platform.WINDOWS)]
    rendered = render_specs(opaque_image(64), specs)

    assert sorted(rendered) == [16, 32]
    assert rendered[32].size == (32, 32)


def test_render_specs_rejects_duplicate_sizes(opaque_image):
    specs = [IconSpec(16, Platform.WINDOWS), IconSpec(16, Platform.WINDOWS)]
    with pytest.raises(ValueError):
        render_specs(opaque_image(64), specs)
