"""
Container Encoders
Windows ICO / macOS ICNS writers, flat PNG writer and container readers.

All files are encoded in memory and written through ``atomic_write_bytes``:
either the complete file lands at its final path or nothing does.
"""

from __future__ import annotations

import io
import logging
import os
import stat
import struct
import tempfile
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from PIL import Image

from iconkit.constants import ICNS_TYPES, MACOS_ICNS_SIZES, WINDOWS_ICO_SIZES
from iconkit.core.errors import ContainerEncodeFailure, FileWriteFailure
from iconkit.core.types import ArtifactFormat, Platform
from iconkit.models.icon_models import ContainerEntry, GeneratedArtifact

logger = logging.getLogger(__name__)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
ICNS_MAGIC = b"icns"
ICNS_SIZES_BY_TYPE = {ostype: size for size, ostype in ICNS_TYPES.items()}


# ============================================================================
# Atomic file writes
# ============================================================================

def _target_mode(path: Path) -> int:
    """Permission bits for a written file: keep an existing file's mode, else honour the umask."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """Write ``data`` to a temporary sibling file, then rename it over ``path``."""
    tmp_path: Optional[str] = None
    try:
        fd, tmp_path = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        # mkstemp creates the file owner-only
        os.chmod(tmp_path, _target_mode(path))
        os.replace(tmp_path, path)
    except OSError as e:
        if tmp_path is not None and os.path.exists(tmp_path):
            try:
                os.unlink(tmp_path)
            except OSError:
                logger.warning("Could not remove temporary file %s", tmp_path)
        raise FileWriteFailure(f"Failed to write file: {e}", path, "write") from e


# ============================================================================
# Encoding
# ============================================================================

def _check_entries(
    images: Mapping[int, Image.Image],
    sizes: Sequence[int],
    path: Path,
) -> List[Image.Image]:
    """Return the images in container order, failing on any missing or mis-sized entry."""
    ordered = []
    for size in sizes:
        img = images.get(size)
        if img is None:
            raise ContainerEncodeFailure(f"Missing {size}x{size} entry", path, "encode")
        if img.size != (size, size):
            raise ContainerEncodeFailure(
                f"Entry declared as {size}x{size} has raster {img.width}x{img.height}",
                path,
                "encode",
            )
        ordered.append(img)
    return ordered


def encode_png(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def encode_ico(
    images: Mapping[int, Image.Image],
    path: Path,
    sizes: Sequence[int] = WINDOWS_ICO_SIZES,
) -> bytes:
    """Pack the rendered sizes into an ICO with PNG-compressed frames."""
    ordered = _check_entries(images, sizes, path)
    # Pillow skips sizes larger than the base image, so the largest frame leads
    base = ordered[-1]
    buf = io.BytesIO()
    try:
        base.save(
            buf,
            format="ICO",
            sizes=[(s, s) for s in sizes],
            append_images=ordered[:-1],
        )
    except (OSError, ValueError, KeyError) as e:
        raise ContainerEncodeFailure(f"ICO encoder failed: {e}", path, "encode") from e
    return buf.getvalue()


def encode_icns(
    images: Mapping[int, Image.Image],
    path: Path,
    sizes: Sequence[int] = MACOS_ICNS_SIZES,
) -> bytes:
    """Pack the rendered sizes into an ICNS: 'icns' + length, then OSType + length + PNG per entry."""
    ordered = _check_entries(images, sizes, path)
    entries = []
    for size, img in zip(sizes, ordered):
        ostype = ICNS_TYPES.get(size)
        if ostype is None:
            raise ContainerEncodeFailure(f"No ICNS entry type for {size}x{size}", path, "encode")
        try:
            png_data = encode_png(img)
        except (OSError, ValueError) as e:
            raise ContainerEncodeFailure(f"PNG encoder failed: {e}", path, "encode") from e
        entries.append(ostype + struct.pack(">I", 8 + len(png_data)) + png_data)

    body = b"".join(entries)
    return ICNS_MAGIC + struct.pack(">I", 8 + len(body)) + body


# ============================================================================
# Writers
# ============================================================================

def write_ico(
    path: Path,
    images: Mapping[int, Image.Image],
    platform: Platform = Platform.WINDOWS,
) -> GeneratedArtifact:
    data = encode_ico(images, path)
    atomic_write_bytes(path, data)
    logger.info("Wrote %s (%d bytes)", path, len(data))
    return GeneratedArtifact(path, len(data), ArtifactFormat.ICO, platform, list(WINDOWS_ICO_SIZES))


def write_icns(
    path: Path,
    images: Mapping[int, Image.Image],
    platform: Platform = Platform.MACOS,
) -> GeneratedArtifact:
    data = encode_icns(images, path)
    atomic_write_bytes(path, data)
    logger.info("Wrote %s (%d bytes)", path, len(data))
    return GeneratedArtifact(path, len(data), ArtifactFormat.ICNS, platform, list(MACOS_ICNS_SIZES))


def write_png(
    path: Path,
    image: Image.Image,
    platform: Optional[Platform] = None,
) -> GeneratedArtifact:
    """Write one flat PNG."""
    try:
        data = encode_png(image)
    except (OSError, ValueError) as e:
        raise FileWriteFailure(f"PNG encoder failed: {e}", path, "encode") from e
    atomic_write_bytes(path, data)
    logger.debug("Wrote %s", path)
    return GeneratedArtifact(path, len(data), ArtifactFormat.PNG, platform, [image.width])


# ============================================================================
# Readers
# ============================================================================

def _raster_dimensions(data: bytes) -> tuple:
    """Width/height of an embedded PNG, or of a BMP DIB (whose height counts the AND mask)."""
    if data.startswith(PNG_SIGNATURE) and data[12:16] == b"IHDR":
        return struct.unpack(">II", data[16:24])
    if len(data) >= 12:
        width, height = struct.unpack("<ii", data[4:12])
        return width, abs(height) // 2
    raise ValueError("Truncated container entry")


def read_ico_entries(path: Path) -> List[ContainerEntry]:
    """Parse an ICO directory, in file order."""
    data = Path(path).read_bytes()
    reserved, kind, count = struct.unpack("<HHH", data[:6])
    if reserved != 0 or kind != 1:
        raise ValueError(f"Not an ICO file: {path}")

    entries = []
    for i in range(count):
        offset = 6 + i * 16
        width, height, _colors, _res, _planes, _bpp, size, data_offset = struct.unpack(
            "<BBBBHHII", data[offset:offset + 16]
        )
        declared = width or 256
        if (height or 256) != declared:
            raise ValueError(f"Non-square ICO entry {width}x{height} in {path}")
        real_w, real_h = _raster_dimensions(data[data_offset:data_offset + size])
        entries.append(ContainerEntry(declared, real_w, real_h))
    return entries


def read_icns_entries(path: Path) -> List[ContainerEntry]:
    """Parse an ICNS file, in file order. Unknown entry types are ignored."""
    data = Path(path).read_bytes()
    if data[:4] != ICNS_MAGIC:
        raise ValueError(f"Not an ICNS file: {path}")
    total = struct.unpack(">I", data[4:8])[0]

    entries = []
    offset = 8
    while offset + 8 <= min(total, len(data)):
        ostype = data[offset:offset + 4]
        length = struct.unpack(">I", data[offset + 4:offset + 8])[0]
        if length < 8:
            raise ValueError(f"Corrupt ICNS entry at offset {offset} in {path}")
        declared = ICNS_SIZES_BY_TYPE.get(ostype)
        if declared is not None:
            real_w, real_h = _raster_dimensions(data[offset + 8:offset + length])
            entries.append(ContainerEntry(declared, real_w, real_h))
        offset += length
    return entries
