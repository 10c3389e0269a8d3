"""
Icon Constants
Size lists, content fractions and layout names for every target platform.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple


# ============================================================================
# Container size lists (increasing order, written in this order)
# ============================================================================

WINDOWS_ICO_SIZES: Tuple[int, ...] = (16, 24, 32, 48, 64, 128, 256)
MACOS_ICNS_SIZES: Tuple[int, ...] = (16, 32, 64, 128, 256, 512, 1024)

WINDOWS_ICO_NAME = "icon.ico"
MACOS_ICNS_NAME = "icon.icns"

# Store icons written next to the mobile rasters
MOBILE_FLAT_SIZES: Tuple[int, ...] = (512, 1024)
FLAT_ICON_NAME = "icon_{size}x{size}.png"

# ICNS entry types carrying PNG payloads
ICNS_TYPES: Dict[int, bytes] = {
    16: b"icp4",
    32: b"icp5",
    64: b"icp6",
    128: b"ic07",
    256: b"ic08",
    512: b"ic09",
    1024: b"ic10",
}


# ============================================================================
# Canvas layout
# ============================================================================

# Fraction of the canvas occupied by artwork; the rest is transparent padding
CONTENT_FRACTIONS: Dict[str, float] = {
    "windows": 0.90,
    "macos": 0.82,
    "ios": 1.0,
    "android": 1.0,
}


@dataclass(frozen=True)
class MaskRadius:
    """Corner radius as a fraction of the content size."""
    SQUIRCLE = 0.223       # macOS Big Sur grid
    ROUNDED_RECT = 0.125   # Android legacy launcher


# ============================================================================
# iOS
# ============================================================================

# (points, scale) slots of the AppIcon set. File name: AppIcon-{pt}x{pt}@{scale}x.png
IOS_APPICON_SLOTS: List[Tuple[str, int]] = [
    ("20", 1), ("20", 2), ("20", 3),
    ("29", 1), ("29", 2), ("29", 3),
    ("40", 1), ("40", 2), ("40", 3),
    ("60", 2), ("60", 3),
    ("76", 1), ("76", 2),
    ("83.5", 2),
    ("512", 2),
]
IOS_APPICON_NAME = "AppIcon-{points}x{points}@{scale}x.png"
IOS_APPICON_GLOB = "AppIcon-*.png"


def ios_slot_pixels(points: str, scale: int) -> int:
    """Pixel size of an iOS slot (83.5pt @2x -> 167px)."""
    return int(round(float(points) * scale))


# ============================================================================
# Android
# ============================================================================

ANDROID_DENSITIES: Tuple[str, ...] = ("mdpi", "hdpi", "xhdpi", "xxhdpi", "xxxhdpi")

ANDROID_LAUNCHER_SIZES: Dict[str, int] = {
    "mdpi": 48,
    "hdpi": 72,
    "xhdpi": 96,
    "xxhdpi": 144,
    "xxxhdpi": 192,
}
ANDROID_MIPMAP_DIR = "mipmap-{density}"
ANDROID_MIPMAP_GLOB = "mipmap-*"
ANDROID_LAUNCHER_NAME = "ic_launcher.png"


# ============================================================================
# Native project layout
# ============================================================================

ICONS_DIR_NAME = "icons"
GEN_APPLE_DIR = "gen/apple"
GEN_ANDROID_DIR = "gen/android"

# Checked in order before falling back to a recursive search
CONVENTIONAL_ICON_DIRS: List[str] = [
    "src-tauri/icons",
    "icons",
    "assets/icons",
    "public/icons",
    "resources/icons",
    "static/icons",
]

SEARCH_SKIP_DIRS = frozenset({
    "node_modules",
    ".git",
    "target",
    "dist",
    "build",
    ".svelte-kit",
    ".next",
    "__pycache__",
})
