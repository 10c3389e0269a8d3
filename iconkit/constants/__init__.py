"""
Constants Package
Centralized constants for icon generation.
"""

from iconkit.constants.icons import (
    WINDOWS_ICO_SIZES,
    MACOS_ICNS_SIZES,
    WINDOWS_ICO_NAME,
    MACOS_ICNS_NAME,
    MOBILE_FLAT_SIZES,
    FLAT_ICON_NAME,
    ICNS_TYPES,
    CONTENT_FRACTIONS,
    MaskRadius,
    IOS_APPICON_SLOTS,
    IOS_APPICON_NAME,
    IOS_APPICON_GLOB,
    ios_slot_pixels,
    ANDROID_DENSITIES,
    ANDROID_LAUNCHER_SIZES,
    ANDROID_MIPMAP_DIR,
    ANDROID_MIPMAP_GLOB,
    ANDROID_LAUNCHER_NAME,
    ICONS_DIR_NAME,
    GEN_APPLE_DIR,
    GEN_ANDROID_DIR,
    CONVENTIONAL_ICON_DIRS,
    SEARCH_SKIP_DIRS,
)

__all__ = [
    # Containers
    "WINDOWS_ICO_SIZES",
    "MACOS_ICNS_SIZES",
    "WINDOWS_ICO_NAME",
    "MACOS_ICNS_NAME",
    "MOBILE_FLAT_SIZES",
    "FLAT_ICON_NAME",
    "ICNS_TYPES",
    # Canvas
    "CONTENT_FRACTIONS",
    "MaskRadius",
    # iOS
    "IOS_APPICON_SLOTS",
    "IOS_APPICON_NAME",
    "IOS_APPICON_GLOB",
    "ios_slot_pixels",
    # Android
    "ANDROID_DENSITIES",
    "ANDROID_LAUNCHER_SIZES",
    "ANDROID_MIPMAP_DIR",
    "ANDROID_MIPMAP_GLOB",
    "ANDROID_LAUNCHER_NAME",
    # Layout
    "ICONS_DIR_NAME",
    "GEN_APPLE_DIR",
    "GEN_ANDROID_DIR",
    "CONVENTIONAL_ICON_DIRS",
    "SEARCH_SKIP_DIRS",
]
