"""
Type Definitions
Shared enums, result type and callback signatures for the icon pipeline.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional
from dataclasses import dataclass
from enum import Enum


# ============================================================================
# Platform Types
# ============================================================================

class Platform(str, Enum):
    """Icon target platform."""
    WINDOWS = "windows"
    MACOS = "macos"
    IOS = "ios"
    ANDROID = "android"


# Request names that expand to several platforms
PLATFORM_ALIASES: Dict[str, List[Platform]] = {
    "desktop": [Platform.WINDOWS, Platform.MACOS],
    "mobile": [Platform.IOS, Platform.ANDROID],
}


def parse_platforms(names: Iterable[str]) -> List[Platform]:
    """
    Resolve requested platform names into an ordered, duplicate-free list.

    Accepts platform values ("windows", "macos", "ios", "android") and the
    aliases "desktop" and "mobile", case-insensitively.

    Raises:
        ValueError: if a name is unknown or nothing was requested.
    """
    if isinstance(names, str):
        names = [names]
    resolved: List[Platform] = []
    for raw in names:
        name = raw.value if isinstance(raw, Platform) else str(raw).strip().lower()
        if name in PLATFORM_ALIASES:
            expanded = PLATFORM_ALIASES[name]
        else:
            try:
                expanded = [Platform(name)]
            except ValueError:
                valid = sorted([p.value for p in Platform] + list(PLATFORM_ALIASES))
                raise ValueError(
                    f"Unknown platform '{raw}'. Expected one of: {', '.join(valid)}"
                ) from None
        for platform in expanded:
            if platform not in resolved:
                resolved.append(platform)

    if not resolved:
        raise ValueError("No platforms requested")
    return resolved


class MaskStyle(str, Enum):
    """Corner mask applied to the icon content area."""
    NONE = "none"
    SQUIRCLE = "squircle"
    ROUNDED_RECT = "roundedRect"


class ArtifactFormat(str, Enum):
    """On-disk format of a generated file."""
    ICO = "ico"
    ICNS = "icns"
    PNG = "png"


class PipelineState(str, Enum):
    """Orchestrator lifecycle. DONE and FAILED are terminal."""
    IDLE = "idle"
    DECODING = "decoding"
    GENERATING = "generating"
    MIGRATING = "migrating"
    DONE = "done"
    FAILED = "failed"


# ============================================================================
# Result Types
# ============================================================================

@dataclass
class Result:
    """Generic result type for operations that can fail."""
    success: bool
    message: str = ""
    data: Any = None
    error: Optional[Exception] = None

    @classmethod
    def ok(cls, data: Any = None, message: str = "") -> "Result":
        """Create a success result."""
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, message: str, error: Optional[Exception] = None) -> "Result":
        """Create a failure result."""
        return cls(success=False, message=message, error=error)


# ============================================================================
# Callback Types
# ============================================================================

ProgressCallback = Callable[[int, int, str], None]  # (current, total, message)
