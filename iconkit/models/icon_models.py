"""
Icon Data Models
Defines data structures for source images, icon specs and generated artifacts.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from PIL import Image

from iconkit.core.types import ArtifactFormat, MaskStyle, Platform


@dataclass
class SourceImage:
    """Decoded source raster, owned by one pipeline invocation."""
    image: Image.Image      # Always RGBA
    path: Path

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height


@dataclass(frozen=True)
class IconSpec:
    """One required output raster."""
    size: int
    platform: Platform
    mask_style: MaskStyle = MaskStyle.NONE
    content_fraction: float = 1.0


@dataclass
class GeneratedArtifact:
    """A file written by the pipeline."""
    path: Path
    byte_length: int
    format: ArtifactFormat
    platform: Optional[Platform] = None
    sizes: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": str(self.path),
            "byte_length": self.byte_length,
            "format": self.format.value,
            "platform": self.platform.value if self.platform else None,
            "sizes": list(self.sizes),
        }


@dataclass(frozen=True)
class ContainerEntry:
    """An entry read back from an ICO/ICNS container."""
    declared_size: int
    width: int
    height: int

    @property
    def is_consistent(self) -> bool:
        return self.width == self.declared_size and self.height == self.declared_size


@dataclass(frozen=True)
class MoveOperation:
    """Relocate one file. Source is relative to the base output directory,
    destination is relative to the layout parent."""
    source: str
    destination: str
    platform: Platform


@dataclass
class MigrationPlan:
    """Filesystem changes needed to reach the native layout."""
    create_dirs: List[str] = field(default_factory=list)    # relative to layout parent
    moves: List[MoveOperation] = field(default_factory=list)
    remove_dirs: List[str] = field(default_factory=list)    # relative to base dir

    @property
    def is_empty(self) -> bool:
        return not self.moves and not self.remove_dirs


@dataclass
class MigrationReport:
    """What the migrator actually did."""
    layout_parent: Path
    moved: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)      # already migrated
    removed_dirs: List[Path] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "layout_parent": str(self.layout_parent),
            "moved": [str(p) for p in self.moved],
            "skipped": [str(p) for p in self.skipped],
            "removed_dirs": [str(p) for p in self.removed_dirs],
        }


@dataclass
class GenerationReport:
    """Successful pipeline run."""
    target_dir: Path
    platforms: List[Platform] = field(default_factory=list)
    artifacts: List[GeneratedArtifact] = field(default_factory=list)
    migration: Optional[MigrationReport] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "target_dir": str(self.target_dir),
            "platforms": [p.value for p in self.platforms],
            "artifacts": [a.to_dict() for a in self.artifacts],
            "migration": self.migration.to_dict() if self.migration else None,
        }
