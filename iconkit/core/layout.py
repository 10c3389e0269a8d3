"""
Platform Layout Migrator
Relocates flat mobile output into the nested layout native build tooling expects.

The move list is computed by ``plan_migration``, a pure function of the set of
files that currently exist, from declarative ``MoveRule`` tables. Only
``apply_plan`` touches the filesystem.

Usage:
    report = migrate(Path("src-tauri/icons"), [Platform.IOS, Platform.ANDROID])
"""

from __future__ import annotations

import fnmatch
import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Dict, Iterable, Optional, Protocol, Set, Tuple

from iconkit.constants import (
    ANDROID_DENSITIES,
    ANDROID_MIPMAP_DIR,
    ANDROID_MIPMAP_GLOB,
    GEN_ANDROID_DIR,
    GEN_APPLE_DIR,
    ICONS_DIR_NAME,
    IOS_APPICON_GLOB,
)
from iconkit.core.errors import MigrationFailure
from iconkit.core.types import Platform
from iconkit.models.icon_models import MigrationPlan, MigrationReport, MoveOperation

logger = logging.getLogger(__name__)


# ============================================================================
# Rule tables
# ============================================================================

@dataclass(frozen=True)
class MoveRule:
    """Move files matching ``source_glob`` (relative to the base directory,
    one glob per path segment) into ``destination`` (relative to the layout
    parent). ``{dir}`` expands to the name of the file's source directory."""
    source_glob: str
    destination: str


@dataclass(frozen=True)
class PlatformLayout:
    platform: Platform
    rules: Tuple[MoveRule, ...]
    create_dirs: Tuple[str, ...] = ()
    cleanup_glob: Optional[str] = None    # source directories removed once emptied


PLATFORM_LAYOUTS: Dict[Platform, PlatformLayout] = {
    Platform.IOS: PlatformLayout(
        platform=Platform.IOS,
        rules=(MoveRule(IOS_APPICON_GLOB, GEN_APPLE_DIR),),
        create_dirs=(GEN_APPLE_DIR,),
    ),
    Platform.ANDROID: PlatformLayout(
        platform=Platform.ANDROID,
        rules=(MoveRule(f"{ANDROID_MIPMAP_GLOB}/*", f"{GEN_ANDROID_DIR}/{{dir}}"),),
        create_dirs=tuple(
            f"{GEN_ANDROID_DIR}/{ANDROID_MIPMAP_DIR.format(density=d)}" for d in ANDROID_DENSITIES
        ),
        cleanup_glob=ANDROID_MIPMAP_GLOB,
    ),
}


def needs_migration(platform: Platform) -> bool:
    return platform in PLATFORM_LAYOUTS


def resolve_layout_parent(base_dir: Path) -> Path:
    """A base directory named 'icons' hands the layout to its parent."""
    base_dir = Path(base_dir)
    if base_dir.name == ICONS_DIR_NAME:
        return base_dir.parent
    return base_dir


# ============================================================================
# File sets
# ============================================================================

class FileSet(Protocol):
    """Snapshot of what exists under a base directory (POSIX relative paths)."""

    def files(self) -> Set[str]:
        ...

    def dirs(self) -> Set[str]:
        ...


class MemoryFileSet:
    """In-memory file set. Parent directories of every file are implied."""

    def __init__(self, files: Iterable[str] = (), dirs: Iterable[str] = ()):
        self._files = {str(PurePosixPath(f)) for f in files}
        self._dirs = {str(PurePosixPath(d)) for d in dirs}
        for f in self._files:
            for parent in PurePosixPath(f).parents:
                if str(parent) != ".":
                    self._dirs.add(str(parent))

    def files(self) -> Set[str]:
        return set(self._files)

    def dirs(self) -> Set[str]:
        return set(self._dirs)


class DirectoryFileSet:
    """File set read from disk, ``depth`` levels below ``base_dir``."""

    def __init__(self, base_dir: Path, depth: int = 2):
        self.base_dir = Path(base_dir)
        self.depth = depth

    def _walk(self) -> Tuple[Set[str], Set[str]]:
        files: Set[str] = set()
        dirs: Set[str] = set()
        if not self.base_dir.is_dir():
            return files, dirs
        pending = [(self.base_dir, 1)]
        while pending:
            current, level = pending.pop()
            with os.scandir(current) as it:
                for entry in it:
                    rel = Path(entry.path).relative_to(self.base_dir).as_posix()
                    if entry.is_dir(follow_symlinks=False):
                        dirs.add(rel)
                        if level < self.depth:
                            pending.append((Path(entry.path), level + 1))
                    elif entry.is_file():
                        files.add(rel)
        return files, dirs

    def files(self) -> Set[str]:
        return self._walk()[0]

    def dirs(self) -> Set[str]:
        return self._walk()[1]


def _matches(rel_path: str, glob: str) -> bool:
    parts = PurePosixPath(rel_path).parts
    patterns = PurePosixPath(glob).parts
    if len(parts) != len(patterns):
        return False
    return all(fnmatch.fnmatchcase(p, pat) for p, pat in zip(parts, patterns))


# ============================================================================
# Planning
# ============================================================================

def plan_migration(file_set: FileSet, platforms: Iterable[Platform]) -> MigrationPlan:
    """Compute the directory creations, moves and cleanups for ``platforms``.

    Pure: only reads the snapshot in ``file_set``. Platforms without a layout
    (desktop) contribute nothing.
    """
    plan = MigrationPlan()
    files = sorted(file_set.files())
    dirs = sorted(file_set.dirs())

    for platform in platforms:
        layout = PLATFORM_LAYOUTS.get(platform)
        if layout is None:
            continue

        for rel in layout.create_dirs:
            if rel not in plan.create_dirs:
                plan.create_dirs.append(rel)

        for rule in layout.rules:
            for rel in files:
                if not _matches(rel, rule.source_glob):
                    continue
                source = PurePosixPath(rel)
                dest_dir = rule.destination.format(dir=source.parent.name)
                plan.moves.append(MoveOperation(
                    source=rel,
                    destination=f"{dest_dir}/{source.name}",
                    platform=platform,
                ))

        if layout.cleanup_glob:
            for rel in dirs:
                if _matches(rel, layout.cleanup_glob) and rel not in plan.remove_dirs:
                    plan.remove_dirs.append(rel)

    return plan


# ============================================================================
# Execution
# ============================================================================

def apply_plan(plan: MigrationPlan, base_dir: Path, layout_parent: Path) -> MigrationReport:
    """Carry out ``plan``.

    A source file that is already gone counts as migrated and is skipped.
    Only files directly inside a matched source directory are relocated;
    nested subdirectories are left in place, so a cleanup directory that
    still has content afterwards is a failure.

    Raises:
        MigrationFailure: a directory cannot be created, a move fails, or a
            source directory cannot be removed.
    """
    base_dir = Path(base_dir)
    layout_parent = Path(layout_parent)
    report = MigrationReport(layout_parent=layout_parent)

    for rel in plan.create_dirs:
        target = layout_parent / rel
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise MigrationFailure(f"Cannot create directory: {e}", target, "mkdir") from e

    for move in plan.moves:
        src = base_dir / move.source
        dst = layout_parent / move.destination
        if not src.exists():
            logger.warning("Skipping %s: already migrated", src)
            report.skipped.append(src)
            continue
        try:
            dst.parent.mkdir(parents=True, exist_ok=True)
            shutil.move(str(src), str(dst))
        except FileNotFoundError:
            logger.warning("Skipping %s: removed during migration", src)
            report.skipped.append(src)
            continue
        except OSError as e:
            raise MigrationFailure(f"Cannot move to {dst}: {e}", src, "move") from e
        logger.debug("Moved %s -> %s", src, dst)
        report.moved.append(dst)

    for rel in plan.remove_dirs:
        directory = base_dir / rel
        if not directory.exists():
            logger.debug("Skipping %s: already removed", directory)
            continue
        try:
            directory.rmdir()
        except OSError as e:
            raise MigrationFailure(
                f"Source directory not empty after migration: {e}", directory, "rmdir"
            ) from e
        report.removed_dirs.append(directory)

    return report


def migrate(
    base_dir: Path,
    platforms: Iterable[Platform],
    file_set: Optional[FileSet] = None,
) -> MigrationReport:
    """Plan and apply the native layout migration for ``base_dir``."""
    base_dir = Path(base_dir)
    layout_parent = resolve_layout_parent(base_dir)
    platforms = [p for p in platforms if needs_migration(p)]

    if file_set is None:
        file_set = DirectoryFileSet(base_dir)
    plan = plan_migration(file_set, platforms)

    logger.info(
        "Migrating %d file(s) for %s into %s",
        len(plan.moves), ", ".join(p.value for p in platforms) or "no platforms", layout_parent,
    )
    report = apply_plan(plan, base_dir, layout_parent)
    if report.skipped:
        logger.info("%d file(s) were already migrated", len(report.skipped))
    return report
