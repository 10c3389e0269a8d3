"""Locate a project's icon directory and its native mobile projects."""

from __future__ import annotations

import logging
import os
from collections import deque
from pathlib import Path
from typing import List, Optional

from iconkit.constants import CONVENTIONAL_ICON_DIRS, ICONS_DIR_NAME, SEARCH_SKIP_DIRS
from iconkit.core.types import Platform

logger = logging.getLogger(__name__)

# Native project folders created by the mobile toolchains
MOBILE_PROJECT_DIRS = {
    Platform.ANDROID: "src-tauri/gen/android",
    Platform.IOS: "src-tauri/gen/apple",
}


def find_icons_dir(project_root: str | Path, max_depth: int = 3) -> Optional[Path]:
    """
    Find the directory that holds a project's icons.

    Conventional locations are checked first; otherwise the tree is searched
    breadth-first, at most ``max_depth`` levels deep, for a folder named
    ``icons``. Dependency and build folders are never entered.

    Returns:
        The icons directory, or None if nothing was found.
    """
    root = Path(project_root)
    if not root.is_dir():
        return None

    for rel in CONVENTIONAL_ICON_DIRS:
        candidate = root / rel
        if candidate.is_dir():
            logger.debug("Found icons directory at conventional path %s", candidate)
            return candidate

    queue = deque([(root, 0)])
    while queue:
        current, depth = queue.popleft()
        if depth >= max_depth:
            continue
        try:
            with os.scandir(current) as it:
                children = sorted(
                    (entry for entry in it if entry.is_dir(follow_symlinks=False)),
                    key=lambda entry: entry.name,
                )
        except OSError as e:
            logger.debug("Skipping unreadable directory %s: %s", current, e)
            continue

        for entry in children:
            if entry.name in SEARCH_SKIP_DIRS:
                continue
            path = Path(entry.path)
            if entry.name == ICONS_DIR_NAME:
                logger.debug("Found icons directory %s", path)
                return path
            queue.append((path, depth + 1))

    return None


def detect_mobile_targets(project_root: str | Path) -> List[Platform]:
    """Mobile platforms whose native project already exists under ``project_root``."""
    root = Path(project_root)
    return [platform for platform, rel in MOBILE_PROJECT_DIRS.items() if (root / rel).is_dir()]
