"""Generate application icons from a source image.

Examples:
  iconkit --input assets/logo.png --output src-tauri/icons
  iconkit --input assets/logo.png --project . --platform desktop --platform android
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from iconkit.core.app_config import get_app_description, get_version
from iconkit.core.errors import IconPipelineError
from iconkit.core.icons_dir import detect_mobile_targets, find_icons_dir
from iconkit.core.pipeline import generate
from iconkit.core.settings_manager import SettingsManager

logger = logging.getLogger("iconkit")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="iconkit", description=get_app_description())
    parser.add_argument(
        "--input",
        help="Path to the source image (defaults to the last used source)",
    )
    target = parser.add_mutually_exclusive_group()
    target.add_argument(
        "--output",
        help="Output directory (e.g. src-tauri/icons)",
    )
    target.add_argument(
        "--project",
        help="Project root; its icons directory is located automatically",
    )
    parser.add_argument(
        "--platform",
        action="append",
        dest="platforms",
        help="windows, macos, ios, android, desktop or mobile (repeatable)",
    )
    parser.add_argument(
        "--mask",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Apply each platform's corner mask",
    )
    parser.add_argument("--settings", help="Path to an alternative settings.json")
    parser.add_argument("--json", action="store_true", help="Print the run report as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")
    return parser


def _resolve_target(args: argparse.Namespace, settings: SettingsManager) -> Optional[Path]:
    if args.output:
        return Path(args.output).resolve()
    if args.project:
        found = find_icons_dir(Path(args.project))
        if found is None:
            logger.error("No icons directory found under %s", args.project)
            return None
        logger.info("Using icons directory %s", found)
        return found.resolve()
    last = settings.get("last_target_dir")
    return Path(last) if last else None


def _error_payload(result) -> dict:
    error = result.error
    if isinstance(error, IconPipelineError):
        detail = error.to_dict()
    else:
        # Invalid requests (unknown platform) carry a plain ValueError
        detail = {"type": "invalid_request", "message": result.message, "path": None, "operation": None}
    return {"success": False, "error": detail}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    settings = SettingsManager(args.settings)

    source = args.input or settings.get("last_source")
    if not source:
        parser.error("--input is required (no previous source recorded)")

    target = _resolve_target(args, settings)
    if target is None:
        if args.project:
            return 1
        parser.error("--output or --project is required (no previous target recorded)")

    platforms = args.platforms or list(settings.get("default_platforms"))
    if args.project and not args.platforms:
        for platform in detect_mobile_targets(Path(args.project)):
            if platform.value not in platforms:
                platforms.append(platform.value)

    apply_mask = settings.get("apply_mask") if args.mask is None else args.mask

    result = generate(
        Path(source).resolve(),
        target,
        platforms,
        apply_mask,
        settings=settings.settings,
    )
    if not result.success:
        if args.json:
            print(json.dumps(_error_payload(result), indent=2))
        print(f"[ERROR] {result.message}", file=sys.stderr)
        return 1

    settings.set("last_source", str(Path(source).resolve()))
    settings.set("last_target_dir", str(target))

    if args.json:
        print(json.dumps({"success": True, "report": result.data.to_dict()}, indent=2))
        return 0

    for artifact in result.data.artifacts:
        print(f"[OK] Wrote: {artifact.path}")
    migration = result.data.migration
    if migration is not None:
        for moved in migration.moved:
            print(f"[OK] Moved: {moved}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
