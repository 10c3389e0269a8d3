"""
Icon Pipeline
Sequences decoding, per-platform rendering/encoding and mobile layout migration.

State machine:
    IDLE -> DECODING -> GENERATING (once per platform) -> MIGRATING -> DONE
    FAILED is reachable from every non-terminal state.

The first error aborts the run and is returned to the caller. Files already
written for earlier platforms are left in place.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Set

from iconkit.constants import (
    ANDROID_DENSITIES,
    ANDROID_LAUNCHER_NAME,
    ANDROID_LAUNCHER_SIZES,
    ANDROID_MIPMAP_DIR,
    CONTENT_FRACTIONS,
    FLAT_ICON_NAME,
    IOS_APPICON_NAME,
    IOS_APPICON_SLOTS,
    MACOS_ICNS_NAME,
    MACOS_ICNS_SIZES,
    MOBILE_FLAT_SIZES,
    WINDOWS_ICO_NAME,
    WINDOWS_ICO_SIZES,
    ios_slot_pixels,
)
from iconkit.core.decoder import load_source
from iconkit.core.encoders import write_icns, write_ico, write_png
from iconkit.core.errors import DirectoryCreationFailure, IconPipelineError
from iconkit.core.layout import migrate, needs_migration
from iconkit.core.resizer import render_specs
from iconkit.core.settings_manager import IconSettings
from iconkit.core.types import (
    MaskStyle,
    PipelineState,
    Platform,
    ProgressCallback,
    Result,
    parse_platforms,
)
from iconkit.models.icon_models import GeneratedArtifact, GenerationReport, IconSpec, SourceImage

logger = logging.getLogger(__name__)


class IconPipeline:
    """
    Generates a platform-correct icon set from one source image.

    An instance handles a single invocation; ``state`` and ``history``
    describe how far it got.

    Usage:
        pipeline = IconPipeline()
        result = pipeline.generate("logo.png", "src-tauri/icons", ["desktop", "android"], True)
        if not result.success:
            print(result.error)
    """

    def __init__(
        self,
        settings: Optional[IconSettings] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ):
        self.settings = settings or IconSettings()
        self.progress_callback = progress_callback
        self.state = PipelineState.IDLE
        self.history: List[PipelineState] = [PipelineState.IDLE]
        self._written: Set[Path] = set()

    def _transition(self, state: PipelineState) -> None:
        logger.debug("Pipeline state %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def _report_progress(self, current: int, total: int, message: str) -> None:
        """Report progress to callback if available."""
        if self.progress_callback:
            self.progress_callback(current, total, message)
        logger.info("[%d/%d] %s", current, total, message)

    # ------------------------------------------------------------------
    # Specs
    # ------------------------------------------------------------------

    def specs_for(self, platform: Platform, apply_mask: bool) -> List[IconSpec]:
        """Every raster a platform needs, one spec per pixel size, increasing."""
        style = self.settings.mask_style_for(platform, apply_mask)
        fraction = CONTENT_FRACTIONS[platform.value]

        if platform == Platform.WINDOWS:
            return [IconSpec(s, platform, style, fraction) for s in WINDOWS_ICO_SIZES]
        if platform == Platform.MACOS:
            return [IconSpec(s, platform, style, fraction) for s in MACOS_ICNS_SIZES]

        if platform == Platform.IOS:
            launcher = {ios_slot_pixels(pt, scale) for pt, scale in IOS_APPICON_SLOTS}
        else:
            launcher = set(ANDROID_LAUNCHER_SIZES.values())

        specs = []
        for size in sorted(launcher | set(MOBILE_FLAT_SIZES)):
            # Store listings apply their own mask
            spec_style = style if size in launcher else MaskStyle.NONE
            specs.append(IconSpec(size, platform, spec_style, fraction))
        return specs

    # ------------------------------------------------------------------
    # Per-platform generation
    # ------------------------------------------------------------------

    def _ensure_dir(self, directory: Path) -> None:
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreationFailure(f"Cannot create directory: {e}", directory, "mkdir") from e

    def _write_store_icons(self, rendered, target: Path, platform: Platform) -> List[GeneratedArtifact]:
        artifacts = []
        for size in MOBILE_FLAT_SIZES:
            path = target / FLAT_ICON_NAME.format(size=size)
            if path in self._written:
                continue
            artifacts.append(write_png(path, rendered[size], platform))
            self._written.add(path)
        return artifacts

    def _generate_platform(
        self,
        source: SourceImage,
        target: Path,
        platform: Platform,
        apply_mask: bool,
    ) -> List[GeneratedArtifact]:
        specs = self.specs_for(platform, apply_mask)
        rendered = render_specs(source.image, specs, self.settings.radius_factors())

        if platform == Platform.WINDOWS:
            return [write_ico(target / WINDOWS_ICO_NAME, rendered, platform)]
        if platform == Platform.MACOS:
            return [write_icns(target / MACOS_ICNS_NAME, rendered, platform)]

        artifacts: List[GeneratedArtifact] = []
        if platform == Platform.IOS:
            for points, scale in IOS_APPICON_SLOTS:
                name = IOS_APPICON_NAME.format(points=points, scale=scale)
                artifacts.append(write_png(target / name, rendered[ios_slot_pixels(points, scale)], platform))
        else:
            for density in ANDROID_DENSITIES:
                mipmap_dir = target / ANDROID_MIPMAP_DIR.format(density=density)
                self._ensure_dir(mipmap_dir)
                size = ANDROID_LAUNCHER_SIZES[density]
                artifacts.append(write_png(mipmap_dir / ANDROID_LAUNCHER_NAME, rendered[size], platform))

        artifacts.extend(self._write_store_icons(rendered, target, platform))
        return artifacts

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def generate(
        self,
        source_path: str | Path,
        target_dir: str | Path,
        platforms: Iterable[str],
        apply_mask: bool = True,
    ) -> Result:
        """
        Run the pipeline.

        Args:
            source_path: Source raster (any format Pillow decodes)
            target_dir: Output directory, created if absent
            platforms: Platform names or the aliases "desktop" / "mobile"
            apply_mask: Apply each platform's corner mask

        Returns:
            Result with a GenerationReport on success, or the first error.
        """
        if self.state != PipelineState.IDLE:
            raise RuntimeError("IconPipeline instances run once; create a new one")

        try:
            requested = parse_platforms(platforms)
        except ValueError as e:
            self._transition(PipelineState.FAILED)
            logger.error("Invalid icon request: %s", e)
            return Result.fail(str(e), e)

        target = Path(target_dir)
        report = GenerationReport(target_dir=target, platforms=requested)
        mobile = [p for p in requested if needs_migration(p)]
        total = len(requested) + (1 if mobile else 0)

        try:
            self._transition(PipelineState.DECODING)
            source = load_source(source_path)
            self._ensure_dir(target)

            for index, platform in enumerate(requested, start=1):
                self._transition(PipelineState.GENERATING)
                self._report_progress(index, total, f"Generating {platform.value} icons")
                report.artifacts.extend(self._generate_platform(source, target, platform, apply_mask))

            if mobile:
                self._transition(PipelineState.MIGRATING)
                self._report_progress(total, total, "Moving mobile icons into native layout")
                report.migration = migrate(target, mobile)
        except IconPipelineError as e:
            self._transition(PipelineState.FAILED)
            logger.error("Icon generation failed: %s", e)
            return Result.fail(str(e), e)

        self._transition(PipelineState.DONE)
        message = f"Generated {len(report.artifacts)} file(s) for {', '.join(p.value for p in requested)}"
        logger.info(message)
        return Result.ok(report, message)


def generate(
    source_path: str | Path,
    target_dir: str | Path,
    platforms: Iterable[str],
    apply_mask: bool = True,
    settings: Optional[IconSettings] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> Result:
    """Generate icons with a fresh pipeline. See ``IconPipeline.generate``."""
    pipeline = IconPipeline(settings=settings, progress_callback=progress_callback)
    return pipeline.generate(source_path, target_dir, platforms, apply_mask)
