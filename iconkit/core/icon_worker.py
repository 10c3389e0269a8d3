"""
Background worker for icon generation.
Runs the pipeline off the UI thread and relays its progress and Result.
"""

from pathlib import Path
from typing import List, Optional

from PySide6.QtCore import QThread, Signal

from iconkit.core.pipeline import IconPipeline
from iconkit.core.settings_manager import IconSettings


class IconWorker(QThread):
    """Background worker for one icon generation run."""

    progress = Signal(str, int, int)  # message, current, total
    finished = Signal(object)  # Result
    error = Signal(str)

    def __init__(
        self,
        source_path: str,
        target_dir: str,
        platforms: List[str],
        apply_mask: bool = True,
        settings: Optional[IconSettings] = None,
    ):
        super().__init__()
        self.source_path = Path(source_path)
        self.target_dir = Path(target_dir)
        self.platforms = list(platforms)
        self.apply_mask = apply_mask
        self.settings = settings
        self.result = None

    def _on_progress(self, current: int, total: int, message: str) -> None:
        self.progress.emit(message, current, total)

    def run(self):
        pipeline = IconPipeline(settings=self.settings, progress_callback=self._on_progress)
        self.result = pipeline.generate(
            self.source_path,
            self.target_dir,
            self.platforms,
            self.apply_mask,
        )
        if not self.result.success:
            self.error.emit(self.result.message)
        self.finished.emit(self.result)
