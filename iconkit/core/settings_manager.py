"""
Settings Manager
Handles generation defaults persistence with JSON storage.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, asdict, field, fields

from iconkit.constants import MaskRadius
from iconkit.core.types import MaskStyle, Platform

logger = logging.getLogger(__name__)


def _default_mask_styles() -> Dict[str, str]:
    # iOS stays square: Apple applies its own mask and rejects transparency
    return {
        Platform.WINDOWS.value: MaskStyle.NONE.value,
        Platform.MACOS.value: MaskStyle.SQUIRCLE.value,
        Platform.IOS.value: MaskStyle.NONE.value,
        Platform.ANDROID.value: MaskStyle.ROUNDED_RECT.value,
    }


@dataclass
class IconSettings:
    """Icon generation settings."""
    # Request defaults
    default_platforms: List[str] = field(default_factory=lambda: ["desktop"])
    apply_mask: bool = True

    # Last used paths
    last_source: str = ""
    last_target_dir: str = ""

    # Masking
    mask_styles: Dict[str, str] = field(default_factory=_default_mask_styles)
    squircle_radius_factor: float = MaskRadius.SQUIRCLE
    rounded_rect_radius_factor: float = MaskRadius.ROUNDED_RECT

    def mask_style_for(self, platform: Platform, apply_mask: bool) -> MaskStyle:
        """Mask style for a platform; NONE when masking is off or the setting is invalid."""
        if not apply_mask:
            return MaskStyle.NONE
        try:
            return MaskStyle(self.mask_styles.get(platform.value, MaskStyle.NONE.value))
        except ValueError:
            logger.warning("Invalid mask style for %s: %r", platform.value, self.mask_styles.get(platform.value))
            return MaskStyle.NONE

    def radius_factors(self) -> Dict[MaskStyle, float]:
        return {
            MaskStyle.SQUIRCLE: self.squircle_radius_factor,
            MaskStyle.ROUNDED_RECT: self.rounded_rect_radius_factor,
        }


class SettingsManager:
    """
    Manages icon settings with automatic persistence.

    Features:
    - Load/save settings from JSON file
    - Default values for missing settings
    - Auto-save on change (optional)

    Usage:
        settings = SettingsManager()
        settings.set("apply_mask", False)
        platforms = settings.get("default_platforms")
    """

    _instance: Optional['SettingsManager'] = None

    def __new__(cls, *args, **kwargs) -> 'SettingsManager':
        """Singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, settings_path: Optional[str] = None, auto_save: bool = True):
        """
        Initialize SettingsManager.

        Args:
            settings_path: Path to settings JSON file
            auto_save: Automatically save when settings change
        """
        if self._initialized:
            return

        self._initialized = True

        if settings_path:
            self._settings_path = Path(settings_path)
        else:
            from iconkit.core.storage_paths import get_settings_file_path
            self._settings_path = get_settings_file_path()

        self._auto_save = auto_save
        self._settings = IconSettings()

        self._load()

    def _load(self) -> None:
        """Load settings from file."""
        if not self._settings_path.exists():
            return
        try:
            with open(self._settings_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Error loading settings %s: %s", self._settings_path, e)
            return
        if not isinstance(data, dict):
            logger.warning("Ignoring settings %s: expected a JSON object", self._settings_path)
            return

        known = {f.name for f in fields(IconSettings)}
        for key, value in data.items():
            if key in known:
                setattr(self._settings, key, value)

    def save(self) -> bool:
        """
        Save settings to file.

        Returns:
            True if successful, False otherwise
        """
        try:
            self._settings_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._settings_path, 'w', encoding='utf-8') as f:
                json.dump(asdict(self._settings), f, indent=2)
            return True
        except OSError as e:
            logger.error("Error saving settings %s: %s", self._settings_path, e)
            return False

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value."""
        return getattr(self._settings, key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a setting value."""
        if hasattr(self._settings, key):
            setattr(self._settings, key, value)
            if self._auto_save:
                self.save()

    @property
    def settings(self) -> IconSettings:
        """Get the settings object."""
        return self._settings

    @property
    def settings_path(self) -> Path:
        return self._settings_path

    def reset_to_defaults(self) -> None:
        """Reset all settings to defaults."""
        self._settings = IconSettings()
        if self._auto_save:
            self.save()
