"""
Application Configuration
Read-only app metadata (name, version) bundled as configs/app.json.
"""

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class AppConfig:
    """Application metadata."""
    version: str = "1.0.0"
    name: str = "iconkit"
    description: str = "Application icon asset generator"
    license: str = "MIT"


class AppConfigManager:
    """
    Provides app metadata loaded from the bundled JSON file.

    Singleton: the metadata is read once per process.
    """

    _instance: Optional['AppConfigManager'] = None

    def __new__(cls, *args, **kwargs) -> 'AppConfigManager':
        """Singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize AppConfigManager.

        Args:
            config_path: Path to app config JSON file
        """
        if self._initialized:
            return

        self._initialized = True

        if config_path:
            self._config_path = Path(config_path)
        else:
            from iconkit.core.storage_paths import get_app_config_file_path
            self._config_path = get_app_config_file_path()

        self._config = AppConfig()
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file. Missing files keep the defaults."""
        if not self._config_path.exists():
            return
        try:
            with open(self._config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Error loading app config %s: %s", self._config_path, e)
            return

        known = {f.name for f in fields(AppConfig)}
        for key, value in data.items():
            if key in known:
                setattr(self._config, key, value)

    @property
    def version(self) -> str:
        """Get application version."""
        return self._config.version

    @property
    def name(self) -> str:
        """Get application name."""
        return self._config.name

    @property
    def description(self) -> str:
        """Get application description."""
        return self._config.description


# Convenience functions
def get_version() -> str:
    """Get application version."""
    return AppConfigManager().version


def get_app_name() -> str:
    """Get application name."""
    return AppConfigManager().name


def get_app_description() -> str:
    """Get application description."""
    return AppConfigManager().description
