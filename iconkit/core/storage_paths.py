"""
Storage Paths
Resolves where settings are stored and where bundled resources live.
"""

import logging
import os
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "ICONKIT_HOME"


def is_frozen() -> bool:
    """Check if running as compiled executable (PyInstaller)."""
    return getattr(sys, 'frozen', False) and hasattr(sys, '_MEIPASS')


def get_app_name() -> str:
    """Get the application name for folder creation."""
    return "iconkit"


def get_resource_base_path() -> Path:
    """Return the directory holding bundled, read-only resources.

    Dev/installed: the iconkit package directory
    Frozen (PyInstaller): sys._MEIPASS/iconkit
    """
    if is_frozen():
        return Path(getattr(sys, "_MEIPASS")) / get_app_name()
    return Path(__file__).parent.parent


def get_default_storage_path() -> Path:
    """
    Get the per-user writable storage directory.

    - $ICONKIT_HOME when set
    - Windows: %APPDATA%/iconkit
    - Elsewhere: $XDG_CONFIG_HOME/iconkit or ~/.config/iconkit
    """
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override)

    if sys.platform == "win32":
        appdata = os.environ.get('APPDATA')
        base = Path(appdata) if appdata else Path.home() / 'AppData' / 'Roaming'
    else:
        xdg = os.environ.get('XDG_CONFIG_HOME')
        base = Path(xdg) if xdg else Path.home() / '.config'
    return base / get_app_name()


def get_configs_path() -> Path:
    """Get the writable configs directory, creating it when possible."""
    configs_path = get_default_storage_path() / "configs"
    try:
        configs_path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning("Could not create configs directory at %s: %s", configs_path, e)
    return configs_path


def get_settings_file_path() -> Path:
    """
    Get the path for the settings.json file.

    Returns:
        Path to settings.json
    """
    return get_configs_path() / "settings.json"


def get_app_config_file_path() -> Path:
    """
    Get the path for the bundled app.json metadata (read-only).

    Returns:
        Path to app.json in resource directory
    """
    return get_resource_base_path() / "configs" / "app.json"
