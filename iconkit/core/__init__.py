# Core pipeline modules

from iconkit.core.types import Platform, MaskStyle, PipelineState, Result, parse_platforms
from iconkit.core.errors import (
    IconPipelineError,
    SourceNotFound,
    DecodeFailure,
    DirectoryCreationFailure,
    ContainerEncodeFailure,
    FileWriteFailure,
    MigrationFailure,
)
from iconkit.core.pipeline import IconPipeline, generate
from iconkit.core.layout import migrate, plan_migration
from iconkit.core.icons_dir import find_icons_dir, detect_mobile_targets
from iconkit.core.settings_manager import SettingsManager, IconSettings
from iconkit.core.app_config import AppConfigManager

__all__ = [
    "Platform",
    "MaskStyle",
    "PipelineState",
    "Result",
    "parse_platforms",
    "IconPipelineError",
    "SourceNotFound",
    "DecodeFailure",
    "DirectoryCreationFailure",
    "ContainerEncodeFailure",
    "FileWriteFailure",
    "MigrationFailure",
    "IconPipeline",
    "generate",
    "migrate",
    "plan_migration",
    "find_icons_dir",
    "detect_mobile_targets",
    "SettingsManager",
    "IconSettings",
    "AppConfigManager",
]
