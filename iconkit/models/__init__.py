# Data models

from iconkit.models.icon_models import (
    SourceImage,
    IconSpec,
    GeneratedArtifact,
    ContainerEntry,
    MoveOperation,
    MigrationPlan,
    MigrationReport,
    GenerationReport,
)

__all__ = [
    "SourceImage",
    "IconSpec",
    "GeneratedArtifact",
    "ContainerEntry",
    "MoveOperation",
    "MigrationPlan",
    "MigrationReport",
    "GenerationReport",
]
