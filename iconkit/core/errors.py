"""
Pipeline Errors
Every failure carries the offending path and the operation that failed.
"""

from pathlib import Path
from typing import Optional, Union


class IconPipelineError(Exception):
    """Base class for icon generation failures."""

    kind = "pipeline"

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        operation: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.path = Path(path) if path is not None else None
        self.operation = operation

    def __str__(self) -> str:
        parts = [self.message]
        if self.operation:
            parts.append(f"operation={self.operation}")
        if self.path is not None:
            parts.append(f"path={self.path}")
        return " | ".join(parts)

    def to_dict(self) -> dict:
        """Serializable form for UI/IPC layers."""
        return {
            "type": self.kind,
            "message": self.message,
            "path": str(self.path) if self.path is not None else None,
            "operation": self.operation,
        }


class SourceNotFound(IconPipelineError):
    kind = "source_not_found"


class DecodeFailure(IconPipelineError):
    """Unsupported or corrupt source image."""
    kind = "decode_failure"


class DirectoryCreationFailure(IconPipelineError):
    kind = "directory_creation_failure"


class ContainerEncodeFailure(IconPipelineError):
    """Dimension mismatch or an internal encoder fault."""
    kind = "container_encode_failure"


class FileWriteFailure(IconPipelineError):
    kind = "file_write_failure"


class MigrationFailure(IconPipelineError):
    """Unexpected filesystem state while relocating generated files."""
    kind = "migration_failure"
