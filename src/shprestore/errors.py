"""Fatal error taxonomy for shapefile reconciliation."""
from __future__ import annotations


class ShpRestoreError(RuntimeError):
    """Base class for every error raised by shprestore."""


class TruncatedHeaderError(ShpRestoreError):
    """Raised when a buffer is shorter than the fixed header it is read as."""

    def __init__(self, stream: str, required: int, actual: int) -> None:
        self.stream = stream
        self.required = required
        self.actual = actual
        super().__init__(
            f"{stream} header truncated: need {required} bytes, got {actual}"
        )


class TruncatedRecordError(ShpRestoreError):
    """Raised when the geometry record walk runs past the end of the buffer."""

    def __init__(self, offset: int, bound: int, actual: int) -> None:
        self.offset = offset
        self.bound = bound
        self.actual = actual
        super().__init__(
            f"geometry record at offset {offset} lies past the end of the buffer "
            f"({actual} bytes, header declares {bound})"
        )


class MissingRequiredInputError(ShpRestoreError):
    """Raised when the geometry or attribute stream was not supplied."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"missing required input: {', '.join(self.missing)}")


class GeometryRemovalUnsupportedError(ShpRestoreError):
    """Raised in strict mode when geometry records would have to be removed."""


class FileSetError(ShpRestoreError):
    """Raised when a set of paths cannot be turned into repair inputs."""
