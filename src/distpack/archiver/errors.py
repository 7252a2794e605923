"""Archive production errors."""

from distpack.common import DistpackError


class ArchiveError(DistpackError):
    """Archive production failed."""
    pass


class SourceMissingError(ArchiveError):
    """Directory to archive does not exist."""
    pass


class BackendExecutionError(ArchiveError):
    """Compression tool exited with an error or timed out."""

    @property
    def exit_code(self) -> int | None:
        return self.context.get("exit_code")

    @property
    def stderr(self) -> str:
        return self.context.get("stderr") or ""


class UnsupportedArchiveFormatError(ArchiveError):
    """Archive format is not supported."""
    pass
