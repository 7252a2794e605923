"""Reproducible archive production with external compression tools."""

from .orchestrator import archive, create_archive
from .args import (
    BuiltArgs,
    IgnoredOption,
    compute_7z_compress_args,
    compute_zip_compress_args,
)
from .backend import BackendKind, select_backend
from .environment import ArchiveEnvironment
from .errors import (
    ArchiveError,
    BackendExecutionError,
    SourceMissingError,
    UnsupportedArchiveFormatError,
)
from .options import ArchiveFormat, ArchiveOptions, parse_format
from .staleness import is_up_to_date
from .tarball import tar

__all__ = [
    "archive",
    "create_archive",
    "tar",
    "BuiltArgs",
    "IgnoredOption",
    "compute_7z_compress_args",
    "compute_zip_compress_args",
    "BackendKind",
    "select_backend",
    "ArchiveEnvironment",
    "ArchiveError",
    "BackendExecutionError",
    "SourceMissingError",
    "UnsupportedArchiveFormatError",
    "ArchiveFormat",
    "ArchiveOptions",
    "parse_format",
    "is_up_to_date",
]
