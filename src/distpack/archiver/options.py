"""Archive request options and supported formats."""

from enum import Enum
from typing import Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .errors import UnsupportedArchiveFormatError

CompressionLevel = Literal["store", "normal", "maximum"]

# "DEFAULT" means no method switch is passed at all
CompressionMethod = Literal["Copy", "LZMA", "Deflate", "DEFAULT"]


class ArchiveFormat(str, Enum):
    """Archive formats that can be produced."""
    SEVEN_Z = "7z"
    ZIP = "zip"
    TAR = "tar"
    TAR_GZ = "tar.gz"
    TAR_BZ2 = "tar.bz2"
    TAR_XZ = "tar.xz"
    TAR_LZ = "tar.lz"

    @property
    def is_tar(self) -> bool:
        return self.value == "tar" or self.value.startswith("tar.")


def parse_format(value: "ArchiveFormat | str") -> ArchiveFormat:
    """Convert a format name to ArchiveFormat.

    Raises:
        UnsupportedArchiveFormatError: If the name is not a known format
    """
    if isinstance(value, ArchiveFormat):
        return value
    try:
        return ArchiveFormat(value)
    except ValueError:
        supported = ", ".join(f.value for f in ArchiveFormat)
        raise UnsupportedArchiveFormatError(
            f"Unsupported archive format '{value}' (supported: {supported})",
            format=value,
        ) from None


class ArchiveOptions(BaseModel):
    """Options for one archive request."""

    model_config = ConfigDict(extra='forbid', frozen=True)

    compression: Optional[CompressionLevel] = Field(
        default=None,
        description="Compression/speed tradeoff; None leaves the backend default"
    )
    without_dir: bool = Field(
        default=False,
        description="Archive directory contents at the root instead of under the directory name"
    )
    solid: bool = Field(
        default=True,
        description="7z only: compress all files as one block"
    )
    is_archive_header_compressed: bool = Field(
        default=True,
        description="7z only: compress the archive header"
    )
    dict_size: Optional[int] = Field(
        default=None,
        ge=1,
        description="LZMA dictionary size in MB"
    )
    excluded: Optional[Tuple[str, ...]] = Field(
        default=None,
        description="Glob patterns to leave out of the archive"
    )
    method: Optional[CompressionMethod] = Field(
        default=None,
        description="Explicit compression method; None picks one automatically"
    )
    is_regular_file: bool = Field(
        default=False,
        description="Content is plain data; False suppresses file timestamp/attribute storage"
    )
