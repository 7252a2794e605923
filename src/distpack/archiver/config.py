"""Configuration schema for the distpack command."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from distpack.common import LoggingConfig
from .options import CompressionLevel


class ArchiveDefaultsConfig(BaseModel):
    """Archive settings used when the command line does not give them."""

    model_config = ConfigDict(extra='forbid')

    compression: Optional[CompressionLevel] = Field(
        default=None,
        description="store, normal or maximum; unset leaves the tool default"
    )
    solid: bool = Field(
        default=True,
        description="Compress 7z archives as one block"
    )
    is_archive_header_compressed: bool = Field(
        default=True,
        description="Compress 7z archive headers"
    )
    dict_size: Optional[int] = Field(
        default=None,
        ge=1,
        description="LZMA dictionary size in MB"
    )
    excluded: List[str] = Field(
        default_factory=list,
        description="Glob patterns always left out of archives"
    )
    timeout_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        description="Kill a compression tool running longer than this"
    )


class ArchiverConfig(BaseModel):
    """Root configuration for the distpack command."""

    model_config = ConfigDict(extra='forbid')

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    archive: ArchiveDefaultsConfig = Field(default_factory=ArchiveDefaultsConfig)
