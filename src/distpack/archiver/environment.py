"""Process-wide overrides read from environment variables."""

from typing import Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from distpack.common import ConfigurationError


class ArchiveEnvironment(BaseSettings):
    """Immutable snapshot of the ``DISTPACK_*`` environment variables.

    Builders and orchestrators take a snapshot as a parameter and create a
    fresh one per call when none is given, so the environment is read at
    call time and never cached.
    """

    model_config = SettingsConfigDict(
        env_prefix="DISTPACK_",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    compression_level: Optional[int] = Field(
        default=None,
        ge=0,
        le=9,
        description="Compression level forced on every backend; wins over ArchiveOptions.compression"
    )
    seven_zip_filter: Optional[str] = Field(
        default=None,
        description="7z filter (BCJ, BCJ2, ARM, ARMT, IA64, PPC, SPARC)"
    )
    debug_7z: bool = Field(
        default=False,
        description="Let the compression tools print verbose output"
    )
    seven_zip_path: Optional[str] = Field(default=None, description="Explicit 7za executable")
    zip_path: Optional[str] = Field(default=None, description="Explicit zip executable")
    lzip_path: Optional[str] = Field(default=None, description="Explicit lzip executable")


def current_environment(env: Optional[ArchiveEnvironment] = None) -> ArchiveEnvironment:
    """Return the injected snapshot, or read a new one from the environment.

    Raises:
        ConfigurationError: If a DISTPACK_* variable holds an invalid value
    """
    if env is not None:
        return env
    try:
        return ArchiveEnvironment()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid DISTPACK_* environment: {e}") from e
