"""Common utilities for distpack packages."""

from .config import ConfigLoader
from .logging import setup_logging, LogContext
from .logging_config import LoggingConfig
from .errors import DistpackError, ConfigurationError, ToolNotFoundError
from .path_utils import has_decomposed_name, unlink_if_exists
from .temp_files import TmpDir

__all__ = [
    'ConfigLoader',
    'LoggingConfig',
    'setup_logging',
    'LogContext',
    'DistpackError',
    'ConfigurationError',
    'ToolNotFoundError',
    'has_decomposed_name',
    'unlink_if_exists',
    'TmpDir',
]
