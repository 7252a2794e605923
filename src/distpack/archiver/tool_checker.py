"""Location of the external compression tools."""

import logging
import shutil
from typing import Dict, Optional, Sequence

from distpack.common import ToolNotFoundError
from .environment import ArchiveEnvironment, current_environment

logger = logging.getLogger(__name__)

# Executable names tried in order; 7zz is the name used by upstream 7-Zip on Linux/macOS
SEVEN_ZIP_NAMES = ("7za", "7z", "7zz")
ZIP_NAMES = ("zip",)
LZIP_NAMES = ("lzip",)


def _find(explicit: Optional[str], names: Sequence[str]) -> Optional[str]:
    if explicit:
        return shutil.which(explicit) or explicit
    for name in names:
        path = shutil.which(name)
        if path:
            return path
    return None


def _is_available(explicit: Optional[str], names: Sequence[str]) -> bool:
    path = _find(explicit, names)
    return path is not None and shutil.which(path) is not None


def check_tool_availability(env: Optional[ArchiveEnvironment] = None) -> Dict[str, bool]:
    """
    Check availability of the compression tools.

    Returns:
        Dictionary mapping tool names to availability status:
        - '7za': 7z, zip, gzip, bzip2 and xz archives
        - 'zip': zip archives of sources with decomposed Unicode names (macOS)
        - 'lzip': tar.lz archives
    """
    env = current_environment(env)
    return {
        '7za': _is_available(env.seven_zip_path, SEVEN_ZIP_NAMES),
        'zip': _is_available(env.zip_path, ZIP_NAMES),
        'lzip': _is_available(env.lzip_path, LZIP_NAMES),
    }


def get_path_7za(env: Optional[ArchiveEnvironment] = None) -> str:
    """Return the 7-Zip executable (DISTPACK_SEVEN_ZIP_PATH or 7za/7z/7zz on PATH).

    Raises:
        ToolNotFoundError: If no 7-Zip executable is configured or on PATH
    """
    path = _find(current_environment(env).seven_zip_path, SEVEN_ZIP_NAMES)
    if path is None:
        raise ToolNotFoundError(
            f"Tool '7za' is not available.\n\n{_get_installation_instructions('7za')}",
            tool="7za",
        )
    return path


def get_path_zip(env: Optional[ArchiveEnvironment] = None) -> str:
    """Return the zip executable; an unresolved name fails when it is run."""
    return _find(current_environment(env).zip_path, ZIP_NAMES) or "zip"


def get_path_lzip(env: Optional[ArchiveEnvironment] = None) -> str:
    """Return the lzip executable; an unresolved name fails when it is run."""
    return _find(current_environment(env).lzip_path, LZIP_NAMES) or "lzip"


def _get_installation_instructions(tool_name: str) -> str:
    """Get installation instructions for a missing tool."""
    instructions = {
        '7za': (
            "7-Zip is required for 7z, zip and tar.gz/bz2/xz archives. Install it:\n"
            "  - Windows: Download from https://www.7-zip.org/\n"
            "  - macOS: brew install sevenzip\n"
            "  - Linux: sudo apt-get install p7zip-full (Debian/Ubuntu)\n"
            "  or set DISTPACK_SEVEN_ZIP_PATH to the executable"
        ),
        'zip': (
            "Info-ZIP is needed for zip archives of decomposed Unicode names. Install it:\n"
            "  - macOS: preinstalled, or brew install zip\n"
            "  - Linux: sudo apt-get install zip"
        ),
        'lzip': (
            "lzip is required for tar.lz archives. Install it:\n"
            "  - macOS: brew install lzip\n"
            "  - Linux: sudo apt-get install lzip"
        ),
    }

    return instructions.get(tool_name, f"Please install {tool_name}")
