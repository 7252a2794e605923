"""Choice of compression backend."""

from enum import Enum


class BackendKind(str, Enum):
    """Compression tool used for a 7z or zip archive."""
    SEVEN_ZIP = "7za"
    ZIP = "zip"


def select_backend(platform: str, format: str, path_normalization_mismatch: bool) -> BackendKind:
    """Pick the tool for an archive.

    7za is used everywhere except for zip archives on macOS whose source path
    is not in NFC form: 7za mangles decomposed (NFD) names, Info-ZIP does not.

    Args:
        platform: ``sys.platform`` value
        format: Archive format name
        path_normalization_mismatch: Result of ``has_decomposed_name`` for the source

    Returns:
        BackendKind to use
    """
    format = format.value if hasattr(format, "value") else format
    if platform == "darwin" and format == "zip" and path_normalization_mismatch:
        return BackendKind.ZIP
    return BackendKind.SEVEN_ZIP
