"""Path helpers for archive sources and outputs."""

import unicodedata
from pathlib import Path


def has_decomposed_name(path: Path | str) -> bool:
    """
    Check whether a path differs from its NFC (composed) form.

    macOS file systems hand out names in decomposed form (NFD). 7-Zip cannot
    archive such names correctly, so callers use this to pick another backend.
    No filesystem access is performed.
    """
    path_str = str(path)
    return unicodedata.normalize('NFC', path_str) != path_str


def unlink_if_exists(path: Path | str) -> None:
    """Delete a file, doing nothing when it is already gone."""
    Path(path).unlink(missing_ok=True)
