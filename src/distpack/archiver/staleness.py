"""Up-to-date check for archives."""

import os
from pathlib import Path
from typing import Optional


def stat_or_none(path: Path) -> Optional[os.stat_result]:
    """Stat a path, returning None when it does not exist."""
    try:
        return os.stat(path)
    except FileNotFoundError:
        return None


def is_up_to_date(out_file: Path, source: Path) -> bool:
    """True when the archive exists and is strictly newer than the source directory."""
    out_stat = stat_or_none(out_file)
    if out_stat is None:
        return False
    source_stat = stat_or_none(source)
    if source_stat is None:
        return False
    return out_stat.st_mtime_ns > source_stat.st_mtime_ns
