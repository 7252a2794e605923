"""Scoped temporary file allocation."""

import logging
import shutil
import tempfile
import threading
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


class TmpDir:
    """Hands out unique temporary paths inside one private directory.

    The directory is created on first use and removed by ``cleanup()`` (or on
    leaving the ``with`` block). Returned paths are not created; callers write
    to them.
    """

    def __init__(self, debug_name: str = "distpack", base_dir: Optional[Path] = None) -> None:
        self.debug_name = debug_name
        self.base_dir = base_dir
        self._dir: Optional[Path] = None
        self._counter = 0
        self._lock = threading.Lock()

    def _ensure_dir(self) -> Path:
        if self._dir is None:
            self._dir = Path(tempfile.mkdtemp(prefix=f"{self.debug_name}-", dir=self.base_dir))
            logger.debug(f"Created temp directory: {self._dir}")
        return self._dir

    def get_temp_file(self, suffix: str = "", prefix: str = "temp") -> Path:
        """Return a fresh path such as ``<dir>/temp-3.tar``."""
        with self._lock:
            directory = self._ensure_dir()
            self._counter += 1
            return directory / f"{prefix}-{self._counter}{suffix}"

    def cleanup(self) -> None:
        """Remove the temp directory and everything in it."""
        with self._lock:
            directory, self._dir = self._dir, None
        if directory is not None:
            shutil.rmtree(directory, ignore_errors=True)
            logger.debug(f"Removed temp directory: {directory}")

    def __enter__(self) -> "TmpDir":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.cleanup()
