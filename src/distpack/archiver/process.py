"""Execution of external compression tools."""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from distpack.common import ToolNotFoundError
from .errors import BackendExecutionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecResult:
    """Outcome of a successful tool run."""
    returncode: int
    stdout: str
    stderr: str


def exec_tool(
    file: str,
    args: Sequence[str],
    cwd: Optional[Path] = None,
    *,
    verbose: bool = False,
    timeout: Optional[float] = None,
) -> ExecResult:
    """
    Run an external tool and wait for it to exit.

    Args:
        file: Executable name or path
        args: Arguments, not including the executable
        cwd: Working directory for the tool
        verbose: Log the tool's captured output at DEBUG level
        timeout: Seconds before the tool is killed; None waits forever

    Returns:
        ExecResult with captured output

    Raises:
        ToolNotFoundError: If the tool cannot be started (missing or non-executable
            binary, working directory missing or not a directory)
        BackendExecutionError: If the tool exits non-zero or times out
    """
    command = [str(file), *[str(a) for a in args]]
    logger.debug(
        "Executing",
        extra={"extra_fields": {"file": str(file), "args": command[1:], "cwd": str(cwd) if cwd else None}},
    )

    try:
        result = subprocess.run(
            command,
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding='utf-8',
            errors='replace',
            check=True,
            timeout=timeout,
        )
    except OSError as e:
        # Spawn failures: missing or non-executable binary, missing cwd or a cwd that is a file
        raise ToolNotFoundError(
            f"Cannot run '{file}': {e.strerror}",
            tool=str(file),
            cwd=str(cwd) if cwd else None,
        ) from e
    except subprocess.CalledProcessError as e:
        logger.error(f"{file} exited with code {e.returncode}: {(e.stderr or '').strip()}")
        raise BackendExecutionError(
            f"{file} exited with code {e.returncode}\n{(e.stdout or '').strip()}\n{(e.stderr or '').strip()}".strip(),
            tool=str(file),
            args=command[1:],
            cwd=str(cwd) if cwd else None,
            exit_code=e.returncode,
            stdout=e.stdout,
            stderr=e.stderr,
        ) from e
    except subprocess.TimeoutExpired as e:
        logger.error(f"{file} timed out after {timeout} seconds")
        raise BackendExecutionError(
            f"{file} timed out after {timeout} seconds",
            tool=str(file),
            args=command[1:],
            cwd=str(cwd) if cwd else None,
            exit_code=None,
            timeout=timeout,
        ) from e

    if verbose:
        if result.stdout:
            logger.debug(result.stdout.rstrip())
        if result.stderr:
            logger.debug(result.stderr.rstrip())

    return ExecResult(returncode=result.returncode, stdout=result.stdout, stderr=result.stderr)
