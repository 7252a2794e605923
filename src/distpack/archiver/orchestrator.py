"""7z and zip archives, and the entry point for every format."""

import logging
import sys
from pathlib import Path
from typing import Optional

from distpack.common import LogContext, TmpDir, ToolNotFoundError, has_decomposed_name, unlink_if_exists
from .args import compute_7z_compress_args, compute_zip_compress_args, is_7z_family
from .backend import BackendKind, select_backend
from .environment import ArchiveEnvironment, current_environment
from .errors import BackendExecutionError, SourceMissingError, UnsupportedArchiveFormatError
from .options import ArchiveFormat, ArchiveOptions, parse_format
from .process import exec_tool
from .staleness import is_up_to_date
from .tarball import tar
from .tool_checker import get_path_7za, get_path_zip

logger = logging.getLogger(__name__)


def archive(
    format: "ArchiveFormat | str",
    out_file: Path,
    dir_to_archive: Path,
    options: Optional[ArchiveOptions] = None,
    *,
    env: Optional[ArchiveEnvironment] = None,
    platform: Optional[str] = None,
    timeout: Optional[float] = None,
) -> Path:
    """
    Produce a 7z or zip archive of a directory.

    Nothing is done when the archive is already newer than the directory.
    7za is used at the maximum sensible level (it is fast enough); Info-ZIP
    takes over for zip on macOS when the source path is NFD-normalized.

    Args:
        format: ``7z``, ``zip`` or a name ending in ``.7z``
        out_file: Archive to write; an existing file is replaced
        dir_to_archive: Directory to archive
        options: Archive options (defaults when None)
        env: Environment snapshot; read from os.environ when None
        platform: ``sys.platform`` value to decide for; the running platform when None
        timeout: Seconds before the compression tool is killed

    Returns:
        Path of the archive

    Raises:
        UnsupportedArchiveFormatError: If format is not 7z or zip
        SourceMissingError: If dir_to_archive does not exist
        ToolNotFoundError: If the compression tool cannot be found
        BackendExecutionError: If the compression tool fails
    """
    format = format.value if isinstance(format, ArchiveFormat) else str(format)
    if format != "zip" and not is_7z_family(format):
        raise UnsupportedArchiveFormatError(
            f"Format '{format}' is not a 7z or zip format", format=format
        )

    options = options or ArchiveOptions()
    env = current_environment(env)
    out_file = Path(out_file).absolute()
    dir_to_archive = Path(dir_to_archive).absolute()

    if is_up_to_date(out_file, dir_to_archive):
        logger.info(
            "Skipped archiving",
            extra={"extra_fields": {"reason": "archive file is up to date", "out_file": str(out_file)}},
        )
        return out_file

    backend = select_backend(platform or sys.platform, format, has_decomposed_name(dir_to_archive))
    if backend is BackendKind.ZIP:
        logger.warning(
            "Using zip",
            extra={"extra_fields": {"reason": "7z doesn't support NFD-normalized filenames"}},
        )
        built = compute_zip_compress_args(options, env)
    else:
        built = compute_7z_compress_args(format, options, env)

    # 7za and zip update an existing archive instead of overwriting it
    unlink_if_exists(out_file)

    args = built.args
    args.extend([str(out_file), "." if options.without_dir else dir_to_archive.name])
    for mask in options.excluded or ():
        args.append(f"-xr!{mask}" if backend is BackendKind.SEVEN_ZIP else f"-x{mask}")

    cwd = dir_to_archive if options.without_dir else dir_to_archive.parent
    try:
        binary = get_path_7za(env) if backend is BackendKind.SEVEN_ZIP else get_path_zip(env)
        exec_tool(binary, args, cwd, verbose=env.debug_7z, timeout=timeout)
    except (ToolNotFoundError, BackendExecutionError) as e:
        # The tool reports a missing source as a missing cwd or as "nothing to do"
        if not dir_to_archive.exists():
            raise SourceMissingError(
                f'Cannot create archive: "{dir_to_archive}" doesn\'t exist',
                path=str(dir_to_archive),
            ) from e
        raise

    return out_file


def create_archive(
    format: "ArchiveFormat | str",
    out_file: Path,
    dir_to_archive: Path,
    options: Optional[ArchiveOptions] = None,
    *,
    temp_dir_manager: Optional[TmpDir] = None,
    is_bundle_directory: bool = False,
    env: Optional[ArchiveEnvironment] = None,
    timeout: Optional[float] = None,
) -> Path:
    """Produce an archive of any supported format.

    tar formats go through ``tar`` (only ``options.compression`` applies to
    them); 7z and zip go through ``archive``. Without a ``temp_dir_manager``
    a private one is used and cleaned up before returning. Every record logged
    meanwhile carries the archive format and output path.

    Raises:
        UnsupportedArchiveFormatError: If format is not supported
    """
    archive_format = parse_format(format)
    options = options or ArchiveOptions()
    out_file = Path(out_file).absolute()

    with LogContext(logger, format=archive_format.value, out_file=str(out_file)):
        if not archive_format.is_tar:
            return archive(archive_format, out_file, dir_to_archive, options, env=env, timeout=timeout)

        if temp_dir_manager is not None:
            tar(options.compression, archive_format, out_file, dir_to_archive, is_bundle_directory,
                temp_dir_manager, env=env, timeout=timeout)
            return out_file

        with TmpDir() as tmp:
            tar(options.compression, archive_format, out_file, dir_to_archive, is_bundle_directory,
                tmp, env=env, timeout=timeout)
        return out_file
