"""tar archives: a portable tar staged in a temp file, then compressed."""

import logging
import shutil
import tarfile
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional

from distpack.common import TmpDir, unlink_if_exists
from .args import compute_7z_compress_args
from .environment import ArchiveEnvironment, current_environment
from .errors import ArchiveError, SourceMissingError, UnsupportedArchiveFormatError
from .options import ArchiveFormat, ArchiveOptions, CompressionLevel, parse_format
from .process import exec_tool
from .tool_checker import get_path_7za, get_path_lzip

logger = logging.getLogger(__name__)

# Format 7za writes for each compressed tar flavour
SEVEN_ZIP_TAR_FORMATS = {
    ArchiveFormat.TAR_GZ: "gzip",
    ArchiveFormat.TAR_BZ2: "bzip2",
    ArchiveFormat.TAR_XZ: "xz",
}


def _portable_entry(tarinfo: tarfile.TarInfo) -> tarfile.TarInfo:
    """Drop host-specific metadata: owners and sub-second times."""
    tarinfo.uid = 0
    tarinfo.gid = 0
    tarinfo.uname = ""
    tarinfo.gname = ""
    tarinfo.mtime = int(tarinfo.mtime)
    return tarinfo


def create_portable_tar(tar_file: Path, cwd: Path, entry: str, prefix: Optional[str] = None) -> None:
    """Write an uncompressed tar of ``cwd/entry``.

    Entries are added in sorted order, symlinks are stored as links and owner
    information is cleared, so equal trees give equal tars on any machine.

    Args:
        tar_file: Tar file to write
        cwd: Directory entry names are relative to
        entry: Path under ``cwd`` to archive (``.`` for cwd itself)
        prefix: Top-level name for the entries instead of ``entry``
    """
    source = cwd if entry == "." else cwd / entry
    arcname = prefix or entry
    try:
        with tarfile.open(tar_file, "w", format=tarfile.PAX_FORMAT) as tf:
            tf.add(source, arcname=arcname, recursive=True, filter=_portable_entry)
    except FileNotFoundError as e:
        if not source.exists():
            raise SourceMissingError(
                f'Cannot create archive: "{source}" doesn\'t exist', path=str(source)
            ) from e
        raise ArchiveError(f"Cannot create tar {tar_file}: {e}", path=str(tar_file)) from e
    except OSError as e:
        raise ArchiveError(f"Cannot create tar {tar_file}: {e}", path=str(tar_file)) from e


def tar(
    compression: Optional[CompressionLevel],
    format: "ArchiveFormat | str",
    out_file: Path,
    dir_to_archive: Path,
    is_bundle_directory: bool,
    temp_dir_manager: TmpDir,
    *,
    env: Optional[ArchiveEnvironment] = None,
    timeout: Optional[float] = None,
) -> None:
    """Produce a tar, tar.gz, tar.bz2, tar.xz or tar.lz archive.

    Args:
        compression: ``store`` for the fastest setting, anything else for the best ratio
        format: One of the tar formats
        out_file: Archive to write; an existing file is replaced
        dir_to_archive: Directory to archive
        is_bundle_directory: Archive the directory itself by name (e.g. a macOS
            ``.app``) instead of its contents under the archive's base name
        temp_dir_manager: Allocator for the intermediate tar; it stays there on failure
        env: Environment snapshot; read from os.environ when None
        timeout: Seconds before a compression tool is killed

    Raises:
        UnsupportedArchiveFormatError: If format is not a tar format
        SourceMissingError: If dir_to_archive does not exist
        ToolNotFoundError: If the compression tool cannot be run
        BackendExecutionError: If the compression tool fails
    """
    archive_format = parse_format(format)
    if not archive_format.is_tar:
        raise UnsupportedArchiveFormatError(
            f"'{archive_format.value}' is not a tar format", format=archive_format.value
        )

    env = current_environment(env)
    out_file = Path(out_file).absolute()
    dir_to_archive = Path(dir_to_archive).absolute()

    tar_file = temp_dir_manager.get_temp_file(suffix=".tar")

    suffix = f".{archive_format.value}"
    cwd = dir_to_archive
    entry = "."
    prefix: Optional[str] = out_file.name[:-len(suffix)] if out_file.name.endswith(suffix) else out_file.name
    if is_bundle_directory:
        prefix = None
        cwd = dir_to_archive.parent
        entry = dir_to_archive.name

    logger.debug(
        "Creating tar",
        extra={"extra_fields": {"tar_file": str(tar_file), "cwd": str(cwd), "entry": entry, "prefix": prefix}},
    )

    # 7za and lzip update an existing output instead of overwriting it
    with ThreadPoolExecutor(max_workers=2) as pool:
        created = pool.submit(create_portable_tar, tar_file, cwd, entry, prefix)
        removed = pool.submit(unlink_if_exists, out_file)
        created.result()
        removed.result()

    if archive_format is ArchiveFormat.TAR:
        shutil.move(str(tar_file), str(out_file))
        return

    if archive_format is ArchiveFormat.TAR_LZ:
        exec_tool(
            get_path_lzip(env),
            ["-1" if compression == "store" else "-9", "--keep", str(tar_file)],
            verbose=env.debug_7z,
            timeout=timeout,
        )
        # lzip always writes <input>.lz next to the input
        shutil.move(f"{tar_file}.lz", str(out_file))
        return

    built = compute_7z_compress_args(
        SEVEN_ZIP_TAR_FORMATS[archive_format],
        ArchiveOptions(is_regular_file=True, method="DEFAULT", compression=compression),
        env,
    )
    args = built.args + [str(out_file), str(tar_file)]
    exec_tool(
        get_path_7za(env),
        args,
        dir_to_archive.parent,
        verbose=env.debug_7z,
        timeout=timeout,
    )
