"""Command-line argument builders for the compression backends.

Both builders are pure: they translate ArchiveOptions plus an environment
snapshot into the argument list for one tool and report options the tool
cannot honor as IgnoredOption records (also logged as warnings). Neither
appends the output path or the inputs; callers do.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from .environment import ArchiveEnvironment, current_environment
from .errors import UnsupportedArchiveFormatError
from .options import ArchiveOptions

logger = logging.getLogger(__name__)

# Formats 7-Zip is asked to write; the type itself comes from the output extension
SEVEN_ZIP_FORMATS = frozenset({"7z", "zip", "gzip", "bzip2", "xz"})


@dataclass(frozen=True)
class IgnoredOption:
    """An option the backend does not support and that was left out."""
    option: str
    value: Any
    reason: str = "ignoring unsupported option"


@dataclass
class BuiltArgs:
    """Arguments for one backend invocation."""
    args: List[str]
    warnings: List[IgnoredOption] = field(default_factory=list)

    def ignore(self, option: str, value: Any) -> None:
        record = IgnoredOption(option=option, value=value)
        self.warnings.append(record)
        logger.warning(
            "Ignoring unsupported option",
            extra={"extra_fields": {"option": option, "value": value}},
        )


def _format_name(format: Any) -> str:
    return format.value if hasattr(format, "value") else str(format)


def is_7z_family(format: str) -> bool:
    return format == "7z" or format.endswith(".7z")


def debug_7z_args(command: str, env: Optional[ArchiveEnvironment] = None) -> List[str]:
    """Leading 7za arguments: the command and progress-indicator suppression."""
    args = [command, "-bd"]
    if current_environment(env).debug_7z:
        args.append("-bb")
    return args


def compute_7z_compress_args(
    format: str,
    options: Optional[ArchiveOptions] = None,
    env: Optional[ArchiveEnvironment] = None,
) -> BuiltArgs:
    """Build 7za ``a`` arguments for a 7z, zip, gzip, bzip2 or xz archive.

    Args:
        format: Format 7za will write (``7z``, ``zip``, ``gzip``, ``bzip2``,
            ``xz`` or any name ending in ``.7z``)
        options: Archive options (defaults when None)
        env: Environment snapshot; read from os.environ when None

    Returns:
        BuiltArgs with the argument list; 7za never needs to ignore options

    Raises:
        UnsupportedArchiveFormatError: If 7za is not used for this format
    """
    format = _format_name(format)
    if format not in SEVEN_ZIP_FORMATS and not is_7z_family(format):
        raise UnsupportedArchiveFormatError(
            f"Format '{format}' cannot be produced by 7za", format=format
        )

    options = options or ArchiveOptions()
    env = current_environment(env)

    store_only = options.compression == "store"
    built = BuiltArgs(args=debug_7z_args("a", env))
    args = built.args

    is_level_set = False
    if env.compression_level is not None:
        store_only = False
        args.append(f"-mx={env.compression_level}")
        is_level_set = True

    is_zip = format == "zip"
    if not store_only:
        if is_zip and options.compression == "maximum":
            # Deflate: largest word size and pass count
            args.extend(["-mfb=258", "-mpass=15"])

        if not is_level_set:
            args.append("-mx=" + ("9" if not is_zip or options.compression == "maximum" else "7"))

    if options.dict_size is not None:
        args.append(f"-md={options.dict_size}m")

    # NTFS timestamps (modification, creation, last access) make output depend on the build machine
    if not options.is_regular_file:
        args.append("-mtc=off")

    if is_7z_family(format):
        if options.solid is False:
            args.append("-ms=off")

        if options.is_archive_header_compressed is False:
            args.append("-mhc=off")

        if env.seven_zip_filter:
            args.append(f"-mf={env.seven_zip_filter}")

        # Valid for 7z only: do not store modification/access times
        args.extend(["-mtm=off", "-mta=off"])

    if options.method is not None:
        if options.method != "DEFAULT":
            args.append(f"-mm={options.method}")
    elif is_zip or store_only:
        args.append(f"-mm={'Copy' if store_only else 'Deflate'}")

    if is_zip:
        # UTF-8 names always, not only when the local code page lacks a symbol
        args.append("-mcu")

    return built


def compute_zip_compress_args(
    options: Optional[ArchiveOptions] = None,
    env: Optional[ArchiveEnvironment] = None,
) -> BuiltArgs:
    """Build Info-ZIP ``zip`` arguments.

    Used when 7za cannot handle the source names. ``dict_size`` and explicit
    methods other than ``DEFAULT`` have no zip equivalent; they are skipped and
    reported in ``BuiltArgs.warnings``.
    """
    options = options or ArchiveOptions()
    env = current_environment(env)

    store_only = options.compression == "store"
    # -y stores symlinks as links
    built = BuiltArgs(args=["-q", "-r", "-y"])
    args = built.args
    if env.debug_7z:
        args.append("-v")

    if env.compression_level is not None:
        store_only = False
        args.append(f"-{env.compression_level}")
    elif not store_only:
        args.append("-" + ("9" if options.compression == "maximum" else "7"))

    if options.dict_size is not None:
        built.ignore("dict_size", options.dict_size)

    # Extra attributes: uid/gid and file times on Unix
    if not options.is_regular_file:
        args.append("-X")

    if options.method is not None:
        if options.method != "DEFAULT":
            built.ignore("method", options.method)
    else:
        args.extend(["-Z", "store" if store_only else "deflate"])

    return built
