"""CLI command for producing distribution archives."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from distpack.common import ConfigLoader, ConfigurationError, DistpackError, setup_logging
from .orchestrator import create_archive
from .config import ArchiverConfig
from .options import ArchiveFormat, ArchiveOptions
from .tool_checker import check_tool_availability

# Application name derived from package name
_package = __package__ or "distpack.archiver"
APP_NAME = _package.replace('_', '-').replace('.', '-')


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value}")
    return number


def build_options(config: ArchiverConfig, args: argparse.Namespace) -> ArchiveOptions:
    """Merge command-line arguments over the configured archive defaults."""
    defaults = config.archive
    excluded = list(defaults.excluded) + list(args.exclude or [])
    return ArchiveOptions(
        compression=args.compression or defaults.compression,
        without_dir=args.without_dir,
        solid=defaults.solid and not args.no_solid,
        is_archive_header_compressed=defaults.is_archive_header_compressed and not args.no_header_compression,
        dict_size=args.dict_size if args.dict_size is not None else defaults.dict_size,
        excluded=tuple(excluded) or None,
        method=args.method,
        is_regular_file=args.regular_file,
    )


def archive_command(config: ArchiverConfig, args: argparse.Namespace) -> int:
    """Produce one archive.

    Args:
        config: Configuration object
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    logger_name = __package__ or __name__
    logger = logging.getLogger(logger_name)

    options = build_options(config, args)
    logger.info(f"Source directory: {args.source}")
    logger.info(f"Output: {args.output} ({args.format})")

    try:
        logger.debug("Tool availability", extra={"extra_fields": check_tool_availability()})
        out_file = create_archive(
            args.format,
            args.output,
            args.source,
            options,
            is_bundle_directory=args.bundle_directory,
            timeout=config.archive.timeout_seconds,
        )
    except DistpackError as e:
        logger.error(f"Archiving failed: {e.message}", extra={"extra_fields": {"error": type(e).__name__}})
        return 1
    except Exception as e:
        logger.exception(f"Archiving failed: {e}")
        return 1

    logger.info(f"Archive ready: {out_file}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="distpack",
        description="Create a reproducible archive of a directory"
    )
    parser.add_argument("source", type=Path, help="Directory to archive")
    parser.add_argument(
        "--format",
        required=True,
        choices=[f.value for f in ArchiveFormat],
        help="Archive format"
    )
    parser.add_argument("--output", "-o", type=Path, required=True, help="Archive file to write")
    parser.add_argument(
        "--compression",
        choices=["store", "normal", "maximum"],
        help="Compression level (overrides config)"
    )
    parser.add_argument(
        "--without-dir",
        action="store_true",
        help="Put the directory contents at the archive root"
    )
    parser.add_argument("--no-solid", action="store_true", help="7z: compress files separately")
    parser.add_argument("--no-header-compression", action="store_true", help="7z: leave headers uncompressed")
    parser.add_argument("--dict-size", type=_positive_int, help="LZMA dictionary size in MB")
    parser.add_argument(
        "--exclude",
        action="append",
        metavar="PATTERN",
        help="Glob pattern to leave out (repeatable)"
    )
    parser.add_argument(
        "--method",
        choices=["Copy", "LZMA", "Deflate", "DEFAULT"],
        help="Explicit compression method; DEFAULT passes none"
    )
    parser.add_argument(
        "--regular-file",
        action="store_true",
        help="Content is plain data; keep file timestamps and attributes"
    )
    parser.add_argument(
        "--bundle-directory",
        action="store_true",
        help="tar formats: archive the directory itself by name (e.g. a macOS .app)"
    )
    parser.add_argument("--config", type=Path, help="Path to config file (defaults.toml)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the distpack command."""
    args = build_parser().parse_args(argv)

    loader = ConfigLoader(app_name=APP_NAME, config_class=ArchiverConfig)
    try:
        config = loader.load(defaults_path=args.config)
    except ConfigurationError as e:
        setup_logging()
        logging.getLogger(__package__ or __name__).error(e.message)
        return 1

    setup_logging(
        level=config.logging.level,
        format=config.logging.format,
        log_file=Path(config.logging.file) if config.logging.file else None,
    )

    return archive_command(config, args)


if __name__ == "__main__":
    sys.exit(main())
