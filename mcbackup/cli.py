"""Command-line entry point — builds options from config and flags, then runs a backup.

Usage:
    mcbackup [--minecraft-path DIR] [--destination DIR] [--folder NAME ...]
             [--compress | --no-compress] [--exclude EXT ...] [--[no-]strict] [--[no-]sort]
             [--save-defaults]

Examples:
    mcbackup --folder saves --folder screenshots --exclude tmp
    mcbackup --minecraft-path ~/.minecraft --destination /mnt/backup --no-compress
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from loguru import logger

from mcbackup.config import Config, options_from_config
from mcbackup.core.backup import ArchiveBuilder
from mcbackup.errors import BackupError
from mcbackup.logger import setup_logger
from mcbackup.models.folder import Folder
from mcbackup.utils import format_size


def _folder(text: str) -> Folder:
    try:
        return Folder.parse(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mcbackup",
        description="Back up Minecraft folders into a single archive.",
    )
    parser.add_argument("--config-dir", type=Path, help="directory holding config.json")
    parser.add_argument("--minecraft-path", type=Path, help="installation root")
    parser.add_argument("--destination", type=Path, help="directory for the archive")
    parser.add_argument(
        "--folder",
        dest="folders",
        action="append",
        type=_folder,
        metavar="NAME",
        help=f"folder to back up, repeatable ({', '.join(f.subdir for f in Folder)})",
    )
    parser.add_argument(
        "--compress",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="deflate entries and name the archive backup.zip",
    )
    parser.add_argument(
        "--exclude",
        dest="excluded",
        action="append",
        default=[],
        metavar="EXT",
        help="skip files with this extension, repeatable",
    )
    parser.add_argument(
        "--strict",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="fail on unreadable folders or files",
    )
    parser.add_argument(
        "--sort",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="archive entries in name order",
    )
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="store the effective options in config.json for later runs",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log every archived file")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = Config(args.config_dir) if args.config_dir else Config()
    setup_logger(config.log_dir, verbose=args.verbose)

    builder = options_from_config(config)
    if args.minecraft_path:
        builder.base_path = args.minecraft_path
    if args.destination:
        builder.destination_path = args.destination
    if args.folders:
        builder.folders = args.folders
    if args.compress is not None:
        builder.set_compress(args.compress)
    if args.strict is not None:
        builder.set_strict(args.strict)
    if args.sort is not None:
        builder.set_sort_entries(args.sort)
    try:
        builder.add_excluded_extensions(args.excluded)
    except ValueError as e:
        logger.error(str(e))
        return 2

    options = builder.build()
    if not options.folders:
        logger.error("No folders selected")
        return 2
    if args.save_defaults:
        config.remember(options)
        logger.info(f"Saved defaults to {config.path}")

    try:
        summary = ArchiveBuilder(observer=lambda p: logger.debug(f"Found {p}")).build(options)
    except BackupError as e:
        logger.error(f"Backup failed: {e}")
        return 1

    record = summary.record
    logger.info(
        f"{summary.archive_path}: {record.file_count} file(s), "
        f"{format_size(record.size_in_bytes)} -> {format_size(summary.size)}"
    )
    if summary.skipped:
        logger.warning(f"{len(summary.skipped)} file(s) skipped")
    return 0
