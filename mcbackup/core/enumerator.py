"""File enumerator — flat listing of eligible files in the selected folders."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Collection, Iterable

from loguru import logger

from mcbackup.errors import FolderUnreadableError

FileObserver = Callable[[Path], None]


def file_extension(name: str) -> str:
    """Text after the last dot of *name*, or ``""`` when there is none."""
    _, dot, ext = name.rpartition(".")
    return ext if dot else ""


def enumerate_files(
    directories: Iterable[Path],
    excluded_extensions: Collection[str] = (),
    *,
    strict: bool = False,
    sort: bool = False,
    observer: FileObserver | None = None,
) -> list[Path]:
    """
    List regular files directly inside each directory, in directory order.

    Subdirectories, symlinks to directories and special files are skipped,
    and so is any file whose extension is in *excluded_extensions*
    (case-sensitive). A missing or unreadable directory is skipped, or raises
    FolderUnreadableError when *strict*.

    Entry order within a directory is whatever the filesystem yields unless
    *sort* is set, in which case entries are ordered by name.
    """
    excluded = set(excluded_extensions)
    files: list[Path] = []

    for directory in directories:
        try:
            entries = list(directory.iterdir())
        except OSError as e:
            if strict:
                raise FolderUnreadableError(f"Cannot read folder {directory}: {e}") from e
            logger.warning(f"Skipping unreadable folder {directory}: {e}")
            continue

        if sort:
            entries.sort(key=lambda p: p.name)

        for entry in entries:
            try:
                regular = entry.is_file()
            except OSError as e:
                # Listable but not searchable: names are visible, stat fails.
                if strict:
                    raise FolderUnreadableError(f"Cannot stat {entry}: {e}") from e
                logger.warning(f"Skipping unreadable entry {entry}: {e}")
                continue
            if not regular:
                continue
            if file_extension(entry.name) in excluded:
                logger.debug(f"Excluded by extension: {entry}")
                continue
            path = entry.absolute()
            files.append(path)
            if observer is not None:
                observer(path)

    return files
