"""Backup statistics — total size and file count of an enumerated file list."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from loguru import logger

from mcbackup.errors import MetadataUnavailableError
from mcbackup.models.backup_record import BackupStatistics


def measure(paths: Sequence[Path], *, strict: bool = False) -> BackupStatistics:
    """
    Sum file sizes and count files.

    Every path is counted. A path whose size cannot be read contributes
    zero bytes, or raises MetadataUnavailableError when *strict*.
    """
    total = 0
    for path in paths:
        try:
            total += path.stat().st_size
        except OSError as e:
            if strict:
                raise MetadataUnavailableError(f"Cannot stat {path}: {e}") from e
            logger.warning(f"Size unavailable, counting as 0 bytes: {path}: {e}")

    return BackupStatistics(total_bytes=total, file_count=len(paths))
