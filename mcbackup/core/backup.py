"""Archive builder — packs the selected folders and a JSON metadata record into one archive."""

from __future__ import annotations

import contextlib
import os
import zipfile
from pathlib import Path, PurePosixPath
from typing import Callable

from loguru import logger

from mcbackup.core.enumerator import FileObserver, enumerate_files
from mcbackup.core.folder_resolver import resolve
from mcbackup.core.statistics import measure
from mcbackup.errors import (
    ArchiveFinalizeError,
    ArchiveWriteError,
    DestinationUnwritableError,
)
from mcbackup.models.backup_options import BackupOptions
from mcbackup.models.backup_record import ArchiveSummary, MetadataRecord, SkippedFile

METADATA_ENTRY = "backup_data.json"


def entry_name(path: Path, base: Path) -> str:
    """
    Archive entry name for *path*: relative to *base*, POSIX separators.

    A path outside *base* keeps its own path with the anchor removed, so no
    entry name is ever absolute. Bytes that are not valid UTF-8 in a file
    name become U+FFFD, since ZIP entry names are stored as UTF-8.
    """
    try:
        relative = path.relative_to(base)
    except ValueError:
        relative = Path(*path.parts[1:]) if path.anchor else path
    name = PurePosixPath(*relative.parts).as_posix()
    return os.fsencode(name).decode("utf-8", "replace")


class ArchiveBuilder:
    """
    Backup pipeline root.

    Steps run strictly in order and nothing is rolled back: a failure leaves
    whatever was already written on disk, including an orphaned
    ``backup_data.json`` if the archive was never finished.
    """

    def __init__(
        self,
        observer: FileObserver | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._observer = observer
        self._clock = clock

    def build(self, options: BackupOptions) -> ArchiveSummary:
        """Run a backup. Raises BackupError subclasses on fatal failures."""
        base = options.base_path.absolute()
        directories = resolve(base, options.folders)
        files = enumerate_files(
            directories,
            options.excluded_extensions,
            strict=options.strict,
            sort=options.sort_entries,
            observer=self._observer,
        )
        # The archive and metadata file being written are never archived themselves.
        own_outputs = {options.archive_path.resolve(), options.metadata_path.resolve()}
        files = [p for p in files if p.resolve() not in own_outputs]
        stats = measure(files, strict=options.strict)
        logger.info(f"Backing up {stats.file_count} file(s), {stats.total_bytes} bytes from {base}")

        record = MetadataRecord.build(
            options, stats.total_bytes, stats.file_count, clock=self._clock
        )
        metadata_path = options.metadata_path
        self._write_metadata(record, metadata_path)

        archive_path = options.archive_path
        summary = ArchiveSummary(archive_path=archive_path, record=record)
        zf = self._open_archive(archive_path, options.compress)
        try:
            self._write_entries(zf, files, base, options.strict, summary)
            self._add_metadata(zf, metadata_path)
        except BaseException:
            # Release the handle; the partial archive stays on disk.
            with contextlib.suppress(OSError):
                zf.close()
            logger.error(
                f"Backup incomplete, partial archive left at {archive_path}"
                f" (metadata file: {metadata_path})"
            )
            raise

        try:
            zf.close()
        except OSError as e:
            logger.error(f"Failed to finalize archive {archive_path}: {e}")
            raise ArchiveFinalizeError(f"Cannot finalize {archive_path}: {e}") from e

        logger.info(f"Created backup: {archive_path} ({len(summary.entry_names)} file(s))")
        return summary

    def _write_metadata(self, record: MetadataRecord, metadata_path: Path) -> None:
        """Persist the standalone metadata file ahead of the archive."""
        try:
            metadata_path.parent.mkdir(parents=True, exist_ok=True)
            with open(metadata_path, "w", encoding="utf-8") as f:
                f.write(record.serialize())
        except (OSError, UnicodeError) as e:
            logger.error(f"Cannot write metadata file {metadata_path}: {e}")
            raise DestinationUnwritableError(f"Cannot write {metadata_path}: {e}") from e

    def _open_archive(self, archive_path: Path, compress: bool) -> zipfile.ZipFile:
        method = zipfile.ZIP_DEFLATED if compress else zipfile.ZIP_STORED
        try:
            # Pre-1980 mtimes are clamped rather than rejected.
            return zipfile.ZipFile(archive_path, "w", method, strict_timestamps=False)
        except OSError as e:
            logger.error(f"Cannot create archive {archive_path}: {e}")
            raise DestinationUnwritableError(f"Cannot create {archive_path}: {e}") from e

    def _write_entries(
        self,
        zf: zipfile.ZipFile,
        files: list[Path],
        base: Path,
        strict: bool,
        summary: ArchiveSummary,
    ) -> None:
        """Write one entry per file, in enumeration order."""
        entries: dict[str, Path] = {}
        for path in files:
            name = entry_name(path, base)
            if name in entries:
                # Last write wins; the entry keeps its first position.
                logger.warning(f"Duplicate entry {name}: {entries[name]} replaced by {path}")
            entries[name] = path

        for name, path in entries.items():
            try:
                zf.write(path, name)
            except FileNotFoundError as e:
                if strict:
                    logger.error(f"File vanished before archiving: {path}")
                    raise ArchiveWriteError(f"Cannot archive {path}: {e}") from e
                logger.warning(f"File vanished before archiving, skipped: {path}")
                summary.skipped.append(SkippedFile(path=str(path), reason=str(e)))
                continue
            except OSError as e:
                logger.error(f"Failed to archive {path}: {e}")
                raise ArchiveWriteError(f"Cannot archive {path}: {e}") from e
            summary.entry_names.append(name)
            logger.debug(f"Archived {name}")

    def _add_metadata(self, zf: zipfile.ZipFile, metadata_path: Path) -> None:
        """Fold the standalone metadata file into the archive, then delete it."""
        if not metadata_path.exists():
            logger.warning(f"Metadata file missing, archive has no {METADATA_ENTRY}: {metadata_path}")
            return
        try:
            zf.write(metadata_path, METADATA_ENTRY)
            metadata_path.unlink()
        except OSError as e:
            logger.error(f"Failed to archive metadata {metadata_path}: {e}")
            raise ArchiveWriteError(f"Cannot archive {metadata_path}: {e}") from e
