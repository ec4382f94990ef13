"""Backup record models."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

from mcbackup.models.backup_options import BackupOptions


@dataclass(frozen=True)
class BackupStatistics:
    """Aggregate size and count of the files selected for a run."""

    total_bytes: int = 0
    file_count: int = 0


@dataclass(frozen=True)
class MetadataOptions:
    """The subset of BackupOptions recorded in the archive."""

    folder_options: tuple[str, ...]
    destination_path: str
    compress: bool
    excluded_extensions: tuple[str, ...]

    @classmethod
    def from_options(cls, options: BackupOptions) -> MetadataOptions:
        return cls(
            folder_options=tuple(f.value for f in options.folders),
            destination_path=str(options.destination_path),
            compress=options.compress,
            excluded_extensions=tuple(options.excluded_extensions),
        )


def _utc_now() -> float:
    return datetime.now(tz=timezone.utc).timestamp()


@dataclass(frozen=True)
class MetadataRecord:
    """Snapshot of one backup run, stored as ``backup_data.json``."""

    timestamp: int
    size_in_bytes: int
    file_count: int
    options: MetadataOptions

    @classmethod
    def build(
        cls,
        options: BackupOptions,
        total_bytes: int,
        file_count: int,
        *,
        clock: Callable[[], float] | None = None,
    ) -> MetadataRecord:
        """Capture the current time; a pre-epoch clock is recorded as 0."""
        now = (clock or _utc_now)()
        return cls(
            timestamp=max(0, int(now)),
            size_in_bytes=total_bytes,
            file_count=file_count,
            options=MetadataOptions.from_options(options),
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        opts = data["options"]
        opts["folder_options"] = list(opts["folder_options"])
        opts["excluded_extensions"] = list(opts["excluded_extensions"])
        return data

    def serialize(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2)

    @classmethod
    def parse(cls, text: str) -> MetadataRecord:
        """Read a serialized record back. Raises ValueError on malformed input."""
        try:
            data = json.loads(text)
            opts = data["options"]
            return cls(
                timestamp=int(data["timestamp"]),
                size_in_bytes=int(data["size_in_bytes"]),
                file_count=int(data["file_count"]),
                options=MetadataOptions(
                    folder_options=tuple(opts["folder_options"]),
                    destination_path=str(opts["destination_path"]),
                    compress=bool(opts["compress"]),
                    excluded_extensions=tuple(opts["excluded_extensions"]),
                ),
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed backup metadata: {e}") from e


@dataclass(frozen=True)
class SkippedFile:
    """A file left out of the archive during a best-effort run."""

    path: str
    reason: str


@dataclass
class ArchiveSummary:
    """Result of a completed backup run."""

    archive_path: Path
    record: MetadataRecord
    entry_names: list[str] = field(default_factory=list)
    skipped: list[SkippedFile] = field(default_factory=list)

    @property
    def size(self) -> int:
        return self.archive_path.stat().st_size
