"""Backup options — a mutable builder that freezes into an immutable snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from mcbackup.models.folder import Folder


def normalize_extension(extension: str) -> str:
    """Strip leading dots: ``".tmp"`` and ``"tmp"`` are the same extension."""
    normalized = extension.strip().lstrip(".")
    if not normalized:
        raise ValueError(f"Invalid extension: {extension!r}")
    return normalized


@dataclass(frozen=True)
class BackupOptions:
    """Configuration snapshot consumed by the backup pipeline."""

    base_path: Path
    folders: tuple[Folder, ...]
    destination_path: Path
    compress: bool = False
    excluded_extensions: tuple[str, ...] = ()
    strict: bool = False
    sort_entries: bool = False

    @property
    def archive_path(self) -> Path:
        name = "backup.zip" if self.compress else "backup"
        return self.destination_path / name

    @property
    def metadata_path(self) -> Path:
        return self.destination_path / "backup_data.json"


@dataclass
class BackupOptionsBuilder:
    """
    Collects options before a run.

    Compression and the exclusion list may change freely here; ``build()``
    hands the pipeline a frozen copy.
    """

    base_path: Path
    folders: list[Folder]
    destination_path: Path
    compress: bool = False
    excluded_extensions: list[str] = field(default_factory=list)
    strict: bool = False
    sort_entries: bool = False

    def set_compress(self, compress: bool) -> BackupOptionsBuilder:
        self.compress = compress
        return self

    def add_excluded_extension(self, extension: str) -> BackupOptionsBuilder:
        ext = normalize_extension(extension)
        if ext not in self.excluded_extensions:
            self.excluded_extensions.append(ext)
        return self

    def add_excluded_extensions(self, extensions: Iterable[str]) -> BackupOptionsBuilder:
        for ext in extensions:
            self.add_excluded_extension(ext)
        return self

    def set_strict(self, strict: bool) -> BackupOptionsBuilder:
        self.strict = strict
        return self

    def set_sort_entries(self, sort_entries: bool) -> BackupOptionsBuilder:
        self.sort_entries = sort_entries
        return self

    def build(self) -> BackupOptions:
        # dict.fromkeys keeps first-seen order
        folders = tuple(dict.fromkeys(self.folders))
        excluded = tuple(dict.fromkeys(normalize_extension(e) for e in self.excluded_extensions))
        return BackupOptions(
            base_path=Path(self.base_path),
            folders=folders,
            destination_path=Path(self.destination_path),
            compress=self.compress,
            excluded_extensions=excluded,
            strict=self.strict,
            sort_entries=self.sort_entries,
        )
