"""Folder resolver — map folder tags to directories under the installation root."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from mcbackup.models.folder import Folder


def resolve(base_path: str | Path, folders: Iterable[Folder]) -> list[Path]:
    """Return ``base_path / <subdir>`` for each tag, in input order.

    Pure: the directories are not checked for existence.
    """
    base = Path(base_path)
    return [base / folder.subdir for folder in folders]
