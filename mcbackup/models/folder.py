"""Folder tags — the fixed data categories of a Minecraft installation."""

from __future__ import annotations

from enum import StrEnum


class Folder(StrEnum):
    """Selectable folder category."""

    SAVES = "Saves"
    CONFIG = "Config"
    SCREENSHOTS = "Screenshots"
    MODS = "Mods"
    LOGS = "Logs"
    BACKUPS = "Backups"

    @property
    def subdir(self) -> str:
        """Directory name under the installation root."""
        return self.value.lower()

    @classmethod
    def parse(cls, text: str) -> Folder:
        """Parse a tag name or subdirectory name, case-insensitively."""
        key = text.strip().lower()
        for folder in cls:
            if key in (folder.value.lower(), folder.name.lower()):
                return folder
        raise ValueError(f"Unknown folder: {text!r}")
