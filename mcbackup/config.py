"""Backup defaults — a flat ``config.json`` merged over built-in values."""

from __future__ import annotations

import copy
import json
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from loguru import logger

from mcbackup.models.backup_options import BackupOptions, BackupOptionsBuilder
from mcbackup.models.folder import Folder

DEFAULT_CONFIG_DIR = Path.home() / ".mcbackup"


class Config:
    """
    Persistent backup defaults.

    Unknown keys in the file are ignored with a warning. Writes go through a
    temporary file so a crash never leaves a half-written ``config.json``.
    """

    DEFAULTS: dict[str, Any] = {
        "minecraft_path": str(Path.home() / ".minecraft"),
        "destination_path": "",
        "folders": ["Saves", "Config"],
        "compress": True,
        "excluded_extensions": [],
        "strict": False,
        "sort_entries": False,
        "log_dir": "",
    }

    def __init__(self, config_dir: Path | None = None) -> None:
        self._dir = config_dir or DEFAULT_CONFIG_DIR
        self._path = self._dir / "config.json"
        self._lock = threading.Lock()
        self._defer_save = False
        self._data = self._load()

    def _load(self) -> dict[str, Any]:
        data = copy.deepcopy(self.DEFAULTS)
        if not self._path.exists():
            return data
        try:
            with open(self._path, encoding="utf-8") as f:
                stored = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Failed to load {self._path}, using defaults: {e}")
            return data
        if not isinstance(stored, dict):
            logger.warning(f"Ignoring {self._path}: expected a JSON object")
            return data

        for key, value in stored.items():
            if key in data:
                data[key] = value
            else:
                logger.warning(f"Ignoring unknown config key {key!r}")
        return data

    def _save(self) -> None:
        if self._defer_save:
            return
        with self._lock:
            self._dir.mkdir(parents=True, exist_ok=True)
            tmp_path = self._path.with_suffix(".tmp")
            try:
                with open(tmp_path, "w", encoding="utf-8") as f:
                    json.dump(self._data, f, ensure_ascii=False, indent=2)
                tmp_path.replace(self._path)
            except OSError as e:
                logger.error(f"Failed to save config: {e}")
                tmp_path.unlink(missing_ok=True)

    @contextmanager
    def batch_update(self) -> Iterator[None]:
        """Coalesce several changes into a single write."""
        self._defer_save = True
        try:
            yield
        finally:
            self._defer_save = False
            self._save()

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        if key not in self.DEFAULTS:
            raise KeyError(f"Unknown config key: {key!r}")
        self._data[key] = value
        self._save()

    def remember(self, options: BackupOptions) -> None:
        """Store *options* as the defaults for the next run."""
        with self.batch_update():
            self.minecraft_path = options.base_path
            self.destination_path = options.destination_path
            self.folders = list(options.folders)
            self.compress = options.compress
            self.excluded_extensions = list(options.excluded_extensions)
            self.strict = options.strict
            self.sort_entries = options.sort_entries

    # ── Typed properties ──

    @property
    def path(self) -> Path:
        return self._path

    @property
    def minecraft_path(self) -> Path:
        return Path(self._data.get("minecraft_path") or self.DEFAULTS["minecraft_path"])

    @minecraft_path.setter
    def minecraft_path(self, value: Path) -> None:
        self.set("minecraft_path", str(value))

    @property
    def destination_path(self) -> Path:
        """Archive destination; defaults to ``<config_dir>/backups``."""
        raw = self._data.get("destination_path", "")
        return Path(raw) if raw else self._dir / "backups"

    @destination_path.setter
    def destination_path(self, value: Path | None) -> None:
        self.set("destination_path", str(value) if value else "")

    @property
    def folders(self) -> list[Folder]:
        result: list[Folder] = []
        for name in self._data.get("folders", []):
            try:
                result.append(Folder.parse(name))
            except ValueError:
                logger.warning(f"Ignoring unknown folder in config: {name!r}")
        return result

    @folders.setter
    def folders(self, value: list[Folder]) -> None:
        self.set("folders", [f.value for f in value])

    @property
    def compress(self) -> bool:
        return bool(self._data.get("compress", True))

    @compress.setter
    def compress(self, value: bool) -> None:
        self.set("compress", value)

    @property
    def excluded_extensions(self) -> list[str]:
        return list(self._data.get("excluded_extensions", []))

    @excluded_extensions.setter
    def excluded_extensions(self, value: list[str]) -> None:
        self.set("excluded_extensions", list(value))

    @property
    def strict(self) -> bool:
        return bool(self._data.get("strict", False))

    @strict.setter
    def strict(self, value: bool) -> None:
        self.set("strict", value)

    @property
    def sort_entries(self) -> bool:
        return bool(self._data.get("sort_entries", False))

    @sort_entries.setter
    def sort_entries(self, value: bool) -> None:
        self.set("sort_entries", value)

    @property
    def log_dir(self) -> Path:
        raw = self._data.get("log_dir", "")
        return Path(raw) if raw else self._dir / "logs"


def options_from_config(config: Config) -> BackupOptionsBuilder:
    """Start an options builder from the configured defaults."""
    builder = BackupOptionsBuilder(
        base_path=config.minecraft_path,
        folders=config.folders,
        destination_path=config.destination_path,
        compress=config.compress,
        strict=config.strict,
        sort_entries=config.sort_entries,
    )
    return builder.add_excluded_extensions(config.excluded_extensions)
