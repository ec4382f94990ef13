"""Tests for the folder resolver and Folder tags."""

from __future__ import annotations

from pathlib import Path

import pytest

from mcbackup.core.folder_resolver import resolve
from mcbackup.models.folder import Folder


class TestResolve:
    def test_one_path_per_tag_in_order(self) -> None:
        base = Path("/games/minecraft")
        result = resolve(base, [Folder.MODS, Folder.SAVES, Folder.LOGS])
        assert result == [base / "mods", base / "saves", base / "logs"]

    def test_all_fixed_names(self) -> None:
        result = resolve("/mc", list(Folder))
        assert [p.name for p in result] == [
            "saves",
            "config",
            "screenshots",
            "mods",
            "logs",
            "backups",
        ]

    def test_duplicates_are_kept(self) -> None:
        result = resolve("/mc", [Folder.SAVES, Folder.SAVES])
        assert result == [Path("/mc/saves"), Path("/mc/saves")]

    def test_no_filesystem_access(self, tmp_path: Path) -> None:
        missing = tmp_path / "does-not-exist"
        assert resolve(missing, [Folder.CONFIG]) == [missing / "config"]


class TestFolderParse:
    @pytest.mark.parametrize("text", ["Saves", "saves", "SAVES", " saves "])
    def test_case_insensitive(self, text: str) -> None:
        assert Folder.parse(text) is Folder.SAVES

    def test_unknown(self) -> None:
        with pytest.raises(ValueError):
            Folder.parse("resourcepacks")

    def test_value_is_tag_name(self) -> None:
        assert Folder.SCREENSHOTS.value == "Screenshots"
        assert Folder.SCREENSHOTS.subdir == "screenshots"
