"""Tests for BackupOptions and its builder."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from mcbackup.models.backup_options import BackupOptionsBuilder, normalize_extension
from mcbackup.models.folder import Folder


@pytest.fixture
def builder() -> BackupOptionsBuilder:
    return BackupOptionsBuilder(
        base_path=Path("/mc"),
        folders=[Folder.SAVES, Folder.CONFIG],
        destination_path=Path("/out"),
    )


class TestBuilder:
    def test_archive_name_follows_compress(self, builder: BackupOptionsBuilder) -> None:
        assert builder.build().archive_path == Path("/out/backup")
        assert builder.set_compress(True).build().archive_path == Path("/out/backup.zip")

    def test_metadata_path(self, builder: BackupOptionsBuilder) -> None:
        assert builder.build().metadata_path == Path("/out/backup_data.json")

    def test_leading_dot_normalized(self, builder: BackupOptionsBuilder) -> None:
        builder.add_excluded_extension(".tmp").add_excluded_extension("tmp")
        assert builder.build().excluded_extensions == ("tmp",)

    def test_extension_case_preserved(self, builder: BackupOptionsBuilder) -> None:
        builder.add_excluded_extensions(["LOG", "log"])
        assert builder.build().excluded_extensions == ("LOG", "log")

    def test_empty_extension_rejected(self, builder: BackupOptionsBuilder) -> None:
        with pytest.raises(ValueError):
            builder.add_excluded_extension(".")

    def test_duplicate_folders_collapsed(self) -> None:
        options = BackupOptionsBuilder(
            base_path=Path("/mc"),
            folders=[Folder.MODS, Folder.SAVES, Folder.MODS],
            destination_path=Path("/out"),
        ).build()
        assert options.folders == (Folder.MODS, Folder.SAVES)

    def test_snapshot_is_frozen(self, builder: BackupOptionsBuilder) -> None:
        options = builder.build()
        with pytest.raises(dataclasses.FrozenInstanceError):
            options.compress = True  # type: ignore[misc]

    def test_builder_changes_do_not_leak(self, builder: BackupOptionsBuilder) -> None:
        options = builder.build()
        builder.set_compress(True).add_excluded_extension("tmp")
        assert options.compress is False
        assert options.excluded_extensions == ()


class TestNormalizeExtension:
    def test_strips_dots(self) -> None:
        assert normalize_extension("..bak") == "bak"
