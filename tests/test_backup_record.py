"""Tests for the metadata record."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from mcbackup.models.backup_options import BackupOptionsBuilder
from mcbackup.models.backup_record import MetadataRecord
from mcbackup.models.folder import Folder


@pytest.fixture
def options():
    return (
        BackupOptionsBuilder(
            base_path=Path("/mc"),
            folders=[Folder.SAVES, Folder.SCREENSHOTS],
            destination_path=Path("/out/dir \"quoted\""),
            compress=True,
        )
        .add_excluded_extension("tmp")
        .build()
    )


class TestBuild:
    def test_fields(self, options) -> None:
        record = MetadataRecord.build(options, 10, 1, clock=lambda: 1700000000.7)
        assert record.timestamp == 1700000000
        assert record.size_in_bytes == 10
        assert record.file_count == 1
        assert record.options.folder_options == ("Saves", "Screenshots")
        assert record.options.compress is True
        assert record.options.excluded_extensions == ("tmp",)

    def test_pre_epoch_clock_is_zero(self, options) -> None:
        record = MetadataRecord.build(options, 0, 0, clock=lambda: -5.0)
        assert record.timestamp == 0

    def test_default_clock_is_current(self, options) -> None:
        record = MetadataRecord.build(options, 0, 0)
        assert record.timestamp > 1_600_000_000


class TestSerialize:
    def test_valid_json_shape(self, options) -> None:
        record = MetadataRecord.build(options, 42, 3, clock=lambda: 100.0)
        data = json.loads(record.serialize())
        assert data == {
            "timestamp": 100,
            "size_in_bytes": 42,
            "file_count": 3,
            "options": {
                "folder_options": ["Saves", "Screenshots"],
                "destination_path": str(Path("/out/dir \"quoted\"")),
                "compress": True,
                "excluded_extensions": ["tmp"],
            },
        }

    def test_round_trip(self, options) -> None:
        record = MetadataRecord.build(options, 42, 3)
        assert MetadataRecord.parse(record.serialize()) == record

    def test_parse_malformed(self) -> None:
        with pytest.raises(ValueError):
            MetadataRecord.parse('{"timestamp": 1}')
        with pytest.raises(ValueError):
            MetadataRecord.parse("not json")
