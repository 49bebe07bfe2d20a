"""Tests for the storage backends and model (de)serialisation helpers."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from git_ignore.exceptions import ConfigError, StorageError
from git_ignore.models import UserData
from git_ignore.storage import FileStorage, MemoryStorage, dump_model, load_model


class TestFileStorage:
    def test_missing_file_reads_none(self, tmp_path: Path) -> None:
        assert FileStorage(tmp_path / "x.json").read() is None

    def test_write_then_read(self, tmp_path: Path) -> None:
        storage = FileStorage(tmp_path / "dir" / "x.json")
        storage.write("hello")
        assert storage.read() == "hello"

    def test_write_failure_is_storage_error(self, tmp_path: Path) -> None:
        storage = FileStorage(tmp_path / "x.json")
        storage.write("valid")
        with patch("git_ignore.config.os.replace", side_effect=OSError("read-only")):
            with pytest.raises(StorageError, match="read-only"):
                storage.write("new")
        assert storage.read() == "valid"

    def test_unreadable_file_is_storage_error(self, tmp_path: Path) -> None:
        storage = FileStorage(tmp_path / "x.json")
        storage.write("data")
        with patch.object(Path, "read_text", side_effect=PermissionError("denied")):
            with pytest.raises(StorageError, match="denied"):
                storage.read()


class TestMemoryStorage:
    def test_counts_writes(self) -> None:
        storage = MemoryStorage()
        storage.write("a")
        storage.write("b")
        assert storage.read() == "b"
        assert storage.writes == 2


class TestModelHelpers:
    def test_load_missing_gives_default(self) -> None:
        assert load_model(MemoryStorage(), UserData) == UserData()

    def test_error_class_is_configurable(self) -> None:
        with pytest.raises(ConfigError):
            load_model(MemoryStorage("[]"), UserData, ConfigError)
        with pytest.raises(StorageError):
            load_model(MemoryStorage("[]"), UserData)

    def test_dump_is_pretty_json(self) -> None:
        text = dump_model(UserData(aliases={"w": ["go"]}))
        assert text.endswith("\n")
        assert '  "aliases"' in text
