"""Tests for config module."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from localstore.config import DEFAULT_MODE, StoreConfig


class TestStoreConfig:
    """Tests for StoreConfig model."""

    def test_default_mode(self, tmp_path: Path) -> None:
        config = StoreConfig(root=tmp_path)
        assert config.mode == DEFAULT_MODE == 0o777

    def test_octal_string_mode(self, tmp_path: Path) -> None:
        """Test octal strings are parsed as octal."""
        assert StoreConfig(root=tmp_path, mode="0755").mode == 0o755
        assert StoreConfig(root=tmp_path, mode="0o700").mode == 0o700

    def test_invalid_mode_string(self, tmp_path: Path) -> None:
        with pytest.raises(ValidationError):
            StoreConfig(root=tmp_path, mode="rwx")

    def test_mode_out_of_range(self, tmp_path: Path) -> None:
        with pytest.raises(ValidationError):
            StoreConfig(root=tmp_path, mode=0o17777)

    def test_alias(self, tmp_path: Path) -> None:
        """Test directoryMode is accepted as an alias."""
        config = StoreConfig.model_validate({"root": str(tmp_path), "directoryMode": "0750"})
        assert config.mode == 0o750

    def test_is_frozen(self, tmp_path: Path) -> None:
        config = StoreConfig(root=tmp_path)
        with pytest.raises(ValidationError):
            config.mode = 0o700


class TestFromFile:
    """Tests for StoreConfig.from_file."""

    def test_load(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text(json.dumps({"root": "/srv/store", "mode": 448}))

        config = StoreConfig.from_file(path)

        assert config.root == Path("/srv/store")
        assert config.mode == 0o700

    def test_relative_root_is_resolved_against_file(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text(json.dumps({"root": "data"}))

        assert StoreConfig.from_file(path).root == tmp_path / "data"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            StoreConfig.from_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text("{not json")
        with pytest.raises(ValueError):
            StoreConfig.from_file(path)
