"""Tests for context module."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from localstore.adapter import LocalAdapter
from localstore.config import ROOT_ENV_VAR, StoreConfig
from localstore.context import AppContext, create_context, resolve_config
from localstore.exceptions import StorageFailure


class TestAppContext:
    """Tests for AppContext dataclass."""

    def test_create_with_all_dependencies(self, tmp_path: Path) -> None:
        """Test creating context with explicit dependencies."""
        adapter = MagicMock()
        config = StoreConfig(root=tmp_path)
        ctx = AppContext(adapter=adapter, config=config)
        assert ctx.adapter is adapter
        assert ctx.config is config


class TestResolveConfig:
    """Tests for resolve_config."""

    def test_explicit_root_wins(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(ROOT_ENV_VAR, "/from/env")
        assert resolve_config(root=tmp_path).root == tmp_path

    def test_config_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ROOT_ENV_VAR, "/from/env")
        path = tmp_path / "store.json"
        path.write_text(json.dumps({"root": "/from/file", "mode": "0700"}))

        config = resolve_config(config_file=path)

        assert config.root == Path("/from/file")
        assert config.mode == 0o700

    def test_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ROOT_ENV_VAR, "/from/env")
        assert resolve_config().root == Path("/from/env")

    def test_mode_override(self, tmp_path: Path) -> None:
        assert resolve_config(root=tmp_path, mode=0o750).mode == 0o750

    def test_mode_override_from_octal_string(self, tmp_path: Path) -> None:
        assert resolve_config(root=tmp_path, mode="0750").mode == 0o750

    def test_mode_override_keeps_config_root(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text(json.dumps({"root": "/from/file", "directoryMode": "0700"}))

        config = resolve_config(config_file=path, mode="0755")

        assert config.root == Path("/from/file")
        assert config.mode == 0o755

    @pytest.mark.parametrize("mode", [-7, "-7", 0o10000, "9z"])
    def test_invalid_mode_override(self, tmp_path: Path, mode: int | str) -> None:
        """Test a mode override is validated like a configured mode."""
        with pytest.raises(ValidationError):
            resolve_config(root=tmp_path, mode=mode)

    def test_no_root(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(ROOT_ENV_VAR, raising=False)
        with pytest.raises(ValueError, match="No storage root"):
            resolve_config()


class TestCreateContext:
    """Tests for create_context factory function."""

    def test_create_context(self, store_root: Path) -> None:
        """Test the factory wires a LocalAdapter over the root."""
        ctx = create_context(root=store_root, mode=0o700)
        assert isinstance(ctx.adapter, LocalAdapter)
        assert ctx.adapter.mode == 0o700
        assert ctx.config.root == store_root

    def test_missing_root(self, tmp_path: Path) -> None:
        with pytest.raises(StorageFailure):
            create_context(root=tmp_path / "missing")
