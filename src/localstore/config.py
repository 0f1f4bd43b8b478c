"""Adapter configuration."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Environment variable the CLI reads the root directory from
ROOT_ENV_VAR = "LOCALSTORE_ROOT"

DEFAULT_MODE = 0o777


class StoreConfig(BaseModel):
    """Configuration of a local storage adapter."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    root: Path
    mode: int = Field(default=DEFAULT_MODE, ge=0, le=0o7777, alias="directoryMode")

    @field_validator("mode", mode="before")
    @classmethod
    def _parse_octal(cls, value: Any) -> Any:
        """Accept octal strings such as "0755" or "0o755"."""
        if isinstance(value, str):
            text = value.strip().lower().removeprefix("0o")
            try:
                return int(text, 8)
            except ValueError as e:
                raise ValueError(f"Invalid octal mode: {value!r}") from e
        return value

    @classmethod
    def from_file(cls, path: Path) -> StoreConfig:
        """Load configuration from a JSON file.

        Relative roots are resolved against the directory of the file.

        Args:
            path: Path to the JSON file.

        Returns:
            Parsed StoreConfig.

        Raises:
            FileNotFoundError: If file doesn't exist.
            ValueError: If JSON is invalid.
        """
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        data = json.loads(path.read_text())
        config = cls.model_validate(data)
        if not config.root.is_absolute():
            config = config.model_copy(update={"root": path.parent / config.root})
        return config
