"""Application context for dependency injection.

This module separates object creation from object use, enabling testability
and reducing coupling in CLI commands.

The storage dependency is typed using the Adapter protocol rather than
the concrete LocalAdapter, so test doubles can be injected without
inheritance.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from localstore.config import ROOT_ENV_VAR, StoreConfig
from localstore.protocols import Adapter


@dataclass
class AppContext:
    """Container for application dependencies.

    Provides a single injection point for the services used by CLI commands.
    """

    adapter: Adapter
    config: StoreConfig


def resolve_config(
    root: Path | None = None,
    config_file: Path | None = None,
    mode: int | str | None = None,
) -> StoreConfig:
    """Build the configuration from CLI arguments and the environment.

    An explicit root wins over the config file, which wins over the
    LOCALSTORE_ROOT environment variable.

    Args:
        root: Root directory given on the command line.
        config_file: JSON config file given on the command line.
        mode: Directory mode override, as an int or an octal string.

    Returns:
        Resolved StoreConfig.

    Raises:
        ValueError: If no root can be determined.
        ValidationError: If the mode override is not a valid mode.
    """
    if root is not None:
        config = StoreConfig(root=root)
    elif config_file is not None:
        config = StoreConfig.from_file(config_file)
    elif os.environ.get(ROOT_ENV_VAR):
        config = StoreConfig(root=Path(os.environ[ROOT_ENV_VAR]))
    else:
        raise ValueError(f"No storage root given. Use --root, --config or {ROOT_ENV_VAR}.")

    if mode is not None:
        config = StoreConfig.model_validate({**config.model_dump(), "mode": mode})
    return config


def create_context(
    root: Path | None = None,
    config_file: Path | None = None,
    mode: int | str | None = None,
) -> AppContext:
    """Factory for application dependencies.

    Creates the adapter with proper wiring. Use this in production code.
    For tests, construct AppContext directly with test doubles.

    Args:
        root: Override root directory.
        config_file: Optional JSON config file.
        mode: Optional directory mode override.

    Returns:
        Configured AppContext.

    Raises:
        ValueError: If no root can be determined.
        StorageFailure: If the root directory does not exist.
    """
    from localstore.adapter import LocalAdapter

    config = resolve_config(root, config_file, mode)
    return AppContext(adapter=LocalAdapter.from_config(config), config=config)
