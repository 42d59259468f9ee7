"""Locate depcontainer.toml.

Resolution order: ``--config`` (handled by the caller), the
``DEPCONTAINER_CONFIG`` env var, then the nearest depcontainer.toml in the
start directory or any of its ancestors.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "depcontainer.toml"
CONFIG_ENV_VAR = "DEPCONTAINER_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies to *start* (default: cwd), or None.

    A set but dangling ``DEPCONTAINER_CONFIG`` disables discovery instead
    of falling back to the walk-up search.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
