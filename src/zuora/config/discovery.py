"""Locate ``zuora.toml``.

``ZUORA_CONFIG`` names the file outright. Without it, the nearest
``zuora.toml`` between the start directory and the filesystem root wins,
the way git finds ``.git``.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

CONFIG_FILENAME = "zuora.toml"
CONFIG_ENV_VAR = "ZUORA_CONFIG"


def _walk_up(start: Path) -> Iterator[Path]:
    current = start.resolve()
    yield current
    yield from current.parents


def find_config(start: Path | None = None) -> Path | None:
    """Path of the config file to load, or None.

    A ``ZUORA_CONFIG`` naming a missing file yields None rather than
    falling back to discovery.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override).expanduser()
        return path if path.is_file() else None

    for directory in _walk_up(start or Path.cwd()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
