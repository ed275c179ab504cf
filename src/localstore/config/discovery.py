"""Locate ``localstore.toml`` for a CLI run.

``LOCALSTORE_CONFIG`` (or ``--config``) names the file directly; otherwise
the nearest ``localstore.toml`` in the working directory or one of its
ancestors is used, the way git finds ``.git/``.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "localstore.toml"
CONFIG_ENV_VAR = "LOCALSTORE_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies to *start* (default: cwd), or None.

    A ``LOCALSTORE_CONFIG`` naming a missing file disables discovery.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override).expanduser()
        return path if path.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
