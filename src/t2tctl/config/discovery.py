"""Locate and read t2tctl.toml.

Lookup order: the ``T2TCTL_CONFIG`` env var, then each directory from the
start path up to the filesystem root.  In every directory ``t2tctl.toml``
wins over the hidden ``.t2tctl.toml``.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from t2tctl.config.models import T2tConfig

CONFIG_FILENAME = "t2tctl.toml"
HIDDEN_CONFIG_FILENAME = ".t2tctl.toml"
CONFIG_ENV_VAR = "T2TCTL_CONFIG"


class ConfigError(ValueError):
    """A config file exists but cannot be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Invalid TOML in {path}: {reason}")
        self.path = path


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies to *start* (default: cwd).

    An env var pointing at a missing file disables discovery and yields
    None rather than falling back to the walk-up.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        explicit = Path(env_path)
        return explicit if explicit.is_file() else None

    directory = (start or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        for name in (CONFIG_FILENAME, HIDDEN_CONFIG_FILENAME):
            candidate = candidate_dir / name
            if candidate.is_file():
                return candidate
    return None


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path*, raising :class:`ConfigError` on malformed TOML."""
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(path, str(exc)) from exc


def load_config(path: Path | None = None, cwd: Path | None = None) -> T2tConfig:
    """Validated conventions from *path*, or from the discovered file.

    Runtime flags (``quiet``, ``today`` and friends) are ignored here;
    only the convention sections are read.  No file means defaults.
    """
    source = path if path is not None else find_config(cwd)
    if source is None:
        return T2tConfig()
    sections = {key: value for key, value in read_toml(source).items() if isinstance(value, dict)}
    return T2tConfig.model_validate(sections)
