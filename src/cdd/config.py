"""Workspace configuration: ``config.yml`` loading, saving, and path resolution.

A workspace is a directory holding ``config.yml`` (a
:class:`~cdd.models.ProjectConfig`), the OpenAPI document it names, and the
per-language projects listed under ``services``.

* :func:`resolve_config_path` -- precedence for locating ``config.yml``:
  CLI flag, then the ``CDD_CONFIG`` environment variable, then the current
  directory.
* :func:`load_config` / :func:`save_config` -- YAML (de)serialisation with
  Pydantic validation. Writes are atomic.
* :func:`get_data_dir` -- XDG-aware location for crash logs.
"""

from __future__ import annotations

import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from cdd.exceptions import ConfigError
from cdd.models import ProjectConfig

_APP_NAME = "cdd"
CONFIG_FILENAME = "config.yml"
CONFIG_ENV_VAR = "CDD_CONFIG"


# --- Path resolution ---


def resolve_config_path(cli_path: Optional[str] = None) -> Path:
    """Locate ``config.yml``.

    Precedence (high to low):
        1. ``cli_path`` (the ``--config`` flag)
        2. ``CDD_CONFIG`` environment variable
        3. ``./config.yml``

    A directory at any level is taken to contain ``config.yml``.
    """
    raw = cli_path or os.environ.get(CONFIG_ENV_VAR) or CONFIG_FILENAME
    path = Path(raw).expanduser()
    if path.is_dir():
        path = path / CONFIG_FILENAME
    return path


def _is_xdg_platform() -> bool:
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/cdd/`` (default ``~/.local/share/cdd/``).
    Elsewhere: ``~/.cdd/``.
    """
    if _is_xdg_platform():
        base = os.environ.get("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
        path = Path(base) / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def atomic_write(path: Path, data: str) -> None:
    """Write *data* to *path* through a temp file in the same directory and rename.

    The temp file is removed on any failure, including ``KeyboardInterrupt``.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path: Optional[str] = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        ) as fd:
            tmp_path = fd.name
            fd.write(data)
            fd.flush()
            os.fsync(fd.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


# --- config.yml ---


def load_config(path: Path) -> ProjectConfig:
    """Load and validate a workspace configuration.

    Args:
        path: Location of ``config.yml``.

    Returns:
        The validated :class:`~cdd.models.ProjectConfig`. An empty file
        yields the defaults.

    Raises:
        ConfigError: If the file is missing, is not valid YAML, or fails
            validation.
    """
    if not path.is_file():
        raise ConfigError(
            f"Could not find {path}. Try running 'cdd init' first if this is a new project."
        )
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Could not read {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config at {path}: expected a mapping")

    try:
        return ProjectConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc


def save_config(config: ProjectConfig, path: Path) -> None:
    """Persist *config* as YAML at *path*, preserving field order."""
    data = config.model_dump(mode="json")
    atomic_write(path, yaml.safe_dump(data, sort_keys=False))
