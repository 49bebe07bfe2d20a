"""Configuration paths, atomic writes, and client settings resolution.

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.git-ignore/`` on macOS and Windows. See :func:`get_config_dir`,
  :func:`get_cache_dir`, :func:`get_data_dir`.
* **Persisted files** -- the catalog cache lives at
  :func:`catalog_path` and the user config at :func:`user_config_path`.
* **Client settings** -- :func:`resolve_client_settings` merges CLI flags,
  environment variables, and defaults into a
  :class:`~git_ignore.models.ClientSettings`.

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`) so a reader never observes a half-written file.
"""

from __future__ import annotations

import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from git_ignore.exceptions import ConfigError
from git_ignore.models import ClientSettings

_APP_NAME = "git-ignore"
_CATALOG_FILENAME = "catalog.json"
_CONFIG_FILENAME = "config.json"

ENV_SERVER = "GIT_IGNORE_SERVER"
ENV_TIMEOUT = "GIT_IGNORE_TIMEOUT"
ENV_MAX_RETRIES = "GIT_IGNORE_MAX_RETRIES"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/git-ignore/`` (default ``~/.config/git-ignore/``).
    On macOS/Windows: ``~/.git-ignore/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_cache_dir() -> Path:
    """Return the cache directory, creating it if necessary.

    The catalog cache can be deleted at any time; the next command simply
    refreshes it.

    On Linux/BSD: ``$XDG_CACHE_HOME/git-ignore/`` (default ``~/.cache/git-ignore/``).
    On macOS/Windows: ``~/.git-ignore/cache/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CACHE_HOME", (".cache",)) / _APP_NAME
    else:
        path = _fallback_base_dir() / "cache"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/git-ignore/`` (default ``~/.local/share/git-ignore/``).
    On macOS/Windows: ``~/.git-ignore/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


def catalog_path() -> Path:
    """Path to the persisted catalog cache."""
    return get_cache_dir() / _CATALOG_FILENAME


def user_config_path() -> Path:
    """Path to the persisted user config (aliases and custom templates)."""
    return get_config_dir() / _CONFIG_FILENAME


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is removed and *path* is left as it was.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Client settings ---


def resolve_client_settings(
    cli_server: Optional[str] = None,
    cli_timeout: Optional[float] = None,
) -> ClientSettings:
    """Resolve catalog client settings.

    Precedence (high to low):
        1. CLI flags (``cli_server``, ``cli_timeout``)
        2. Environment variables (``GIT_IGNORE_SERVER``,
           ``GIT_IGNORE_TIMEOUT``, ``GIT_IGNORE_MAX_RETRIES``)
        3. Defaults

    Raises:
        ConfigError: If an environment variable holds an invalid value.
    """
    values: dict[str, object] = {}

    env_server = os.environ.get(ENV_SERVER)
    if env_server:
        values["server"] = env_server
    env_timeout = os.environ.get(ENV_TIMEOUT)
    if env_timeout:
        values["timeout"] = env_timeout
    env_retries = os.environ.get(ENV_MAX_RETRIES)
    if env_retries:
        values["max_retries"] = env_retries

    if cli_server is not None:
        values["server"] = cli_server
    if cli_timeout is not None:
        values["timeout"] = cli_timeout

    try:
        settings = ClientSettings.model_validate(values)
    except ValidationError as exc:
        raise ConfigError(f"Invalid client settings: {exc}") from exc
    settings.server = settings.server.rstrip("/")
    return settings
