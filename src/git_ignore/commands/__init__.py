"""Built-in CLI sub-commands for git-ignore.

* :mod:`~git_ignore.commands.catalog` -- ``update``, ``list`` and ``get``.
* :mod:`~git_ignore.commands.alias` -- manage user aliases.
* :mod:`~git_ignore.commands.template` -- manage custom templates.
* :mod:`~git_ignore.commands.init` -- create the user config.

This module also holds the helpers the commands share for loading the
stores, opening the catalog client, and turning
:class:`~git_ignore.exceptions.GitIgnoreError` into an exit code.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Optional

import typer

from git_ignore.cache import CacheStore
from git_ignore.client import CatalogClient
from git_ignore.config import catalog_path, resolve_client_settings, user_config_path
from git_ignore.exceptions import FetchError, GitIgnoreError, StorageError
from git_ignore.output import debug, error, info, warning
from git_ignore.storage import FileStorage
from git_ignore.user_data import UserConfig


@contextmanager
def exit_on_error() -> Iterator[None]:
    """Report a :class:`GitIgnoreError` on stderr and exit with its code."""
    try:
        yield
    except GitIgnoreError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def _options(ctx: typer.Context) -> dict[str, Any]:
    return ctx.obj if isinstance(ctx.obj, dict) else {}


def load_cache() -> CacheStore:
    """Load the catalog cache, falling back to an empty one if it is unreadable."""
    storage = FileStorage(catalog_path())
    try:
        return CacheStore.load(storage)
    except StorageError as exc:
        warning(f"{exc}; starting with an empty catalog cache")
        return CacheStore(storage)


def load_user_config() -> UserConfig:
    """Load the user config. Errors propagate: a broken config is never dropped."""
    return UserConfig.load(FileStorage(user_config_path()))


def open_client(ctx: typer.Context) -> CatalogClient:
    """Create a catalog client from CLI options and the environment."""
    opts = _options(ctx)
    settings = resolve_client_settings(opts.get("server"), opts.get("timeout"))
    debug(f"Catalog server: {settings.server}")
    return CatalogClient(settings)


def ensure_catalog(cache: CacheStore, client: CatalogClient) -> Optional[FetchError]:
    """Refresh *cache* if it has never been fetched.

    A failed refresh is reported as a warning and the command continues
    with whatever was cached before. The failure is returned so callers
    can still report it if the missing catalog turns out to matter.
    """
    if cache.has_catalog:
        return None
    info("Catalog cache is empty, fetching template list...")
    try:
        cache.refresh(client)
    except FetchError as exc:
        warning(f"{exc}")
        warning("Could not update the catalog, results may be stale.")
        return exc
    return None
