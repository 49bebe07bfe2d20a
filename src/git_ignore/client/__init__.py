"""Clients for the remote template catalog.

- :class:`RemoteCatalogClient` -- the abstract contract the stores rely on.
- :class:`CatalogClient` -- the httpx implementation talking to the
  gitignore.io API.
"""

from git_ignore.client.base import RemoteCatalogClient
from git_ignore.client.catalog_client import CatalogClient

__all__ = ["CatalogClient", "RemoteCatalogClient"]
