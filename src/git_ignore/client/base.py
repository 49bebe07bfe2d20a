"""Abstract base class for remote catalog clients.

:class:`~git_ignore.cache.CacheStore` only ever talks to this interface,
so tests can substitute an in-memory stub for the network client.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable


class RemoteCatalogClient(ABC):
    """Read-only access to the remote catalog of ``.gitignore`` templates.

    Implementations raise :class:`~git_ignore.exceptions.FetchError` for
    any transport or parse failure; callers do not distinguish further.
    """

    @abstractmethod
    def list_names(self) -> set[str]:
        """Return every template name the remote catalog knows about."""

    @abstractmethod
    def fetch_bodies(self, names: Iterable[str]) -> dict[str, str]:
        """Return a mapping of name to template body for each of *names*."""
