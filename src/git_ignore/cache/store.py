"""Persisted catalog cache with atomic refresh.

The cache is a single JSON document (see
:class:`~git_ignore.models.CatalogCache`)::

    {
      "all_names": ["go", "node", "rust"],
      "contents": {"rust": "/target\\n"},
      "fetched_at": "2024-05-01T12:00:00Z"
    }

``all_names`` is replaced on every :meth:`CacheStore.refresh`; ``contents``
fills up lazily through :meth:`CacheStore.ensure_bodies`. Every mutating
operation builds the new document first, persists it, and only then swaps
it in, so a failed fetch or write leaves both the file and the in-memory
state exactly as they were.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from git_ignore.client.base import RemoteCatalogClient
from git_ignore.exceptions import FetchError
from git_ignore.models import CatalogCache
from git_ignore.storage import Storage, dump_model, load_model


class CacheStore:
    """The last-known remote catalog.

    Args:
        storage: Where the cache document lives.
        data: Initial in-memory state. Defaults to an empty catalog.

    Example::

        store = CacheStore.load(FileStorage(catalog_path()))
        with CatalogClient(settings) as client:
            store.refresh(client)
            unknown = store.ensure_bodies(client, ["python"])
    """

    def __init__(self, storage: Storage, data: Optional[CatalogCache] = None) -> None:
        self._storage = storage
        self._data = data if data is not None else CatalogCache()

    @classmethod
    def load(cls, storage: Storage) -> CacheStore:
        """Read the cache from *storage*; a missing document yields an empty store.

        Raises:
            StorageError: If the document exists but is unreadable or corrupt.
        """
        return cls(storage, load_model(storage, CatalogCache))

    # ------------------------------------------------------------------ #
    # Accessors
    # ------------------------------------------------------------------ #

    @property
    def data(self) -> CatalogCache:
        """A copy of the current in-memory document."""
        return self._data.model_copy(deep=True)

    @property
    def all_names(self) -> frozenset[str]:
        return frozenset(self._data.all_names)

    @property
    def fetched_at(self) -> Optional[datetime]:
        return self._data.fetched_at

    @property
    def has_catalog(self) -> bool:
        """Whether the catalog has ever been refreshed successfully."""
        return self._data.fetched_at is not None

    def __contains__(self, name: object) -> bool:
        return name in self._data.all_names

    def body(self, name: str) -> Optional[str]:
        """Return the cached body of *name*, or ``None`` if not cached."""
        return self._data.contents.get(name)

    def stats(self) -> dict[str, Any]:
        """Summary of the cache for ``update --status``."""
        return {
            "location": self._storage.location,
            "templates": len(self._data.all_names),
            "cached_bodies": len(self._data.contents),
            "fetched_at": self._data.fetched_at.isoformat() if self._data.fetched_at else None,
        }

    # ------------------------------------------------------------------ #
    # Mutations
    # ------------------------------------------------------------------ #

    def save(self) -> None:
        """Persist the current state, replacing the whole document."""
        self._storage.write(dump_model(self._data))

    def refresh(self, client: RemoteCatalogClient, prefetch: bool = False) -> CacheStore:
        """Replace the catalog with the remote's current name list.

        Cached bodies of names that no longer exist remotely are dropped and
        ``fetched_at`` is set to now. With *prefetch*, every body is
        downloaded as well.

        Raises:
            FetchError: The remote could not be reached. Nothing is changed.
            StorageError: The new document could not be written. Nothing is
                changed.
        """
        names = client.list_names()
        contents = {k: v for k, v in self._data.contents.items() if k in names}
        if prefetch:
            contents.update(client.fetch_bodies(names))

        self._commit(
            CatalogCache(
                all_names=set(names),
                contents=contents,
                fetched_at=datetime.now(timezone.utc),
            )
        )
        return self

    def ensure_bodies(self, client: RemoteCatalogClient, names: Iterable[str]) -> list[str]:
        """Make sure the body of every known name in *names* is cached.

        Missing bodies are fetched in a single call and persisted. Names not
        in :attr:`all_names` are never fetched.

        Returns:
            The names that are not part of the catalog, in request order and
            without duplicates.

        Raises:
            FetchError: The remote could not be reached or did not return a
                requested body. Nothing is changed.
            StorageError: The updated document could not be written.
        """
        unknown: list[str] = []
        missing: set[str] = set()
        for name in names:
            if name not in self._data.all_names:
                if name not in unknown:
                    unknown.append(name)
            elif name not in self._data.contents:
                missing.add(name)

        if missing:
            bodies = client.fetch_bodies(missing)
            absent = sorted(missing - bodies.keys())
            if absent:
                raise FetchError("Remote catalog did not return bodies for: " + ", ".join(absent))
            contents = dict(self._data.contents)
            contents.update({name: bodies[name] for name in missing})
            self._commit(
                CatalogCache(
                    all_names=set(self._data.all_names),
                    contents=contents,
                    fetched_at=self._data.fetched_at,
                )
            )
        return unknown

    def _commit(self, data: CatalogCache) -> None:
        self._storage.write(dump_model(data))
        self._data = data
