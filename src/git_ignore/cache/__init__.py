"""On-disk cache of the remote template catalog.

:class:`CacheStore` holds the last-known catalog (every template name plus
the bodies fetched so far) and is rewritten wholesale on each refresh.
"""

from git_ignore.cache.store import CacheStore

__all__ = ["CacheStore"]
