"""git-ignore -- fetch, list, and cache ``.gitignore`` templates.

Templates come from a remote catalog service (gitignore.io by default) and
are cached locally. Users can layer their own *aliases* (named groups of
templates) and *custom templates* on top of the remote catalog without
ever mutating it.

Typical workflow::

    git-ignore update                 # refresh the catalog cache
    git-ignore list py                # prefix search
    git-ignore get python rust > .gitignore

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models for the persisted stores and queries.
    config: XDG-aware paths, atomic writes, and client settings.
    cache: The on-disk catalog cache (:class:`~git_ignore.cache.CacheStore`).
    user_data: User aliases and custom templates.
    resolver: Matching and assembly of templates.
    exceptions: Exception hierarchy with exit-code mapping.
"""

__version__ = "1.4.0"
