"""User-defined aliases and custom templates.

The user config is a small, human-editable JSON document (see
:class:`~git_ignore.models.UserData`). It is never refreshed from the
remote; only the alias/template management commands change it, and every
change rewrites the whole file atomically.

Two invariants are enforced at write time so that resolution can use plain
recursion:

* a name is never both an alias and a custom template;
* no alias expands, directly or through other aliases, to itself.

Files edited by hand are checked for the same invariants on load.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from git_ignore.exceptions import ConfigError, CyclicAliasError, NameCollisionError
from git_ignore.models import UserData
from git_ignore.storage import Storage, dump_model, load_model


def find_alias_cycle(
    aliases: dict[str, list[str]],
    start: str,
) -> Optional[list[str]]:
    """Depth-first search for a path from alias *start* back to itself.

    Only members that are themselves aliases are followed; every other
    member is a leaf.

    Returns:
        The cycle as a list of names (``[start, ..., start]``), or ``None``.
    """
    expanding: list[str] = []
    done: set[str] = set()

    def visit(name: str) -> Optional[list[str]]:
        if name in expanding:
            return expanding[expanding.index(name):] + [name]
        if name in done or name not in aliases:
            return None
        expanding.append(name)
        for member in aliases[name]:
            cycle = visit(member)
            if cycle is not None:
                return cycle
        expanding.pop()
        done.add(name)
        return None

    return visit(start)


def _ordered_unique(names: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result = []
    for name in names:
        if name not in seen:
            seen.add(name)
            result.append(name)
    return result


class UserConfig:
    """Aliases and custom templates layered on top of the remote catalog.

    Args:
        storage: Where the config document lives.
        data: Initial in-memory state. Defaults to an empty config.
    """

    def __init__(self, storage: Storage, data: Optional[UserData] = None) -> None:
        self._storage = storage
        self._data = data if data is not None else UserData()

    @classmethod
    def load(cls, storage: Storage) -> UserConfig:
        """Read the config from *storage*; a missing document yields an empty config.

        Raises:
            ConfigError: If the document is malformed, contains a name that is
                both an alias and a custom template, or contains an alias cycle.
            StorageError: If the document exists but cannot be read.
        """
        data = load_model(storage, UserData, ConfigError)
        _validate(data)
        return cls(storage, data)

    @classmethod
    def init(cls, storage: Storage, force: bool = False) -> tuple[UserConfig, bool]:
        """Create an empty config document.

        An existing document is left untouched unless *force* is set.

        Returns:
            ``(config, created)`` where *created* tells whether a new document
            was written.
        """
        if storage.read() is not None and not force:
            return cls.load(storage), False
        config = cls(storage)
        config.save()
        return config, True

    # ------------------------------------------------------------------ #
    # Accessors
    # ------------------------------------------------------------------ #

    @property
    def data(self) -> UserData:
        """A copy of the current in-memory document."""
        return self._data.model_copy(deep=True)

    @property
    def aliases(self) -> dict[str, list[str]]:
        return {name: list(members) for name, members in self._data.aliases.items()}

    @property
    def custom_templates(self) -> dict[str, str]:
        return dict(self._data.custom_templates)

    def is_alias(self, name: str) -> bool:
        return name in self._data.aliases

    def is_custom_template(self, name: str) -> bool:
        return name in self._data.custom_templates

    def alias_members(self, name: str) -> list[str]:
        return list(self._data.aliases[name])

    def custom_content(self, name: str) -> str:
        return self._data.custom_templates[name]

    # ------------------------------------------------------------------ #
    # Mutations
    # ------------------------------------------------------------------ #

    def save(self) -> None:
        """Persist the current state, replacing the whole document."""
        self._storage.write(dump_model(self._data))

    def add_alias(self, name: str, members: Sequence[str], overwrite: bool = False) -> None:
        """Define alias *name* expanding to *members*, in order.

        Duplicate members are dropped, keeping the first occurrence.

        Raises:
            NameCollisionError: *name* is a custom template, or an existing
                alias and *overwrite* is not set.
            CyclicAliasError: *members* would reach *name* again.
            ConfigError: *name* is empty or *members* is empty.
        """
        if not name:
            raise ConfigError("Alias name must not be empty")
        members = _ordered_unique(members)
        if not members:
            raise ConfigError(f"Alias '{name}' needs at least one template")
        if name in self._data.custom_templates:
            raise NameCollisionError(name, "a custom template")
        if name in self._data.aliases and not overwrite:
            raise NameCollisionError(name, "an alias")

        aliases = self.aliases
        aliases[name] = members
        cycle = find_alias_cycle(aliases, name)
        if cycle is not None:
            raise CyclicAliasError(cycle)

        self._commit(UserData(aliases=aliases, custom_templates=self.custom_templates))

    def remove_alias(self, name: str) -> bool:
        """Remove alias *name*. Removing an absent alias is a no-op.

        Returns:
            ``True`` if an alias was removed.
        """
        if name not in self._data.aliases:
            return False
        aliases = self.aliases
        del aliases[name]
        self._commit(UserData(aliases=aliases, custom_templates=self.custom_templates))
        return True

    def add_custom_template(self, name: str, content: str) -> None:
        """Store *content* as custom template *name*, replacing any previous content.

        Raises:
            NameCollisionError: *name* is an alias.
            ConfigError: *name* is empty.
        """
        if not name:
            raise ConfigError("Template name must not be empty")
        if name in self._data.aliases:
            raise NameCollisionError(name, "an alias")
        templates = self.custom_templates
        templates[name] = content
        self._commit(UserData(aliases=self.aliases, custom_templates=templates))

    def remove_custom_template(self, name: str) -> bool:
        """Remove custom template *name*. Removing an absent template is a no-op.

        Returns:
            ``True`` if a template was removed.
        """
        if name not in self._data.custom_templates:
            return False
        templates = self.custom_templates
        del templates[name]
        self._commit(UserData(aliases=self.aliases, custom_templates=templates))
        return True

    def _commit(self, data: UserData) -> None:
        self._storage.write(dump_model(data))
        self._data = data


def _validate(data: UserData) -> None:
    """Check the write-time invariants on a document loaded from disk."""
    for name in data.aliases:
        if name in data.custom_templates:
            raise ConfigError(f"'{name}' is defined both as an alias and as a custom template")
    for name in data.aliases:
        cycle = find_alias_cycle(data.aliases, name)
        if cycle is not None:
            raise CyclicAliasError(cycle)
