"""Template resolution: prefix listing and exact-match assembly.

:class:`Resolver` combines the catalog cache with the user config and
answers a :class:`~git_ignore.models.Query`:

* **list mode** -- every name in the universe that starts with one of the
  query tokens (literal, case-sensitive prefix), sorted and deduplicated.
  An empty query lists everything.
* **get mode** -- every token must name something exactly. Aliases are
  expanded depth-first in their declared member order, custom templates
  win over remote templates of the same name, and remote bodies are
  fetched into the cache on demand. Blocks are emitted in request order,
  once per occurrence, without deduplication.

The *universe* is the remote catalog plus alias and custom template names,
or the remote catalog alone in simple mode.

The resolver holds no state of its own between calls; alias cycles are
rejected by :class:`~git_ignore.user_data.UserConfig` so expansion here
is plain recursion.
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

from git_ignore.cache import CacheStore
from git_ignore.client.base import RemoteCatalogClient
from git_ignore.exceptions import FetchError, UnknownTemplateError
from git_ignore.models import Query, QueryMode, Template, TemplateOrigin
from git_ignore.user_data import UserConfig


def render_template(template: Template) -> str:
    """Frame a single template with a header and footer naming its source."""
    body = template.content
    if body and not body.endswith("\n"):
        body += "\n"
    return (
        f"### {template.name} ({template.origin.value}) ###\n"
        f"{body}"
        f"### end {template.name} ###\n"
    )


def render(templates: Sequence[Template]) -> str:
    """Concatenate framed templates, separated by blank lines."""
    return "\n".join(render_template(t) for t in templates)


class Resolver:
    """Answer list and get queries against the cache and the user config.

    Args:
        cache: The loaded catalog cache.
        config: The loaded user config. ``None`` behaves like an empty one.
        client: Used to fetch bodies that are not cached yet. Only needed
            in get mode when a remote body is missing.
    """

    def __init__(
        self,
        cache: CacheStore,
        config: Optional[UserConfig] = None,
        client: Optional[RemoteCatalogClient] = None,
    ) -> None:
        self._cache = cache
        self._config = config
        self._client = client

    def universe(self, simple: bool = False) -> set[str]:
        """Every name a query can refer to."""
        names = set(self._cache.all_names)
        if not simple and self._config is not None:
            names.update(self._config.aliases)
            names.update(self._config.custom_templates)
        return names

    def origin(self, name: str, simple: bool = False) -> Optional[TemplateOrigin]:
        """Classify *name*; ``None`` if it is not in the universe."""
        if not simple and self._config is not None:
            if self._config.is_alias(name):
                return TemplateOrigin.ALIAS
            if self._config.is_custom_template(name):
                return TemplateOrigin.CUSTOM
        if name in self._cache:
            return TemplateOrigin.REMOTE
        return None

    def run(self, query: Query) -> Union[list[str], str]:
        """Dispatch *query* to :meth:`list_names` or :meth:`get_text` based on its mode."""
        if query.mode == QueryMode.GET:
            return self.get_text(query)
        return self.list_names(query)

    # ------------------------------------------------------------------ #
    # List mode
    # ------------------------------------------------------------------ #

    def list_names(self, query: Query) -> list[str]:
        """Names starting with any token of *query*, sorted and unique."""
        universe = self.universe(query.simple)
        if not query.names:
            return sorted(universe)
        return sorted(
            name for name in universe if any(name.startswith(token) for token in query.names)
        )

    # ------------------------------------------------------------------ #
    # Get mode
    # ------------------------------------------------------------------ #

    def get_text(self, query: Query) -> str:
        """Assembled text for *query*. See :meth:`resolve`."""
        return render(self.resolve(query))

    def resolve(self, query: Query) -> list[Template]:
        """Resolve every token of *query* to leaf templates, in request order.

        Raises:
            UnknownTemplateError: A token, or a member of a requested alias,
                matches nothing exactly. No partial result is returned.
            FetchError: A remote body is missing and cannot be fetched.
        """
        universe = self.universe(query.simple)
        unknown = [name for name in dict.fromkeys(query.names) if name not in universe]
        if unknown:
            raise UnknownTemplateError(unknown)

        leaves: list[tuple[str, TemplateOrigin]] = []
        for name in query.names:
            self._expand(name, query.simple, universe, leaves, unknown)
        if unknown:
            raise UnknownTemplateError(dict.fromkeys(unknown))

        remote = [name for name, origin in leaves if origin == TemplateOrigin.REMOTE]
        self._ensure_remote_bodies(remote)

        templates = []
        for name, origin in leaves:
            if origin == TemplateOrigin.CUSTOM:
                content = self._config.custom_content(name)  # type: ignore[union-attr]
            else:
                content = self._cache.body(name) or ""
            templates.append(Template(name=name, content=content, origin=origin))
        return templates

    def _expand(
        self,
        name: str,
        simple: bool,
        universe: set[str],
        leaves: list[tuple[str, TemplateOrigin]],
        unknown: list[str],
    ) -> None:
        if name not in universe:
            unknown.append(name)
            return
        origin = self.origin(name, simple)
        if origin == TemplateOrigin.ALIAS:
            for member in self._config.alias_members(name):  # type: ignore[union-attr]
                self._expand(member, simple, universe, leaves, unknown)
        else:
            leaves.append((name, origin))  # type: ignore[arg-type]

    def _ensure_remote_bodies(self, names: list[str]) -> None:
        missing = [name for name in names if self._cache.body(name) is None]
        if not missing:
            return
        if self._client is None:
            raise FetchError(
                "Template bodies are not cached and no remote client is available: "
                + ", ".join(sorted(set(missing)))
            )
        unknown = self._cache.ensure_bodies(self._client, missing)
        if unknown:
            raise UnknownTemplateError(unknown)
