"""Canonical Pydantic models shared across git-ignore modules.

**Persisted models** -- serialised as JSON on disk:
    :class:`CatalogCache` (the cache file) and :class:`UserData` (the user
    config file).

**In-memory models** -- never persisted:
    :class:`Template`, :class:`TemplateOrigin`, :class:`Query`,
    :class:`QueryMode`, and :class:`ClientSettings`.
"""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_serializer


DEFAULT_SERVER = "https://www.toptal.com/developers/gitignore/api"


# --- Persisted ---


class CatalogCache(BaseModel):
    """Last-known state of the remote catalog, stored in the cache directory.

    ``all_names`` is authoritative for existence checks; ``contents`` only
    caches bodies of names that have been fetched so far. Every key of
    ``contents`` is a member of ``all_names`` at the time it was written.
    """

    all_names: set[str] = Field(default_factory=set)
    contents: dict[str, str] = Field(default_factory=dict)
    fetched_at: Optional[datetime] = None

    @field_serializer("all_names")
    def _serialize_names(self, names: set[str]) -> list[str]:
        # Sorted so that identical catalogs produce identical files.
        return sorted(names)

    @field_serializer("contents")
    def _serialize_contents(self, contents: dict[str, str]) -> dict[str, str]:
        return {k: contents[k] for k in sorted(contents)}


class UserData(BaseModel):
    """User-defined aliases and custom templates, stored in the config directory.

    Example file::

        {
          "aliases": {"web": ["node", "go"]},
          "custom_templates": {"secrets": ".env\\n*.pem\\n"}
        }
    """

    aliases: dict[str, list[str]] = Field(default_factory=dict)
    custom_templates: dict[str, str] = Field(default_factory=dict)


# --- In-memory ---


class TemplateOrigin(str, enum.Enum):
    """Where a name in the template universe comes from."""

    REMOTE = "remote"
    CUSTOM = "custom"
    ALIAS = "alias"


class Template(BaseModel):
    """A resolved, named text blob ready to be written into a ``.gitignore``."""

    name: str = Field(min_length=1)
    content: str
    origin: TemplateOrigin


class QueryMode(str, enum.Enum):
    """``list`` does prefix matching on names; ``get`` assembles contents."""

    LIST = "list"
    GET = "get"


class Query(BaseModel):
    """A single lookup request.

    When ``simple`` is set only the remote catalog is consulted and all
    user aliases and custom templates are ignored.
    """

    names: list[str] = Field(default_factory=list)
    mode: QueryMode = QueryMode.LIST
    simple: bool = False


class ClientSettings(BaseModel):
    """Settings for talking to the remote catalog service."""

    server: str = Field(default=DEFAULT_SERVER, description="Catalog API base URL")
    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    max_retries: int = Field(default=3, ge=0, description="Max retry attempts")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
