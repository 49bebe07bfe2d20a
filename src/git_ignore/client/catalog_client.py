"""Synchronous HTTP client for the gitignore.io catalog API.

Wraps :class:`httpx.Client` and layers on retry with exponential backoff
(1 s, 2 s, 4 s, ...) for 5xx responses and network errors. Every failure
that survives the retries is mapped to
:class:`~git_ignore.exceptions.FetchError`.

Endpoints used (relative to :attr:`ClientSettings.server`):

- ``GET /list?format=lines`` -- template names, one per line.
- ``GET /list?format=json`` -- every template as
  ``{"<key>": {"key": ..., "name": ..., "fileName": ..., "contents": ...}}``.
"""

from __future__ import annotations

import re
import time
from typing import Any, Iterable, Optional

import httpx

from git_ignore.client.base import RemoteCatalogClient
from git_ignore.exceptions import FetchError
from git_ignore.models import ClientSettings
from git_ignore.output import get_output

_NAME_SEPARATORS = re.compile(r"[,\s]+")


class CatalogClient(RemoteCatalogClient):
    """HTTP implementation of :class:`RemoteCatalogClient`.

    Must be used as a context manager so that the underlying transport is
    opened and closed properly.

    Args:
        settings: Server URL, timeout, retry and TLS settings.
        transport: Optional httpx transport, mainly for
            :class:`httpx.MockTransport` in tests.

    Example::

        with CatalogClient(ClientSettings()) as client:
            names = client.list_names()
    """

    def __init__(
        self,
        settings: Optional[ClientSettings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._settings = settings or ClientSettings()
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    def __enter__(self) -> CatalogClient:
        self._client = httpx.Client(
            base_url=self._settings.server,
            timeout=self._settings.timeout,
            verify=self._settings.verify_ssl,
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # RemoteCatalogClient
    # ------------------------------------------------------------------ #

    def list_names(self) -> set[str]:
        response = self._get("/list", {"format": "lines"})
        names = {n for n in _NAME_SEPARATORS.split(response.text) if n}
        if not names:
            raise FetchError("Remote catalog returned no template names")
        return names

    def fetch_bodies(self, names: Iterable[str]) -> dict[str, str]:
        wanted = set(names)
        if not wanted:
            return {}
        catalog = self._fetch_catalog()
        missing = sorted(wanted - catalog.keys())
        if missing:
            raise FetchError(
                "Remote catalog did not return bodies for: " + ", ".join(missing)
            )
        return {name: catalog[name] for name in wanted}


    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _fetch_catalog(self) -> dict[str, str]:
        response = self._get("/list", {"format": "json"})
        try:
            data: Any = response.json()
        except ValueError as exc:
            raise FetchError(f"Remote catalog returned invalid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise FetchError("Remote catalog returned an unexpected payload")

        bodies: dict[str, str] = {}
        for key, entry in data.items():
            if not isinstance(entry, dict) or not isinstance(entry.get("contents"), str):
                raise FetchError(f"Remote catalog entry '{key}' has no contents")
            bodies[key] = entry["contents"]
        return bodies

    def _get(self, path: str, params: dict[str, str]) -> httpx.Response:
        """GET *path* with exponential-backoff retry, raising :class:`FetchError`."""
        assert self._client is not None, "Client not initialised -- use as context manager"

        max_retries = self._settings.max_retries
        output = get_output()

        for attempt in range(max_retries + 1):
            try:
                response = self._client.get(path, params=params)
            except httpx.HTTPError as exc:
                if isinstance(exc, httpx.TransportError) and attempt < max_retries:
                    delay = 2 ** attempt
                    output.debug(
                        f"Connection error: {exc}, retrying in {delay}s "
                        f"(attempt {attempt + 1}/{max_retries})"
                    )
                    time.sleep(delay)
                    continue
                raise FetchError(
                    f"Cannot reach {self._settings.server}: {exc}"
                ) from exc

            if response.status_code >= 500 and attempt < max_retries:
                delay = 2 ** attempt
                output.debug(
                    f"Server error {response.status_code}, retrying in {delay}s "
                    f"(attempt {attempt + 1}/{max_retries})"
                )
                time.sleep(delay)
                continue

            if not response.is_success:
                raise FetchError(
                    f"Remote catalog returned HTTP {response.status_code} for {path}"
                )
            return response

        raise FetchError(f"Request to {path} failed after {max_retries} retries")
