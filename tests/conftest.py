"""Shared test fixtures for git-ignore.

Provides an isolated config environment, output state management, an
in-memory stand-in for the remote catalog, and store factories backed by
:class:`~git_ignore.storage.MemoryStorage`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import pytest

from git_ignore.cache import CacheStore
from git_ignore.client.base import RemoteCatalogClient
from git_ignore.exceptions import FetchError
from git_ignore.output import OutputFormat, OutputManager, reset_output, set_output
from git_ignore.storage import MemoryStorage
from git_ignore.user_data import UserConfig


CATALOG = {
    "rust": "/target\n**/*.rs.bk\n",
    "node": "NODE_BODY",
    "go": "*.exe\n*.test\n",
    "python": "__pycache__/\n*.py[cod]\n",
    "rust2": "RUST2_BODY\n",
}


class StubCatalogClient(RemoteCatalogClient):
    """In-memory remote catalog that records calls and can be told to fail."""

    def __init__(self, bodies: Optional[dict[str, str]] = None, fail: bool = False) -> None:
        self.bodies = dict(CATALOG if bodies is None else bodies)
        self.fail = fail
        self.list_calls = 0
        self.fetch_calls: list[set[str]] = []

    def list_names(self) -> set[str]:
        self.list_calls += 1
        if self.fail:
            raise FetchError("connection refused")
        return set(self.bodies)

    def fetch_bodies(self, names: Iterable[str]) -> dict[str, str]:
        wanted = set(names)
        self.fetch_calls.append(wanted)
        if self.fail:
            raise FetchError("connection refused")
        return {name: self.bodies[name] for name in wanted if name in self.bodies}


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time, which go stale once CliRunner restores the streams.
    """
    yield
    reset_output()


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet, plain OutputManager for tests that ignore output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points the XDG directories at subdirectories of tmp_path, clears the
    GIT_IGNORE_* environment variables, and changes into tmp_path.
    """
    monkeypatch.setattr("git_ignore.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ["GIT_IGNORE_SERVER", "GIT_IGNORE_TIMEOUT", "GIT_IGNORE_MAX_RETRIES"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Store fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def stub_client() -> StubCatalogClient:
    return StubCatalogClient()


@pytest.fixture
def failing_client() -> StubCatalogClient:
    return StubCatalogClient(fail=True)


@pytest.fixture
def cache_storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def config_storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def cache(cache_storage: MemoryStorage, stub_client: StubCatalogClient) -> CacheStore:
    """A cache refreshed against the stub catalog (names only, no bodies)."""
    store = CacheStore.load(cache_storage)
    store.refresh(stub_client)
    stub_client.list_calls = 0
    return store


@pytest.fixture
def user_config(config_storage: MemoryStorage) -> UserConfig:
    return UserConfig.load(config_storage)


@pytest.fixture
def make_client() -> type[StubCatalogClient]:
    """Factory for stub clients with custom bodies or failure mode."""
    return StubCatalogClient
