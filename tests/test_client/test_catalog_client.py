"""Tests for the httpx-based catalog client."""

from __future__ import annotations

import httpx
import pytest

from git_ignore.client import CatalogClient
from git_ignore.exceptions import FetchError
from git_ignore.models import ClientSettings


CATALOG_JSON = {
    "rust": {"key": "rust", "name": "Rust", "fileName": "Rust.gitignore", "contents": "/target\n"},
    "node": {"key": "node", "name": "Node", "fileName": "Node.gitignore", "contents": "node_modules/\n"},
    "go": {"key": "go", "name": "Go", "fileName": "Go.gitignore", "contents": "*.exe\n"},
}


def _client(handler, max_retries: int = 0) -> CatalogClient:
    settings = ClientSettings(server="https://catalog.test/api", max_retries=max_retries)
    return CatalogClient(settings, transport=httpx.MockTransport(handler))


@pytest.fixture(autouse=True)
def _no_sleep(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    """Record backoff delays instead of sleeping."""
    delays: list[float] = []
    monkeypatch.setattr("git_ignore.client.catalog_client.time.sleep", delays.append)
    return delays


class TestContextManager:
    def test_enter_and_exit(self) -> None:
        client = _client(lambda request: httpx.Response(200))
        assert client._client is None
        with client:
            assert client._client is not None
        assert client._client is None


class TestListNames:
    def test_lines_format(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/list"
            assert request.url.params["format"] == "lines"
            return httpx.Response(200, text="go\nnode\nrust\n")

        with _client(handler) as client:
            assert client.list_names() == {"go", "node", "rust"}

    def test_comma_separated(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="1c,1c-bitrix,a-frame\nactionscript,ada\n")

        with _client(handler) as client:
            assert client.list_names() == {"1c", "1c-bitrix", "a-frame", "actionscript", "ada"}

    def test_empty_body_is_error(self) -> None:
        with _client(lambda request: httpx.Response(200, text="\n")) as client:
            with pytest.raises(FetchError):
                client.list_names()

    def test_http_error_status(self) -> None:
        with _client(lambda request: httpx.Response(404)) as client:
            with pytest.raises(FetchError, match="404"):
                client.list_names()


class TestFetchBodies:
    def test_returns_requested_bodies(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.params["format"] == "json"
            return httpx.Response(200, json=CATALOG_JSON)

        with _client(handler) as client:
            assert client.fetch_bodies(["rust", "go"]) == {"rust": "/target\n", "go": "*.exe\n"}

    def test_empty_request_makes_no_call(self) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json=CATALOG_JSON)

        with _client(handler) as client:
            assert client.fetch_bodies([]) == {}
        assert calls == []

    def test_missing_name_is_error(self) -> None:
        with _client(lambda request: httpx.Response(200, json=CATALOG_JSON)) as client:
            with pytest.raises(FetchError, match="elm"):
                client.fetch_bodies(["rust", "elm"])

    def test_invalid_json_is_error(self) -> None:
        with _client(lambda request: httpx.Response(200, text="<html>")) as client:
            with pytest.raises(FetchError):
                client.fetch_bodies(["rust"])

    def test_entry_without_contents_is_error(self) -> None:
        payload = {"rust": {"key": "rust"}}
        with _client(lambda request: httpx.Response(200, json=payload)) as client:
            with pytest.raises(FetchError, match="rust"):
                client.fetch_bodies(["rust"])

    def test_non_mapping_payload_is_error(self) -> None:
        with _client(lambda request: httpx.Response(200, json=["rust"])) as client:
            with pytest.raises(FetchError):
                client.fetch_bodies(["rust"])


class TestRetry:
    def test_retries_server_errors_then_succeeds(self, _no_sleep: list[float]) -> None:
        responses = iter([httpx.Response(503), httpx.Response(502), httpx.Response(200, text="go\n")])

        with _client(lambda request: next(responses), max_retries=3) as client:
            assert client.list_names() == {"go"}
        assert _no_sleep == [1, 2]

    def test_gives_up_after_max_retries(self, _no_sleep: list[float]) -> None:
        with _client(lambda request: httpx.Response(500), max_retries=2) as client:
            with pytest.raises(FetchError, match="500"):
                client.list_names()
        assert _no_sleep == [1, 2]

    def test_connection_error_is_retried(self, _no_sleep: list[float]) -> None:
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(request)
            if len(attempts) == 1:
                raise httpx.ConnectError("refused", request=request)
            return httpx.Response(200, text="rust\n")

        with _client(handler, max_retries=1) as client:
            assert client.list_names() == {"rust"}
        assert len(attempts) == 2

    def test_connection_error_becomes_fetch_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with _client(handler) as client:
            with pytest.raises(FetchError, match="Cannot reach"):
                client.list_names()

    def test_client_errors_are_not_retried(self, _no_sleep: list[float]) -> None:
        with _client(lambda request: httpx.Response(403), max_retries=3) as client:
            with pytest.raises(FetchError):
                client.list_names()
        assert _no_sleep == []
