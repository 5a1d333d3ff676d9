"""
Shared fixtures: isolated configuration and a stubbed HTTP transport.

The transport stub serves XML files from ``tests/fixtures``; the HTTP status is
taken from the file name suffix (``show-200.xml`` -> 200).
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import httpx
import pytest

from recurly_v2.adapters import http_client
from recurly_v2.core import config
from recurly_v2.core.log import set_logger

FIXTURES = Path(__file__).parent / "fixtures"
BASE_URL = "https://api.recurly.com/v2/"

_STATUS_SUFFIX = re.compile(r"-(\d{3})(?:\.\w+)?$")


def load_fixture(name: str) -> bytes:
    return (FIXTURES / name).read_bytes()


class ApiStub:
    """Routes ``(method, path[, query])`` to canned responses and records requests."""

    def __init__(self) -> None:
        self._routes: list[tuple[str, str, dict[str, str], tuple[int, bytes, dict[str, str]]]] = []
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        fixture: str | None = None,
        *,
        status: int | None = None,
        body: bytes = b"",
        headers: dict[str, str] | None = None,
        query: dict[str, str] | None = None,
    ) -> None:
        if fixture is not None:
            body = load_fixture(fixture)
            match = _STATUS_SUFFIX.search(fixture)
            if status is None and match:
                status = int(match.group(1))
        response_headers = {"Content-Type": "application/xml; charset=utf-8"}
        response_headers.update(headers or {})
        canned = (status or 200, body, response_headers)
        self._routes.append((method.upper(), "/v2/" + path.lstrip("/"), dict(query or {}), canned))

    def handle(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        params = dict(request.url.params)
        candidates = [
            route
            for route in self._routes
            if route[0] == request.method
            and route[1] == request.url.path
            and all(params.get(k) == v for k, v in route[2].items())
        ]
        if not candidates:
            return httpx.Response(
                404,
                content=b"<error><symbol>not_found</symbol><description>no stub</description></error>",
                headers={"Content-Type": "application/xml"},
            )
        # The most specific route (most query constraints) wins.
        _, _, _, (status, body, headers) = max(candidates, key=lambda route: len(route[2]))
        return httpx.Response(status, content=body, headers=headers, request=request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def find(self, method: str, path: str) -> list[httpx.Request]:
        full = "/v2/" + path.lstrip("/")
        return [r for r in self.requests if r.method == method.upper() and r.url.path == full]


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Any:
    """Clean env + config for every test; a dummy API key is always present."""

    monkeypatch.chdir(tmp_path)
    for name in (
        "RECURLY_SUBDOMAIN",
        "RECURLY_DEFAULT_CURRENCY",
        "RECURLY_INSECURE_DEBUG",
        "RECURLY_CONTENT_FORMAT",
        "RECURLY_JS_PUBLIC_KEY",
        "RECURLY_JS_PRIVATE_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("RECURLY_API_KEY", "test-api-key")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    config.reset()
    yield
    set_logger(None)
    config.reset()


@pytest.fixture
def api(monkeypatch: pytest.MonkeyPatch) -> ApiStub:
    """Every ``ApiClient`` request goes to an in-memory ``ApiStub``."""

    stub = ApiStub()
    real_build_client = http_client.build_client

    def build_client(settings: Any = None, **kwargs: Any) -> httpx.Client:
        kwargs["transport"] = httpx.MockTransport(stub.handle)
        return real_build_client(settings, **kwargs)

    monkeypatch.setattr(http_client, "build_client", build_client)
    return stub
