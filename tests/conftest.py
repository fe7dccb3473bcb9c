"""Shared pytest fixtures and configuration for the samplefetch test suite.

Guidelines
----------
* No internet access in any test; httpx is driven through
  ``httpx.MockTransport``.
* Archives are built in memory and extracted under ``tmp_path``.
* Consoles write to ``io.StringIO`` so output can be asserted on.
"""

from __future__ import annotations

import io
import json
import zipfile
from collections.abc import Callable, Iterator, Mapping
from typing import Any

import httpx
import pytest
from rich.console import Console

from samplefetch.config import RegistryConfig
from samplefetch.infra.httpx_registry_client import HttpxRegistryClient

REGISTRY_URL = "https://registry.test"

Route = Callable[[httpx.Request], httpx.Response]


# ---------------------------------------------------------------------------
# Payload factories
# ---------------------------------------------------------------------------

def sample_payload(**overrides: Any) -> dict[str, Any]:
    """Wire-shaped sample dict with sensible defaults."""
    payload: dict[str, Any] = {
        "Name": "console",
        "Command": "dotnet run",
        "Url": "https://cdn.test/console.zip",
        "Description": "A minimal console application.",
    }
    payload.update(overrides)
    return payload


def make_zip(files: Mapping[str, str | bytes]) -> bytes:
    """Build a zip archive in memory from ``{member_name: content}``."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for member, content in files.items():
            archive.writestr(member, content)
    return buffer.getvalue()


# ---------------------------------------------------------------------------
# Route helpers for httpx.MockTransport
# ---------------------------------------------------------------------------

def json_route(payload: Any, status_code: int = 200) -> Route:
    """Serve *payload* as JSON; ``None`` is sent as a literal ``null`` body."""
    body = json.dumps(payload).encode()
    return lambda request: httpx.Response(
        status_code,
        content=body,
        headers={"Content-Type": "application/json"},
    )


def bytes_route(content: bytes, status_code: int = 200) -> Route:
    return lambda request: httpx.Response(status_code, content=content)


def status_route(status_code: int) -> Route:
    return lambda request: httpx.Response(status_code)


def failing_route(message: str = "Connection refused") -> Route:
    def _raise(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError(message, request=request)

    return _raise


def mock_transport(routes: Mapping[str, Route]) -> httpx.MockTransport:
    """Dispatch on the full URL; unknown URLs answer 404."""

    def handler(request: httpx.Request) -> httpx.Response:
        route = routes.get(str(request.url))
        if route is None:
            return httpx.Response(404)
        return route(request)

    return httpx.MockTransport(handler)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def make_registry() -> Iterator[Callable[[Mapping[str, Route]], HttpxRegistryClient]]:
    """Factory for registry clients wired to in-memory routes."""
    clients: list[HttpxRegistryClient] = []

    def _make(routes: Mapping[str, Route]) -> HttpxRegistryClient:
        client = HttpxRegistryClient(
            RegistryConfig(base_url=REGISTRY_URL, timeout=5.0),
            transport=mock_transport(routes),
        )
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


@pytest.fixture
def out_console() -> Console:
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def err_console() -> Console:
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def color_err_console() -> Console:
    """Error console that emits ANSI colour codes."""
    return Console(
        file=io.StringIO(),
        width=200,
        force_terminal=True,
        color_system="standard",
    )


def console_text(console: Console) -> str:
    """Everything written to a StringIO-backed console so far."""
    file = console.file
    assert isinstance(file, io.StringIO)
    return file.getvalue()
