"""Tests for the httpx registry adapter (infra/httpx_registry_client.py).

httpx is driven through ``httpx.MockTransport``; no sockets are opened.

Coverage:
* URL resolution against the base address.
* Status and transport errors → ``FetchFailedError``.
* Archive streaming: seekable spool, progress reporting, cleanup.
"""

from __future__ import annotations

import json
import zipfile
from collections.abc import Callable, Iterator, Mapping

import httpx
import pytest

from samplefetch.config import RegistryConfig
from samplefetch.exceptions import FetchFailedError
from samplefetch.infra.httpx_registry_client import HttpxRegistryClient

from conftest import (
    REGISTRY_URL,
    Route,
    bytes_route,
    failing_route,
    json_route,
    make_zip,
    mock_transport,
    sample_payload,
    status_route,
)

MakeRegistry = Callable[[Mapping[str, Route]], HttpxRegistryClient]


class _ChunkedStream(httpx.SyncByteStream):
    """Response body delivered in fixed chunks, like a live socket."""

    def __init__(self, chunks: list[bytes]) -> None:
        self._chunks = chunks

    def __iter__(self) -> Iterator[bytes]:
        yield from self._chunks


# ---------------------------------------------------------------------------
# get_text
# ---------------------------------------------------------------------------

class TestGetText:
    def test_empty_path_hits_registry_root(self, make_registry: MakeRegistry) -> None:
        registry = make_registry({f"{REGISTRY_URL}/": json_route([sample_payload()])})
        assert json.loads(registry.get_text(""))[0]["Name"] == "console"

    def test_sample_path_is_relative_to_base(self, make_registry: MakeRegistry) -> None:
        seen: list[str] = []

        def route(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200, text="{}")

        registry = make_registry({f"{REGISTRY_URL}/Samples/console": route})
        assert registry.get_text("Samples/console") == "{}"
        assert seen == [f"{REGISTRY_URL}/Samples/console"]

    def test_base_url_property(self, make_registry: MakeRegistry) -> None:
        assert make_registry({}).base_url == REGISTRY_URL

    def test_not_found_status(self, make_registry: MakeRegistry) -> None:
        registry = make_registry({})
        with pytest.raises(FetchFailedError) as exc_info:
            registry.get_text("Samples/missing")
        err = exc_info.value
        assert err.status_code == 404
        assert err.target == f"{REGISTRY_URL}/Samples/missing"
        assert "404" in str(err)

    def test_server_error_status(self, make_registry: MakeRegistry) -> None:
        registry = make_registry({f"{REGISTRY_URL}/": status_route(503)})
        with pytest.raises(FetchFailedError) as exc_info:
            registry.get_text("")
        assert exc_info.value.status_code == 503
        assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)

    def test_transport_error(self, make_registry: MakeRegistry) -> None:
        registry = make_registry({f"{REGISTRY_URL}/": failing_route("Connection refused")})
        with pytest.raises(FetchFailedError) as exc_info:
            registry.get_text("")
        err = exc_info.value
        assert err.status_code is None
        assert err.target == f"{REGISTRY_URL}/"
        assert "Connection refused" in str(err)
        assert err.hint is not None
        assert isinstance(err.__cause__, httpx.ConnectError)

    def test_follows_redirects(self, make_registry: MakeRegistry) -> None:
        registry = make_registry({
            f"{REGISTRY_URL}/Samples/old": lambda request: httpx.Response(
                301, headers={"Location": f"{REGISTRY_URL}/Samples/new"},
            ),
            f"{REGISTRY_URL}/Samples/new": json_route(sample_payload(Name="new")),
        })
        assert json.loads(registry.get_text("Samples/old"))["Name"] == "new"


# ---------------------------------------------------------------------------
# open_archive
# ---------------------------------------------------------------------------

class TestOpenArchive:
    def test_yields_seekable_zip_stream(self, make_registry: MakeRegistry) -> None:
        archive = make_zip({"Program.cs": "class Program {}"})
        registry = make_registry({"https://cdn.test/console.zip": bytes_route(archive)})

        with registry.open_archive("https://cdn.test/console.zip") as stream:
            assert stream.read() == archive
            stream.seek(0)
            with zipfile.ZipFile(stream) as zf:
                assert zf.namelist() == ["Program.cs"]

    def test_relative_url_resolves_against_base(self, make_registry: MakeRegistry) -> None:
        archive = make_zip({"a.txt": "a"})
        registry = make_registry({f"{REGISTRY_URL}/archives/a.zip": bytes_route(archive)})

        with registry.open_archive("archives/a.zip") as stream:
            assert stream.read() == archive

    @pytest.mark.parametrize(
        ("link", "expected"),
        [
            ("/files/a.zip", "https://h.test/files/a.zip"),
            ("https://cdn.test/a.zip", "https://cdn.test/a.zip"),
        ],
    )
    def test_archive_link_resolves_like_a_browser(self, link: str, expected: str) -> None:
        seen: list[str] = []

        def route(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200, content=b"zip")

        config = RegistryConfig(base_url="https://h.test/api", timeout=1.0)
        with HttpxRegistryClient(config, transport=mock_transport({expected: route})) as registry:
            with registry.open_archive(link) as stream:
                assert stream.read() == b"zip"
        assert seen == [expected]

    def test_reports_progress_while_streaming(self, make_registry: MakeRegistry) -> None:
        chunks = [b"abc", b"def", b"ghi"]
        registry = make_registry({
            "https://cdn.test/big.zip": lambda request: httpx.Response(
                200,
                headers={"Content-Length": "9"},
                stream=_ChunkedStream(chunks),
            ),
        })
        calls: list[tuple[int, int | None]] = []

        with registry.open_archive(
            "https://cdn.test/big.zip",
            progress_callback=lambda done, total: calls.append((done, total)),
        ) as stream:
            assert stream.read() == b"abcdefghi"

        assert calls == [(3, 9), (6, 9), (9, 9)]

    def test_reports_progress(self, make_registry: MakeRegistry) -> None:
        archive = make_zip({"big.bin": b"\0" * 4096})
        registry = make_registry({"https://cdn.test/big.zip": bytes_route(archive)})
        calls: list[tuple[int, int | None]] = []

        with registry.open_archive(
            "https://cdn.test/big.zip",
            progress_callback=lambda done, total: calls.append((done, total)),
        ):
            pass

        assert calls
        assert calls[-1] == (len(archive), len(archive))

    def test_stream_closed_after_block(self, make_registry: MakeRegistry) -> None:
        registry = make_registry({"https://cdn.test/a.zip": bytes_route(make_zip({"a": "a"}))})
        with registry.open_archive("https://cdn.test/a.zip") as stream:
            pass
        assert stream.closed

    def test_stream_closed_when_block_raises(self, make_registry: MakeRegistry) -> None:
        registry = make_registry({"https://cdn.test/a.zip": bytes_route(make_zip({"a": "a"}))})
        with pytest.raises(RuntimeError):
            with registry.open_archive("https://cdn.test/a.zip") as stream:
                raise RuntimeError("extract blew up")
        assert stream.closed

    def test_missing_archive(self, make_registry: MakeRegistry) -> None:
        registry = make_registry({})
        with pytest.raises(FetchFailedError) as exc_info:
            with registry.open_archive("https://cdn.test/gone.zip"):
                pytest.fail("block must not run")
        assert exc_info.value.status_code == 404
        assert exc_info.value.target == "https://cdn.test/gone.zip"

    def test_transport_failure(self, make_registry: MakeRegistry) -> None:
        registry = make_registry({"https://cdn.test/a.zip": failing_route("timed out")})
        with pytest.raises(FetchFailedError, match="timed out"):
            with registry.open_archive("https://cdn.test/a.zip"):
                pytest.fail("block must not run")


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------

class TestLifecycle:
    def test_context_manager_closes_client(self) -> None:
        config = RegistryConfig(base_url=REGISTRY_URL, timeout=1.0)
        with HttpxRegistryClient(config, transport=mock_transport({})) as registry:
            pass
        assert registry._client.is_closed

    def test_close_is_idempotent(self) -> None:
        config = RegistryConfig(base_url=REGISTRY_URL, timeout=1.0)
        registry = HttpxRegistryClient(config, transport=mock_transport({}))
        registry.close()
        registry.close()
