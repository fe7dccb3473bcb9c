"""httpx backed implementation of :class:`~samplefetch.core.protocols.RegistryProvider`.

This module is the **only** place in the codebase that imports ``httpx``.
All httpx exceptions are caught here and re-raised as
:class:`~samplefetch.exceptions.FetchFailedError`, so nothing raw escapes
the infrastructure boundary.
"""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Iterator
from contextlib import closing, contextmanager
from typing import IO, BinaryIO, NoReturn, cast

import httpx

from samplefetch.config import RegistryConfig
from samplefetch.core.protocols import ProgressCallback
from samplefetch.exceptions import FetchFailedError

logger = logging.getLogger(__name__)

# Archives larger than this roll over from memory to a temp file on disk.
_SPOOL_MAX_BYTES = 8 * 1024 * 1024


class HttpxRegistryClient:
    """Concrete :class:`RegistryProvider` backed by a synchronous ``httpx.Client``.

    Usage::

        with HttpxRegistryClient(RegistryConfig.from_env()) as registry:
            body = registry.get_text("Samples/console")

    Request paths are appended to ``config.base_url``.  Archive links are
    resolved against it like browser links, so absolute URLs (e.g. a CDN)
    are used unchanged and root-relative ones replace the base path.
    """

    def __init__(
        self,
        config: RegistryConfig,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config: RegistryConfig = config
        self._client: httpx.Client = httpx.Client(
            base_url=config.base_url,
            timeout=config.timeout,
            follow_redirects=True,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._config.base_url

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> HttpxRegistryClient:
        return self

    def __exit__(self, *_args: object) -> None:
        self.close()

    def close(self) -> None:
        """Release pooled connections (idempotent)."""
        self._client.close()

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def get_text(self, path: str) -> str:
        """GET *path* and return the decoded response body.

        Raises
        ------
        FetchFailedError
            On transport failures and non-2xx responses.
        """
        request = self._build_request(path)
        request_url = str(request.url)
        logger.debug("GET %s", request_url)
        try:
            response = self._client.send(request)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._raise_status(exc)
        except httpx.HTTPError as exc:
            self._raise_transport(request_url, exc)

        logger.debug(
            "GET %s -> %s (%d bytes)",
            request_url,
            response.status_code,
            len(response.content),
        )
        return response.text

    @contextmanager
    def open_archive(
        self,
        url: str,
        *,
        progress_callback: ProgressCallback | None = None,
    ) -> Iterator[BinaryIO]:
        """Stream the archive at *url* into a spooled temp file and yield it.

        The yielded file is rewound and seekable, as ``zipfile`` requires.
        Both the HTTP response and the spool are closed when the block
        exits, whether normally or through an exception.

        Raises
        ------
        FetchFailedError
            On transport failures and non-2xx responses.
        """
        with tempfile.SpooledTemporaryFile(max_size=_SPOOL_MAX_BYTES) as spool:
            self._download_into(url, cast(IO[bytes], spool), progress_callback)
            spool.seek(0)
            yield cast(BinaryIO, spool)

    # ------------------------------------------------------------------
    # Streaming
    # ------------------------------------------------------------------

    def _download_into(
        self,
        url: str,
        sink: IO[bytes],
        progress_callback: ProgressCallback | None,
    ) -> None:
        request = self._build_request(self._absolute_url(url))
        request_url = str(request.url)
        logger.debug("GET %s (archive)", request_url)
        try:
            response = self._client.send(request, stream=True)
            with closing(response):
                response.raise_for_status()
                total = _content_length(response)
                downloaded = 0
                for chunk in response.iter_bytes():
                    sink.write(chunk)
                    downloaded += len(chunk)
                    if progress_callback is not None:
                        progress_callback(downloaded, total)
                logger.debug(
                    "GET %s -> %s (%d bytes)",
                    request_url,
                    response.status_code,
                    downloaded,
                )
        except httpx.HTTPStatusError as exc:
            self._raise_status(exc)
        except httpx.HTTPError as exc:
            self._raise_transport(request_url, exc)

    # ------------------------------------------------------------------
    # Exception mapping
    # ------------------------------------------------------------------

    def _build_request(self, url: str) -> httpx.Request:
        try:
            return self._client.build_request("GET", url)
        except httpx.InvalidURL as exc:
            raise FetchFailedError(
                f"Invalid registry URL {url!r}: {exc}",
                target=url,
            ) from exc

    def _absolute_url(self, url: str) -> str:
        """Resolve an archive link against the base URL per RFC 3986.

        ``/files/a.zip`` on base ``https://h.test/api`` becomes
        ``https://h.test/files/a.zip``; absolute links are unchanged.
        """
        try:
            return str(httpx.URL(self.base_url).join(url))
        except httpx.InvalidURL as exc:
            raise FetchFailedError(
                f"Invalid archive URL {url!r}: {exc}",
                target=url,
            ) from exc

    @staticmethod
    def _raise_status(exc: httpx.HTTPStatusError) -> NoReturn:
        """Translate a non-success response into :class:`FetchFailedError`.

        Always raises.
        """
        response = exc.response
        target = str(exc.request.url)
        raise FetchFailedError(
            f"Response status code does not indicate success: "
            f"{response.status_code} ({response.reason_phrase}) from {target}.",
            target=target,
            status_code=response.status_code,
        ) from exc

    @staticmethod
    def _raise_transport(target: str, exc: httpx.HTTPError) -> NoReturn:
        """Translate a transport-level failure into :class:`FetchFailedError`.

        Always raises.
        """
        reason = str(exc) or type(exc).__name__
        raise FetchFailedError(
            f"Request to {target} failed: {reason}",
            target=target,
            hint="Check the registry address and your network connection.",
        ) from exc


def _content_length(response: httpx.Response) -> int | None:
    raw = response.headers.get("Content-Length")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None
