"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols, never on concrete
implementations.
"""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractContextManager
from pathlib import Path
from typing import BinaryIO, Protocol

ProgressCallback = Callable[[int, int | None], None]
"""Called with ``(downloaded_bytes, total_bytes)``; total may be unknown."""


class RegistryProvider(Protocol):
    """Contract for registry transport backends.

    Any object that implements these methods with the correct signatures
    satisfies this protocol structurally (no explicit inheritance
    required).
    """

    @property
    def base_url(self) -> str:
        """Registry address all relative paths are resolved against."""
        ...  # pragma: no cover

    def get_text(self, path: str) -> str:
        """GET *path* relative to :attr:`base_url` and return the body.

        Raises
        ------
        FetchFailedError
            On any transport failure or non-success status.
        """
        ...  # pragma: no cover

    def open_archive(
        self,
        url: str,
        *,
        progress_callback: ProgressCallback | None = None,
    ) -> AbstractContextManager[BinaryIO]:
        """Open a seekable binary stream over the archive at *url*.

        The stream is only valid inside the ``with`` block; it is closed
        on every exit path.

        Raises
        ------
        FetchFailedError
            On any transport failure or non-success status.
        """
        ...  # pragma: no cover


class ArchiveExtractor(Protocol):
    """Contract for archive extraction backends."""

    def extract(self, stream: BinaryIO, destination: Path) -> Path:
        """Extract every entry of *stream* into *destination*.

        Existing files with the same relative path are overwritten.

        Raises
        ------
        ExtractFailedError
            When the archive is invalid or cannot be written.
        """
        ...  # pragma: no cover
