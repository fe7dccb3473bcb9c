"""Custom exception hierarchy for samplefetch.

All exceptions that cross layer boundaries must inherit from
:class:`SampleFetchError`.  Raw third-party exceptions (httpx, zipfile,
``json``) must NEVER propagate beyond the layer that produced them;
they are caught and re-raised as a typed subclass defined here.

Hierarchy
---------
SampleFetchError
├── FetchFailedError
├── DecodeFailedError
├── ExtractFailedError
├── SampleNotFoundError
└── ConfigurationError
"""

from __future__ import annotations


class SampleFetchError(Exception):
    """Base exception for all samplefetch errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI can render a clean single-line message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Network ---------------------------------------------------------------

class FetchFailedError(SampleFetchError):
    """Raised when an HTTP GET against the registry fails.

    Covers both transport failures (DNS, refused connection, timeout)
    and non-success HTTP status codes.
    """

    def __init__(
        self,
        message: str,
        *,
        target: str,
        status_code: int | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.target: str = target
        """URL or sample name the request was aimed at."""
        self.status_code: int | None = status_code
        """HTTP status, or ``None`` when no response was received."""


# --- Payload decoding ------------------------------------------------------

class DecodeFailedError(SampleFetchError):
    """Raised when a registry response body is not the expected JSON."""

    def __init__(
        self,
        message: str,
        *,
        snippet: str,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.snippet: str = snippet
        """Leading part of the offending body."""


# --- Extraction ------------------------------------------------------------

class ExtractFailedError(SampleFetchError):
    """Raised when an archive is invalid or cannot be written to disk."""


# --- Lookup ----------------------------------------------------------------

class SampleNotFoundError(SampleFetchError):
    """Raised when the registry has no sample with the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Sample '{name}' was not found in the registry.",
            hint="Run without arguments to list the available samples.",
        )
        self.name: str = name


# --- Configuration ---------------------------------------------------------

class ConfigurationError(SampleFetchError):
    """Raised when environment or command-line settings are invalid."""
