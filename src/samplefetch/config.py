"""Registry configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

from samplefetch.exceptions import ConfigurationError

DEFAULT_REGISTRY_URL = "https://localhost:5001"
DEFAULT_TIMEOUT = 30.0

REGISTRY_URL_ENV = "SAMPLEFETCH_REGISTRY_URL"
TIMEOUT_ENV = "SAMPLEFETCH_TIMEOUT"


@dataclass(frozen=True, slots=True)
class RegistryConfig:
    """Where the registry lives and how long to wait for it."""

    base_url: str = DEFAULT_REGISTRY_URL
    timeout: float = DEFAULT_TIMEOUT

    @staticmethod
    def from_env() -> RegistryConfig:
        """Load configuration from environment variables.

        Raises
        ------
        ConfigurationError
            If the URL is blank or the timeout is not a positive number.
        """
        base_url = os.environ.get(REGISTRY_URL_ENV, DEFAULT_REGISTRY_URL)
        raw_timeout = os.environ.get(TIMEOUT_ENV, str(DEFAULT_TIMEOUT))
        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise ConfigurationError(
                f"Invalid {TIMEOUT_ENV} value: {raw_timeout!r}",
                hint="Set it to a number of seconds, e.g. 30.",
            ) from exc
        if timeout <= 0:
            raise ConfigurationError(
                f"{TIMEOUT_ENV} must be greater than zero, got {raw_timeout!r}",
            )
        return RegistryConfig(base_url=_validate_url(base_url), timeout=timeout)

    def with_base_url(self, base_url: str) -> RegistryConfig:
        """Return a copy pointing at *base_url*."""
        return replace(self, base_url=_validate_url(base_url))


def _validate_url(url: str) -> str:
    stripped = url.strip()
    if not stripped:
        raise ConfigurationError(
            "Registry URL must not be empty.",
            hint=f"Pass --registry or set {REGISTRY_URL_ENV}.",
        )
    return stripped
