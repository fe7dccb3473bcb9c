"""Infrastructure layer: external system integration.

This layer wraps all interaction with the registry over HTTP (httpx)
and with the local filesystem (zipfile).  Every raw third-party
exception must be caught here and re-raised as a
:class:`~samplefetch.exceptions.SampleFetchError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from samplefetch.infra.httpx_registry_client import HttpxRegistryClient
from samplefetch.infra.zip_extractor import ZipArchiveExtractor

__all__: list[str] = [
    "HttpxRegistryClient",
    "ZipArchiveExtractor",
]
