"""Core / service layer: pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No direct filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from samplefetch.core.catalog_decoder import decode_catalog, decode_sample
from samplefetch.core.models import Catalog, DownloadResult, Sample
from samplefetch.core.protocols import ArchiveExtractor, ProgressCallback, RegistryProvider
from samplefetch.core.sample_service import SampleService

__all__: list[str] = [
    "ArchiveExtractor",
    "Catalog",
    "DownloadResult",
    "ProgressCallback",
    "RegistryProvider",
    "Sample",
    "SampleService",
    "decode_catalog",
    "decode_sample",
]
