"""Core sample service: list, look up and download registry samples.

This is the central service class consumed by the CLI layer.  It
depends on a :class:`~samplefetch.core.protocols.RegistryProvider` and an
:class:`~samplefetch.core.protocols.ArchiveExtractor` injected at
construction time (dependency inversion), keeping the core free of any
httpx or zipfile imports.

Guarantees
----------
* Pure orchestration; no direct network, filesystem or console I/O.
* Only :class:`~samplefetch.exceptions.SampleFetchError` subclasses escape.
* Every failure message names the sample or registry it concerns.
"""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from samplefetch.core.catalog_decoder import decode_catalog, decode_sample
from samplefetch.core.models import Catalog, DownloadResult, Sample
from samplefetch.core.protocols import ArchiveExtractor, ProgressCallback, RegistryProvider
from samplefetch.exceptions import (
    DecodeFailedError,
    ExtractFailedError,
    FetchFailedError,
    SampleFetchError,
    SampleNotFoundError,
)

SAMPLES_PATH = "Samples/"


class SampleService:
    """Stateless service driving the list, details and download flows.

    Parameters
    ----------
    registry:
        Any object satisfying the :class:`RegistryProvider` protocol.
    extractor:
        Any object satisfying the :class:`ArchiveExtractor` protocol.
    """

    def __init__(
        self,
        registry: RegistryProvider,
        extractor: ArchiveExtractor,
    ) -> None:
        self._registry: RegistryProvider = registry
        self._extractor: ArchiveExtractor = extractor

    @property
    def registry_url(self) -> str:
        return self._registry.base_url

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_samples(self) -> Catalog:
        """Fetch and decode the full catalog.

        Raises
        ------
        FetchFailedError
            If the catalog cannot be retrieved.
        DecodeFailedError
            If the body is not a JSON array of samples.
        """
        try:
            body = self._registry.get_text("")
        except FetchFailedError as exc:
            raise FetchFailedError(
                f"Could not retrieve samples from {self.registry_url}. {exc}",
                target=self.registry_url,
                status_code=exc.status_code,
                hint=exc.hint,
            ) from exc
        except SampleFetchError:
            raise
        except Exception as exc:
            raise FetchFailedError(
                f"Could not retrieve samples from {self.registry_url}. "
                f"Unexpected registry error: {exc}",
                target=self.registry_url,
            ) from exc

        try:
            return decode_catalog(body)
        except DecodeFailedError as exc:
            raise DecodeFailedError(
                f"Could not retrieve samples from {self.registry_url}. {exc}",
                snippet=exc.snippet,
                hint=exc.hint,
            ) from exc

    def get_sample(self, name: str) -> Sample:
        """Fetch and decode a single sample by *name*.

        Raises
        ------
        SampleNotFoundError
            If *name* is blank, the registry answers 404, or the body is
            JSON ``null``.
        FetchFailedError
            For any other retrieval failure.
        DecodeFailedError
            If the body is not a JSON sample object.
        """
        if not name.strip():
            raise SampleNotFoundError(name)

        try:
            body = self._registry.get_text(SAMPLES_PATH + name)
        except FetchFailedError as exc:
            if exc.status_code == 404:
                raise SampleNotFoundError(name) from exc
            raise FetchFailedError(
                f"Could not retrieve sample {name}. {exc}",
                target=name,
                status_code=exc.status_code,
                hint=exc.hint,
            ) from exc
        except SampleFetchError:
            raise
        except Exception as exc:
            raise FetchFailedError(
                f"Could not retrieve sample {name}. Unexpected registry error: {exc}",
                target=name,
            ) from exc

        try:
            sample = decode_sample(body)
        except DecodeFailedError as exc:
            raise DecodeFailedError(
                f"Could not retrieve sample {name}. {exc}",
                snippet=exc.snippet,
                hint=exc.hint,
            ) from exc
        if sample is None:
            raise SampleNotFoundError(name)
        return sample

    @staticmethod
    def resolve_destination(sample: Sample, folder: str | None = None) -> Path:
        """Return the extraction folder: *folder* if given, else the sample name.

        Raises
        ------
        ExtractFailedError
            If there is no *folder* and the sample name is blank.
        """
        if folder:
            return Path(folder)
        if not sample.name.strip():
            raise ExtractFailedError(
                "The sample has no name to use as a destination folder.",
                hint="Pass --folder to choose where to extract it.",
            )
        return Path(sample.name)

    def download_sample(
        self,
        name: str,
        folder: str | None = None,
        *,
        progress_callback: ProgressCallback | None = None,
    ) -> DownloadResult:
        """Look up *name*, fetch its archive and extract it.

        Parameters
        ----------
        name:
            Registry name of the sample.
        folder:
            Optional destination override.  Defaults to the sample name.
        progress_callback:
            Optional callable forwarded to the registry for archive
            download progress.

        Raises
        ------
        SampleNotFoundError
            If the registry has no such sample.
        FetchFailedError
            If the metadata or the archive cannot be retrieved.
        ExtractFailedError
            If the archive is invalid or cannot be written.
        """
        sample = self.get_sample(name)
        try:
            destination = self.resolve_destination(sample, folder)
        except ExtractFailedError as exc:
            raise ExtractFailedError(
                f"Could not choose a folder for sample '{name}'. {exc}",
                hint=exc.hint,
            ) from exc

        try:
            with self._registry.open_archive(
                sample.url,
                progress_callback=progress_callback,
            ) as stream:
                extracted_to = self._extract(sample, stream, destination)
        except FetchFailedError as exc:
            raise FetchFailedError(
                f"Could not download sample '{name}'. {exc}",
                target=sample.url,
                status_code=exc.status_code,
                hint=exc.hint,
            ) from exc
        except SampleFetchError:
            raise
        except Exception as exc:
            raise FetchFailedError(
                f"Could not download sample '{name}'. Unexpected registry error: {exc}",
                target=sample.url,
            ) from exc

        return DownloadResult(sample=sample, destination=extracted_to)

    # ------------------------------------------------------------------
    # Extractor delegation (safe boundary)
    # ------------------------------------------------------------------

    def _extract(self, sample: Sample, stream: BinaryIO, destination: Path) -> Path:
        """Call the extractor and ensure only our exceptions escape."""
        try:
            return self._extractor.extract(stream, destination)
        except Exception as exc:
            raise ExtractFailedError(
                f"An error occurred while attempting to extract the "
                f"{sample.name} sample. {exc}",
                hint=getattr(exc, "hint", None),
            ) from exc
