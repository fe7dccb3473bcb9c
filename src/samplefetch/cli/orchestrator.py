"""Command orchestration for the three CLI modes.

:class:`CommandOrchestrator` interprets the user's intent (details, list
or download), drives :class:`~samplefetch.core.sample_service.SampleService`
and renders the outcome.  Every
:class:`~samplefetch.exceptions.SampleFetchError` is reported here, on
the error console in red and to the injected logger, and the mode ends
with its normal exit code.  Nothing in this module raises domain errors
to the caller.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.markup import escape

from samplefetch.cli import exit_codes
from samplefetch.cli.console import print_plain
from samplefetch.cli.progress import RichProgressHook
from samplefetch.cli.rendering import render_catalog, render_details
from samplefetch.core.sample_service import SampleService
from samplefetch.exceptions import SampleFetchError


class CommandOrchestrator:
    """Run one CLI command against a :class:`SampleService`.

    Parameters
    ----------
    service:
        The configured sample service.
    console:
        Destination for regular output (stdout in production).
    error_console:
        Destination for errors and the progress bar (stderr).
    logger:
        Logger receiving progress and failure records.
    show_progress:
        Render a progress bar while archives download.
    """

    def __init__(
        self,
        service: SampleService,
        *,
        console: Console,
        error_console: Console,
        logger: logging.Logger,
        show_progress: bool = True,
    ) -> None:
        self._service = service
        self._console = console
        self._error_console = error_console
        self._logger = logger
        self._show_progress = show_progress

    # ------------------------------------------------------------------
    # Mode dispatch
    # ------------------------------------------------------------------

    def run(
        self,
        name: str | None,
        *,
        folder: str | None = None,
        details: bool = False,
    ) -> int:
        """Pick the mode from the arguments and execute it.

        Details take precedence over everything; without a name the
        catalog is listed; otherwise the named sample is downloaded.
        """
        if details:
            return self.show_details(name or "")
        if not name:
            return self.list_samples()
        return self.download(name, folder)

    # ------------------------------------------------------------------
    # Modes
    # ------------------------------------------------------------------

    def show_details(self, name: str) -> int:
        """Print one sample's fields.  Always returns :data:`exit_codes.DETAILS`."""
        if not name.strip():
            self._report(
                SampleFetchError(
                    "A sample name is required with --details.",
                    hint="Usage: samplefetch NAME --details",
                ),
            )
            return exit_codes.DETAILS

        self._logger.info(
            "Retrieving sample '%s' from '%s'", name, self._service.registry_url,
        )
        try:
            sample = self._service.get_sample(name)
        except SampleFetchError as exc:
            self._report(exc)
            return exit_codes.DETAILS

        for line in render_details(sample):
            print_plain(self._console, line)
        return exit_codes.DETAILS

    def list_samples(self) -> int:
        """Print the catalog as a table followed by the total count."""
        registry_url = self._service.registry_url
        self._logger.info("Retrieving samples from '%s'", registry_url)
        try:
            catalog = self._service.list_samples()
        except SampleFetchError as exc:
            self._report(exc)
            return exit_codes.SUCCESS

        for line in render_catalog(catalog, registry_url):
            print_plain(self._console, line)
        return exit_codes.SUCCESS

    def download(self, name: str, folder: str | None = None) -> int:
        """Download *name* and extract it into *folder* (or its own name)."""
        self._logger.info(
            "Downloading sample '%s' from '%s'", name, self._service.registry_url,
        )
        try:
            if self._show_progress:
                with RichProgressHook(name, console=self._error_console) as hook:
                    result = self._service.download_sample(
                        name, folder, progress_callback=hook,
                    )
            else:
                result = self._service.download_sample(name, folder)
        except SampleFetchError as exc:
            self._report(exc)
            return exit_codes.SUCCESS

        self._logger.info(
            "Extracted sample '%s' into '%s'", result.sample.name, result.destination,
        )
        self._console.print(
            f"[bold green]Sample[/bold green] '{escape(result.sample.name)}' "
            f"[bold green]extracted to[/bold green] '{escape(str(result.destination))}'",
            highlight=False,
            soft_wrap=True,
        )
        return exit_codes.SUCCESS

    # ------------------------------------------------------------------
    # Error reporting
    # ------------------------------------------------------------------

    def _report(self, exc: SampleFetchError) -> None:
        """Show *exc* in red on the error console and log it."""
        self._error_console.print("Error: ", style="bold red", end="")
        self._error_console.print(
            str(exc), style="red", markup=False, highlight=False, soft_wrap=True,
        )
        if exc.hint:
            self._error_console.print("Hint: ", style="yellow", end="")
            self._error_console.print(
                exc.hint, markup=False, highlight=False, soft_wrap=True,
            )
        self._logger.error("%s", exc)
        self._logger.debug("Failure details", exc_info=exc)
