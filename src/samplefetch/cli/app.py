"""CLI application entry point and command routing for samplefetch.

This module wires configuration, logging, consoles and the infra
adapters together and hands control to
:class:`~samplefetch.cli.orchestrator.CommandOrchestrator`.  It is also
the **last** error boundary for the application: anything the
orchestrator did not already report is rendered here and mapped to a
well-defined exit code.

Architecture notes
------------------
* No business logic lives here; all work is delegated to the core
  service and the infrastructure adapters.
* ``print()`` is not used; Rich consoles handle all output.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys

from rich.console import Console
from rich.markup import escape

from samplefetch.cli import exit_codes
from samplefetch.cli.console import get_console, get_error_console
from samplefetch.cli.logging_setup import configure_logging
from samplefetch.cli.orchestrator import CommandOrchestrator
from samplefetch.config import RegistryConfig
from samplefetch.core.protocols import RegistryProvider
from samplefetch.core.sample_service import SampleService
from samplefetch.exceptions import SampleFetchError
from samplefetch.infra.httpx_registry_client import HttpxRegistryClient
from samplefetch.infra.zip_extractor import ZipArchiveExtractor
from samplefetch.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    The CLI supports:
    * ``samplefetch``: list the registry catalog
    * ``samplefetch <name> --details``: show one sample
    * ``samplefetch <name> [-f DIR]``: download and extract a sample
    """
    parser = argparse.ArgumentParser(
        prog="samplefetch",
        description="Download and extract sample code from a sample registry.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "name",
        nargs="?",
        default=None,
        help="Name of the sample project to fetch. Omit to list all samples.",
    )
    parser.add_argument(
        "-f",
        "--folder",
        metavar="FOLDER",
        default=None,
        help="Folder to write the sample to (defaults to the sample name).",
    )
    parser.add_argument(
        "--details",
        action="store_true",
        help="Show a sample project's details instead of downloading it.",
    )
    parser.add_argument(
        "--registry",
        metavar="URL",
        default=None,
        help="Registry base URL (overrides SAMPLEFETCH_REGISTRY_URL).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log output (-v for info, -vv for debug).",
    )
    return parser


def _load_config(registry_url: str | None) -> RegistryConfig:
    config = RegistryConfig.from_env()
    if registry_url is not None:
        config = config.with_base_url(registry_url)
    return config


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: list[str] | None = None,
    *,
    registry: RegistryProvider | None = None,
    console: Console | None = None,
    error_console: Console | None = None,
) -> int:
    """Run the samplefetch CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.
    registry:
        Pre-built registry provider.  When ``None``, an
        :class:`HttpxRegistryClient` is created from the environment and
        ``--registry`` and closed before returning.
    console, error_console:
        Output targets; default to stdout and stderr Rich consoles.

    Returns
    -------
    int
        OS process exit code.

    Raises
    ------
    SampleFetchError
        For configuration problems detected before any command runs.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    out = console if console is not None else get_console()
    err = error_console if error_console is not None else get_error_console()
    logger = configure_logging(args.verbose, err)

    if registry is not None:
        return _run(args, registry, out, err, logger)

    config = _load_config(args.registry)
    logger.debug("Using registry %s (timeout %ss)", config.base_url, config.timeout)
    with HttpxRegistryClient(config) as client:
        return _run(args, client, out, err, logger)


def _run(
    args: argparse.Namespace,
    registry: RegistryProvider,
    console: Console,
    error_console: Console,
    logger: logging.Logger,
) -> int:
    service = SampleService(registry, ZipArchiveExtractor())
    orchestrator = CommandOrchestrator(
        service,
        console=console,
        error_console=error_console,
        logger=logger,
        show_progress=error_console.is_terminal,
    )
    return orchestrator.run(args.name, folder=args.folder, details=args.details)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    console = get_error_console()
    try:
        code = main()
        sys.exit(code)
    except SampleFetchError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}", highlight=False)
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}", highlight=False)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}",
            highlight=False,
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
