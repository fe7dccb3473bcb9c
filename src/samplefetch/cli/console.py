"""Rich console factories for the CLI layer.

Regular command output goes to stdout; errors, hints, log records and
the download progress bar go to stderr so that listings stay pipeable.
"""

from __future__ import annotations

from rich.console import Console


def get_console() -> Console:
    """Create a Rich console instance targeting stdout."""
    return Console()


def get_error_console() -> Console:
    """Create a Rich console instance targeting stderr."""
    return Console(stderr=True)


def print_plain(console: Console, line: str = "") -> None:
    """Print *line* verbatim, with no markup, emoji or wrapping applied."""
    console.print(line, markup=False, highlight=False, emoji=False, soft_wrap=True)
