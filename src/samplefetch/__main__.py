"""Allow ``python -m samplefetch`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m samplefetch`` behaves identically to the
``samplefetch`` console script.
"""

from __future__ import annotations

from samplefetch.cli.app import cli

if __name__ == "__main__":
    cli()
