"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit.  List and download modes also return this after reporting
a handled failure."""

DETAILS: int = 1
"""Returned by every ``--details`` run, successful or not.  Existing
scripts around the registry depend on this value."""

GENERAL_ERROR: int = 1
"""A SampleFetchError reached the top-level boundary.  User-facing
message was displayed."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""
