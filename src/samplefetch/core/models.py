"""Domain models for samplefetch.

All models are **frozen** dataclasses; immutable value objects with no
behaviour beyond data access.  They carry zero I/O, zero dependencies on
external packages, and live only for the duration of one command.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path


# ---------------------------------------------------------------------------
# Catalog entry
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Sample:
    """One downloadable project template published by the registry."""

    name: str
    """Unique identifier; also the default output folder name."""

    command: str
    """Short invocation hint.  Display only."""

    url: str
    """Absolute or registry-relative address of the zip archive."""

    description: str
    """Free-text explanation.  May be long or empty."""

    def to_dict(self) -> dict[str, str]:
        """Encode using the registry's wire field names."""
        return {
            "Name": self.name,
            "Command": self.command,
            "Url": self.url,
            "Description": self.description,
        }


# ---------------------------------------------------------------------------
# Typed collection wrapper
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Catalog:
    """Immutable, ordered collection of :class:`Sample` entries.

    Order is whatever the server returned.  Duplicate names are kept as
    received.
    """

    samples: tuple[Sample, ...]

    def __len__(self) -> int:
        return len(self.samples)

    def __bool__(self) -> bool:
        return len(self.samples) > 0

    def __iter__(self) -> Iterator[Sample]:
        return iter(self.samples)


# ---------------------------------------------------------------------------
# Download outcome
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class DownloadResult:
    """Where a sample ended up after a successful download."""

    sample: Sample
    destination: Path
