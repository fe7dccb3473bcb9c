"""Text layout for catalog listings and sample details.

Pure transforms only: every function returns strings and performs no
I/O, so column widths and truncation can be tested without a console.
"""

from __future__ import annotations

from samplefetch.core.models import Catalog, Sample

DESCRIPTION_WIDTH = 49
"""Maximum number of description characters shown in a listing row."""

_ROW_FORMAT = "{0:<20}  {1:<10}  {2:<50}"
_DETAIL_FORMAT = "{0:<10} {1}"


def truncate_description(description: str) -> str:
    """Return at most the first :data:`DESCRIPTION_WIDTH` characters.

    No ellipsis is appended; an empty description stays empty.
    """
    return description[:DESCRIPTION_WIDTH]


def format_catalog_row(sample: Sample) -> str:
    return _ROW_FORMAT.format(
        sample.name,
        sample.command,
        truncate_description(sample.description),
    )


def render_catalog(catalog: Catalog, registry_url: str) -> list[str]:
    """Build every line of the list-mode output, header to footer."""
    lines = [
        f"The available samples from {registry_url}",
        "-" * 45,
        "",
        _ROW_FORMAT.format("Sample Name", "Command", "Description"),
        "-" * 84,
        "",
    ]
    lines.extend(format_catalog_row(sample) for sample in catalog)
    lines.append("")
    lines.append(f"Total samples found: {len(catalog)}")
    return lines


def render_details(sample: Sample) -> list[str]:
    """Build the two-column key/value lines of details mode."""
    return [
        _DETAIL_FORMAT.format("Name:", sample.name),
        _DETAIL_FORMAT.format("Command:", sample.command),
        _DETAIL_FORMAT.format("Url:", sample.url),
        _DETAIL_FORMAT.format("Details:", sample.description),
    ]
