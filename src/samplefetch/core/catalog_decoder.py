"""JSON → domain-model decoding for registry responses.

Pure functions only.  Field lookup is case-insensitive so that
``"name"`` and ``"Name"`` are both accepted; missing or ``null`` fields
decode to an empty string rather than failing.
"""

from __future__ import annotations

import json
from typing import Any

from samplefetch.core.models import Catalog, Sample
from samplefetch.exceptions import DecodeFailedError

_SNIPPET_LENGTH = 80

_FIELDS: dict[str, str] = {
    "name": "name",
    "command": "command",
    "url": "url",
    "description": "description",
}


def decode_sample(text: str) -> Sample | None:
    """Decode a single sample object.

    Returns ``None`` when the body is JSON ``null``.

    Raises
    ------
    DecodeFailedError
        If *text* is not JSON or is not an object.
    """
    payload = _loads(text)
    if payload is None:
        return None
    if not isinstance(payload, dict):
        raise DecodeFailedError(
            f"Expected a sample object, got {type(payload).__name__}.",
            snippet=_snippet(text),
        )
    return sample_from_dict(payload)


def decode_catalog(text: str) -> Catalog:
    """Decode a JSON array of sample objects, preserving order.

    Raises
    ------
    DecodeFailedError
        If *text* is not JSON, is not an array, or holds non-objects.
    """
    payload = _loads(text)
    if not isinstance(payload, list):
        raise DecodeFailedError(
            f"Expected a list of samples, got {type(payload).__name__}.",
            snippet=_snippet(text),
        )

    samples: list[Sample] = []
    for index, entry in enumerate(payload):
        if not isinstance(entry, dict):
            raise DecodeFailedError(
                f"Catalog entry {index} is not an object.",
                snippet=_snippet(text),
            )
        samples.append(sample_from_dict(entry))
    return Catalog(samples=tuple(samples))


def sample_from_dict(raw: dict[str, Any]) -> Sample:
    """Build a :class:`Sample` from a wire-shaped dict."""
    values = {field: "" for field in _FIELDS.values()}
    for key, value in raw.items():
        field = _FIELDS.get(str(key).lower())
        if field is None or value is None:
            continue
        values[field] = value if isinstance(value, str) else str(value)
    return Sample(**values)


def _loads(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeFailedError(
            f"Registry returned invalid JSON: {exc.msg} "
            f"(line {exc.lineno}, column {exc.colno}). "
            f"Body starts with: {_snippet(text)!r}",
            snippet=_snippet(text),
        ) from exc


def _snippet(text: str) -> str:
    return text[:_SNIPPET_LENGTH]
