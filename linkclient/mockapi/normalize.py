"""Turn a decoded response body into a list of records.

The mock server is inconsistent about response shapes.  The same resource
may come back as:

* a bare array: ``[{...}, {...}]``
* an envelope: ``{"items": [{...}]}`` or ``{"items": {...}}``
* a bare object: ``{...}``

:func:`normalize_body` accepts all three and always returns a list of dicts.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from linkclient.mockapi.models import Record


class MalformedBodyError(ValueError):
    """The decoded body matches none of the tolerated shapes."""


def _as_record(value: Any, where: str) -> Record:
    if not isinstance(value, Mapping):
        raise MalformedBodyError(
            f"expected an object {where}, got {type(value).__name__}"
        )
    return dict(value)


def _as_records(items: list[Any], where: str) -> list[Record]:
    return [_as_record(item, f"at {where}[{i}]") for i, item in enumerate(items)]


def normalize_body(data: Any, expected_key: str) -> list[Record]:
    """Return the records held in *data*.

    Raises:
        MalformedBodyError: If *data* (or any element of the record list) is
            not a JSON object.  Nothing is returned for a partially valid body.
    """
    if isinstance(data, list):
        return _as_records(data, "top level")

    if isinstance(data, Mapping) and expected_key in data:
        items = data[expected_key]
        if isinstance(items, list):
            return _as_records(items, repr(expected_key))
        return [_as_record(items, f"under {expected_key!r}")]

    return [_as_record(data, "at top level")]
