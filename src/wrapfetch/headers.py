"""Helpers that treat every supported header container the same way.

Headers may arrive as a ``requests.structures.CaseInsensitiveDict``, a plain
mutable mapping, or a list of ``[name, value]`` pairs. Lookups are always
case-insensitive.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, MutableMapping

from requests.structures import CaseInsensitiveDict

HeadersLike = Mapping[str, str] | Iterable[Iterable[str]]


def _find_key(headers: Mapping[str, Any], name: str) -> str | None:
    lowered = name.lower()
    for key in headers:
        if key.lower() == lowered:
            return key
    return None


def get_header(headers: Any, name: str) -> str | None:
    """Return the value of ``name`` or None when it is not set."""
    if isinstance(headers, CaseInsensitiveDict):
        return headers.get(name)
    if isinstance(headers, Mapping):
        key = _find_key(headers, name)
        return None if key is None else headers[key]
    for pair in headers:
        if pair[0].lower() == name.lower():
            return pair[1]
    return None


def set_header(headers: Any, name: str, value: str) -> None:
    """Set ``name`` to ``value``, replacing any existing value."""
    if isinstance(headers, CaseInsensitiveDict):
        headers[name] = value
        return
    if isinstance(headers, MutableMapping):
        key = _find_key(headers, name)
        if key is not None:
            del headers[key]
        headers[name] = value
        return
    for pair in headers:
        if pair[0].lower() == name.lower():
            pair[1] = value
            return
    headers.append([name, value])


def append_header(headers: Any, name: str, value: str) -> None:
    """Add ``value`` to ``name``, joining with any existing value."""
    current = get_header(headers, name)
    if current is None:
        set_header(headers, name, value)
    else:
        set_header(headers, name, f"{current}, {value}")


def delete_header(headers: Any, name: str) -> None:
    """Remove ``name`` if present."""
    if isinstance(headers, CaseInsensitiveDict):
        headers.pop(name, None)
        return
    if isinstance(headers, MutableMapping):
        key = _find_key(headers, name)
        if key is not None:
            del headers[key]
        return
    headers[:] = [pair for pair in headers if pair[0].lower() != name.lower()]


def to_headers(source: HeadersLike | None) -> CaseInsensitiveDict:
    """Build a fresh ``CaseInsensitiveDict`` from any supported shape.

    Repeated names in a list of pairs are combined with ``", "``.
    """
    headers: CaseInsensitiveDict = CaseInsensitiveDict()
    if source is None:
        return headers
    if isinstance(source, Mapping):
        for name, value in source.items():
            headers[name] = value
        return headers
    for name, value in source:
        append_header(headers, name, value)
    return headers


def merge_headers(
    defaults: HeadersLike | None, overrides: HeadersLike | None
) -> CaseInsensitiveDict:
    """Return defaults overlaid with overrides as a new container."""
    merged = to_headers(defaults)
    for name, value in to_headers(overrides).items():
        merged[name] = value
    return merged
