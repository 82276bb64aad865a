"""Body classification and conversion to a wire-ready payload."""

from __future__ import annotations

import io
import json
from collections.abc import AsyncIterator, Iterator, Mapping
from enum import Enum
from typing import Any

from .forms import MultipartForm, URLEncodedParams
from .headers import get_header, set_header

JSON_CONTENT_TYPE = "application/json;charset=utf-8"
URLENCODED_CONTENT_TYPE = "application/x-www-form-urlencoded;charset=utf-8"
DEFAULT_CONTENT_TYPE = "application/x-www-form-urlencoded"


class BodyKind(Enum):
    MULTIPART = "multipart"
    BINARY = "binary"
    FILE = "file"
    BLOB = "blob"
    STREAM = "stream"
    BYTE_VIEW = "byte_view"
    URLENCODED = "urlencoded"
    PLAIN_OBJECT = "plain_object"
    PRIMITIVE = "primitive"


WIRE_READY = frozenset(
    {
        BodyKind.MULTIPART,
        BodyKind.BINARY,
        BodyKind.FILE,
        BodyKind.BLOB,
        BodyKind.STREAM,
    }
)


def classify_body(body: Any) -> BodyKind:
    """Return the kind of ``body``; the first matching rule wins."""
    if isinstance(body, MultipartForm):
        return BodyKind.MULTIPART
    if isinstance(body, (bytes, bytearray)):
        return BodyKind.BINARY
    if isinstance(body, io.IOBase):
        return BodyKind.FILE
    if callable(getattr(body, "read", None)):
        return BodyKind.BLOB
    if isinstance(body, (Iterator, AsyncIterator)):
        return BodyKind.STREAM
    if isinstance(body, memoryview):
        return BodyKind.BYTE_VIEW
    if isinstance(body, URLEncodedParams):
        return BodyKind.URLENCODED
    if isinstance(body, (Mapping, list, tuple)):
        return BodyKind.PLAIN_OBJECT
    return BodyKind.PRIMITIVE


def _default_content_type(headers: Any, value: str) -> None:
    if get_header(headers, "Content-Type") is None:
        set_header(headers, "Content-Type", value)


def transform_body(
    body: Any, headers: Any, method: str | None
) -> tuple[Any, str | None]:
    """Convert ``body`` for the wire and fill in Content-Type if missing.

    Args:
        body: Caller supplied body.
        headers: Header container updated in place.
        method: Method chosen so far, None when unset.

    Returns:
        The payload and the (possibly defaulted) method.
    """
    kind = classify_body(body)
    if kind in WIRE_READY:
        return body, method
    if kind is BodyKind.BYTE_VIEW:
        return body.tobytes(), method
    if kind is BodyKind.URLENCODED:
        _default_content_type(headers, URLENCODED_CONTENT_TYPE)
        return str(body), method
    if kind is BodyKind.PLAIN_OBJECT:
        _default_content_type(headers, JSON_CONTENT_TYPE)
        return json.dumps(body), method or "POST"
    _default_content_type(headers, DEFAULT_CONTENT_TYPE)
    return body, method
