"""Ordered form containers used as request bodies."""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Mapping, Sequence
from urllib.parse import urlencode

FieldValue = str | Sequence[str]


class _FieldList:
    """Ordered multi-valued ``name -> value`` collection."""

    def __init__(
        self,
        fields: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None,
    ) -> None:
        self._fields: list[tuple[str, Any]] = []
        if fields is None:
            return
        items = fields.items() if isinstance(fields, Mapping) else fields
        for name, value in items:
            self.append(name, value)

    def append(self, name: str, value: Any) -> None:
        self._fields.append((name, value))

    def get(self, name: str) -> Any | None:
        for key, value in self._fields:
            if key == name:
                return value
        return None

    def get_all(self, name: str) -> list[Any]:
        return [value for key, value in self._fields if key == name]

    def items(self) -> list[tuple[str, Any]]:
        return list(self._fields)

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._fields == other._fields  # type: ignore[attr-defined]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._fields!r})"


class MultipartForm(_FieldList):
    """Fields to be sent as ``multipart/form-data``.

    The transport owns the encoding, so no Content-Type is attached when a
    ``MultipartForm`` is used as a body.
    """

    @classmethod
    def from_fields(cls, fields: Mapping[str, FieldValue]) -> "MultipartForm":
        """Build a form with one entry per scalar or per list element."""
        form = cls()
        for name, value in fields.items():
            if isinstance(value, str):
                form.append(name, value)
            else:
                for item in value:
                    form.append(name, item)
        return form


class URLEncodedParams(_FieldList):
    """Fields serialized as ``application/x-www-form-urlencoded``."""

    def __str__(self) -> str:
        return urlencode(self._fields)
