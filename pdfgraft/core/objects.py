"""PDF object kinds recognised by pdfgraft.

Objects themselves are the value classes of :mod:`pypdf.generic`; this
module closes them over a fixed set of kinds so that callers can dispatch
on :class:`ObjectKind` instead of probing classes ad hoc.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pypdf.generic import (
    ArrayObject,
    BooleanObject,
    ByteStringObject,
    DictionaryObject,
    FloatObject,
    IndirectObject,
    NameObject,
    NullObject,
    NumberObject,
    PdfObject,
    StreamObject,
    TextStringObject,
)

from .exceptions import UnsupportedObjectError

ReferenceKey = tuple[int, int]


class ObjectKind(str, Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    NAME = "name"
    INTEGER = "integer"
    REAL = "real"
    STRING = "string"
    DICTIONARY = "dictionary"
    ARRAY = "array"
    STREAM = "stream"
    REFERENCE = "reference"

    @property
    def is_scalar(self) -> bool:
        """Scalars hold no references and are shared, not copied."""
        return self in _SCALAR_KINDS


_SCALAR_KINDS = frozenset(
    (
        ObjectKind.NULL,
        ObjectKind.BOOLEAN,
        ObjectKind.NAME,
        ObjectKind.INTEGER,
        ObjectKind.REAL,
        ObjectKind.STRING,
    )
)

# Order matters: streams are dictionaries, so they are tested first.
_KIND_TABLE: tuple[tuple[type, ObjectKind], ...] = (
    (IndirectObject, ObjectKind.REFERENCE),
    (StreamObject, ObjectKind.STREAM),
    (DictionaryObject, ObjectKind.DICTIONARY),
    (ArrayObject, ObjectKind.ARRAY),
    (NameObject, ObjectKind.NAME),
    (TextStringObject, ObjectKind.STRING),
    (ByteStringObject, ObjectKind.STRING),
    (BooleanObject, ObjectKind.BOOLEAN),
    (NumberObject, ObjectKind.INTEGER),
    (FloatObject, ObjectKind.REAL),
    (NullObject, ObjectKind.NULL),
)


def object_kind(obj: Any) -> ObjectKind:
    """Return the :class:`ObjectKind` of *obj*.

    Raises:
        UnsupportedObjectError: If *obj* is not one of the supported
            :mod:`pypdf.generic` value classes.
    """

    for cls, kind in _KIND_TABLE:
        if isinstance(obj, cls):
            return kind
    raise UnsupportedObjectError(type(obj).__name__)


def is_reference(obj: Any) -> bool:
    return isinstance(obj, IndirectObject)


def reference_key(reference: IndirectObject) -> ReferenceKey:
    """Identity of *reference* within its document: ``(idnum, generation)``."""

    return reference.idnum, reference.generation


def name(value: str) -> NameObject:
    """Return a :class:`NameObject`, adding the leading ``/`` when missing."""

    return NameObject(value if value.startswith("/") else f"/{value}")


def make_dictionary(entries: dict[str, PdfObject]) -> DictionaryObject:
    """Build a :class:`DictionaryObject` from plain string keys."""

    dictionary = DictionaryObject()
    for key, value in entries.items():
        dictionary[name(key)] = value
    return dictionary


__all__ = [
    "ObjectKind",
    "ReferenceKey",
    "object_kind",
    "is_reference",
    "reference_key",
    "name",
    "make_dictionary",
]
