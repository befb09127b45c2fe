"""Reference-translating deep copy of PDF object graphs between stores.

The copier walks an object drawn from a source :class:`DocumentStore` and
rebuilds it inside a destination store, replacing every reference with a
reference minted by the destination. A :class:`ReferenceTable` records the
translation for one source so that each source object is copied at most
once, however many paths reach it.

Cycles are broken by registering the destination reference *before* the
referenced object is copied: a placeholder slot is reserved first, and any
path that leads back to the same source reference finds the placeholder in
the table instead of descending again. Referenced objects are copied from a
work queue that is drained before :meth:`ObjectGraphCopier.copy` returns, so
long reference chains do not grow the Python call stack.

Scalars, including ``null`` and booleans, are shared with the source rather
than rejected, since they cannot carry references.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Iterator

from pypdf.generic import (
    ArrayObject,
    DecodedStreamObject,
    DictionaryObject,
    EncodedStreamObject,
    IndirectObject,
    PdfObject,
    StreamObject,
)

from ..core.objects import ObjectKind, ReferenceKey, is_reference, object_kind, reference_key
from ..core.store import DocumentStore

LOGGER = logging.getLogger("pdfgraft.merge")


class ReferenceTable:
    """Translation of source references to destination references."""

    def __init__(self) -> None:
        self._entries: dict[ReferenceKey, IndirectObject] = {}

    def lookup(self, source: IndirectObject) -> IndirectObject | None:
        return self._entries.get(reference_key(source))

    def register(self, source: IndirectObject, destination: IndirectObject) -> None:
        key = reference_key(source)
        if key in self._entries:
            raise KeyError(f"Reference {key[0]} {key[1]} R is already translated")
        self._entries[key] = destination

    def __contains__(self, source: object) -> bool:
        return is_reference(source) and reference_key(source) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ReferenceKey]:
        return iter(self._entries)


class ObjectGraphCopier:
    """Copy objects from *source* into *destination* using one table."""

    def __init__(
        self,
        destination: DocumentStore,
        source: DocumentStore,
        table: ReferenceTable | None = None,
    ) -> None:
        self.destination = destination
        self.source = source
        self.table = table if table is not None else ReferenceTable()
        self.copied_count = 0
        self._pending: deque[tuple[IndirectObject, IndirectObject]] = deque()

    def copy(self, obj: PdfObject) -> PdfObject:
        """Return *obj* rebuilt with destination references.

        Every reference discovered while copying is bound to its final
        content in the destination by the time this method returns.
        """

        copied = self._translate(obj)
        while self._pending:
            source_ref, placeholder = self._pending.popleft()
            content = self._translate(self.source.get(source_ref))
            self.destination.add(content, reference=placeholder)
            self.copied_count += 1
        return copied

    def _translate(self, obj: PdfObject) -> PdfObject:
        kind = object_kind(obj)
        if kind.is_scalar:
            return obj
        if kind is ObjectKind.REFERENCE:
            return self._translate_reference(obj)  # type: ignore[arg-type]
        if kind is ObjectKind.DICTIONARY:
            return self._translate_dictionary(obj)  # type: ignore[arg-type]
        if kind is ObjectKind.ARRAY:
            return ArrayObject(self._translate(item) for item in obj)  # type: ignore[attr-defined]
        return self._translate_stream(obj)  # type: ignore[arg-type]

    def _translate_reference(self, reference: IndirectObject) -> IndirectObject:
        translated = self.table.lookup(reference)
        if translated is not None:
            return translated
        placeholder = self.destination.reserve()
        self.table.register(reference, placeholder)
        self._pending.append((reference, placeholder))
        LOGGER.debug(
            "Translating %d %d R to %d %d R",
            reference.idnum,
            reference.generation,
            placeholder.idnum,
            placeholder.generation,
        )
        return placeholder

    def _translate_dictionary(self, dictionary: DictionaryObject) -> DictionaryObject:
        copied = DictionaryObject()
        self._translate_entries(dictionary, copied)
        return copied

    def _translate_stream(self, stream: StreamObject) -> StreamObject:
        copied: StreamObject
        if isinstance(stream, EncodedStreamObject):
            copied = EncodedStreamObject()
            copied._data = stream._data
        else:
            copied = DecodedStreamObject()
            copied.set_data(stream.get_data())
        self._translate_entries(stream, copied)
        return copied

    def _translate_entries(self, source: DictionaryObject, target: DictionaryObject) -> None:
        # dict.items() yields the raw values; DictionaryObject.__getitem__
        # would dereference them.
        for key, value in dict.items(source):
            target[key] = self._translate(value)


def copy_object(
    table: ReferenceTable,
    destination: DocumentStore,
    source: DocumentStore,
    obj: PdfObject,
) -> PdfObject:
    """Copy *obj* from *source* into *destination*, updating *table* in place."""

    return ObjectGraphCopier(destination, source, table).copy(obj)


__all__ = ["ReferenceTable", "ObjectGraphCopier", "copy_object"]
