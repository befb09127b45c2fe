"""Join the page trees of copied catalogs under one new root."""

from __future__ import annotations

import logging
from typing import Sequence

from pypdf.generic import (
    ArrayObject,
    DictionaryObject,
    IndirectObject,
    NameObject,
    NumberObject,
)

from ..core.store import DocumentStore
from .exceptions import PdfStructureError

LOGGER = logging.getLogger("pdfgraft.merge")

PAGES = NameObject("/Pages")
KIDS = NameObject("/Kids")
COUNT = NameObject("/Count")
PARENT = NameObject("/Parent")
TYPE = NameObject("/Type")


def merge_page_trees(
    destination: DocumentStore,
    catalogs: Sequence[DictionaryObject],
    *,
    labels: Sequence[object] | None = None,
) -> IndirectObject:
    """Build a page tree whose kids are the page-tree roots of *catalogs*.

    Each catalog must already live in *destination*. The former roots keep
    their order, gain a ``/Parent`` pointing at the new root, and are written
    back to their own slots; the new root's ``/Count`` is the sum of theirs.

    Args:
        destination: Store holding the copied catalogs.
        catalogs: Copied catalog dictionaries, in source order.
        labels: Optional names for the sources, used in error messages.

    Raises:
        PdfStructureError: If a catalog has no ``/Pages`` reference or its
            page tree has no integer ``/Count``.
    """

    # Reserved first so the former roots can point at it.
    tree_ref = destination.reserve()

    kids = ArrayObject()
    page_count = 0
    for index, catalog in enumerate(catalogs):
        label = labels[index] if labels is not None else None
        pages_ref = catalog.raw_get(PAGES) if PAGES in catalog else None
        if not isinstance(pages_ref, IndirectObject):
            raise PdfStructureError(index, "catalog has no /Pages reference", source=label)

        pages = destination.get(pages_ref)
        if not isinstance(pages, DictionaryObject):
            raise PdfStructureError(index, "/Pages is not a dictionary", source=label)
        count = destination.resolve(pages.raw_get(COUNT)) if COUNT in pages else None
        if not isinstance(count, NumberObject):
            raise PdfStructureError(index, "page tree has no integer /Count", source=label)

        kids.append(pages_ref)
        pages[PARENT] = tree_ref
        destination.add(pages, reference=pages_ref)
        page_count += int(count)
        LOGGER.debug(
            "Attached page tree %d %d R with %d page(s)",
            pages_ref.idnum,
            pages_ref.generation,
            int(count),
        )

    destination.add(
        DictionaryObject(
            {
                TYPE: NameObject("/Pages"),
                KIDS: kids,
                COUNT: NumberObject(page_count),
            }
        ),
        reference=tree_ref,
    )
    return tree_ref


__all__ = ["merge_page_trees"]
