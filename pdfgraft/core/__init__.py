"""Object model and document store shared by pdfgraft tools."""

from __future__ import annotations

from .exceptions import (
    DocumentOpenError,
    DocumentStoreError,
    PdfGraftError,
    UnsupportedObjectError,
)
from .objects import ObjectKind, object_kind, reference_key
from .store import DocumentStore

__all__ = [
    "DocumentStore",
    "ObjectKind",
    "object_kind",
    "reference_key",
    "PdfGraftError",
    "DocumentOpenError",
    "DocumentStoreError",
    "UnsupportedObjectError",
]
