"""Addressable PDF object store built on :mod:`pypdf`.

A :class:`DocumentStore` is either *read-only*, wrapping a
:class:`pypdf.PdfReader` opened from an existing file, or *writable*,
wrapping a :class:`pypdf.PdfWriter` that will be saved to a destination
path. Both expose the same object-level contract: objects are addressed by
:class:`pypdf.generic.IndirectObject` references minted by the store itself,
and a writable store can allocate new slots or overwrite existing ones.
"""

from __future__ import annotations

import copy
import logging
import os
import shutil
import tempfile
from pathlib import Path
from types import TracebackType
from typing import Any, Mapping

from pypdf import PdfReader, PdfWriter
from pypdf.generic import DictionaryObject, IndirectObject, NullObject, PdfObject

from .exceptions import DocumentOpenError, DocumentStoreError
from .objects import reference_key
from .utils import PathLike
from .validator import ensure_output_parent, ensure_readable_file

LOGGER = logging.getLogger("pdfgraft.core.store")

ROOT_KEY = "/Root"
PAGES_KEY = "/Pages"
COUNT_KEY = "/Count"


def _describe(reference: IndirectObject) -> str:
    return f"{reference.idnum} {reference.generation} R"


def _new_file_mode() -> int:
    # mkstemp creates 0o600 files; match what open() would give under the umask.
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


class DocumentStore:
    """Object store for one PDF document."""

    def __init__(
        self,
        path: Path,
        *,
        reader: PdfReader | None = None,
        writer: PdfWriter | None = None,
    ) -> None:
        if (reader is None) == (writer is None):
            raise ValueError("DocumentStore requires exactly one of reader or writer")
        self.path = path
        self._reader = reader
        self._writer = writer
        self._root: IndirectObject | None = None
        self.closed = False
        if reader is not None:
            root = reader.trailer.raw_get(ROOT_KEY) if ROOT_KEY in reader.trailer else None
            if isinstance(root, IndirectObject):
                self._root = root

    # -- Construction --------------------------------------------------------

    @classmethod
    def open(cls, path: PathLike, *, password: str | None = None) -> "DocumentStore":
        """Open the PDF at *path* as a read-only store.

        Encrypted documents are decrypted with *password*, or with the empty
        password when none is given.

        Raises:
            DocumentOpenError: If the file is missing, unreadable, malformed
                or cannot be decrypted.
        """

        resolved = ensure_readable_file(path)
        LOGGER.debug("Opening PDF %s", resolved)
        try:
            reader = PdfReader(str(resolved))
        except Exception as exc:  # pypdf raises a variety of parse errors
            LOGGER.error("Failed to read PDF %s: %s", resolved, exc)
            raise DocumentOpenError(resolved, exc) from exc

        if reader.is_encrypted:
            LOGGER.debug("Attempting to decrypt encrypted PDF %s", resolved)
            try:
                decrypted = reader.decrypt(password or "")
            except Exception as exc:  # pragma: no cover - decrypt errors vary
                LOGGER.error("Failed to decrypt PDF %s: %s", resolved, exc)
                raise DocumentOpenError(resolved, "unable to decrypt") from exc
            if decrypted == 0:
                raise DocumentOpenError(resolved, "encrypted PDF cannot be decrypted")

        return cls(resolved, reader=reader)

    @classmethod
    def create(cls, path: PathLike) -> "DocumentStore":
        """Return an empty writable store that saves to *path*."""

        resolved = ensure_output_parent(path)
        LOGGER.debug("Creating PDF %s", resolved)
        writer = PdfWriter()
        # PdfWriter seeds an empty page tree and catalog; release both slots
        # so that only objects added through the store are written.
        seeded_catalog = writer.root_object
        seeded_pages = seeded_catalog.raw_get(PAGES_KEY)
        for seeded in (seeded_pages, seeded_catalog.indirect_reference):
            if isinstance(seeded, IndirectObject):
                writer._objects[seeded.idnum - 1] = None  # type: ignore[attr-defined]
        return cls(resolved, writer=writer)

    # -- Properties ----------------------------------------------------------

    @property
    def writable(self) -> bool:
        return self._writer is not None

    @property
    def root(self) -> IndirectObject | None:
        return self._root

    @root.setter
    def root(self, reference: IndirectObject | None) -> None:
        self._require_writer("set root")
        if reference is not None:
            self._slot_index(reference, "set root")
        self._root = reference

    @property
    def is_encrypted(self) -> bool:
        return self._reader is not None and self._reader.is_encrypted

    @property
    def object_count(self) -> int:
        if self._writer is not None:
            return sum(1 for obj in self._writer._objects if obj is not None)  # type: ignore[attr-defined]
        assert self._reader is not None
        size = self._reader.trailer.get("/Size")
        return max(int(size) - 1, 0) if size is not None else 0

    @property
    def page_count(self) -> int:
        """``/Count`` of the page tree the root catalog points to."""

        if self._root is None:
            return 0
        catalog = self.get(self._root)
        if not isinstance(catalog, DictionaryObject):
            return 0
        pages = self.resolve(catalog.get(PAGES_KEY))
        if not isinstance(pages, DictionaryObject):
            return 0
        count = self.resolve(pages.get(COUNT_KEY))
        return int(count) if isinstance(count, int) else 0

    @property
    def metadata(self) -> dict[str, str]:
        info = self._document.metadata
        if not info:
            return {}
        return {str(key): str(value) for key, value in info.items() if value is not None}

    def set_metadata(self, entries: Mapping[str, object]) -> None:
        writer = self._require_writer("set metadata")
        values = {
            (key if key.startswith("/") else f"/{key}"): str(value)
            for key, value in entries.items()
            if value is not None
        }
        if values:
            writer.add_metadata(values)

    # -- Object access -------------------------------------------------------

    def get(self, reference: IndirectObject) -> PdfObject:
        """Return the object bound to *reference*.

        A reference to an object that does not exist in a source document
        resolves to ``null``, as the PDF format prescribes.
        """

        self._ensure_open("get")
        document = self._document
        if reference.pdf is not document:
            raise DocumentStoreError(
                "get", f"reference {_describe(reference)} belongs to another document"
            )
        try:
            obj = document.get_object(reference)
        except Exception as exc:  # pypdf raises a variety of read errors
            raise DocumentStoreError("get", f"object {_describe(reference)}: {exc}") from exc
        if obj is None:
            LOGGER.debug("Object %s missing from %s; using null", _describe(reference), self.path)
            return NullObject()
        return obj

    def resolve(self, obj: Any) -> Any:
        """Follow *obj* one level when it is a reference into this store."""

        if isinstance(obj, IndirectObject):
            return self.get(obj)
        return obj

    def add(self, obj: PdfObject, *, reference: IndirectObject | None = None) -> IndirectObject:
        """Bind *obj* to a new slot, or overwrite the slot named by *reference*."""

        writer = self._require_writer("add")
        if not isinstance(obj, PdfObject):
            raise DocumentStoreError("add", f"expected a PDF object, got {type(obj).__name__}")

        bound = getattr(obj, "indirect_reference", None)
        if bound is not None and (
            bound.pdf is not writer
            or reference is None
            or reference_key(bound) != reference_key(reference)
        ):
            # The object is bound elsewhere; bind a shallow copy instead.
            obj = copy.copy(obj)

        objects = writer._objects  # type: ignore[attr-defined]
        if reference is None:
            objects.append(obj)
            reference = IndirectObject(len(objects), 0, writer)
        else:
            objects[self._slot_index(reference, "add")] = obj
        obj.indirect_reference = reference
        return reference

    def reserve(self) -> IndirectObject:
        """Allocate a slot holding ``null`` and return its reference."""

        return self.add(NullObject())

    # -- Persistence ---------------------------------------------------------

    def save(self) -> Path:
        """Write the document to :attr:`path`.

        The output is written to a temporary file next to the destination
        and moved into place once complete, so a failed save never leaves a
        truncated document behind.
        """

        writer = self._require_writer("save")
        if self._root is None:
            raise DocumentStoreError("save", "document root is not set")
        catalog = self.get(self._root)
        if not isinstance(catalog, DictionaryObject):
            raise DocumentStoreError("save", "document root is not a dictionary")
        writer._root_object = catalog  # type: ignore[attr-defined]

        fd, temp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        temp_path = Path(temp_name)
        try:
            with os.fdopen(fd, "wb") as handle:
                writer.write(handle)
            if self.path.exists():
                shutil.copymode(self.path, temp_path)
            else:
                os.chmod(temp_path, _new_file_mode())
            os.replace(temp_path, self.path)
        except Exception as exc:
            LOGGER.error("Failed to write PDF to %s: %s", self.path, exc)
            temp_path.unlink(missing_ok=True)
            raise DocumentStoreError("save", f"{self.path}: {exc}") from exc

        LOGGER.debug("Saved %d object(s) to %s", self.object_count, self.path)
        return self.path

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        if self._reader is not None:
            self._reader.close()
        LOGGER.debug("Closed %s", self.path)

    def __enter__(self) -> "DocumentStore":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        mode = "w" if self.writable else "r"
        return f"DocumentStore({str(self.path)!r}, mode={mode!r})"

    # -- Internal helpers ----------------------------------------------------

    @property
    def _document(self) -> PdfReader | PdfWriter:
        return self._writer if self._writer is not None else self._reader  # type: ignore[return-value]

    def _ensure_open(self, operation: str) -> None:
        if self.closed:
            raise DocumentStoreError(operation, f"{self.path} is closed")

    def _require_writer(self, operation: str) -> PdfWriter:
        self._ensure_open(operation)
        if self._writer is None:
            raise DocumentStoreError(operation, f"{self.path} is opened read-only")
        return self._writer

    def _slot_index(self, reference: IndirectObject, operation: str) -> int:
        writer = self._require_writer(operation)
        if reference.pdf is not writer:
            raise DocumentStoreError(
                operation, f"reference {_describe(reference)} belongs to another document"
            )
        index = reference.idnum - 1
        if not 0 <= index < len(writer._objects):  # type: ignore[attr-defined]
            raise DocumentStoreError(operation, f"no slot for reference {_describe(reference)}")
        return index


__all__ = ["DocumentStore"]
