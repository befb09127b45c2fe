from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Callable

import pytest
from pypdf import PdfReader, PdfWriter
from pypdf.generic import (
    ArrayObject,
    IndirectObject,
    NameObject,
    NullObject,
    NumberObject,
    TextStringObject,
)

from pdfgraft.core.exceptions import DocumentOpenError, DocumentStoreError
from pdfgraft.core.objects import make_dictionary
from pdfgraft.core.store import DocumentStore


def _install_catalog(store: DocumentStore) -> IndirectObject:
    pages_ref = store.add(
        make_dictionary(
            {"Type": NameObject("/Pages"), "Kids": ArrayObject(), "Count": NumberObject(0)}
        )
    )
    store.root = store.add(make_dictionary({"Type": NameObject("/Catalog"), "Pages": pages_ref}))
    return store.root


def test_add_and_get_round_trip(tmp_path: Path) -> None:
    with DocumentStore.create(tmp_path / "out.pdf") as store:
        value = TextStringObject("hello")
        ref = store.add(value)

        assert store.get(ref) == "hello"
        assert store.get(ref).indirect_reference == ref


def test_references_are_distinct(tmp_path: Path) -> None:
    with DocumentStore.create(tmp_path / "out.pdf") as store:
        refs = [store.add(NumberObject(i)) for i in range(5)]

        assert len({(ref.idnum, ref.generation) for ref in refs}) == 5


def test_reserve_then_overwrite_keeps_reference(tmp_path: Path) -> None:
    with DocumentStore.create(tmp_path / "out.pdf") as store:
        ref = store.reserve()
        assert isinstance(store.get(ref), NullObject)

        returned = store.add(make_dictionary({"Answer": NumberObject(42)}), reference=ref)

        assert returned == ref
        assert store.get(ref)["/Answer"] == 42


def test_add_copies_object_bound_to_another_slot(tmp_path: Path) -> None:
    with DocumentStore.create(tmp_path / "out.pdf") as store:
        original = make_dictionary({"Key": NumberObject(1)})
        first = store.add(original)
        second = store.add(original)

        assert first != second
        assert store.get(first) is original
        assert store.get(second) is not original
        assert store.get(second)["/Key"] == 1


def test_get_rejects_foreign_reference(tmp_path: Path) -> None:
    with DocumentStore.create(tmp_path / "a.pdf") as first, DocumentStore.create(
        tmp_path / "b.pdf"
    ) as second:
        ref = first.add(NumberObject(1))

        with pytest.raises(DocumentStoreError, match="another document"):
            second.get(ref)


def test_overwrite_rejects_foreign_reference(tmp_path: Path) -> None:
    with DocumentStore.create(tmp_path / "a.pdf") as first, DocumentStore.create(
        tmp_path / "b.pdf"
    ) as second:
        ref = first.add(NumberObject(1))

        with pytest.raises(DocumentStoreError) as excinfo:
            second.add(NumberObject(2), reference=ref)
        assert excinfo.value.operation == "add"


def test_add_rejects_plain_python_values(tmp_path: Path) -> None:
    with DocumentStore.create(tmp_path / "out.pdf") as store:
        with pytest.raises(DocumentStoreError, match="expected a PDF object"):
            store.add(42)  # type: ignore[arg-type]


def test_read_only_store_rejects_writes(pdf_factory: Callable[..., Path]) -> None:
    source = pdf_factory("input.pdf")

    with DocumentStore.open(source) as store:
        assert not store.writable
        with pytest.raises(DocumentStoreError, match="read-only"):
            store.add(NumberObject(1))
        with pytest.raises(DocumentStoreError, match="read-only"):
            store.reserve()
        with pytest.raises(DocumentStoreError, match="read-only"):
            store.save()


def test_open_reads_root_page_count_and_metadata(pdf_factory: Callable[..., Path]) -> None:
    source = pdf_factory("input.pdf", title="Quarterly", pages=3)

    with DocumentStore.open(source) as store:
        assert store.root is not None
        catalog = store.get(store.root)
        assert catalog["/Type"] == "/Catalog"
        assert store.page_count == 3
        assert store.metadata["/Title"] == "Quarterly"
        assert store.object_count > 0
        assert not store.is_encrypted


def test_open_missing_file_names_path(tmp_path: Path) -> None:
    missing = tmp_path / "missing.pdf"

    with pytest.raises(DocumentOpenError) as excinfo:
        DocumentStore.open(missing)

    assert excinfo.value.path == missing.resolve()
    assert "missing.pdf" in str(excinfo.value)


def test_open_rejects_directory(tmp_path: Path) -> None:
    with pytest.raises(DocumentOpenError, match="not a regular file"):
        DocumentStore.open(tmp_path)


def test_open_rejects_empty_file(tmp_path: Path) -> None:
    empty = tmp_path / "empty.pdf"
    empty.write_bytes(b"")

    with pytest.raises(DocumentOpenError) as excinfo:
        DocumentStore.open(empty)

    assert excinfo.value.path == empty.resolve()


def test_encrypted_document_requires_password(tmp_path: Path) -> None:
    path = tmp_path / "locked.pdf"
    writer = PdfWriter()
    writer.add_blank_page(width=72, height=72)
    writer.encrypt("secret")
    with path.open("wb") as handle:
        writer.write(handle)

    with pytest.raises(DocumentOpenError, match="cannot be decrypted"):
        DocumentStore.open(path)

    with DocumentStore.open(path, password="secret") as store:
        assert store.is_encrypted
        assert store.page_count == 1


def test_missing_source_object_reads_as_null(tmp_path: Path) -> None:
    path = tmp_path / "dangling.pdf"
    writer = PdfWriter()
    writer.add_blank_page(width=72, height=72)
    writer.root_object[NameObject("/Dangling")] = IndirectObject(50, 0, writer)
    with path.open("wb") as handle:
        writer.write(handle)

    with DocumentStore.open(path) as store:
        catalog = store.get(store.root)
        dangling = catalog.raw_get("/Dangling")

        assert isinstance(dangling, IndirectObject)
        assert isinstance(store.get(dangling), NullObject)


def test_get_after_close_fails(pdf_factory: Callable[..., Path]) -> None:
    store = DocumentStore.open(pdf_factory("input.pdf"))
    root = store.root
    store.close()
    store.close()

    assert store.closed
    with pytest.raises(DocumentStoreError, match="closed"):
        store.get(root)


def test_save_requires_root(tmp_path: Path) -> None:
    with DocumentStore.create(tmp_path / "out.pdf") as store:
        with pytest.raises(DocumentStoreError, match="root is not set"):
            store.save()


def test_root_must_be_a_dictionary(tmp_path: Path) -> None:
    with DocumentStore.create(tmp_path / "out.pdf") as store:
        store.root = store.add(NumberObject(3))

        with pytest.raises(DocumentStoreError, match="not a dictionary"):
            store.save()


def test_save_writes_readable_document(tmp_path: Path) -> None:
    output = tmp_path / "nested" / "out.pdf"

    with DocumentStore.create(output) as store:
        _install_catalog(store)
        store.set_metadata({"Title": "Saved"})
        assert store.save() == output.resolve()

    reader = PdfReader(str(output))
    assert reader.trailer["/Root"]["/Type"] == "/Catalog"
    assert len(reader.pages) == 0
    assert reader.metadata["/Title"] == "Saved"
    assert list(output.parent.glob("*.tmp")) == []
    assert list(output.parent.glob(".*.tmp")) == []


def test_new_file_follows_umask(tmp_path: Path) -> None:
    output = tmp_path / "out.pdf"
    previous = os.umask(0o027)
    try:
        with DocumentStore.create(output) as store:
            _install_catalog(store)
            store.save()
    finally:
        os.umask(previous)

    assert stat.S_IMODE(output.stat().st_mode) == 0o640


def test_overwrite_keeps_existing_mode(tmp_path: Path) -> None:
    output = tmp_path / "out.pdf"
    output.write_bytes(b"old")
    output.chmod(0o600)

    with DocumentStore.create(output) as store:
        _install_catalog(store)
        store.save()

    assert stat.S_IMODE(output.stat().st_mode) == 0o600
    assert output.read_bytes().startswith(b"%PDF-")


def test_failed_save_leaves_no_files(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    output = tmp_path / "out.pdf"

    def _broken_write(self, stream):  # noqa: ANN001
        stream.write(b"%PDF-1.7\n")
        raise OSError("disk full")

    monkeypatch.setattr(PdfWriter, "write", _broken_write)

    with DocumentStore.create(output) as store:
        _install_catalog(store)
        with pytest.raises(DocumentStoreError, match="disk full") as excinfo:
            store.save()

    assert excinfo.value.operation == "save"
    assert not output.exists()
    assert list(tmp_path.iterdir()) == []


def test_create_rejects_directory_destination(tmp_path: Path) -> None:
    with pytest.raises(DocumentOpenError, match="is a directory"):
        DocumentStore.create(tmp_path)
