from __future__ import annotations

from pathlib import Path
from typing import Callable, Sequence
import sys

import pytest
from pypdf import PdfWriter
from pypdf.generic import ArrayObject, NameObject, NumberObject

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdfgraft.core.objects import make_dictionary  # noqa: E402
from pdfgraft.core.store import DocumentStore  # noqa: E402

PdfBuilder = Callable[..., Path]


@pytest.fixture()
def pdf_factory(tmp_path: Path) -> Callable[..., Path]:
    """Write a PDF of blank pages with pypdf's own writer."""

    def _create(filename: str, title: str | None = None, pages: int = 1) -> Path:
        path = tmp_path / filename
        writer = PdfWriter()
        for _ in range(pages):
            writer.add_blank_page(width=72, height=72)
        if title is not None:
            writer.add_metadata({"/Title": title})
        with path.open("wb") as handle:
            writer.write(handle)
        return path

    return _create


@pytest.fixture()
def sample_pdfs(pdf_factory: Callable[..., Path]) -> list[Path]:
    pdf1 = pdf_factory("one.pdf", title="Document One")
    pdf2 = pdf_factory("two.pdf")
    return [pdf1, pdf2]


@pytest.fixture()
def pdf_builder(tmp_path: Path) -> PdfBuilder:
    """Write a PDF whose page widths, fonts and catalog are controlled.

    Every page gets a ``/MediaBox`` of ``[0 0 width 72]``; when
    *shared_font* is set, all pages reference one font dictionary.
    """

    def _build(
        filename: str,
        widths: Sequence[int] = (72,),
        *,
        title: str | None = None,
        with_pages: bool = True,
        shared_font: bool = False,
    ) -> Path:
        path = tmp_path / filename
        store = DocumentStore.create(path)
        pages_ref = store.reserve()

        resources = make_dictionary({})
        if shared_font:
            font_ref = store.add(
                make_dictionary(
                    {
                        "Type": NameObject("/Font"),
                        "Subtype": NameObject("/Type1"),
                        "BaseFont": NameObject("/Helvetica"),
                    }
                )
            )
            resources = make_dictionary({"Font": make_dictionary({"F1": font_ref})})

        kids = ArrayObject()
        for width in widths:
            page = make_dictionary(
                {
                    "Type": NameObject("/Page"),
                    "Parent": pages_ref,
                    "MediaBox": ArrayObject(
                        [NumberObject(0), NumberObject(0), NumberObject(width), NumberObject(72)]
                    ),
                    "Resources": resources,
                }
            )
            kids.append(store.add(page))
        store.add(
            make_dictionary(
                {
                    "Type": NameObject("/Pages"),
                    "Kids": kids,
                    "Count": NumberObject(len(kids)),
                }
            ),
            reference=pages_ref,
        )

        catalog = {"Type": NameObject("/Catalog")}
        if with_pages:
            catalog["Pages"] = pages_ref
        store.root = store.add(make_dictionary(catalog))
        if title is not None:
            store.set_metadata({"/Title": title})
        store.save()
        store.close()
        return path

    return _build


@pytest.fixture()
def stores(tmp_path: Path):
    """A writable source store and a writable destination store."""

    source = DocumentStore.create(tmp_path / "source.pdf")
    destination = DocumentStore.create(tmp_path / "destination.pdf")
    yield source, destination
    source.close()
    destination.close()
