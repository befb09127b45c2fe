"""Merge functionality for the :mod:`pdfgraft.merge` package."""

from __future__ import annotations

import logging
from contextlib import ExitStack
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Mapping, Sequence, cast

from pypdf.generic import DictionaryObject, IndirectObject, NameObject

from ..core.objects import make_dictionary
from ..core.store import DocumentStore
from ..core.utils import PathLike, resolve_path, resolve_paths
from .copier import ObjectGraphCopier
from .exceptions import PdfMergeError, PdfStructureError
from .page_tree import merge_page_trees

LOGGER = logging.getLogger("pdfgraft.merge")

DOCUMENT_INFO_KEYS = {
    "title": "/Title",
    "author": "/Author",
    "subject": "/Subject",
    "keywords": "/Keywords",
}


class MergeStage(str, Enum):
    """Progress of a :class:`PdfMerger` run."""

    PENDING = "pending"
    CREATED = "created"
    SOURCES_OPENED = "sources-opened"
    SOURCES_COPIED = "sources-copied"
    PAGE_TREES_MERGED = "page-trees-merged"
    CATALOG_INSTALLED = "catalog-installed"
    SAVED = "saved"
    FAILED = "failed"


@dataclass(frozen=True)
class MergeResult:
    """Summary of a completed merge."""

    output: Path
    sources: tuple[Path, ...]
    source_page_counts: tuple[int, ...]
    page_count: int
    copied_objects: int


def normalize_document_info(document_info: Mapping[str, object]) -> dict[str, str]:
    """Map user-facing info keys to PDF names, dropping empty values."""

    normalized: dict[str, str] = {}
    for key, value in document_info.items():
        if value is None:
            continue
        string_value = str(value).strip()
        if not string_value:
            continue
        pdf_key = DOCUMENT_INFO_KEYS.get(key.lower())
        if pdf_key is None:
            pdf_key = key if key.startswith("/") else f"/{key}"
        normalized[pdf_key] = string_value
    return normalized


class PdfMerger:
    """Merge several PDF documents into one by grafting their object graphs.

    Every source is copied into the destination with its own reference
    table, the copied page trees are joined under a new ``/Pages`` root, and
    a fresh catalog is installed before the destination is saved. Sources
    stay open until the destination has been written and are closed on every
    exit path.
    """

    def __init__(self, *, logger: logging.Logger | None = None) -> None:
        self.logger = logger if logger is not None else LOGGER
        self.stage = MergeStage.PENDING

    def merge(
        self,
        destination: PathLike,
        sources: Iterable[PathLike],
        *,
        metadata: bool = True,
        document_info: Mapping[str, object] | None = None,
        password: str | None = None,
    ) -> MergeResult:
        """Merge *sources* into *destination*.

        Args:
            destination: Path of the merged document to write.
            sources: Paths of the documents to merge, in page order.
            metadata: When ``True`` the information dictionary of the first
                source is copied into the merged document.
            document_info: Explicit document information (``title``,
                ``author``, ``subject``, ``keywords`` or raw PDF names). Takes
                precedence over *metadata*.
            password: Password used to decrypt encrypted sources.

        Raises:
            PdfMergeError: If no sources are given or a source is malformed.
            DocumentOpenError: If a source or the destination cannot be opened.
            DocumentStoreError: If reading, writing or saving objects fails.
        """

        source_paths = resolve_paths(sources)
        if not source_paths:
            raise PdfMergeError("No input PDFs provided")
        output_path = resolve_path(destination)

        self.stage = MergeStage.PENDING
        try:
            with ExitStack() as stack:
                result = self._run(
                    stack,
                    output_path,
                    source_paths,
                    metadata=metadata,
                    document_info=document_info,
                    password=password,
                )
        except Exception as exc:
            failed_at = self.stage
            self.stage = MergeStage.FAILED
            self.logger.error(
                "Merge into %s failed after stage %s: %s", output_path, failed_at.value, exc
            )
            raise

        self.logger.info(
            "Merged %d PDFs (%d pages) into %s",
            len(source_paths),
            result.page_count,
            result.output,
        )
        return result

    def _run(
        self,
        stack: ExitStack,
        output_path: Path,
        source_paths: Sequence[Path],
        *,
        metadata: bool,
        document_info: Mapping[str, object] | None,
        password: str | None,
    ) -> MergeResult:
        merged = stack.enter_context(DocumentStore.create(output_path))
        self._advance(MergeStage.CREATED)

        # Sources must stay open until the merged document is saved.
        sources: list[DocumentStore] = []
        for path in source_paths:
            self.logger.debug("Opening input PDF %s", path)
            sources.append(stack.enter_context(DocumentStore.open(path, password=password)))
        self._advance(MergeStage.SOURCES_OPENED)

        roots: list[IndirectObject] = []
        source_page_counts: list[int] = []
        copied_objects = 0
        for index, source in enumerate(sources):
            if source.root is None:
                raise PdfStructureError(index, "trailer has no /Root reference", source=source.path)
            source_page_counts.append(source.page_count)

            copier = ObjectGraphCopier(merged, source)
            root = cast(IndirectObject, copier.copy(source.root))
            roots.append(root)
            merged.root = root
            copied_objects += copier.copied_count
            self.logger.debug("Copied %d object(s) from %s", copier.copied_count, source.path)
        self._advance(MergeStage.SOURCES_COPIED)

        catalogs: list[DictionaryObject] = []
        for index, root in enumerate(roots):
            catalog = merged.get(root)
            if not isinstance(catalog, DictionaryObject):
                raise PdfStructureError(index, "catalog is not a dictionary", source=source_paths[index])
            catalogs.append(catalog)
        page_tree = merge_page_trees(merged, catalogs, labels=source_paths)
        self._advance(MergeStage.PAGE_TREES_MERGED)

        merged.root = merged.add(
            make_dictionary({"Type": NameObject("/Catalog"), "Pages": page_tree})
        )
        self._advance(MergeStage.CATALOG_INSTALLED)

        info = self._select_document_info(sources[0], metadata, document_info)
        if info:
            self.logger.debug("Setting metadata on merged PDF: %s", info)
            merged.set_metadata(info)

        merged.save()
        self._advance(MergeStage.SAVED)

        return MergeResult(
            output=output_path,
            sources=tuple(source_paths),
            source_page_counts=tuple(source_page_counts),
            page_count=merged.page_count,
            copied_objects=copied_objects,
        )

    def _select_document_info(
        self,
        first_source: DocumentStore,
        metadata: bool,
        document_info: Mapping[str, object] | None,
    ) -> dict[str, str]:
        if document_info:
            return normalize_document_info(document_info)
        if metadata:
            return first_source.metadata
        return {}

    def _advance(self, stage: MergeStage) -> None:
        self.logger.debug("Merge stage: %s -> %s", self.stage.value, stage.value)
        self.stage = stage


def merge_pdfs(
    inputs: Iterable[PathLike],
    output: PathLike,
    *,
    metadata: bool = True,
    document_info: Mapping[str, object] | None = None,
    password: str | None = None,
    logger: logging.Logger | None = None,
) -> Path:
    """Merge *inputs* into *output* and return the resulting path.

    Raises:
        PdfGraftError: If merging fails for any reason.
    """

    merger = PdfMerger(logger=logger)
    result = merger.merge(
        output,
        inputs,
        metadata=metadata,
        document_info=document_info,
        password=password,
    )
    return result.output


__all__ = [
    "MergeStage",
    "MergeResult",
    "PdfMerger",
    "merge_pdfs",
    "normalize_document_info",
]
