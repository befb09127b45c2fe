"""Merge PDF documents by grafting their object graphs into one document."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from . import core, merge
from .core import (
    DocumentOpenError,
    DocumentStore,
    DocumentStoreError,
    ObjectKind,
    PdfGraftError,
    UnsupportedObjectError,
    object_kind,
)
from .merge import (
    DocumentInfo,
    MergeResult,
    MergeStage,
    ObjectGraphCopier,
    PdfMergeError,
    PdfMerger,
    PdfStructureError,
    ReferenceTable,
    copy_object,
    get_document_info,
    merge_page_trees,
    merge_pdfs,
)
from .tools import load_builtin_plugins
from .tools.common.interfaces import ToolContext
from .tools.common.pipeline import ToolRegistry, register_tool, registry

__version__ = "0.1.0"

load_builtin_plugins()

__all__ = [
    "core",
    "merge",
    "merge_pdfs",
    "merge_page_trees",
    "copy_object",
    "get_document_info",
    "merge_documents",
    "describe_document",
    "DocumentStore",
    "ObjectKind",
    "object_kind",
    "ObjectGraphCopier",
    "ReferenceTable",
    "PdfMerger",
    "MergeResult",
    "MergeStage",
    "DocumentInfo",
    "ToolContext",
    "ToolRegistry",
    "registry",
    "register_tool",
    "PdfGraftError",
    "PdfMergeError",
    "PdfStructureError",
    "DocumentOpenError",
    "DocumentStoreError",
    "UnsupportedObjectError",
]


def merge_documents(inputs: Iterable[str | Path], output: str | Path, **config) -> Path:
    """Convenience wrapper around the merge plugin."""

    context = ToolContext(output_path=output, config={"inputs": list(inputs), **config})
    tool = registry.create("merge", context)
    return tool.run()


def describe_document(input: str | Path, *, password: str | None = None) -> DocumentInfo:
    """Convenience wrapper around the info plugin."""

    context = ToolContext(input_path=input, config={"password": password})
    tool = registry.create("info", context)
    return tool.run()
