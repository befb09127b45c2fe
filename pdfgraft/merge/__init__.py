"""Merge utilities for the :mod:`pdfgraft` toolkit."""

from __future__ import annotations

from .copier import ObjectGraphCopier, ReferenceTable, copy_object
from .exceptions import PdfMergeError, PdfStructureError
from .info import DocumentInfo, get_document_info
from .merger import MergeResult, MergeStage, PdfMerger, merge_pdfs
from .page_tree import merge_page_trees

__all__ = [
    "merge_pdfs",
    "merge_page_trees",
    "copy_object",
    "get_document_info",
    "ObjectGraphCopier",
    "ReferenceTable",
    "PdfMerger",
    "MergeResult",
    "MergeStage",
    "DocumentInfo",
    "PdfMergeError",
    "PdfStructureError",
]
