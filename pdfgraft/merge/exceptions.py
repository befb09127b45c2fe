"""Custom exceptions for the :mod:`pdfgraft.merge` package."""

from __future__ import annotations

from ..core.exceptions import PdfGraftError


class PdfMergeError(PdfGraftError):
    """Raised when the merge operation fails."""


class PdfStructureError(PdfMergeError):
    """Raised when a source document lacks an expected structural entry."""

    def __init__(self, index: int, message: str, *, source: object | None = None) -> None:
        self.index = index
        self.source = source
        label = f"source #{index}"
        if source is not None:
            label = f"{label} ({source})"
        super().__init__(f"{label}: {message}")
