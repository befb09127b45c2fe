"""Exception types shared by the :mod:`pdfgraft` packages."""

from __future__ import annotations

from pathlib import Path


class PdfGraftError(Exception):
    """Base exception for all pdfgraft errors."""


class DocumentOpenError(PdfGraftError):
    """Raised when a document cannot be opened or created."""

    def __init__(self, path: str | Path, reason: object = "") -> None:
        self.path = Path(path)
        self.reason = str(reason)
        message = f"Unable to open {self.path}"
        if self.reason:
            message = f"{message}: {self.reason}"
        super().__init__(message)


class DocumentStoreError(PdfGraftError):
    """Raised when reading, adding or saving an object fails."""

    def __init__(self, operation: str, reason: object = "") -> None:
        self.operation = operation
        self.reason = str(reason)
        message = f"{operation} failed"
        if self.reason:
            message = f"{message}: {self.reason}"
        super().__init__(message)


class UnsupportedObjectError(PdfGraftError):
    """Raised when an object outside the supported PDF kinds is encountered."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"Unsupported PDF object kind: {kind}")


__all__ = [
    "PdfGraftError",
    "DocumentOpenError",
    "DocumentStoreError",
    "UnsupportedObjectError",
]
