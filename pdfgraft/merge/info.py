"""Summary information about a PDF document."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Dict

from ..core.store import DocumentStore
from ..core.utils import PathLike

LOGGER = logging.getLogger("pdfgraft.merge")


@dataclass(frozen=True)
class DocumentInfo:
    """Summary information describing a PDF document."""

    path: Path
    num_pages: int
    num_objects: int
    is_encrypted: bool
    metadata: Dict[str, str]


def get_document_info(path: PathLike, *, password: str | None = None) -> DocumentInfo:
    """Return :class:`DocumentInfo` describing the PDF located at *path*."""

    with DocumentStore.open(path, password=password) as store:
        info = DocumentInfo(
            path=store.path,
            num_pages=store.page_count,
            num_objects=store.object_count,
            is_encrypted=store.is_encrypted,
            metadata=store.metadata,
        )
    LOGGER.info(
        "PDF info: path=%s, pages=%s, objects=%s, encrypted=%s",
        info.path,
        info.num_pages,
        info.num_objects,
        info.is_encrypted,
    )
    return info


__all__ = ["DocumentInfo", "get_document_info"]
