"""Path validation helpers used before documents are opened or created."""

from __future__ import annotations

import os
from pathlib import Path

from .exceptions import DocumentOpenError
from .utils import PathLike, resolve_path


def ensure_readable_file(path: PathLike) -> Path:
    resolved = resolve_path(path)
    if not resolved.exists():
        raise DocumentOpenError(resolved, "file not found")
    if not resolved.is_file():
        raise DocumentOpenError(resolved, "not a regular file")
    if not os.access(resolved, os.R_OK):
        raise DocumentOpenError(resolved, "permission denied")
    return resolved


def ensure_output_parent(path: PathLike) -> Path:
    """Create the parent directory of *path* and check it can receive a file."""

    resolved = resolve_path(path)
    if resolved.is_dir():
        raise DocumentOpenError(resolved, "destination is a directory")
    try:
        resolved.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DocumentOpenError(resolved, exc) from exc
    if not os.access(resolved.parent, os.W_OK):
        raise DocumentOpenError(resolved, "destination directory is not writable")
    return resolved


__all__ = ["ensure_readable_file", "ensure_output_parent"]
