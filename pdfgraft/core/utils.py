"""Utilities shared by pdfgraft modules."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Union

PathLike = Union[str, Path]

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(LOG_FORMAT)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False
    return logger


def resolve_path(path: PathLike | None) -> Path:
    """Return an absolute :class:`~pathlib.Path` for *path*.

    User-home references are expanded and relative paths are resolved
    against the current working directory.
    """

    if path is None:
        raise ValueError("Path must not be None")
    return Path(path).expanduser().resolve(strict=False)


def resolve_paths(paths: Iterable[PathLike]) -> list[Path]:
    """Convert an iterable of paths to a list of resolved paths."""

    return [resolve_path(path) for path in paths]


__all__ = ["PathLike", "LOG_FORMAT", "get_logger", "resolve_path", "resolve_paths"]
