"""Namespace for pluggable pdfgraft tools."""

from __future__ import annotations

from .common.pipeline import registry


def load_builtin_plugins() -> None:
    from .merger import merge  # noqa: F401  # register merge and info tools


__all__ = ["registry", "load_builtin_plugins"]
