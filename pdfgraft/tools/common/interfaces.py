"""Context and base class shared by pdfgraft tools."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ...core.utils import resolve_path


@dataclass
class ToolContext:
    """Paths and options for one tool run.

    Tools read their options from :attr:`config` and leave anything the
    caller may want to inspect afterwards (a merge result, document info) in
    :attr:`resources`.
    """

    input_path: Path | None = None
    output_path: Path | None = None
    resources: dict[str, Any] = field(default_factory=dict)
    config: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.input_path is not None:
            self.input_path = resolve_path(self.input_path)
        if self.output_path is not None:
            self.output_path = resolve_path(self.output_path)


class BaseTool:
    name: str

    def __init__(self, context: ToolContext) -> None:
        self.context = context

    def run(self) -> Any:  # pragma: no cover - implemented by each tool
        raise NotImplementedError
