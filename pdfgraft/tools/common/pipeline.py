"""Name-based lookup of pdfgraft tools."""

from __future__ import annotations

from typing import Dict

from .interfaces import BaseTool, ToolContext


class ToolRegistry:
    """Maps tool names to the :class:`BaseTool` subclasses implementing them."""

    def __init__(self) -> None:
        self._tools: Dict[str, type[BaseTool]] = {}

    def register(self, name: str, tool_class: type[BaseTool]) -> None:
        existing = self._tools.setdefault(name, tool_class)
        if existing is not tool_class:
            raise ValueError(
                f"Tool '{name}' is already registered to {existing.__name__}"
            )

    def create(self, name: str, context: ToolContext) -> BaseTool:
        tool_class = self._tools.get(name)
        if tool_class is None:
            available = ", ".join(sorted(self._tools)) or "none"
            raise KeyError(f"Tool '{name}' is not registered (available: {available})")
        return tool_class(context)


registry = ToolRegistry()


def register_tool(name: str):
    """Class decorator adding a tool to the shared :data:`registry`."""

    def decorator(cls: type[BaseTool]) -> type[BaseTool]:
        registry.register(name, cls)
        return cls

    return decorator


__all__ = ["ToolRegistry", "registry", "register_tool", "ToolContext", "BaseTool"]
