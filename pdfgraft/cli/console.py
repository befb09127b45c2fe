"""Shared rich console for CLI output."""

from __future__ import annotations

import sys
from typing import NoReturn

from rich.console import Console

console = Console()


def fail(exc: BaseException) -> NoReturn:
    console.print(f"\n[bold red]✗ Error:[/bold red] {exc}")
    sys.exit(1)
