"""CLI command describing a PDF."""

from __future__ import annotations

import click
from rich.table import Table

from ...core.exceptions import PdfGraftError
from ...merge.info import DocumentInfo
from ...tools.common.interfaces import ToolContext
from ...tools.common.pipeline import registry
from ..console import console, fail


@click.command(name="info")
@click.argument("input_pdf", type=click.Path(exists=True, dir_okay=False))
@click.option("--password", default=None, help="Password for an encrypted PDF")
def info_command(input_pdf, password):
    """
    Display information about a PDF file.

    Example:

        pdfgraft info input.pdf
    """
    context = ToolContext(input_path=input_pdf, config={"password": password})
    try:
        info: DocumentInfo = registry.create("info", context).run()
    except PdfGraftError as exc:
        fail(exc)

    table = Table(title=f"PDF Information: {info.path.name}")
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")
    table.add_row("File Path", str(info.path))
    table.add_row("Number of Pages", str(info.num_pages))
    table.add_row("Number of Objects", str(info.num_objects))
    table.add_row("Encrypted", "Yes" if info.is_encrypted else "No")
    for key, value in sorted(info.metadata.items()):
        table.add_row(key.lstrip("/"), value)

    console.print()
    console.print(table)
    console.print()
