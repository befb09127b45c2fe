"""CLI command for merging PDFs."""

from __future__ import annotations

import os

import click
from rich.table import Table

from ...core.exceptions import PdfGraftError
from ...merge.merger import MergeResult
from ...tools.common.interfaces import ToolContext
from ...tools.common.pipeline import registry
from ..console import console, fail


@click.command(name="merge")
@click.argument("inputs", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output", "-o",
    required=True,
    help="Output PDF path",
    type=click.Path(dir_okay=False),
)
@click.option("--title", default=None, help="Title of the merged document")
@click.option("--author", default=None, help="Author of the merged document")
@click.option("--subject", default=None, help="Subject of the merged document")
@click.option("--keywords", default=None, help="Keywords of the merged document")
@click.option(
    "--no-metadata",
    is_flag=True,
    help="Do not copy metadata from the first document",
)
@click.option("--password", default=None, help="Password for encrypted inputs")
def merge_command(inputs, output, title, author, subject, keywords, no_metadata, password):
    """
    Merge multiple PDFs into one, in the order given.

    Examples:

        pdfgraft merge a.pdf b.pdf -o merged.pdf

        pdfgraft merge a.pdf b.pdf -o merged.pdf --title "Annual report"
    """
    document_info = {
        key: value
        for key, value in {
            "title": title,
            "author": author,
            "subject": subject,
            "keywords": keywords,
        }.items()
        if value
    }
    context = ToolContext(
        output_path=output,
        config={
            "inputs": list(inputs),
            "metadata": not no_metadata,
            "document_info": document_info or None,
            "password": password,
        },
    )

    console.print(f"\n[bold cyan]Merging {len(inputs)} PDF(s)...[/bold cyan]")
    try:
        registry.create("merge", context).run()
    except PdfGraftError as exc:
        fail(exc)

    result: MergeResult = context.resources["result"]
    table = Table(title="Merged sources")
    table.add_column("#", style="dim", justify="right")
    table.add_column("File", style="cyan")
    table.add_column("Pages", style="green", justify="right")
    for index, (path, pages) in enumerate(zip(result.sources, result.source_page_counts), start=1):
        table.add_row(str(index), os.path.basename(path), str(pages))
    console.print(table)

    console.print(
        f"\n[bold green]✓ Merged {len(result.sources)} PDF(s) into {result.page_count} page(s)[/bold green]"
    )
    console.print(f"[dim]Output: {result.output}[/dim]")
    console.print(f"[dim]Objects copied: {result.copied_objects}[/dim]")
    console.print()
