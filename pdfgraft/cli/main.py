"""Entry point of the ``pdfgraft`` command."""

from __future__ import annotations

import logging

import click

from .. import __version__
from ..core.utils import get_logger
from ..tools import load_builtin_plugins
from .commands.info import info_command
from .commands.merge import merge_command


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """
    pdfgraft - merge PDF documents into one.
    """
    load_builtin_plugins()
    if verbose:
        get_logger("pdfgraft").setLevel(logging.DEBUG)


cli.add_command(merge_command)
cli.add_command(info_command)


if __name__ == "__main__":  # pragma: no cover
    cli()
