"""CLI command reporting the installed fileinfo version."""

from __future__ import annotations

import click

from fileinfo import __version__
from fileinfo.constants import OutputFormat
from fileinfo.image_probe import PARSERS

from .common import emit_json, format_option


@click.command()
@format_option
def version(*, fmt: str) -> None:
    """Print the version and the image formats this build recognises."""
    if OutputFormat(fmt) is OutputFormat.JSON:
        emit_json({"version": __version__, "image_formats": [parser.format.value for parser in PARSERS]})
        return
    print(__version__)
