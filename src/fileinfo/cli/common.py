"""Shared CLI helpers used by multiple subcommands."""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, NoReturn

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from fileinfo.config import PresenterConfig, load_presenter_config
from fileinfo.constants import EXIT_CONFIG, OutputFormat
from fileinfo.errors import ConfigLoadError

if TYPE_CHECKING:
    from collections.abc import Iterable

FORMAT_OPTION_CHOICES = [f.value for f in OutputFormat]


def format_option(func: Any) -> Any:
    return click.option(
        "--format",
        "fmt",
        type=click.Choice(FORMAT_OPTION_CHOICES, case_sensitive=False),
        default=OutputFormat.HUMAN.value,
        help="Output format",
    )(func)


def config_option(func: Any) -> Any:
    return click.option(
        "--config",
        "config_path",
        type=click.Path(path_type=Path),
        help="Explicit config file path",
    )(func)


def path_argument(func: Any) -> Any:
    return click.argument("path", type=click.Path(path_type=Path))(func)


def exit_on_broken_pipe() -> None:
    """Silence the downstream pipe and exit cleanly."""
    # Redirect stdout to devnull so the interpreter's final flush does not raise again.
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
    except (OSError, ValueError, AttributeError):
        pass
    raise SystemExit(0)


def load_config_or_exit(*, path: Path, config_path: Path | None) -> PresenterConfig:
    base = path.parent if not path.is_dir() else path
    try:
        return load_presenter_config(base_path=base, explicit_config=config_path)
    except ConfigLoadError as err:
        print(err, file=sys.stderr)
        raise SystemExit(EXIT_CONFIG) from err


def fail(message: str, code: int) -> NoReturn:
    print(message, file=sys.stderr)
    raise SystemExit(code)


def emit_json(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, sort_keys=True, indent=2, ensure_ascii=False))


def _split_line(line: str) -> tuple[str, str]:
    key, sep, value = line.partition(":")
    if not sep:
        return line, ""
    return key, value.strip()


def emit_table(title: str, lines: Iterable[str]) -> None:
    """Print ``Key: value`` lines as a two-column rich table."""
    console = Console(soft_wrap=True)
    table = Table(title=title, show_header=False, box=None, pad_edge=False, expand=False)
    table.add_column(style="cyan", no_wrap=True)
    table.add_column(style="default")
    for line in lines:
        key, value = _split_line(line)
        table.add_row(Text(key), Text(value))
    console.print(table)
