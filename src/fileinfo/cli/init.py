"""CLI command that writes the default configuration file."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from fileinfo.config import TOML_CONFIG, write_default_config
from fileinfo.errors import ConfigLoadError


@click.command()
@click.option(
    "--path",
    "target",
    type=click.Path(path_type=Path, file_okay=False),
    default=Path(),
    help="Directory to initialize",
)
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
def init(*, target: Path, force: bool) -> None:
    """Create a default .fileinfo.toml in the target directory."""
    target = target.resolve()
    if (target / TOML_CONFIG).exists() and not force:
        print(
            f"Config '{TOML_CONFIG}' already exists at {target}. Use --force to overwrite.",
            file=sys.stderr,
        )
        raise SystemExit(1)
    try:
        written = write_default_config(target)
    except (OSError, ConfigLoadError) as e:
        print(f"Could not write config: {e}", file=sys.stderr)
        raise SystemExit(1) from e
    print(f"Wrote {written}")
