"""Loading, layering and validating the presenter configuration."""

from __future__ import annotations

import importlib.resources
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from fileinfo.constants import (
    CONFIG_CSV_EXTENSIONS,
    CONFIG_IMAGE_EXTENSIONS,
    CONFIG_NAME_MAX_LENGTH,
    CONFIG_TIMESTAMP_FORMAT,
)
from fileinfo.errors import ConfigLoadError

TOML_CONFIG = ".fileinfo.toml"
ENV_CONFIG_PATH = "FILEINFO_CONFIG_PATH"


def load_default_config_text() -> str:
    """Return the bundled default configuration text, formatting preserved."""
    try:
        cfg_path = importlib.resources.files("fileinfo.resources").joinpath("default_config.toml")
        with cfg_path.open("r", encoding="utf-8") as f:  # type: ignore[attr-defined]
            return f.read()
    except OSError as err:  # pragma: no cover - packaging error
        msg = f"Error loading default configuration: {err}"
        raise ConfigLoadError(msg) from err


def load_default_config() -> dict[str, Any]:
    """Return the bundled default configuration as a Python dict."""
    return tomllib.loads(load_default_config_text())


def write_default_config(target_dir: Path) -> Path:
    """Write the bundled default configuration into ``target_dir``."""
    toml_path = target_dir / TOML_CONFIG
    toml_path.write_text(load_default_config_text(), encoding="utf-8")
    return toml_path


def load_toml_config(path: Path) -> dict[str, Any]:
    """Load one user TOML file as plain Python values."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        msg = f"Error reading {path}: {e}"
        raise ConfigLoadError(msg) from e
    try:
        return tomlkit.loads(raw).unwrap()
    except TOMLKitError as e:
        msg = f"Error parsing {path.name}: {e}"
        raise ConfigLoadError(msg) from e


def _xdg_config_path() -> Path:
    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    xdg_dir = Path(xdg_home) if xdg_home else Path.home() / ".config"
    return xdg_dir / "fileinfo" / "config.toml"


def _merge_pyproject_cfg(pyproject_path: Path, cfg: dict[str, Any]) -> dict[str, Any]:
    if not pyproject_path.exists():
        return cfg
    tool = load_toml_config(pyproject_path).get("tool", {})
    if isinstance(tool, dict):
        section = tool.get("fileinfo")
        if isinstance(section, dict):
            cfg |= section
    return cfg


def read_config(*, base_path: Path, explicit_config: Path | None = None) -> dict[str, Any]:
    """Read configuration merging multiple sources.

    Precedence (low to high):
      1. bundled defaults
      2. XDG config: $XDG_CONFIG_HOME/fileinfo/config.toml (or ~/.config/fileinfo/config.toml)
      3. .fileinfo.toml in ``base_path``
      4. [tool.fileinfo] table in pyproject.toml at ``base_path``
      5. $FILEINFO_CONFIG_PATH (if set)
      6. ``explicit_config`` (from --config)
    """
    cfg = load_default_config()

    for p in (_xdg_config_path(), base_path / TOML_CONFIG):
        if p.exists():
            cfg |= load_toml_config(p)

    cfg = _merge_pyproject_cfg(base_path / "pyproject.toml", cfg)

    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        p = Path(env_path)
        if p.exists():
            cfg |= load_toml_config(p)

    if explicit_config:
        if not explicit_config.exists():
            msg = f"Explicit config file not found: {explicit_config}"
            raise ConfigLoadError(msg)
        cfg |= load_toml_config(explicit_config)

    return cfg


def _normalise_extensions(key: str, value: object) -> frozenset[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        msg = f"'{key}' must be a list of strings"
        raise ConfigLoadError(msg)
    return frozenset(v.lower() if v.startswith(".") else f".{v.lower()}" for v in value if v)


@dataclass(frozen=True, slots=True)
class PresenterConfig:
    """Validated settings used to route and render file details."""

    image_extensions: frozenset[str]
    csv_extensions: frozenset[str]
    name_max_length: int
    timestamp_format: str

    @classmethod
    def from_mapping(cls, cfg: dict[str, Any]) -> PresenterConfig:
        name_max = cfg.get(CONFIG_NAME_MAX_LENGTH)
        if isinstance(name_max, bool) or not isinstance(name_max, int) or name_max < 2:  # noqa: PLR2004
            msg = f"'{CONFIG_NAME_MAX_LENGTH}' must be an integer >= 2"
            raise ConfigLoadError(msg)
        ts_format = cfg.get(CONFIG_TIMESTAMP_FORMAT)
        if not isinstance(ts_format, str) or not ts_format:
            msg = f"'{CONFIG_TIMESTAMP_FORMAT}' must be a non-empty string"
            raise ConfigLoadError(msg)
        return cls(
            image_extensions=_normalise_extensions(CONFIG_IMAGE_EXTENSIONS, cfg.get(CONFIG_IMAGE_EXTENSIONS)),
            csv_extensions=_normalise_extensions(CONFIG_CSV_EXTENSIONS, cfg.get(CONFIG_CSV_EXTENSIONS)),
            name_max_length=name_max,
            timestamp_format=ts_format,
        )

    @classmethod
    def default(cls) -> PresenterConfig:
        return cls.from_mapping(load_default_config())


def load_presenter_config(*, base_path: Path, explicit_config: Path | None = None) -> PresenterConfig:
    """Read layered configuration and validate it."""
    return PresenterConfig.from_mapping(read_config(base_path=base_path, explicit_config=explicit_config))
