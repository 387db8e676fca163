from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from fileinfo.config import (
    TOML_CONFIG,
    PresenterConfig,
    load_default_config,
    load_presenter_config,
    read_config,
    write_default_config,
)
from fileinfo.errors import ConfigLoadError

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.small


def write_toml(p: Path, content: str) -> None:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content, encoding="utf-8")


def test_defaults_are_bundled() -> None:
    cfg = load_default_config()
    assert ".png" in cfg["image_extensions"]
    assert cfg["csv_extensions"] == [".csv"]
    assert cfg["name_max_length"] == 30


def test_default_presenter_config() -> None:
    config = PresenterConfig.default()
    assert config.image_extensions == frozenset({".png", ".jpg", ".jpeg", ".bmp", ".gif"})
    assert config.csv_extensions == frozenset({".csv"})
    assert config.name_max_length == 30


def test_config_precedence_explicit_overrides_env_and_local(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    base = tmp_path / "proj"
    base.mkdir()

    xdg = tmp_path / "xdg" / "fileinfo" / "config.toml"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg.parent.parent))
    write_toml(xdg, "name_max_length = 10\ncsv_extensions = ['.tsv']\n")

    write_toml(base / TOML_CONFIG, "name_max_length = 11\n")
    write_toml(base / "pyproject.toml", "[tool.fileinfo]\nname_max_length = 12\n")

    env_cfg = tmp_path / "env.toml"
    write_toml(env_cfg, "name_max_length = 13\n")
    monkeypatch.setenv("FILEINFO_CONFIG_PATH", str(env_cfg))

    explicit_cfg = tmp_path / "explicit.toml"
    write_toml(explicit_cfg, "name_max_length = 14\n")

    cfg = read_config(base_path=base, explicit_config=explicit_cfg)
    assert cfg["name_max_length"] == 14
    # untouched keys fall through from lower layers
    assert cfg["csv_extensions"] == [".tsv"]

    cfg = read_config(base_path=base)
    assert cfg["name_max_length"] == 13


def test_pyproject_table_overrides_local_file(tmp_path: Path) -> None:
    write_toml(tmp_path / TOML_CONFIG, "name_max_length = 11\n")
    write_toml(tmp_path / "pyproject.toml", "[project]\nname = 'x'\n[tool.fileinfo]\nname_max_length = 12\n")
    assert read_config(base_path=tmp_path)["name_max_length"] == 12


def test_missing_explicit_config_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigLoadError, match="not found"):
        read_config(base_path=tmp_path, explicit_config=tmp_path / "nope.toml")


def test_invalid_toml_raises(tmp_path: Path) -> None:
    write_toml(tmp_path / TOML_CONFIG, "name_max_length = = 3\n")
    with pytest.raises(ConfigLoadError, match="Error parsing"):
        read_config(base_path=tmp_path)


def test_extensions_are_normalised(tmp_path: Path) -> None:
    write_toml(tmp_path / TOML_CONFIG, "image_extensions = ['PNG', '.Webp', '']\n")
    config = load_presenter_config(base_path=tmp_path)
    assert config.image_extensions == frozenset({".png", ".webp"})


@pytest.mark.parametrize(
    "content",
    [
        "image_extensions = '.png'\n",
        "csv_extensions = [1, 2]\n",
        "name_max_length = 'long'\n",
        "name_max_length = 1\n",
        "name_max_length = true\n",
        "timestamp_format = ''\n",
    ],
)
def test_invalid_values_raise(tmp_path: Path, content: str) -> None:
    write_toml(tmp_path / TOML_CONFIG, content)
    with pytest.raises(ConfigLoadError):
        load_presenter_config(base_path=tmp_path)


def test_write_default_config_round_trips(tmp_path: Path) -> None:
    written = write_default_config(tmp_path)
    assert written.name == TOML_CONFIG
    assert "image_extensions" in written.read_text(encoding="utf-8")
    assert read_config(base_path=tmp_path) == load_default_config()
