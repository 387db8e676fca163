from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner

from fileinfo import __version__
from fileinfo.cli import cli
from fileinfo.config import TOML_CONFIG
from fileinfo.constants import EXIT_PATH
from tests.builders import gif_bytes, png_bytes

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.medium


def test_image_command_ignores_extension(tmp_path: Path) -> None:
    p = tmp_path / "really_a_png.bin"
    p.write_bytes(png_bytes(16, 8, color_type=0, phys=(3780, 3780, 1)))
    res = CliRunner().invoke(cli, ["image", "--format", "json", str(p)])
    assert res.exit_code == 0, res.output
    assert json.loads(res.output) == {
        "format": "PNG",
        "width": 16,
        "height": 8,
        "channels": 1,
        "density": {"x": 96, "y": 96, "units": "ppi"},
    }


def test_image_command_human(tmp_path: Path) -> None:
    p = tmp_path / "a.gif"
    p.write_bytes(gif_bytes(10, 20))
    res = CliRunner().invoke(cli, ["image", str(p)])
    assert res.exit_code == 0, res.output
    assert "10×20px" in res.output
    assert "Resolution" not in res.output


def test_image_command_unrecognized(tmp_path: Path) -> None:
    p = tmp_path / "blob.png"
    p.write_bytes(b"\x00" * 64)
    res = CliRunner().invoke(cli, ["image", str(p)])
    assert res.exit_code == EXIT_PATH
    assert "Unrecognized image format" in res.output


def test_csv_command(tmp_path: Path) -> None:
    p = tmp_path / "t.txt"
    p.write_bytes(b"x,y\n1,2\n")
    res = CliRunner().invoke(cli, ["csv", "--format", "json", str(p)])
    assert res.exit_code == 0, res.output
    assert json.loads(res.output)["row_count"] == 2

    res = CliRunner().invoke(cli, ["csv", str(p)])
    assert "First Row" in res.output


def test_csv_command_unreadable(tmp_path: Path) -> None:
    res = CliRunner().invoke(cli, ["csv", str(tmp_path / "missing.csv")])
    assert res.exit_code == EXIT_PATH
    assert "Cannot read CSV" in res.output


def test_status_command(tmp_path: Path) -> None:
    p = tmp_path / "data.csv"
    p.write_bytes(b"a\n" * 10)
    res = CliRunner().invoke(cli, ["status", str(p)])
    assert res.exit_code == 0, res.output
    lines = res.output.splitlines()
    assert lines[0] == "📄 data.csv (20.0 B)"
    assert lines[1] == f"Path: {p}"

    res = CliRunner().invoke(cli, ["status", "--no-tooltip", str(p)])
    assert res.output.splitlines() == ["📄 data.csv (20.0 B)"]


def test_status_command_missing(tmp_path: Path) -> None:
    res = CliRunner().invoke(cli, ["status", str(tmp_path / "gone.png")])
    assert res.exit_code == EXIT_PATH
    assert "⚠️ gone.png" in res.output
    assert "Cannot access" in res.output


def test_status_respects_configured_name_length(tmp_path: Path) -> None:
    (tmp_path / TOML_CONFIG).write_text("name_max_length = 5\n", encoding="utf-8")
    p = tmp_path / "abcdefgh.txt"
    p.write_text("x", encoding="utf-8")
    res = CliRunner().invoke(cli, ["status", "--no-tooltip", str(p)])
    assert res.output.strip() == "📄 abcd… (1.0 B)"


def test_init_writes_default_config(tmp_path: Path) -> None:
    runner = CliRunner()
    res = runner.invoke(cli, ["init", "--path", str(tmp_path)])
    assert res.exit_code == 0, res.output
    assert (tmp_path / TOML_CONFIG).exists()

    res = runner.invoke(cli, ["init", "--path", str(tmp_path)])
    assert res.exit_code == 1
    assert "already exists" in res.output

    res = runner.invoke(cli, ["init", "--path", str(tmp_path), "--force"])
    assert res.exit_code == 0


def test_version_command_and_flag() -> None:
    runner = CliRunner()
    assert runner.invoke(cli, ["version"]).output.strip() == __version__
    assert __version__ in runner.invoke(cli, ["-V"]).output


@pytest.mark.parametrize(
    ("args", "level"),
    [([], logging.WARNING), (["-v"], logging.INFO), (["-vv"], logging.DEBUG), (["--log-level", "error"], logging.ERROR)],
)
def test_verbosity_sets_root_level(tmp_path: Path, args: list[str], level: int) -> None:
    p = tmp_path / "a.gif"
    p.write_bytes(gif_bytes(1, 1))
    res = CliRunner().invoke(cli, [*args, "image", str(p)])
    assert res.exit_code == 0, res.output
    assert logging.getLogger().level == level


def test_version_command_json_lists_image_formats() -> None:
    res = CliRunner().invoke(cli, ["version", "--format", "json"])
    assert res.exit_code == 0, res.output
    payload = json.loads(res.output)
    assert payload == {"version": __version__, "image_formats": ["PNG", "JPEG", "BMP", "GIF"]}
