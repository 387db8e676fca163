from __future__ import annotations

import runpy

import pytest

from fileinfo.cli import root as cli_root
from fileinfo.cli.root import main as module_main

pytestmark = pytest.mark.small


def test_main_module_invokes_cli(monkeypatch: pytest.MonkeyPatch) -> None:
    called = {}
    monkeypatch.setattr("fileinfo.cli.main", lambda: called.setdefault("ran", True))
    runpy.run_module("fileinfo.__main__", run_name="__main__")
    assert called.get("ran")


class _DummyCLI:
    def __init__(self) -> None:
        self.called_with: list[str] | None = None

    def main(self, *, args: list[str], prog_name: str) -> None:
        self.called_with = list(args)


def test_main_forwards_argv(monkeypatch: pytest.MonkeyPatch) -> None:
    dummy = _DummyCLI()
    monkeypatch.setattr(cli_root, "cli", dummy, raising=True)
    module_main(["-v", "info", "x.png"])
    assert dummy.called_with == ["-v", "info", "x.png"]


def test_main_handles_broken_pipe(monkeypatch: pytest.MonkeyPatch) -> None:
    class BrokenCLI:
        def main(self, *, args: list[str], prog_name: str) -> None:
            raise BrokenPipeError

    def fake_exit() -> None:
        raise SystemExit(0)

    monkeypatch.setattr(cli_root, "cli", BrokenCLI(), raising=True)
    # the real helper redirects fd 1, which would break pytest capture
    monkeypatch.setattr(cli_root, "exit_on_broken_pipe", fake_exit)

    with pytest.raises(SystemExit) as excinfo:
        module_main(["status", "."])

    assert excinfo.value.args[0] == 0
