from __future__ import annotations

import pytest

from depfetch import __version__
from depfetch.cli._dispatcher import build_parser, discover_root_commands, main as cli_main


def test_discovers_commands() -> None:
    commands = discover_root_commands()

    assert set(commands) == {"fetch", "validate"}
    assert commands["fetch"]["summary"].startswith("Fetch every dependency")


def test_no_command_prints_help(capsys) -> None:
    assert cli_main([]) == 0
    assert "fetch" in capsys.readouterr().out


def test_version(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        build_parser().parse_args(["--version"])

    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_unexpected_errors_exit_nonzero(monkeypatch, capsys) -> None:
    def boom(_args):
        raise RuntimeError("kaboom")

    monkeypatch.setattr("depfetch.cli.commands.validate.main", boom)
    discover_root_commands.cache_clear()
    try:
        rc = cli_main(["validate"])
    finally:
        discover_root_commands.cache_clear()

    assert rc == 1
    assert "Error: kaboom" in capsys.readouterr().err
