from __future__ import annotations

import runpy
from pathlib import Path

import pytest

import placeholder_app.__main__ as cli_main


@pytest.mark.parametrize(
    ("argv", "expected"),
    [
        ([], ["generate"]),
        (["-v"], ["-v", "generate"]),
        (["--config", "c.json"], ["--config", "c.json", "generate"]),
        (["--config=c.json", "--verbose"], ["--config=c.json", "--verbose", "generate"]),
        (["config", "show"], ["config", "show"]),
        (["--config", "c.json", "headers", "--size", "5x5"], ["--config", "c.json", "headers", "--size", "5x5"]),
        (["--help"], ["--help"]),
    ],
)
def test_default_command_only_added_without_subcommand(argv: list[str], expected: list[str]) -> None:
    assert cli_main.with_default_command(argv) == expected


def test_main_forwards_to_cli(monkeypatch) -> None:
    seen: list[list[str]] = []

    def fake_cli(argv: list[str]) -> int:
        seen.append(argv)
        return 3

    monkeypatch.setattr(cli_main, "_cli_main", fake_cli)
    assert cli_main.main(["--config", "c.json"]) == 3
    assert seen == [["--config", "c.json", "generate"]]


def test_main_reads_sys_argv(monkeypatch) -> None:
    seen: list[list[str]] = []
    monkeypatch.setattr(cli_main, "_cli_main", lambda argv: seen.append(argv) or 0)
    monkeypatch.setattr(cli_main.sys, "argv", ["placeholder", "config", "show"])

    assert cli_main.main() == 0
    assert seen == [["config", "show"]]


def test_module_loads_by_file_path() -> None:
    main_path = Path(__file__).resolve().parents[1] / "apps" / "cli" / "placeholder_app" / "__main__.py"
    namespace = runpy.run_path(str(main_path))
    assert namespace["DEFAULT_COMMAND"] == "generate"
    assert callable(namespace["with_default_command"])
