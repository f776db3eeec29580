"""`python -m placeholder_app` entry point."""

from __future__ import annotations

import sys

if __package__:
    from .cli import main as _cli_main
else:
    # Executed by file path, outside the package.
    from placeholder_app.cli import main as _cli_main


DEFAULT_COMMAND = "generate"

# Top-level options and whether they consume the following argument.
_GLOBAL_OPTIONS = {"--config": True, "-v": False, "--verbose": False}


def with_default_command(argv: list[str]) -> list[str]:
    """Append the default subcommand when argv holds only global options."""
    if any(arg in ("-h", "--help") for arg in argv):
        return list(argv)
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg.startswith("--config="):
            i += 1
        elif arg in _GLOBAL_OPTIONS:
            i += 2 if _GLOBAL_OPTIONS[arg] else 1
        else:
            return list(argv)
    return [*argv, DEFAULT_COMMAND]


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    return int(_cli_main(with_default_command(list(args))))


if __name__ == "__main__":
    raise SystemExit(main())
