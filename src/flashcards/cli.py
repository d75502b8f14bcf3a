"""Unified ``flashcards`` command."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from importlib import import_module, metadata
from typing import Callable, Mapping, Optional, Sequence


@dataclass(frozen=True)
class CommandSpec:
    """A ``flashcards`` subcommand and where its entry point lives."""

    name: str
    summary: str
    module: str
    func: str = "main"
    is_tui: bool = False

    def run(self, argv: Sequence[str]) -> int:
        target = getattr(import_module(self.module), self.func)
        try:
            result = target(list(argv))
        except SystemExit as exc:
            return _exit_code(exc)
        return result if isinstance(result, int) else 0


_COMMAND_SPECS: Sequence[CommandSpec] = (
    CommandSpec(
        name="play",
        summary="Open the keypad quiz.",
        module="flashcards.quiz._main",
        func="play_main",
        is_tui=True,
    ),
    CommandSpec(
        name="drill",
        summary="Practice a set in the plain terminal.",
        module="flashcards.quiz._main",
        func="drill_main",
    ),
    CommandSpec(
        name="sets",
        summary="List the available problem sets.",
        module="flashcards.quiz._main",
        func="sets_main",
    ),
    CommandSpec(
        name="init",
        summary="Create the workspace and a starter config file.",
        module="flashcards.workspace.cli",
    ),
)

COMMANDS: Mapping[str, CommandSpec] = {
    spec.name: spec for spec in _COMMAND_SPECS
}


def format_command_table() -> str:
    width = max(len(spec.name) for spec in _COMMAND_SPECS)
    lines = ["Available commands:"]
    for spec in _COMMAND_SPECS:
        suffix = " (TUI)" if spec.is_tui else ""
        lines.append(f"  {spec.name.ljust(width)}  {spec.summary}{suffix}")
    return "\n".join(lines)


def format_usage() -> str:
    return "\n".join(
        [
            "Usage: flashcards <command> [args...]",
            "Run `flashcards help <name>` for details on one command.",
            "",
            format_command_table(),
        ]
    )


def _print(text: str, *, stream: Optional[Callable[[str], object]] = None):
    target = stream if stream is not None else sys.stdout.write
    if text:
        target(text + "\n")


def _handle_version() -> int:
    try:
        version = metadata.version("flashcards")
    except metadata.PackageNotFoundError:
        version = "unknown"
    _print(version)
    return 0


def _handle_help(argv: Sequence[str]) -> int:
    if not argv:
        _print(format_usage())
        return 0
    spec = COMMANDS.get(argv[0])
    if spec is None:
        _print(f"Unknown command '{argv[0]}'.", stream=sys.stderr.write)
        _print(format_command_table(), stream=sys.stderr.write)
        return 2
    _print(f"{spec.name}: {spec.summary}")
    _print(f"Run `flashcards {spec.name} --help` for its options.")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(argv if argv is not None else sys.argv[1:])
    if not args:
        _print(format_usage())
        return 2

    head, *tail = args
    if head in ("-h", "--help"):
        _print(format_usage())
        return 0
    if head in ("-V", "--version", "version"):
        return _handle_version()
    if head == "list":
        _print(format_command_table())
        return 0
    if head == "help":
        return _handle_help(tail)

    spec = COMMANDS.get(head)
    if spec is None:
        _print(f"Unknown command '{head}'.", stream=sys.stderr.write)
        _print(format_command_table(), stream=sys.stderr.write)
        return 2
    return spec.run(tail)


def _exit_code(exc: SystemExit) -> int:
    code = exc.code
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    _print(str(code), stream=sys.stderr.write)
    return 1


if __name__ == "__main__":  # pragma: no cover - manual invocation guard
    raise SystemExit(main())
