import argparse
import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.text import Text

from ..config import AppConfig, ConfigError, load_config
from ..core import WorkspaceError, configure_logger, ensure_workspace
from .console import render_set_table, run_drill
from .engine import QuizEngine
from .problems import DataLoadError, ProblemSet


@dataclass
class _Context:
    config: AppConfig
    engine: QuizEngine
    logger: logging.Logger


def _base_parser(prog: str, description: str) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog=prog,
        description=description,
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    p.add_argument("--config", type=Path, help="Path to flashcards.toml")
    p.add_argument(
        "--problems",
        type=Path,
        help="Problem-set JSON file (overrides the config)",
    )
    p.add_argument(
        "--seed",
        type=int,
        help="Seed the shuffle for a reproducible question order",
    )
    p.add_argument("--verbose", action="store_true", help="Log to stderr")
    return p


def _prepare(args: argparse.Namespace, console: Console) -> Optional[_Context]:
    try:
        config = load_config(args.config)
        layout = ensure_workspace()
    except (ConfigError, WorkspaceError) as exc:
        console.print(f"[red]Error:[/] {escape(str(exc))}")
        return None

    logger, _ = configure_logger(
        "flashcards",
        log_dir=layout.path_for("logs"),
        level=config.logging.level,
        verbose=bool(args.verbose or config.logging.verbose),
    )
    rng = random.Random(args.seed) if args.seed is not None else None
    engine = QuizEngine(
        problems_path=args.problems or config.data.problems,
        max_digits=config.quiz.max_digits,
        rng=rng,
    )
    return _Context(config=config, engine=engine, logger=logger)


def _load(ctx: _Context, console: Console) -> bool:
    try:
        ctx.engine.load_problem_sets_sync()
    except DataLoadError as exc:
        ctx.logger.error(
            "Failed to load problem sets", extra={"error": str(exc)}
        )
        console.print(Text(ctx.config.messages.load_error, style="red"))
        console.print(f"[dim]{escape(str(exc))}[/]")
        return False
    return True


def _resolve_choice(raw: str, sets: Sequence[ProblemSet]) -> Optional[int]:
    text = raw.strip()
    if text.isdigit():
        idx = int(text) - 1
        return idx if 0 <= idx < len(sets) else None
    for idx, problem_set in enumerate(sets):
        if problem_set.title.lower() == text.lower():
            return idx
    return None


def sets_main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _base_parser("flashcards sets", "List the available sets")
    args = parser.parse_args(argv)
    console = Console()
    ctx = _prepare(args, console)
    if ctx is None:
        return 2
    if not _load(ctx, console):
        return 1
    sets = ctx.engine.list_sets()
    if not sets:
        console.print("No problem sets found.")
        return 1
    render_set_table(console, sets)
    return 0


def drill_main(
    argv: Optional[Sequence[str]] = None,
    *,
    console: Optional[Console] = None,
    input_provider: Optional[Callable[[], str]] = None,
) -> int:
    """Run the Rich console drill.

    With a set argument the drill plays that set once. Without one it keeps
    offering the set list after every finished round until the user quits.
    """
    parser = _base_parser("flashcards drill", "Practice in the terminal")
    parser.add_argument(
        "set", nargs="?", help="Set number (1-based) or exact title"
    )
    args = parser.parse_args(argv)
    console = console or Console()
    ask = input_provider or (lambda: console.input("> "))

    ctx = _prepare(args, console)
    if ctx is None:
        return 2
    if not _load(ctx, console):
        return 1
    sets = ctx.engine.list_sets()
    if not sets:
        console.print("No problem sets found.")
        return 1

    if args.set is not None:
        idx = _resolve_choice(args.set, sets)
        if idx is None:
            console.print(f"[red]Unknown set:[/] {escape(args.set)}")
            return 2
        run_drill(
            ctx.engine, idx, console, ask, messages=ctx.config.messages
        )
        return 0

    while True:
        render_set_table(console, sets)
        console.print("Pick a set by number, or q to quit.")
        try:
            raw = ask()
        except (EOFError, KeyboardInterrupt, StopIteration):
            return 0
        if raw.strip().lower() in {"q", "quit", "exit"}:
            return 0
        idx = _resolve_choice(raw, sets)
        if idx is None:
            console.print(f"[red]Unknown set:[/] {escape(raw.strip())}")
            continue
        result = run_drill(
            ctx.engine, idx, console, ask, messages=ctx.config.messages
        )
        if result.exit_action == "quit":
            return 0


def play_main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _base_parser("flashcards play", "Launch the keypad quiz TUI")
    args = parser.parse_args(argv)
    console = Console(stderr=True)
    ctx = _prepare(args, console)
    if ctx is None:
        return 2

    from .view import FlashcardsApp

    app = FlashcardsApp(ctx.engine, messages=ctx.config.messages)
    app.run()
    return 1 if app.load_error else 0

