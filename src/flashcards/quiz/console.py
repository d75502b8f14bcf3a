"""Rich-powered line-by-line drill for terminals without a full TUI.

Each input line is one action: a number answers the current question,
``c`` clears the pending answer, an empty line resubmits what is pending and
``q`` leaves the drill.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..config import MessagesConfig, default_config
from .engine import QuizEngine
from .problems import ProblemSet
from .session import position_label, problem_text

InputProvider = Callable[[], str]
ExitAction = Literal["complete", "quit", "empty"]


@dataclass(frozen=True)
class DrillCommand:
    type: Literal["answer", "clear", "submit", "quit"]
    digits: str | None = None


@dataclass(frozen=True)
class DrillResult:
    title: str
    total: int
    answered: int
    exit_action: ExitAction


def parse_drill_command(raw: str | None) -> DrillCommand | None:
    if raw is None:
        return None
    text = raw.strip().lower()
    if not text:
        return DrillCommand("submit")
    if text in {"c", "clear"}:
        return DrillCommand("clear")
    if text in {"q", "quit", "exit"}:
        return DrillCommand("quit")
    if text.isascii() and text.isdigit():
        return DrillCommand("answer", text)
    return None


def render_set_table(console: Console, sets: Sequence[ProblemSet]) -> None:
    table = Table(title="Problem sets", box=box.SIMPLE, expand=False)
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Title")
    table.add_column("Questions", justify="right")
    table.add_column("Per round", justify="right")
    for idx, problem_set in enumerate(sets, start=1):
        table.add_row(
            str(idx),
            Text(problem_set.title),
            str(len(problem_set.questions)),
            str(problem_set.session_size),
        )
    console.print(table)


def run_drill(
    engine: QuizEngine,
    set_key: ProblemSet | str | int,
    console: Console,
    input_provider: InputProvider,
    *,
    messages: MessagesConfig | None = None,
) -> DrillResult:
    """Play one problem set to completion or until the user quits."""

    texts = messages or default_config().messages
    session = engine.start(set_key)
    title = session.title or ""

    if session.is_complete:
        console.print(
            Panel(
                "This set has no questions.",
                title=Text(title),
                border_style="yellow",
            )
        )
        return DrillResult(title, 0, 0, "empty")

    while not session.is_complete:
        _render_question(console, engine)
        try:
            raw = input_provider()
        except (EOFError, KeyboardInterrupt, StopIteration):
            console.print("\n[bold yellow]Drill interrupted.[/]")
            return DrillResult(
                title, session.total, session.current_index, "quit"
            )
        command = parse_drill_command(raw)
        if command is None:
            console.print("[red]Type a number, c to clear, or q to quit.[/]")
            continue
        if command.type == "quit":
            console.print("[bold yellow]See you next time![/]")
            return DrillResult(
                title, session.total, session.current_index, "quit"
            )
        if command.type == "clear":
            engine.clear_input()
            continue
        if command.type == "answer" and command.digits:
            # a typed line is a whole answer, not a continuation
            engine.clear_input()
            if len(command.digits) > engine.max_digits:
                console.print(Text(texts.incorrect, style="bold red"))
                continue
            for digit in command.digits:
                engine.append_digit(digit)
        result = engine.submit()
        if result is not None and not result.correct:
            console.print(Text(texts.incorrect, style="bold red"))

    console.print(Panel(Text(texts.complete), border_style="green"))
    return DrillResult(title, session.total, session.current_index, "complete")


def _render_question(console: Console, engine: QuizEngine) -> None:
    question = engine.current_question
    if question is None:
        return
    console.print()
    console.rule(Text(position_label(engine.session), style="bold cyan"))
    line = Text(problem_text(question), style="bold")
    if engine.pending_input:
        line.append(f" {engine.pending_input}", style="green")
    console.print(line)
