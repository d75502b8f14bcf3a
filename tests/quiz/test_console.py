from __future__ import annotations

from rich.console import Console

from flashcards.config import MessagesConfig
from flashcards.quiz.console import (
    DrillCommand,
    parse_drill_command,
    render_set_table,
    run_drill,
)
from flashcards.quiz.engine import QuizEngine

from fixtures import SequenceRandom, make_set

MESSAGES = MessagesConfig(
    incorrect="Try again!",
    complete="Well done!",
    load_error="Could not load.",
)


def make_provider(lines: list[str]):
    iterator = iter(lines)

    def _provider() -> str:
        return next(iterator)

    return _provider


def make_engine(*sets) -> QuizEngine:
    return QuizEngine(problem_sets=list(sets), rng=SequenceRandom())


def recording_console() -> Console:
    return Console(record=True, width=80, force_terminal=True)


def test_parse_drill_command_variants() -> None:
    assert parse_drill_command("12") == DrillCommand("answer", "12")
    assert parse_drill_command(" 7 ") == DrillCommand("answer", "7")
    assert parse_drill_command("") == DrillCommand("submit")
    assert parse_drill_command("c") == DrillCommand("clear")
    assert parse_drill_command("QUIT") == DrillCommand("quit")
    assert parse_drill_command("-3") is None
    assert parse_drill_command("seven") is None
    assert parse_drill_command(None) is None


def test_run_drill_to_completion() -> None:
    engine = make_engine(make_set([("3 + 4", 7), ("1 + 1", 2)], title="Sums"))
    console = recording_console()

    result = run_drill(
        engine, "Sums", console, make_provider(["6", "7", "2"]),
        messages=MESSAGES,
    )

    assert result.exit_action == "complete"
    assert result.total == 2
    assert result.answered == 2
    text = console.export_text()
    assert "1 / 2" in text
    assert "3 + 4 =" in text
    assert "Try again!" in text
    assert "Well done!" in text


def test_typed_line_replaces_pending_input() -> None:
    engine = make_engine(make_set([("3 + 4", 7)]))
    console = recording_console()

    result = run_drill(
        engine, 0, console, make_provider(["6", "7"]), messages=MESSAGES
    )

    assert result.exit_action == "complete"


def test_answer_longer_than_keypad_is_wrong_not_truncated() -> None:
    engine = make_engine(make_set([("100 + 23", 123)], title="S"))
    console = recording_console()

    result = run_drill(
        engine, "S", console, make_provider(["1234", "q"]), messages=MESSAGES
    )

    assert result.exit_action == "quit"
    assert result.answered == 0
    assert engine.pending_input == ""
    assert "Try again!" in console.export_text()


def test_long_line_then_correct_answer_completes() -> None:
    engine = make_engine(make_set([("100 + 23", 123)], title="S"))
    console = recording_console()

    result = run_drill(
        engine, "S", console, make_provider(["1234", "123"]),
        messages=MESSAGES,
    )

    assert result.exit_action == "complete"
    assert result.answered == 1


def test_blank_line_resubmits_and_clear_empties() -> None:
    engine = make_engine(make_set([("3 + 4", 7)]))
    console = recording_console()

    result = run_drill(
        engine, 0, console, make_provider(["5", "", "c", "q"]),
        messages=MESSAGES,
    )

    assert result.exit_action == "quit"
    assert result.answered == 0
    assert console.export_text().count("Try again!") == 2
    assert engine.pending_input == ""


def test_unknown_command_and_interrupt() -> None:
    engine = make_engine(make_set([("3 + 4", 7)]))
    console = recording_console()

    result = run_drill(
        engine, 0, console, make_provider(["seven"]), messages=MESSAGES
    )

    assert result.exit_action == "quit"
    text = console.export_text()
    assert "Type a number" in text
    assert "Drill interrupted" in text


def test_empty_set() -> None:
    engine = make_engine(make_set([("1 + 1", 2)], count=0, title="Empty"))
    console = recording_console()

    result = run_drill(engine, 0, console, make_provider([]))

    assert result.exit_action == "empty"
    assert "no questions" in console.export_text()


def test_render_set_table() -> None:
    console = recording_console()
    render_set_table(
        console,
        [
            make_set([("1 + 1", 2), ("2 + 2", 4)], count=5, title="[Sums]"),
        ],
    )
    text = console.export_text()
    assert "[Sums]" in text
    assert "Per round" in text
