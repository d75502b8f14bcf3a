from __future__ import annotations

import json

from rich.console import Console

from flashcards.quiz import _main


def make_provider(lines: list[str]):
    iterator = iter(lines)
    return lambda: next(iterator)


def recording_console() -> Console:
    return Console(record=True, width=100, force_terminal=True)


def single_question_file(tmp_path):
    path = tmp_path / "one.json"
    path.write_text(
        json.dumps(
            {
                "sets": [
                    {
                        "title": "Only",
                        "questions": [{"q": "3 + 4", "a": 7}],
                        "config": {"count": 1},
                    }
                ]
            }
        ),
        encoding="utf-8",
    )
    return path


def test_sets_lists_bundled_sets(capsys) -> None:
    code = _main.sets_main([])
    out = capsys.readouterr().out
    assert code == 0
    assert "Problem sets" in out
    assert "Addition up to 10" in out


def test_sets_reports_load_error(tmp_path, capsys) -> None:
    code = _main.sets_main(["--problems", str(tmp_path / "nope.json")])
    out = capsys.readouterr().out
    assert code == 1
    assert "could not load" in out


def test_bad_config_exits_with_two(tmp_path, capsys) -> None:
    config = tmp_path / "bad.toml"
    config.write_text("[quiz]\nmax_digits = 0\n", encoding="utf-8")
    code = _main.sets_main(["--config", str(config)])
    assert code == 2
    assert "max_digits" in capsys.readouterr().out


def test_drill_named_set(tmp_path) -> None:
    console = recording_console()
    code = _main.drill_main(
        ["--problems", str(single_question_file(tmp_path)), "Only"],
        console=console,
        input_provider=make_provider(["7"]),
    )
    assert code == 0
    assert "All done" in console.export_text()


def test_drill_unknown_set(tmp_path) -> None:
    console = recording_console()
    code = _main.drill_main(
        ["--problems", str(single_question_file(tmp_path)), "9"],
        console=console,
        input_provider=make_provider([]),
    )
    assert code == 2
    assert "Unknown set" in console.export_text()


def test_drill_returns_to_set_list_after_completion(tmp_path) -> None:
    console = recording_console()
    code = _main.drill_main(
        ["--problems", str(single_question_file(tmp_path)), "--seed", "3"],
        console=console,
        input_provider=make_provider(["x", "1", "7", "q"]),
    )
    text = console.export_text()
    assert code == 0
    assert "Unknown set" in text
    assert text.count("Pick a set") == 3
    assert "All done" in text


def test_drill_writes_json_logs(tmp_path, _isolated_home) -> None:
    console = recording_console()
    _main.drill_main(
        ["--problems", str(single_question_file(tmp_path)), "1"],
        console=console,
        input_provider=make_provider(["7"]),
    )
    log_file = _isolated_home / "logs" / "flashcards.log"
    records = [
        json.loads(line)
        for line in log_file.read_text(encoding="utf-8").splitlines()
    ]
    messages = [record["message"] for record in records]
    assert "Session started" in messages
    assert "Session complete" in messages
