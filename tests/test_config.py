from __future__ import annotations

from pathlib import Path

import pytest

from flashcards import config as config_mod


def test_defaults_without_a_config_file() -> None:
    cfg = config_mod.load_config()
    assert cfg.data.problems is None
    assert cfg.quiz.max_digits == 3
    assert cfg.messages.incorrect
    assert cfg.logging.level == "INFO"
    assert cfg == config_mod.default_config()


def test_template_matches_defaults(tmp_path: Path) -> None:
    path = config_mod.write_config_template(tmp_path / "flashcards.toml")
    assert config_mod.load_config(path) == config_mod.default_config()


def test_template_refuses_to_overwrite(tmp_path: Path) -> None:
    path = config_mod.write_config_template(tmp_path / "flashcards.toml")
    with pytest.raises(config_mod.ConfigError, match="already exists"):
        config_mod.write_config_template(path)
    config_mod.write_config_template(path, overwrite=True)


def test_partial_override_and_relative_problem_path(workspace) -> None:
    path = workspace.write(
        "cfg/flashcards.toml",
        '[data]\nproblems = "sets/mine.json"\n\n[quiz]\nmax_digits = 4\n',
    )
    cfg = config_mod.load_config(path)
    assert cfg.quiz.max_digits == 4
    assert cfg.data.problems == path.parent / "sets" / "mine.json"
    assert cfg.messages.complete == "All done! Great job!"


def test_env_variable_locates_the_file(workspace, monkeypatch) -> None:
    path = workspace.write(
        "env.toml", '[messages]\nincorrect = "Oops"\n'
    )
    monkeypatch.setenv(config_mod.CONFIG_PATH_ENV, str(path))
    assert config_mod.load_config().messages.incorrect == "Oops"


def test_workspace_config_is_used(_isolated_home: Path) -> None:
    target = _isolated_home / "config" / config_mod.CONFIG_FILENAME
    target.parent.mkdir(parents=True)
    target.write_text("[logging]\nverbose = true\n", encoding="utf-8")
    assert config_mod.load_config().logging.verbose is True


def test_explicit_missing_file_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(config_mod.ConfigError, match="not found"):
        config_mod.load_config(tmp_path / "absent.toml")


@pytest.mark.parametrize(
    ("body", "match"),
    [
        ("[quiz]\nmax_digits = 0\n", "at least 1"),
        ("[quiz]\nmax_digits = true\n", "integer"),
        ('[quiz]\nmax_digits = "3"\n', "int"),
        (
            "[quiz]\nspeed = 2\n",
            r"Unknown key 'quiz.speed'.*accepts max_digits",
        ),
        ("[colors]\ntheme = 1\n", r"Unknown section \[colors\]"),
        ("quiz = 3\n", r"\[quiz\] in .* must be a table"),
        ("[logging]\nverbose = 1\n", "logging.verbose"),
        ("[quiz\n", "Invalid TOML"),
    ],
)
def test_invalid_configs(tmp_path: Path, body: str, match: str) -> None:
    path = tmp_path / "bad.toml"
    path.write_text(body, encoding="utf-8")
    with pytest.raises(config_mod.ConfigError, match=match):
        config_mod.load_config(path)
