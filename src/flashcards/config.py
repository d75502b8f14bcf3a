"""Typed configuration for the flashcards quiz.

Values come from ``flashcards.toml`` merged over built-in defaults. The file
is looked up from an explicit path, then ``FLASHCARDS_CONFIG``, then the
workspace ``config/`` directory; a missing file simply means defaults.
"""

from __future__ import annotations

import copy
import os
import tomllib
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .core import ensure_workspace

CONFIG_PATH_ENV = "FLASHCARDS_CONFIG"
CONFIG_FILENAME = "flashcards.toml"

_DEFAULTS: Dict[str, Any] = {
    "data": {"problems": ""},
    "quiz": {"max_digits": 3},
    "messages": {
        "incorrect": "Not quite! Try again.",
        "complete": "All done! Great job!",
        "load_error": "Error: could not load the problem sets.",
    },
    "logging": {"level": "INFO", "verbose": False},
}


class ConfigError(RuntimeError):
    """Raised when configuration parsing or validation fails."""


@dataclass(frozen=True)
class DataConfig:
    problems: Optional[Path]


@dataclass(frozen=True)
class QuizConfig:
    max_digits: int


@dataclass(frozen=True)
class MessagesConfig:
    incorrect: str
    complete: str
    load_error: str


@dataclass(frozen=True)
class LoggingConfig:
    level: str
    verbose: bool


@dataclass(frozen=True)
class AppConfig:
    data: DataConfig
    quiz: QuizConfig
    messages: MessagesConfig
    logging: LoggingConfig


def default_config() -> AppConfig:
    return _build(copy.deepcopy(_DEFAULTS), base_dir=None)


def resolve_config_path(
    explicit: Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> Path:
    """Return where the config file is expected to live."""

    if explicit is not None:
        return explicit.expanduser()
    env_map = os.environ if env is None else env
    override = (env_map.get(CONFIG_PATH_ENV) or "").strip()
    if override:
        return Path(override).expanduser()
    layout = ensure_workspace(env=env_map, create=False)
    return layout.path_for("config") / CONFIG_FILENAME


def load_config(
    path: Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> AppConfig:
    """Load and validate configuration.

    An explicitly requested file must exist; the implicit locations are
    optional.
    """

    target = resolve_config_path(path, env=env)
    data = copy.deepcopy(_DEFAULTS)
    if target.exists() or path is not None:
        _apply_sections(data, _read_config_file(target), source=target)
    return _build(data, base_dir=target.parent)


def config_template() -> str:
    return (
        resources.files("flashcards")
        .joinpath(CONFIG_FILENAME)
        .read_text(encoding="utf-8")
    )


def write_config_template(path: Path, *, overwrite: bool = False) -> Path:
    """Write the commented ``flashcards.toml`` template to ``path``."""

    if path.exists() and not overwrite:
        raise ConfigError(f"Config already exists: {path}")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(config_template(), encoding="utf-8")
    return path


def _read_config_file(path: Path) -> Mapping[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc


def _apply_sections(
    data: Dict[str, Dict[str, Any]],
    document: Mapping[str, Any],
    *,
    source: Path,
) -> None:
    """Overlay the file's ``[section]`` tables onto the defaults.

    Every key must already exist in the defaults, so a typo such as
    ``[quiz] max_digit`` fails loudly instead of being ignored.
    """

    for section, table in document.items():
        if section not in data:
            known = ", ".join(f"[{name}]" for name in data)
            raise ConfigError(
                f"Unknown section [{section}] in {source}; "
                f"expected one of {known}."
            )
        if not isinstance(table, Mapping):
            raise ConfigError(
                f"[{section}] in {source} must be a table, "
                f"found {type(table).__name__}."
            )
        for key, value in table.items():
            if key not in data[section]:
                known = ", ".join(sorted(data[section]))
                raise ConfigError(
                    f"Unknown key '{section}.{key}' in {source}; "
                    f"[{section}] accepts {known}."
                )
            data[section][key] = value


def _build(data: Mapping[str, Any], *, base_dir: Path | None) -> AppConfig:
    problems_raw = _expect(data["data"]["problems"], str, "data.problems")
    problems: Optional[Path] = None
    if problems_raw.strip():
        problems = Path(problems_raw.strip()).expanduser()
        if not problems.is_absolute() and base_dir is not None:
            problems = base_dir / problems

    max_digits = _expect(data["quiz"]["max_digits"], int, "quiz.max_digits")
    if max_digits < 1:
        raise ConfigError("quiz.max_digits must be at least 1.")

    messages = data["messages"]
    log_cfg = data["logging"]
    return AppConfig(
        data=DataConfig(problems=problems),
        quiz=QuizConfig(max_digits=max_digits),
        messages=MessagesConfig(
            incorrect=_expect(
                messages["incorrect"], str, "messages.incorrect"
            ),
            complete=_expect(messages["complete"], str, "messages.complete"),
            load_error=_expect(
                messages["load_error"], str, "messages.load_error"
            ),
        ),
        logging=LoggingConfig(
            level=_expect(log_cfg["level"], str, "logging.level"),
            verbose=_expect(log_cfg["verbose"], bool, "logging.verbose"),
        ),
    )


def _expect(value: Any, kind: type, dotted: str) -> Any:
    # bool is an int subclass; keep the two apart
    if kind is int and isinstance(value, bool):
        raise ConfigError(f"{dotted} must be an integer.")
    if not isinstance(value, kind):
        raise ConfigError(
            f"{dotted} must be of type {kind.__name__}, "
            f"found {type(value).__name__}."
        )
    return value
