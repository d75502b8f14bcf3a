"""Problem-set data model and the JSON loader that validates it.

The document shape is::

    {"sets": [{"title": str,
               "questions": [{"q": str, "a": int}, ...],
               "config": {"count": int}}, ...]}

Any failure (missing file, bad JSON, schema violation) raises
:class:`DataLoadError`; nothing is partially loaded.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Sequence

logger = logging.getLogger("flashcards.problems")

BUNDLED_PROBLEMS = "problems.json"


class DataLoadError(RuntimeError):
    """Raised when the problem-set file cannot be read or is malformed."""


@dataclass(frozen=True)
class Question:
    prompt: str
    expected_answer: int


@dataclass(frozen=True)
class SetConfig:
    count: int

    def __post_init__(self) -> None:
        if isinstance(self.count, bool) or self.count < 0:
            raise ValueError(
                f"count must be a non-negative integer, got {self.count!r}"
            )


@dataclass(frozen=True)
class ProblemSet:
    title: str
    questions: tuple[Question, ...]
    config: SetConfig

    @property
    def session_size(self) -> int:
        return min(self.config.count, len(self.questions))


def load_problem_sets(
    path: Path | None = None, *, max_digits: int | None = None
) -> list[ProblemSet]:
    """Read and validate problem sets from ``path`` or the bundled file.

    With ``max_digits`` set, answers too long to type on the keypad are
    logged as warnings.
    """

    source = f"<bundled {BUNDLED_PROBLEMS}>" if path is None else str(path)
    try:
        if path is None:
            text = (
                resources.files("flashcards.data")
                .joinpath(BUNDLED_PROBLEMS)
                .read_text(encoding="utf-8")
            )
        else:
            text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DataLoadError(
            f"Cannot read problem file {source}: {exc}"
        ) from exc

    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DataLoadError(f"Invalid JSON in {source}: {exc}") from exc

    sets = parse_problem_sets(document)
    if max_digits is not None:
        _warn_untypeable(sets, max_digits)
    logger.info(
        "Loaded problem sets",
        extra={"source": source, "sets": len(sets)},
    )
    return sets


def parse_problem_sets(document: Any) -> list[ProblemSet]:
    if not isinstance(document, dict):
        raise DataLoadError("Problem file must contain a JSON object.")
    raw_sets = document.get("sets")
    if not isinstance(raw_sets, list):
        raise DataLoadError("'sets' must be a list.")
    return [
        _parse_set(raw, f"sets[{idx}]") for idx, raw in enumerate(raw_sets)
    ]


def _parse_set(raw: Any, where: str) -> ProblemSet:
    if not isinstance(raw, dict):
        raise DataLoadError(f"{where} must be an object.")

    title = raw.get("title")
    if not isinstance(title, str) or not title.strip():
        raise DataLoadError(f"{where}.title must be a non-empty string.")

    raw_questions = raw.get("questions")
    if not isinstance(raw_questions, list):
        raise DataLoadError(f"{where}.questions must be a list.")
    questions = tuple(
        _parse_question(item, f"{where}.questions[{idx}]")
        for idx, item in enumerate(raw_questions)
    )

    config = raw.get("config")
    if not isinstance(config, dict):
        raise DataLoadError(f"{where}.config must be an object.")
    count = config.get("count")
    if not _is_int(count) or count < 0:
        raise DataLoadError(
            f"{where}.config.count must be a non-negative integer."
        )

    return ProblemSet(
        title=title, questions=questions, config=SetConfig(count=count)
    )


def _parse_question(raw: Any, where: str) -> Question:
    if not isinstance(raw, dict):
        raise DataLoadError(f"{where} must be an object.")
    prompt = raw.get("q")
    if not isinstance(prompt, str):
        raise DataLoadError(f"{where}.q must be a string.")
    answer = raw.get("a")
    if not _is_int(answer) or answer < 0:
        raise DataLoadError(f"{where}.a must be a non-negative integer.")
    return Question(prompt=prompt, expected_answer=answer)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _warn_untypeable(sets: Sequence[ProblemSet], max_digits: int) -> None:
    for problem_set in sets:
        for question in problem_set.questions:
            if len(str(question.expected_answer)) > max_digits:
                logger.warning(
                    "Answer longer than the keypad allows",
                    extra={
                        "set": problem_set.title,
                        "prompt": question.prompt,
                        "max_digits": max_digits,
                    },
                )
