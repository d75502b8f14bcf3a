"""The quiz engine owned by a presentation layer.

``QuizEngine`` holds the loaded problem sets and the single active session.
Loading is the only asynchronous step; everything after it is a synchronous
reaction to one user action.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Sequence

from .keypad import parse_keypad_value
from .problems import DataLoadError, ProblemSet, Question, load_problem_sets
from .session import (
    DEFAULT_MAX_DIGITS,
    QuizSession,
    SessionState,
    SubmitResult,
)
from .shuffle import RandomSource

logger = logging.getLogger("flashcards.engine")


class QuizEngine:
    def __init__(
        self,
        *,
        problems_path: Path | None = None,
        max_digits: int = DEFAULT_MAX_DIGITS,
        rng: RandomSource | None = None,
        problem_sets: Sequence[ProblemSet] | None = None,
    ) -> None:
        self.problems_path = problems_path
        self.max_digits = max_digits
        self._rng = rng
        self._sets: list[ProblemSet] = list(problem_sets or [])
        self._loaded = problem_sets is not None
        self.session = QuizSession(max_digits=max_digits, rng=rng)

    async def load_problem_sets(self) -> list[ProblemSet]:
        """Load the problem file without blocking the event loop."""

        return self._store(
            await asyncio.to_thread(
                load_problem_sets,
                self.problems_path,
                max_digits=self.max_digits,
            )
        )

    def load_problem_sets_sync(self) -> list[ProblemSet]:
        return self._store(
            load_problem_sets(self.problems_path, max_digits=self.max_digits)
        )

    def _store(self, sets: list[ProblemSet]) -> list[ProblemSet]:
        self._sets = sets
        self._loaded = True
        return list(sets)

    @property
    def loaded(self) -> bool:
        return self._loaded

    def list_sets(self) -> list[ProblemSet]:
        if not self._loaded:
            raise DataLoadError("Problem sets have not been loaded yet.")
        return list(self._sets)

    def find_set(self, key: ProblemSet | str | int) -> ProblemSet:
        """Resolve a set by object, title, or 0-based index."""

        if isinstance(key, ProblemSet):
            return key
        sets = self.list_sets()
        if isinstance(key, bool):
            raise IndexError(f"Not a problem set index: {key!r}")
        if isinstance(key, int):
            if not 0 <= key < len(sets):
                raise IndexError(f"No problem set at index {key}.")
            return sets[key]
        for problem_set in sets:
            if problem_set.title == key:
                return problem_set
        raise KeyError(f"No problem set titled {key!r}.")

    def start(self, key: ProblemSet | str | int) -> QuizSession:
        """Begin a fresh session, discarding whatever was in progress."""

        problem_set = self.find_set(key)
        self.session = QuizSession(max_digits=self.max_digits, rng=self._rng)
        self.session.start(problem_set)
        return self.session

    def append_digit(self, digit: str) -> bool:
        return self.session.append_digit(digit)

    def clear_input(self) -> None:
        self.session.clear_input()

    def submit(self) -> SubmitResult | None:
        return self.session.submit()

    def press(self, value: str) -> SubmitResult | None:
        """Apply one raw keypad value (digit, ``clear`` or ``submit``)."""

        key = parse_keypad_value(value)
        if key is None:
            raise ValueError(f"Unknown keypad value: {value!r}")
        if key.type == "digit":
            self.session.append_digit(key.value)
        elif key.type == "clear":
            self.session.clear_input()
        elif key.type == "submit":
            return self.session.submit()
        return None

    @property
    def state(self) -> SessionState:
        return self.session.state

    @property
    def current_question(self) -> Question | None:
        if not self.session.in_progress:
            return None
        return self.session.current_question

    @property
    def position(self) -> int:
        return self.session.position

    @property
    def total(self) -> int:
        return self.session.total

    @property
    def pending_input(self) -> str:
        return self.session.pending_input

    @property
    def last_submit_was_correct(self) -> bool | None:
        return self.session.last_submit_was_correct

    @property
    def is_complete(self) -> bool:
        return self.session.is_complete
