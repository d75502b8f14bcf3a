"""Quiz session state machine.

A session walks through a shuffled selection of questions from one problem
set. Answers are typed digit by digit into a pending buffer and submitted;
a wrong answer leaves the buffer intact so it can be corrected.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from .problems import ProblemSet, Question
from .shuffle import RandomSource, shuffled

logger = logging.getLogger("flashcards.session")

DEFAULT_MAX_DIGITS = 3


class SessionState(enum.Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


class SessionStateError(RuntimeError):
    """Raised when an operation needs a current question but none exists."""


@dataclass(frozen=True)
class SubmitResult:
    """Outcome of a non-empty submit."""

    correct: bool
    answer: int
    question: Question
    complete: bool = False


class QuizSession:
    """Mutable state of one quiz attempt."""

    def __init__(
        self,
        *,
        max_digits: int = DEFAULT_MAX_DIGITS,
        rng: RandomSource | None = None,
    ) -> None:
        if max_digits < 1:
            raise ValueError("max_digits must be at least 1")
        self.max_digits = max_digits
        self._rng = rng
        self._questions: tuple[Question, ...] = ()
        self._index = 0
        self._pending = ""
        self._last_correct: bool | None = None
        self._state = SessionState.NOT_STARTED
        self._title: str | None = None

    def start(self, problem_set: ProblemSet) -> None:
        selection = shuffled(problem_set.questions, self._rng)
        self._questions = tuple(selection[: problem_set.config.count])
        self._index = 0
        self._pending = ""
        self._last_correct = None
        self._title = problem_set.title
        self._state = (
            SessionState.IN_PROGRESS
            if self._questions
            else SessionState.COMPLETE
        )
        logger.info(
            "Session started",
            extra={"set": problem_set.title, "size": len(self._questions)},
        )

    def append_digit(self, digit: str) -> bool:
        """Append ``digit`` to the pending answer.

        Returns ``False`` when the input is full or no question is active.
        """

        if len(digit) != 1 or digit not in "0123456789":
            raise ValueError(f"Not a keypad digit: {digit!r}")
        if self._state is not SessionState.IN_PROGRESS:
            return False
        if len(self._pending) >= self.max_digits:
            return False
        self._pending += digit
        return True

    def clear_input(self) -> None:
        self._pending = ""

    def submit(self) -> SubmitResult | None:
        if not self._pending:
            return None
        question = self.current_question
        answer = int(self._pending, 10)

        if answer != question.expected_answer:
            self._last_correct = False
            logger.debug(
                "Incorrect answer",
                extra={"index": self._index, "answer": answer},
            )
            return SubmitResult(
                correct=False, answer=answer, question=question
            )

        self._last_correct = True
        self._pending = ""
        self._index += 1
        if self._index >= len(self._questions):
            self._state = SessionState.COMPLETE
            logger.info("Session complete", extra={"set": self._title})
        return SubmitResult(
            correct=True,
            answer=answer,
            question=question,
            complete=self.is_complete,
        )

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def title(self) -> str | None:
        return self._title

    @property
    def active_questions(self) -> tuple[Question, ...]:
        return self._questions

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current_question(self) -> Question:
        if self._state is not SessionState.IN_PROGRESS:
            raise SessionStateError(
                f"No current question while {self._state.value}."
            )
        return self._questions[self._index]

    @property
    def position(self) -> int:
        """1-based number of the question being asked."""

        return min(self._index + 1, len(self._questions))

    @property
    def total(self) -> int:
        return len(self._questions)

    @property
    def pending_input(self) -> str:
        return self._pending

    @property
    def last_submit_was_correct(self) -> bool | None:
        return self._last_correct

    @property
    def is_complete(self) -> bool:
        return self._state is SessionState.COMPLETE

    @property
    def in_progress(self) -> bool:
        return self._state is SessionState.IN_PROGRESS


def position_label(session: QuizSession) -> str:
    return f"{session.position} / {session.total}"


def problem_text(question: Question) -> str:
    return f"{question.prompt} ="
