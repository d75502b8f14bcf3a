from .engine import QuizEngine
from .keypad import KeypadPress, parse_keypad_value
from .problems import (
    DataLoadError,
    ProblemSet,
    Question,
    SetConfig,
    load_problem_sets,
    parse_problem_sets,
)
from .session import (
    QuizSession,
    SessionState,
    SessionStateError,
    SubmitResult,
    position_label,
    problem_text,
)
from .shuffle import shuffle_in_place, shuffled

__all__ = [
    "QuizEngine",
    "KeypadPress",
    "parse_keypad_value",
    "DataLoadError",
    "ProblemSet",
    "Question",
    "SetConfig",
    "load_problem_sets",
    "parse_problem_sets",
    "QuizSession",
    "SessionState",
    "SessionStateError",
    "SubmitResult",
    "position_label",
    "problem_text",
    "shuffle_in_place",
    "shuffled",
]
