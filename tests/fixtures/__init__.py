"""Shared testing fixtures for the flashcards test suite."""

from .problems import (  # noqa: F401
    SAMPLE_DOCUMENT,
    SequenceRandom,
    make_set,
    write_problem_file,
)
from .workspace import WorkspaceBuilder, build_tree  # noqa: F401

__all__ = [
    "SAMPLE_DOCUMENT",
    "SequenceRandom",
    "WorkspaceBuilder",
    "build_tree",
    "make_set",
    "write_problem_file",
]
