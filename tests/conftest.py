from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterator

import pytest

TESTS_DIR = Path(__file__).resolve().parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

ROOT = TESTS_DIR.parent
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

from fixtures import (  # noqa: E402
    SAMPLE_DOCUMENT,
    WorkspaceBuilder,
    write_problem_file,
)


@pytest.fixture(autouse=True)
def _isolated_home(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[Path]:
    """Keep every test away from the real ~/.flashcards."""

    home = tmp_path / "flashcards-home"
    monkeypatch.setenv("FLASHCARDS_HOME", str(home))
    monkeypatch.delenv("FLASHCARDS_CONFIG", raising=False)
    yield home
    logger = logging.getLogger("flashcards")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True


@pytest.fixture
def workspace(tmp_path: Path) -> WorkspaceBuilder:
    """Provide a helper bound to pytest's per-test tmp directory."""

    return WorkspaceBuilder(tmp_path)


@pytest.fixture
def problem_file(tmp_path: Path) -> Path:
    """A valid problem-set JSON file with the sample sets."""

    return write_problem_file(tmp_path / "problems.json", SAMPLE_DOCUMENT)
