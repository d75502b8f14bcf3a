"""On-screen keypad vocabulary: ten digits plus clear and submit."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

DIGITS = "0123456789"
CLEAR = "clear"
SUBMIT = "submit"

# Row-major layout of the keypad grid.
LAYOUT: tuple[tuple[str, ...], ...] = (
    ("7", "8", "9"),
    ("4", "5", "6"),
    ("1", "2", "3"),
    (CLEAR, "0", SUBMIT),
)

LABELS = {CLEAR: "Clear", SUBMIT: "OK"}


@dataclass(frozen=True)
class KeypadPress:
    """One key; ``value`` is the digit for digit keys, else the key name."""

    type: Literal["digit", "clear", "submit"]
    value: str


def parse_keypad_value(value: str | None) -> KeypadPress | None:
    """Map a raw keypad value to a press, or ``None`` if it is not a key."""

    if value is None:
        return None
    text = value.strip().lower()
    if text == CLEAR:
        return KeypadPress("clear", CLEAR)
    if text == SUBMIT:
        return KeypadPress("submit", SUBMIT)
    if len(text) == 1 and text in DIGITS:
        return KeypadPress("digit", text)
    return None


def label_for(value: str) -> str:
    return LABELS.get(value, value)
