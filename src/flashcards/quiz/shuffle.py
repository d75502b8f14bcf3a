"""Fisher–Yates shuffling with an injectable random source."""

from __future__ import annotations

import random
from typing import Iterable, MutableSequence, Protocol, TypeVar

T = TypeVar("T")
S = TypeVar("S", bound=MutableSequence)


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


_default_rng = random.Random()


def shuffle_in_place(items: S, rng: RandomSource | None = None) -> S:
    """Uniformly permute ``items`` in place and return it."""

    source = rng if rng is not None else _default_rng
    for i in range(len(items) - 1, 0, -1):
        j = source.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items


def shuffled(items: Iterable[T], rng: RandomSource | None = None) -> list[T]:
    """Return a new uniformly shuffled list; ``items`` is left untouched."""

    return shuffle_in_place(list(items), rng)
