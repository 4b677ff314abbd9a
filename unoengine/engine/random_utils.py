"""Shuffler and randomizer capabilities.

The engine never draws randomness on its own; callers pass these functions in.
"""

import random
from typing import Callable, List

from unoengine.engine.card import Card
from unoengine.engine.deck import Shuffler

# Picks an index in range(n), used to choose the dealer.
Randomizer = Callable[[int], int]


def seeded_shuffler(rng: random.Random) -> Shuffler:
    """Shuffler backed by the given random generator."""

    def shuffle(cards: List[Card]) -> None:
        rng.shuffle(cards)

    return shuffle


def seeded_randomizer(rng: random.Random) -> Randomizer:
    """Randomizer backed by the given random generator."""

    def pick(n: int) -> int:
        return rng.randrange(n)

    return pick


def identity_shuffler(cards: List[Card]) -> None:
    """Leave the order untouched. Useful for deterministic deals in tests."""


class MemoizingShuffler:
    """Wraps a shuffler and remembers the order it produced last."""

    def __init__(self, base: Shuffler) -> None:
        self._base = base
        self.memo: List[Card] = []

    def __call__(self, cards: List[Card]) -> None:
        self._base(cards)
        self.memo = list(cards)


def memoizing_shuffler(base: Shuffler) -> MemoizingShuffler:
    return MemoizingShuffler(base)
