"""Pytest fixtures for UNO engine tests."""

import random
from typing import Any, Callable, Optional, Sequence

import pytest

from unoengine.engine import Card, Round, create_deck, is_wild, seeded_randomizer, seeded_shuffler
from unoengine.engine.card import card_color, card_to_dict
from unoengine.engine.random_utils import identity_shuffler


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return random.Random(42)


@pytest.fixture
def shuffler(rng):
    return seeded_shuffler(rng)


@pytest.fixture
def randomizer(rng):
    return seeded_randomizer(rng)


def _build_snapshot(
    hands: Sequence[Sequence[Card]],
    discard: Sequence[Card],
    *,
    draw: Optional[Sequence[Card]] = None,
    leftover_to: Optional[int] = None,
    color: Any = None,
    turn: Optional[int] = 0,
    dealer: int = 0,
    direction: str = "clockwise",
    players: Optional[Sequence[str]] = None,
    accusation: Optional[dict] = None,
    pre_announced: Optional[list] = None,
) -> dict:
    """Build a round snapshot that holds a full 108-card deck.

    Cards not mentioned go to the draw pile, or, when `draw` is given, under
    the top of the discard pile. `leftover_to` sends them to a player's hand
    instead.
    """
    hands = [list(h) for h in hands]
    discard = list(discard)
    remaining = create_deck()
    for card in [c for h in hands for c in h] + discard + list(draw or []):
        remaining.remove(card)

    if leftover_to is not None:
        hands[leftover_to].extend(remaining)
        draw_pile = list(draw or [])
    elif draw is None:
        draw_pile = remaining
    else:
        draw_pile = list(draw)
        discard = discard + remaining

    top = discard[0]
    if color is None:
        assert not is_wild(top), "a color is required when a wild card is on top"
        color = card_color(top)

    return {
        "players": list(players or [f"P{i}" for i in range(len(hands))]),
        "hands": [[card_to_dict(c) for c in h] for h in hands],
        "draw_pile": [card_to_dict(c) for c in draw_pile],
        "discard_pile": [card_to_dict(c) for c in discard],
        "current_color": getattr(color, "value", color),
        "current_direction": direction,
        "dealer": dealer,
        "player_in_turn": turn,
        "accusation": accusation,
        "pre_announced": pre_announced or [],
    }


@pytest.fixture
def snapshot_factory() -> Callable[..., dict]:
    """Build a valid round snapshot dict from hands and a discard pile."""
    return _build_snapshot


@pytest.fixture
def round_factory() -> Callable[..., Round]:
    """Build a Round from hands and a discard pile.

    Uses the identity shuffler by default so pile rebuilds are predictable.
    """

    def build(hands, discard, shuffler=identity_shuffler, **kwargs) -> Round:
        return Round.from_snapshot(_build_snapshot(hands, discard, **kwargs), shuffler=shuffler)

    return build
