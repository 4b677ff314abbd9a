"""Deck creation and the Pile sequence used for draw and discard piles."""

from typing import Any, Callable, Iterable, Iterator, List, Mapping, Optional, Sequence

from unoengine.engine.card import (
    ActionCard,
    ActionKind,
    Card,
    Color,
    NumberedCard,
    WildCard,
    WildDrawFourCard,
    card_from_dict,
    card_to_dict,
)

DECK_SIZE = 108

# Shuffles a list of cards in place, like random.shuffle.
Shuffler = Callable[[List[Card]], None]


def create_deck() -> List[Card]:
    """Create a standard 108-card UNO deck in build order.

    - 4 colors x (one 0, two each of 1-9, Skip, Reverse, Draw Two): 100 cards
    - 4 Wild, 4 Wild Draw Four: 8 cards
    - Total: 108 cards
    """
    cards: List[Card] = []

    for color in Color:
        cards.append(NumberedCard(color=color, number=0))
        for number in range(1, 10):
            cards.append(NumberedCard(color=color, number=number))
            cards.append(NumberedCard(color=color, number=number))
        for kind in ActionKind:
            cards.append(ActionCard(kind=kind, color=color))
            cards.append(ActionCard(kind=kind, color=color))

    cards.extend(WildCard() for _ in range(4))
    cards.extend(WildDrawFourCard() for _ in range(4))
    return cards


class Pile:
    """Ordered sequence of cards. Index 0 is the top of the pile."""

    def __init__(self, cards: Iterable[Card] = ()) -> None:
        self._cards: List[Card] = list(cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(list(self._cards))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pile):
            return NotImplemented
        return self._cards == other._cards

    def __repr__(self) -> str:
        return f"Pile({len(self._cards)} cards, top={self.peek()})"

    @property
    def cards(self) -> tuple[Card, ...]:
        return tuple(self._cards)

    def shuffle(self, shuffler: Shuffler) -> None:
        shuffler(self._cards)

    def deal(self) -> Optional[Card]:
        """Remove and return the top card, or None if the pile is empty."""
        if not self._cards:
            return None
        return self._cards.pop(0)

    def peek(self) -> Optional[Card]:
        return self._cards[0] if self._cards else None

    def push(self, card: Card) -> None:
        """Place a card on top."""
        self._cards.insert(0, card)

    def filter(self, predicate: Callable[[Card], bool]) -> "Pile":
        return Pile(c for c in self._cards if predicate(c))

    def take_below_top(self) -> List[Card]:
        """Remove and return every card under the top card."""
        rest = self._cards[1:]
        del self._cards[1:]
        return rest

    def copy(self) -> "Pile":
        return Pile(self._cards)

    def to_snapshot(self) -> List[dict[str, Any]]:
        return [card_to_dict(c) for c in self._cards]

    @classmethod
    def from_snapshot(cls, records: Sequence[Mapping[str, Any]]) -> "Pile":
        return cls(card_from_dict(r) for r in records)
