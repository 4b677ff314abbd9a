"""Card and Color types for UNO."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Union


class Color(str, Enum):
    """Card colors, in standard deck order."""

    BLUE = "blue"
    GREEN = "green"
    RED = "red"
    YELLOW = "yellow"


class ActionKind(str, Enum):
    """Colored action cards."""

    SKIP = "skip"
    REVERSE = "reverse"
    DRAW_TWO = "draw_two"


@dataclass(frozen=True)
class NumberedCard:
    """A colored card with a face value 0-9."""

    color: Color
    number: int

    def __post_init__(self) -> None:
        if not isinstance(self.color, Color):
            raise ValueError(f"Invalid card color: {self.color!r}")
        if isinstance(self.number, bool) or not isinstance(self.number, int) or not 0 <= self.number <= 9:
            raise ValueError(f"Invalid card number: {self.number!r}")

    def __str__(self) -> str:
        return f"{self.color.value}_{self.number}"


@dataclass(frozen=True)
class ActionCard:
    """Skip, Reverse or Draw Two in one of the four colors."""

    kind: ActionKind
    color: Color

    def __post_init__(self) -> None:
        if not isinstance(self.kind, ActionKind):
            raise ValueError(f"Invalid action kind: {self.kind!r}")
        if not isinstance(self.color, Color):
            raise ValueError(f"Invalid card color: {self.color!r}")

    def __str__(self) -> str:
        return f"{self.color.value}_{self.kind.value}"


@dataclass(frozen=True)
class WildCard:
    def __str__(self) -> str:
        return "wild"


@dataclass(frozen=True)
class WildDrawFourCard:
    def __str__(self) -> str:
        return "wild_draw_four"


ColoredCard = Union[NumberedCard, ActionCard]
Card = Union[NumberedCard, ActionCard, WildCard, WildDrawFourCard]

WILD_POINTS = 50
ACTION_POINTS = 20


def is_wild(card: Card) -> bool:
    """True for Wild and Wild Draw Four."""
    return isinstance(card, (WildCard, WildDrawFourCard))


def card_color(card: Card) -> Optional[Color]:
    """Printed color of the card, None for the wild family."""
    if isinstance(card, ColoredCard):
        return card.color
    return None


def points_for(card: Card) -> int:
    """Points a card left in a losing hand is worth to the round winner."""
    if isinstance(card, NumberedCard):
        return card.number
    if isinstance(card, ActionCard):
        return ACTION_POINTS
    return WILD_POINTS


def card_to_dict(card: Card) -> dict[str, Any]:
    """Tagged record for a card, e.g. {"type": "numbered", "color": "red", "number": 5}."""
    if isinstance(card, NumberedCard):
        return {"type": "numbered", "color": card.color.value, "number": card.number}
    if isinstance(card, ActionCard):
        return {"type": card.kind.value, "color": card.color.value}
    if isinstance(card, WildCard):
        return {"type": "wild"}
    if isinstance(card, WildDrawFourCard):
        return {"type": "wild_draw_four"}
    raise TypeError(f"Not a card: {card!r}")


def card_from_dict(record: Mapping[str, Any]) -> Card:
    """Inverse of card_to_dict. Raises ValueError on malformed records."""
    kind = record.get("type")
    if kind == "wild":
        return WildCard()
    if kind == "wild_draw_four":
        return WildDrawFourCard()
    if "color" not in record:
        raise ValueError(f"Missing color for {kind!r} card")
    color = Color(record["color"])
    if kind == "numbered":
        if "number" not in record:
            raise ValueError("Missing number for numbered card")
        return NumberedCard(color=color, number=record["number"])
    if kind in (k.value for k in ActionKind):
        return ActionCard(kind=ActionKind(kind), color=color)
    raise ValueError(f"Unknown card type: {kind!r}")
