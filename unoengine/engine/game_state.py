"""State value types shared by rounds, games and their callers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional, Union

from unoengine.engine.card import Card, Color

if TYPE_CHECKING:
    from unoengine.engine.round import Round


class Direction(str, Enum):
    """Turn order around the table."""

    CLOCKWISE = "clockwise"
    COUNTERCLOCKWISE = "counterclockwise"

    @property
    def step(self) -> int:
        return 1 if self is Direction.CLOCKWISE else -1

    def reversed(self) -> "Direction":
        if self is Direction.CLOCKWISE:
            return Direction.COUNTERCLOCKWISE
        return Direction.CLOCKWISE


@dataclass
class AccusationWindow:
    """Open while the target sits on one card and nobody has acted since."""

    open: bool = False
    target: Optional[int] = None
    said: bool = False

    def close(self) -> None:
        self.open = False
        self.target = None
        self.said = False


@dataclass(frozen=True)
class RoundContinues:
    """The action did not end the round."""


@dataclass(frozen=True)
class RoundEnded:
    """The action emptied a hand and ended the round."""

    winner: int
    score: int


RoundOutcome = Union[RoundContinues, RoundEnded]


@dataclass
class PlayerView:
    """Round state visible to a single player.

    Contains only that player's hand and public info.
    """

    player: int
    my_hand: List[Card]
    top_discard: Card
    current_color: Color
    direction: Direction
    player_in_turn: Optional[int]
    players: tuple[str, ...]
    num_cards_per_player: Dict[int, int]
    accusation_target: Optional[int]

    @classmethod
    def from_round(cls, rnd: "Round", player: int) -> "PlayerView":
        """Create a player view from a round, hiding other players' hands."""
        return cls(
            player=player,
            my_hand=list(rnd.player_hand(player)),
            top_discard=rnd.top_card(),
            current_color=rnd.current_color,
            direction=rnd.current_direction,
            player_in_turn=rnd.player_in_turn(),
            players=tuple(rnd.player(i) for i in range(rnd.player_count)),
            num_cards_per_player={
                i: len(rnd.player_hand(i)) for i in range(rnd.player_count)
            },
            accusation_target=rnd.accusation_target(),
        )
