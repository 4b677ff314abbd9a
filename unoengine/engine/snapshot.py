"""Snapshot records for rounds and games.

Snapshots are plain pydantic models: they check the shape of the data (types,
enum values, numeric ranges). Game rules and cross-field invariants are
checked by Round.from_snapshot and Game.from_snapshot, which refuse to build
an instance from inconsistent data.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from unoengine.engine.card import (
    ActionCard,
    ActionKind,
    Card,
    Color,
    NumberedCard,
    WildCard,
    WildDrawFourCard,
    card_to_dict,
)
from unoengine.engine.deck import Shuffler
from unoengine.engine.errors import InvalidStateError
from unoengine.engine.game_state import Direction

if TYPE_CHECKING:
    from unoengine.engine.game import Game
    from unoengine.engine.random_utils import Randomizer
    from unoengine.engine.round import Round


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class NumberedRecord(_Record):
    type: Literal["numbered"]
    color: Color
    number: int = Field(ge=0, le=9)

    def to_card(self) -> Card:
        return NumberedCard(color=self.color, number=self.number)


class ActionRecord(_Record):
    type: Literal["skip", "reverse", "draw_two"]
    color: Color

    def to_card(self) -> Card:
        return ActionCard(kind=ActionKind(self.type), color=self.color)


class WildRecord(_Record):
    type: Literal["wild"]

    def to_card(self) -> Card:
        return WildCard()


class WildDrawFourRecord(_Record):
    type: Literal["wild_draw_four"]

    def to_card(self) -> Card:
        return WildDrawFourCard()


CardRecord = Annotated[
    Union[NumberedRecord, ActionRecord, WildRecord, WildDrawFourRecord],
    Field(discriminator="type"),
]


class AccusationRecord(_Record):
    """An open UNO accusation window."""

    target: int
    said: bool = False


class RoundSnapshot(_Record):
    """Complete state of one round. Piles are listed top first."""

    players: List[str]
    hands: List[List[CardRecord]]
    draw_pile: List[CardRecord]
    discard_pile: List[CardRecord]
    current_color: Color
    current_direction: Direction
    dealer: int
    player_in_turn: Optional[int] = None
    accusation: Optional[AccusationRecord] = None
    pre_announced: List[bool] = Field(default_factory=list)


class GameSnapshot(_Record):
    """Complete state of a match, with the round in progress if any."""

    players: List[str]
    target_score: int = Field(gt=0)
    scores: List[Annotated[int, Field(ge=0)]]
    cards_per_player: int = Field(default=7, ge=1)
    rounds_played: int = Field(default=0, ge=0)
    current_round: Optional[RoundSnapshot] = None


def cards_to_records(cards: Any) -> List[dict[str, Any]]:
    return [card_to_dict(c) for c in cards]


def records_to_cards(records: List[Any]) -> List[Card]:
    return [r.to_card() for r in records]


def parse_round_snapshot(data: Any) -> RoundSnapshot:
    """Accept a RoundSnapshot or a plain mapping; raise InvalidStateError on bad shape."""
    if isinstance(data, RoundSnapshot):
        return data
    try:
        return RoundSnapshot.model_validate(data)
    except ValidationError as err:
        raise InvalidStateError(f"Malformed round snapshot: {err}") from err


def parse_game_snapshot(data: Any) -> GameSnapshot:
    """Accept a GameSnapshot or a plain mapping; raise InvalidStateError on bad shape."""
    if isinstance(data, GameSnapshot):
        return data
    try:
        return GameSnapshot.model_validate(data)
    except ValidationError as err:
        raise InvalidStateError(f"Malformed game snapshot: {err}") from err


def dump_round(rnd: "Round") -> str:
    """Serialize a round to JSON."""
    return rnd.to_snapshot().model_dump_json()


def load_round(text: str, shuffler: Optional[Shuffler] = None) -> "Round":
    """Rebuild a round from JSON produced by dump_round."""
    from unoengine.engine.round import Round

    try:
        snapshot = RoundSnapshot.model_validate_json(text)
    except ValidationError as err:
        raise InvalidStateError(f"Malformed round snapshot: {err}") from err
    return Round.from_snapshot(snapshot, shuffler=shuffler)


def dump_game(game: "Game") -> str:
    """Serialize a game to JSON."""
    return game.to_snapshot().model_dump_json(indent=2)


def load_game(
    text: str,
    shuffler: Optional[Shuffler] = None,
    randomizer: Optional["Randomizer"] = None,
) -> "Game":
    """Rebuild a game from JSON produced by dump_game."""
    from unoengine.engine.game import Game

    try:
        snapshot = GameSnapshot.model_validate_json(text)
    except ValidationError as err:
        raise InvalidStateError(f"Malformed game snapshot: {err}") from err
    return Game.from_snapshot(snapshot, shuffler=shuffler, randomizer=randomizer)
