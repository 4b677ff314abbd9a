"""Actions a player can take, and helpers to enumerate and apply them."""

from dataclasses import dataclass
from typing import List, Optional, Union

from unoengine.engine.card import Color, is_wild
from unoengine.engine.game import Game
from unoengine.engine.game_state import RoundOutcome
from unoengine.engine.round import Round


@dataclass(frozen=True)
class PlayCard:
    """Action: play the card at `index` of the hand. For wilds, chosen_color is required."""

    index: int
    chosen_color: Optional[Color] = None


@dataclass(frozen=True)
class DrawCard:
    """Action: draw a card (when no legal play or player chooses to draw)."""


Action = Union[PlayCard, DrawCard]


def legal_actions(rnd: Round) -> List[Action]:
    """Return all legal actions for the player in turn."""
    player = rnd.player_in_turn()
    if player is None:
        return []

    actions: List[Action] = []
    for i, card in enumerate(rnd.player_hand(player)):
        if not rnd.can_play(i):
            continue
        if is_wild(card):
            actions.extend(PlayCard(index=i, chosen_color=color) for color in Color)
        else:
            actions.append(PlayCard(index=i))

    if len(rnd.draw_pile()) > 0 or len(rnd.discard_pile()) > 1:
        actions.append(DrawCard())
    return actions


def apply_action(game: Game, action: Action) -> RoundOutcome:
    """Apply an action for the player in turn of the game's current round."""
    if isinstance(action, DrawCard):
        return game.draw()
    return game.play(action.index, action.chosen_color)
