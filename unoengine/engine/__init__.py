"""Rules engine for UNO."""

from unoengine.engine.card import (
    ActionCard,
    ActionKind,
    Card,
    Color,
    NumberedCard,
    WildCard,
    WildDrawFourCard,
    is_wild,
    points_for,
)
from unoengine.engine.deck import DECK_SIZE, Pile, Shuffler, create_deck
from unoengine.engine.errors import (
    ConfigurationError,
    IllegalActionError,
    InvalidStateError,
    UnoError,
)
from unoengine.engine.game_state import (
    Direction,
    PlayerView,
    RoundContinues,
    RoundEnded,
    RoundOutcome,
)
from unoengine.engine.round import Round
from unoengine.engine.game import Game
from unoengine.engine.snapshot import (
    GameSnapshot,
    RoundSnapshot,
    dump_game,
    dump_round,
    load_game,
    load_round,
)
from unoengine.engine.random_utils import (
    Randomizer,
    identity_shuffler,
    seeded_randomizer,
    seeded_shuffler,
)
from unoengine.engine.actions import Action, DrawCard, PlayCard, apply_action, legal_actions

__all__ = [
    "ActionCard",
    "ActionKind",
    "Card",
    "Color",
    "NumberedCard",
    "WildCard",
    "WildDrawFourCard",
    "is_wild",
    "points_for",
    "DECK_SIZE",
    "Pile",
    "Shuffler",
    "create_deck",
    "ConfigurationError",
    "IllegalActionError",
    "InvalidStateError",
    "UnoError",
    "Direction",
    "PlayerView",
    "RoundContinues",
    "RoundEnded",
    "RoundOutcome",
    "Round",
    "Game",
    "GameSnapshot",
    "RoundSnapshot",
    "dump_game",
    "dump_round",
    "load_game",
    "load_round",
    "Randomizer",
    "identity_shuffler",
    "seeded_randomizer",
    "seeded_shuffler",
    "Action",
    "DrawCard",
    "PlayCard",
    "apply_action",
    "legal_actions",
]
