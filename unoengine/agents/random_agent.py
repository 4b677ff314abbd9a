"""Random agent - picks uniformly among legal actions."""

import random

from unoengine.engine import Action, PlayerView
from unoengine.engine.actions import PlayCard


class RandomAgent:
    """Agent that plays a random legal card, drawing only when it has to.

    `uno_probability` and `accuse_probability` control how often it remembers
    to declare UNO and to catch opponents who forgot.
    """

    def __init__(
        self,
        name: str = "random",
        rng: random.Random | None = None,
        uno_probability: float = 1.0,
        accuse_probability: float = 1.0,
    ):
        self._name = name
        self._rng = rng or random.Random()
        self._uno_probability = uno_probability
        self._accuse_probability = accuse_probability

    @property
    def name(self) -> str:
        return self._name

    def get_action(
        self,
        player_view: PlayerView,
        legal_actions: list[Action],
        player: int,
    ) -> Action | None:
        if not legal_actions:
            return None
        plays = [a for a in legal_actions if isinstance(a, PlayCard)]
        if plays:
            return self._rng.choice(plays)
        return None

    def wants_to_say_uno(self, player_view: PlayerView, player: int) -> bool:
        if len(player_view.my_hand) > 2:
            return False
        return self._rng.random() < self._uno_probability

    def wants_to_accuse(self, player_view: PlayerView, player: int, target: int) -> bool:
        return self._rng.random() < self._accuse_probability
