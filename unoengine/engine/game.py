"""Game loop: chains rounds and accumulates scores up to a target."""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

from unoengine.engine.card import Color
from unoengine.engine.deck import Shuffler
from unoengine.engine.errors import ConfigurationError, IllegalActionError, InvalidStateError
from unoengine.engine.game_state import RoundEnded, RoundOutcome
from unoengine.engine.random_utils import Randomizer
from unoengine.engine.round import DEFAULT_CARDS_PER_PLAYER, Round, check_deal_size
from unoengine.engine.snapshot import GameSnapshot, parse_game_snapshot

logger = logging.getLogger(__name__)

DEFAULT_TARGET_SCORE = 500


class Game:
    """A match of consecutive rounds.

    Act on the current round through the game's own play/draw/say_uno/
    catch_uno_failure so the game sees every round outcome.
    """

    def __init__(
        self,
        players: Sequence[str],
        target_score: int = DEFAULT_TARGET_SCORE,
        cards_per_player: int = DEFAULT_CARDS_PER_PLAYER,
        shuffler: Optional[Shuffler] = None,
        randomizer: Optional[Randomizer] = None,
    ) -> None:
        if len(players) < 2:
            raise InvalidStateError("Need at least 2 players")
        if target_score <= 0:
            raise InvalidStateError("Target score must be positive")
        self._players: List[str] = list(players)
        self._target = target_score
        self._cards_per_player = cards_per_player
        self._shuffler = shuffler
        self._randomizer = randomizer
        self._scores = [0] * len(self._players)
        self._winner: Optional[int] = None
        self._rounds_played = 0
        self._round: Optional[Round] = self._new_round()

    @classmethod
    def from_snapshot(
        cls,
        snapshot: Any,
        shuffler: Optional[Shuffler] = None,
        randomizer: Optional[Randomizer] = None,
    ) -> "Game":
        """Rebuild a game from a GameSnapshot (or an equivalent mapping).

        The winner is derived from the scores. Raises InvalidStateError on
        inconsistent data.
        """
        snap = parse_game_snapshot(snapshot)
        if len(snap.players) < 2:
            raise InvalidStateError("Need at least 2 players")
        if len(snap.scores) != len(snap.players):
            raise InvalidStateError("Scores count must match players count")
        winners = [i for i, s in enumerate(snap.scores) if s >= snap.target_score]
        if len(winners) > 1:
            raise InvalidStateError("Multiple winners not allowed")
        if not winners and snap.current_round is None:
            raise InvalidStateError("Current round required for an unfinished game")
        if winners and snap.current_round is not None:
            raise InvalidStateError("A finished game cannot have a current round")

        check_deal_size(len(snap.players), snap.cards_per_player)

        current = None
        if snap.current_round is not None:
            if snap.current_round.players != snap.players:
                raise InvalidStateError("Round players must match game players")
            current = Round.from_snapshot(snap.current_round, shuffler=shuffler)
            if current.has_ended():
                raise InvalidStateError("Current round has already ended")

        game = cls.__new__(cls)
        game._players = list(snap.players)
        game._target = snap.target_score
        game._cards_per_player = snap.cards_per_player
        game._shuffler = shuffler
        game._randomizer = randomizer
        game._scores = list(snap.scores)
        game._winner = winners[0] if winners else None
        game._rounds_played = snap.rounds_played
        game._round = current
        return game

    def _new_round(self) -> Round:
        if self._randomizer is None:
            raise ConfigurationError("A randomizer is required to pick the dealer")
        n = len(self._players)
        dealer = self._randomizer(n)
        if not 0 <= dealer < n:
            raise ConfigurationError(f"Randomizer returned dealer {dealer} for {n} players")
        logger.debug("Dealing a round with dealer %s", self._players[dealer])
        return Round(
            self._players,
            dealer,
            cards_per_player=self._cards_per_player,
            shuffler=self._shuffler,
        )

    @property
    def player_count(self) -> int:
        return len(self._players)

    @property
    def target_score(self) -> int:
        return self._target

    @property
    def rounds_played(self) -> int:
        return self._rounds_played

    def player(self, index: int) -> str:
        if not 0 <= index < len(self._players):
            raise IllegalActionError(f"Player index {index} out of range")
        return self._players[index]

    def score(self, index: int) -> int:
        if not 0 <= index < len(self._players):
            raise IllegalActionError(f"Player index {index} out of range")
        return self._scores[index]

    def scores(self) -> tuple[int, ...]:
        return tuple(self._scores)

    def winner(self) -> Optional[int]:
        return self._winner

    def has_ended(self) -> bool:
        return self._winner is not None

    def current_round(self) -> Optional[Round]:
        return self._round

    def _active_round(self) -> Round:
        if self._round is None:
            raise IllegalActionError("The game has ended")
        return self._round

    def play(self, index: int, color: Optional[Color] = None) -> RoundOutcome:
        """Play a card for the player in turn.

        When the play would empty their hand, the following round is dealt
        first, so a failing dealer pick or deal leaves the game untouched.
        """
        current = self._active_round()
        next_round = None
        if self._ends_round(current, index):
            next_round = self._new_round()
        outcome = current.play(index, color)
        self._handle_outcome(outcome, next_round)
        return outcome

    def draw(self) -> RoundOutcome:
        outcome = self._active_round().draw()
        self._handle_outcome(outcome, None)
        return outcome

    @staticmethod
    def _ends_round(current: Round, index: int) -> bool:
        turn = current.player_in_turn()
        if turn is None:
            return False
        return len(current.player_hand(turn)) == 1 and current.can_play(index)

    def say_uno(self, player: int) -> None:
        self._active_round().say_uno(player)

    def catch_uno_failure(self, accuser: int, accused: int) -> bool:
        return self._active_round().catch_uno_failure(accuser, accused)

    def _handle_outcome(self, outcome: RoundOutcome, next_round: Optional[Round]) -> None:
        if not isinstance(outcome, RoundEnded):
            return
        if next_round is None:
            next_round = self._new_round()
        self._rounds_played += 1
        self._scores[outcome.winner] += outcome.score
        if self._scores[outcome.winner] >= self._target:
            self._winner = outcome.winner
            self._round = None
            logger.info(
                "Game won by %s with %d points after %d rounds",
                self._players[outcome.winner], self._scores[outcome.winner], self._rounds_played,
            )
            return
        self._round = next_round

    def to_snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            players=list(self._players),
            target_score=self._target,
            scores=list(self._scores),
            cards_per_player=self._cards_per_player,
            rounds_played=self._rounds_played,
            current_round=self._round.to_snapshot() if self._round is not None else None,
        )
