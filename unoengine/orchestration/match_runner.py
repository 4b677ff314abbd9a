"""Drives a match to completion with one agent per seat."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Optional, Sequence

from unoengine.engine import (
    DrawCard,
    Game,
    GameSnapshot,
    PlayerView,
    RoundEnded,
    apply_action,
    legal_actions,
)

if TYPE_CHECKING:
    from unoengine.agent.protocol import AgentProtocol

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    """Result of a finished (or abandoned) match."""

    winner: Optional[str]
    scores: Dict[str, int]
    rounds_played: int
    num_turns: int
    snapshot: GameSnapshot


class MatchRunner:
    """Runs a single UNO match, one agent per seat."""

    def __init__(
        self,
        agents: Sequence["AgentProtocol"],
        game: Game,
        max_turns: int = 5000,
    ):
        if len(agents) != game.player_count:
            raise ValueError(f"Need {game.player_count} agents, got {len(agents)}")
        self._agents = list(agents)
        self._game = game
        self._max_turns = max_turns

    def run(self) -> MatchResult:
        """Run the match and return the result."""
        game = self._game
        num_turns = 0

        while num_turns < self._max_turns:
            rnd = game.current_round()
            if rnd is None:
                break
            seat = rnd.player_in_turn()
            if seat is None:
                break
            agent = self._agents[seat]

            view = PlayerView.from_round(rnd, seat)
            if agent.wants_to_say_uno(view, seat):
                game.say_uno(seat)

            legal = legal_actions(rnd)
            if not legal:
                logger.warning("No legal action for %s, abandoning match", rnd.player(seat))
                break
            action = agent.get_action(view, legal, seat)
            if action is None:
                action = next((a for a in legal if isinstance(a, DrawCard)), legal[0])

            outcome = apply_action(game, action)
            num_turns += 1
            if isinstance(outcome, RoundEnded):
                logger.info(
                    "Round %d: %s scores %d", game.rounds_played, rnd.player(outcome.winner), outcome.score
                )
                continue
            self._offer_accusations(game)

        if not game.has_ended():
            logger.warning("Match stopped after %d turns without a winner", num_turns)

        winner = game.winner()
        return MatchResult(
            winner=game.player(winner) if winner is not None else None,
            scores={game.player(i): game.score(i) for i in range(game.player_count)},
            rounds_played=game.rounds_played,
            num_turns=num_turns,
            snapshot=game.to_snapshot(),
        )

    def _offer_accusations(self, game: Game) -> None:
        rnd = game.current_round()
        if rnd is None:
            return
        target = rnd.accusation_target()
        if target is None or rnd.has_called_uno(target):
            return
        n = game.player_count
        for offset in range(1, n):
            seat = (target + offset) % n
            view = PlayerView.from_round(rnd, seat)
            if self._agents[seat].wants_to_accuse(view, seat, target):
                if game.catch_uno_failure(seat, target):
                    logger.info("%s caught %s without UNO", rnd.player(seat), rnd.player(target))
                return
