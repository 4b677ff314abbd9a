"""Tournament - run many matches between random agents and aggregate results."""

import random
from collections import defaultdict
from typing import Sequence

from unoengine.agents.random_agent import RandomAgent
from unoengine.engine import Game, seeded_randomizer, seeded_shuffler
from unoengine.orchestration.match_runner import MatchRunner


def run_tournament(
    players: Sequence[str],
    num_matches: int = 100,
    seed: int | None = None,
    target_score: int = 500,
    cards_per_player: int = 7,
    max_turns: int = 5000,
) -> dict[str, int]:
    """Run `num_matches` matches between random agents.

    Seating rotates every match so nobody always sits next to the same
    opponent on the same side.

    Returns:
        Dict mapping player name to number of match wins.
    """
    names = list(players)
    wins: dict[str, int] = defaultdict(int)

    rng = random.Random(seed)
    for m in range(num_matches):
        shift = m % len(names)
        order = names[shift:] + names[:shift]
        match_rng = random.Random(rng.randint(0, 2**31 - 1))
        game = Game(
            order,
            target_score=target_score,
            cards_per_player=cards_per_player,
            shuffler=seeded_shuffler(match_rng),
            randomizer=seeded_randomizer(match_rng),
        )
        agents = [RandomAgent(name=n, rng=match_rng) for n in order]
        result = MatchRunner(agents, game, max_turns=max_turns).run()
        if result.winner:
            wins[result.winner] += 1

    return dict(wins)
