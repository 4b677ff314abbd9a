"""Simulate a match with random agents, printing every move."""

import random

from unoengine.agents.random_agent import RandomAgent
from unoengine.engine import Game, PlayerView, seeded_randomizer, seeded_shuffler
from unoengine.orchestration.match_runner import MatchRunner


class ChattyAgent(RandomAgent):
    def get_action(self, view: PlayerView, actions, player: int):
        action = super().get_action(view, actions, player)
        if action is None:
            print(f"> {self.name} draws (top: {view.top_discard}, color: {view.current_color.value})")
        else:
            card = view.my_hand[action.index]
            print(f"> {self.name} plays {card} on {view.top_discard}")
        return action


def main():
    rng = random.Random(42)
    names = ["p1", "p2", "p3", "p4"]
    agents = [ChattyAgent(name=n, rng=rng, uno_probability=0.8) for n in names]
    game = Game(
        names,
        target_score=200,
        shuffler=seeded_shuffler(rng),
        randomizer=seeded_randomizer(rng),
    )

    result = MatchRunner(agents, game).run()

    print(f"Match finished! Winner: {result.winner}")
    print(f"Rounds: {result.rounds_played}  Turns: {result.num_turns}")
    print(f"Scores: {result.scores}")


if __name__ == "__main__":
    main()
