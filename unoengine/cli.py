"""CLI entry point."""

from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(help="UNO rules engine: run matches between random and human players")


def _setup(seed: Optional[int]):
    from unoengine.config import load_config

    cfg = load_config()
    logging.basicConfig(level=cfg.log_level, format="%(levelname)s %(name)s: %(message)s")
    rng = random.Random(seed if seed is not None else cfg.match.seed)
    return cfg, rng


def _parse_agents(agent_specs: str, rng: random.Random) -> list["AgentProtocol"]:
    from unoengine.agent.protocol import AgentProtocol
    from unoengine.agents.human_agent import HumanAgent
    from unoengine.agents.random_agent import RandomAgent

    parts = [s.strip().lower() for s in agent_specs.split(",") if s.strip()]
    agents: list[AgentProtocol] = []
    for i, part in enumerate(parts):
        if part == "random":
            agents.append(RandomAgent(name=f"Bot_{i}", rng=rng))
        elif part == "human":
            agents.append(HumanAgent(name=f"Human_{i}"))
        else:
            raise typer.BadParameter(f"Unknown agent type: {part}. Use 'random' or 'human'.")
    if len(agents) < 2:
        raise typer.BadParameter("Need at least 2 agents.")
    return agents


def _report(result, save: Optional[Path]) -> None:
    typer.echo(f"Winner: {result.winner or 'None (unfinished)'}")
    typer.echo(f"Rounds: {result.rounds_played}  Turns: {result.num_turns}")
    for name, score in sorted(result.scores.items(), key=lambda x: -x[1]):
        typer.echo(f"  {name}: {score}")
    if save is not None:
        save.write_text(result.snapshot.model_dump_json(indent=2))
        typer.echo(f"Saved game to {save}")


@app.command()
def play(
    agents: str = typer.Option(
        "random,random,random,random",
        "--agents",
        "-a",
        help="Comma-separated agent types: random or human (e.g. human,random,random)",
    ),
    target_score: Optional[int] = typer.Option(None, "--target", "-t", help="Score needed to win the match"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    max_turns: Optional[int] = typer.Option(None, "--max-turns", help="Stop after this many turns"),
    save: Optional[Path] = typer.Option(None, "--save", help="Write the final game snapshot (JSON) here"),
) -> None:
    """Run a single UNO match."""
    from unoengine.engine import Game, seeded_randomizer, seeded_shuffler
    from unoengine.orchestration.match_runner import MatchRunner

    cfg, rng = _setup(seed)
    agent_list = _parse_agents(agents, rng)
    game = Game(
        [a.name for a in agent_list],
        target_score=target_score or cfg.match.target_score,
        cards_per_player=cfg.match.cards_per_player,
        shuffler=seeded_shuffler(rng),
        randomizer=seeded_randomizer(rng),
    )
    result = MatchRunner(agent_list, game, max_turns=max_turns or cfg.match.max_turns).run()
    _report(result, save)


@app.command()
def resume(
    snapshot: Path = typer.Argument(..., exists=True, dir_okay=False, help="Game snapshot JSON file"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    max_turns: Optional[int] = typer.Option(None, "--max-turns", help="Stop after this many turns"),
    save: Optional[Path] = typer.Option(None, "--save", help="Write the resulting game snapshot (JSON) here"),
) -> None:
    """Continue a saved match with random agents in every seat."""
    from unoengine.agents.random_agent import RandomAgent
    from unoengine.engine import UnoError, load_game, seeded_randomizer, seeded_shuffler
    from unoengine.orchestration.match_runner import MatchRunner

    cfg, rng = _setup(seed)
    try:
        game = load_game(
            snapshot.read_text(),
            shuffler=seeded_shuffler(rng),
            randomizer=seeded_randomizer(rng),
        )
    except UnoError as e:
        typer.echo(f"Cannot load {snapshot}: {e}", err=True)
        raise typer.Exit(code=1)
    if game.has_ended():
        typer.echo(f"Match already won by {game.player(game.winner())}")
        return
    agent_list = [RandomAgent(name=game.player(i), rng=rng) for i in range(game.player_count)]
    result = MatchRunner(agent_list, game, max_turns=max_turns or cfg.match.max_turns).run()
    _report(result, save)


@app.command()
def show(
    snapshot: Path = typer.Argument(..., exists=True, dir_okay=False, help="Game snapshot JSON file"),
) -> None:
    """Print a summary of a saved match."""
    from unoengine.engine import UnoError, load_game

    try:
        game = load_game(snapshot.read_text())
    except UnoError as e:
        typer.echo(f"Cannot load {snapshot}: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Target score: {game.target_score}  Rounds played: {game.rounds_played}")
    for i in range(game.player_count):
        typer.echo(f"  {game.player(i)}: {game.score(i)}")
    winner = game.winner()
    if winner is not None:
        typer.echo(f"Winner: {game.player(winner)}")
        return
    rnd = game.current_round()
    if rnd is None:
        return
    turn = rnd.player_in_turn()
    typer.echo(f"Top card: {rnd.top_card()} (color: {rnd.current_color.value})")
    typer.echo(f"Direction: {rnd.current_direction.value}")
    typer.echo(f"In turn: {rnd.player(turn) if turn is not None else '-'}")
    for i in range(rnd.player_count):
        typer.echo(f"  {rnd.player(i)}: {len(rnd.player_hand(i))} cards")


@app.command()
def tournament(
    players: int = typer.Option(2, "--players", "-n", help="Number of random agents"),
    matches: int = typer.Option(100, "--matches", "-g", help="Number of matches"),
    target_score: Optional[int] = typer.Option(None, "--target", "-t", help="Score needed to win a match"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
) -> None:
    """Run a tournament between random agents."""
    from unoengine.orchestration.tournament import run_tournament

    cfg, _ = _setup(seed)
    names = [f"Bot_{i}" for i in range(players)]
    wins = run_tournament(
        names,
        num_matches=matches,
        seed=seed if seed is not None else cfg.match.seed,
        target_score=target_score or cfg.match.target_score,
        cards_per_player=cfg.match.cards_per_player,
        max_turns=cfg.match.max_turns,
    )
    typer.echo("Tournament results:")
    for name in names:
        typer.echo(f"  {name}: {wins.get(name, 0)} wins")


if __name__ == "__main__":
    app()
