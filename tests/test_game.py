"""Tests for the game loop."""

import pytest

from unoengine.engine import (
    Color,
    ConfigurationError,
    Game,
    IllegalActionError,
    InvalidStateError,
    NumberedCard,
    RoundContinues,
    RoundEnded,
    WildCard,
    identity_shuffler,
    seeded_shuffler,
)

R, B, G, Y = Color.RED, Color.BLUE, Color.GREEN, Color.YELLOW
PLAYERS = ["P0", "P1", "P2"]


def test_new_game(shuffler) -> None:
    game = Game(["A", "B", "C"], shuffler=shuffler, randomizer=lambda n: 1)
    assert game.player_count == 3
    assert game.player(0) == "A"
    assert game.scores() == (0, 0, 0)
    assert game.target_score == 500
    assert game.winner() is None
    assert game.rounds_played == 0
    rnd = game.current_round()
    assert rnd is not None
    assert rnd.dealer == 1
    assert rnd.player_in_turn() is not None


def test_game_needs_randomizer(shuffler) -> None:
    with pytest.raises(ConfigurationError):
        Game(["A", "B"], shuffler=shuffler)
    with pytest.raises(ConfigurationError):
        Game(["A", "B"], shuffler=shuffler, randomizer=lambda n: n)


@pytest.mark.parametrize(("players", "target"), [(["A"], 500), (["A", "B"], 0), (["A", "B"], -10)])
def test_invalid_game_configuration(players, target) -> None:
    with pytest.raises(InvalidStateError):
        Game(players, target_score=target, shuffler=identity_shuffler, randomizer=lambda n: 0)


def test_player_index_out_of_range(shuffler) -> None:
    game = Game(["A", "B"], shuffler=shuffler, randomizer=lambda n: 0)
    with pytest.raises(IllegalActionError):
        game.player(2)
    with pytest.raises(IllegalActionError):
        game.score(-1)


@pytest.fixture
def game_data(snapshot_factory):
    """A game whose current round ends when P0 plays their last card."""

    def build(scores, target=500, rounds_played=0, turn=0, hands=None):
        hands = hands or [[NumberedCard(R, 5)], [NumberedCard(B, 2), WildCard()], [NumberedCard(Y, 9)]]
        return {
            "players": PLAYERS,
            "target_score": target,
            "scores": scores,
            "rounds_played": rounds_played,
            "current_round": snapshot_factory(hands, [NumberedCard(R, 3)], turn=turn, players=PLAYERS),
        }

    return build


def test_round_score_is_credited_and_next_round_starts(game_data, rng) -> None:
    game = Game.from_snapshot(
        game_data([10, 20, 30], rounds_played=2),
        shuffler=seeded_shuffler(rng),
        randomizer=lambda n: 2,
    )
    outcome = game.play(0)
    assert outcome == RoundEnded(winner=0, score=61)
    assert game.scores() == (71, 20, 30)
    assert game.rounds_played == 3
    assert game.winner() is None
    next_round = game.current_round()
    assert next_round is not None
    assert not next_round.has_ended()
    assert next_round.dealer == 2


def test_score_goes_to_the_round_winner_seat(game_data, rng) -> None:
    hands = [[NumberedCard(B, 2)], [NumberedCard(R, 5)], [NumberedCard(Y, 9)]]
    game = Game.from_snapshot(
        game_data([0, 0, 0], rounds_played=1, turn=1, hands=hands),
        shuffler=seeded_shuffler(rng),
        randomizer=lambda n: 0,
    )
    game.play(0)
    assert game.scores() == (0, 11, 0)


def test_reaching_target_freezes_game(game_data, rng) -> None:
    game = Game.from_snapshot(
        game_data([0, 0, 0], target=60),
        shuffler=seeded_shuffler(rng),
        randomizer=lambda n: 0,
    )
    game.play(0)
    assert game.winner() == 0
    assert game.has_ended()
    assert game.current_round() is None
    assert game.score(0) == 61

    with pytest.raises(IllegalActionError):
        game.play(0)
    with pytest.raises(IllegalActionError):
        game.draw()

    snapshot = game.to_snapshot()
    assert snapshot.current_round is None
    assert Game.from_snapshot(snapshot).winner() == 0


def test_finishing_a_round_needs_randomizer(game_data) -> None:
    game = Game.from_snapshot(game_data([0, 0, 0]), shuffler=identity_shuffler)
    before = game.to_snapshot()
    with pytest.raises(ConfigurationError):
        game.play(0)
    assert game.to_snapshot() == before


def test_game_delegates_uno_calls(snapshot_factory) -> None:
    hands = [[NumberedCard(G, 1), NumberedCard(G, 2)], [NumberedCard(Y, 1)], [NumberedCard(Y, 2)]]
    data = {
        "players": PLAYERS,
        "target_score": 500,
        "scores": [0, 0, 0],
        "current_round": snapshot_factory(hands, [NumberedCard(G, 5)], players=PLAYERS),
    }
    game = Game.from_snapshot(data, shuffler=identity_shuffler, randomizer=lambda n: 0)
    assert game.play(0) == RoundContinues()
    assert game.catch_uno_failure(2, 0) is True
    assert len(game.current_round().player_hand(0)) == 5

    game.say_uno(1)
    assert game.draw() == RoundContinues()


def test_failed_deal_of_next_round_leaves_game_unchanged(game_data) -> None:
    game = Game.from_snapshot(game_data([0, 0, 0]), shuffler=identity_shuffler, randomizer=lambda n: n)
    before = game.to_snapshot()
    with pytest.raises(ConfigurationError):
        game.play(0)
    assert game.to_snapshot() == before
    assert game.scores() == (0, 0, 0)
    assert game.rounds_played == 0
    assert not game.current_round().has_ended()
    assert game.draw() == RoundContinues()


def test_illegal_last_card_does_not_deal_next_round(game_data) -> None:
    dealers = []

    def randomizer(n: int) -> int:
        dealers.append(n)
        return 0

    hands = [[NumberedCard(B, 2)], [NumberedCard(R, 5)], [NumberedCard(Y, 9)]]
    game = Game.from_snapshot(game_data([0, 0, 0], hands=hands), shuffler=identity_shuffler, randomizer=randomizer)
    with pytest.raises(IllegalActionError):
        game.play(0)
    assert dealers == []
