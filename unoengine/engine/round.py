"""Round engine: one hand of UNO, from the deal until a hand is empty."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, List, Optional, Sequence

from unoengine.engine.card import (
    ActionCard,
    ActionKind,
    Card,
    Color,
    NumberedCard,
    WildCard,
    WildDrawFourCard,
    card_color,
    is_wild,
    points_for,
)
from unoengine.engine.deck import DECK_SIZE, Pile, Shuffler, create_deck
from unoengine.engine.errors import ConfigurationError, IllegalActionError, InvalidStateError
from unoengine.engine.game_state import (
    AccusationWindow,
    Direction,
    RoundContinues,
    RoundEnded,
    RoundOutcome,
)
from unoengine.engine.snapshot import (
    AccusationRecord,
    RoundSnapshot,
    cards_to_records,
    parse_round_snapshot,
    records_to_cards,
)

logger = logging.getLogger(__name__)

MIN_PLAYERS = 2
MAX_PLAYERS = 10
DEFAULT_CARDS_PER_PLAYER = 7
UNO_PENALTY = 4
# Reshuffles allowed while looking for a non-wild starting card.
MAX_STARTING_FLIPS = 100


def _check_player_count(n: int) -> None:
    if n < MIN_PLAYERS:
        raise InvalidStateError(f"Need at least {MIN_PLAYERS} players")
    if n > MAX_PLAYERS:
        raise InvalidStateError(f"Cannot have more than {MAX_PLAYERS} players")


def check_deal_size(players: int, cards_per_player: int) -> None:
    """Every hand must be dealt in full with at least one card left to flip."""
    if cards_per_player < 1 or players * cards_per_player >= DECK_SIZE:
        raise InvalidStateError(
            f"Cannot deal {cards_per_player} cards to each of {players} players"
        )


class Round:
    """State machine for a single round.

    Players are addressed by index. Piles keep their top card at index 0.
    Commands either succeed completely or raise without touching the state.
    """

    def __init__(
        self,
        players: Sequence[str],
        dealer: int,
        cards_per_player: int = DEFAULT_CARDS_PER_PLAYER,
        shuffler: Optional[Shuffler] = None,
    ) -> None:
        n = len(players)
        _check_player_count(n)
        if not 0 <= dealer < n:
            raise InvalidStateError(f"Dealer index {dealer} out of range")
        check_deal_size(n, cards_per_player)

        self._players: List[str] = list(players)
        self._dealer = dealer
        self._shuffler = shuffler
        self._direction = Direction.CLOCKWISE
        self._window = AccusationWindow()
        self._pre_announced = [False] * n
        self._winner: Optional[int] = None

        cards = create_deck()
        if shuffler is not None:
            shuffler(cards)
        k = cards_per_player
        self._hands: List[List[Card]] = [cards[i * k:(i + 1) * k] for i in range(n)]
        rest = cards[n * k:]

        first = self._flip_starting_card(rest)
        self._draw_pile = Pile(rest)
        self._discard_pile = Pile([first])
        self._color: Color = card_color(first)  # type: ignore[assignment]
        self._turn: Optional[int] = self._apply_starting_card(first)
        logger.debug(
            "Dealt round: players=%s dealer=%d first=%s turn=%s",
            self._players, dealer, first, self._turn,
        )

    @classmethod
    def from_snapshot(cls, snapshot: Any, shuffler: Optional[Shuffler] = None) -> "Round":
        """Rebuild a round from a RoundSnapshot (or an equivalent mapping).

        Raises InvalidStateError if the snapshot breaks any round invariant.
        """
        snap = parse_round_snapshot(snapshot)
        rnd = cls.__new__(cls)
        rnd._restore(snap, shuffler)
        return rnd

    def _restore(self, snap: RoundSnapshot, shuffler: Optional[Shuffler]) -> None:
        n = len(snap.players)
        _check_player_count(n)
        if len(snap.hands) != n:
            raise InvalidStateError("Hands count must match players count")
        if not snap.discard_pile:
            raise InvalidStateError("Discard pile cannot be empty")
        if not 0 <= snap.dealer < n:
            raise InvalidStateError(f"Dealer index {snap.dealer} out of range")
        turn = snap.player_in_turn
        if turn is not None and not 0 <= turn < n:
            raise InvalidStateError(f"Player in turn {turn} out of range")
        if snap.pre_announced and len(snap.pre_announced) != n:
            raise InvalidStateError("Pre-announce flags must match players count")

        hands = [records_to_cards(h) for h in snap.hands]
        draw_pile = Pile(records_to_cards(snap.draw_pile))
        discard = records_to_cards(snap.discard_pile)
        top = discard[0]
        discard_pile = Pile(discard)

        total = sum(len(h) for h in hands) + len(draw_pile) + len(discard_pile)
        if total != DECK_SIZE:
            raise InvalidStateError(f"Round holds {total} cards, expected {DECK_SIZE}")
        all_cards = [c for h in hands for c in h] + list(draw_pile) + list(discard_pile)
        if Counter(all_cards) != Counter(create_deck()):
            raise InvalidStateError("Cards do not form a standard deck")

        empty = [i for i, h in enumerate(hands) if not h]
        if len(empty) > 1:
            raise InvalidStateError("Multiple winners not allowed")
        ended = bool(empty)
        if not ended and turn is None:
            raise InvalidStateError("Player in turn required when the round has not ended")
        if ended and turn is not None:
            raise InvalidStateError("An ended round cannot have a player in turn")

        if not is_wild(top) and card_color(top) != snap.current_color:
            raise InvalidStateError("Current color inconsistent with top discard card")

        window = AccusationWindow()
        if snap.accusation is not None:
            target = snap.accusation.target
            if ended:
                raise InvalidStateError("An ended round cannot have an open accusation window")
            if not 0 <= target < n:
                raise InvalidStateError(f"Accusation target {target} out of range")
            if len(hands[target]) != 1:
                raise InvalidStateError("Accusation target must hold exactly one card")
            window = AccusationWindow(open=True, target=target, said=snap.accusation.said)

        self._players = list(snap.players)
        self._dealer = snap.dealer
        self._shuffler = shuffler
        self._hands = hands
        self._draw_pile = draw_pile
        self._discard_pile = discard_pile
        self._color = snap.current_color
        self._direction = snap.current_direction
        self._turn = turn
        self._window = window
        self._pre_announced = list(snap.pre_announced) or [False] * n
        self._winner = empty[0] if ended else None

    # -- setup ---------------------------------------------------------

    def _flip_starting_card(self, rest: List[Card]) -> Card:
        """Pop the starting card off the undealt cards, reshuffling away wilds."""
        first = rest.pop(0)
        flips = 0
        while is_wild(first):
            if self._shuffler is None:
                raise ConfigurationError(
                    "A wild card was flipped to start the round and no shuffler was supplied"
                )
            flips += 1
            if flips > MAX_STARTING_FLIPS:
                raise ConfigurationError("Shuffler keeps turning up wild starting cards")
            rest.insert(0, first)
            self._shuffler(rest)
            first = rest.pop(0)
        return first

    def _apply_starting_card(self, first: Card) -> int:
        n = len(self._players)
        dealer = self._dealer
        if isinstance(first, ActionCard):
            if first.kind is ActionKind.REVERSE:
                self._direction = Direction.COUNTERCLOCKWISE
                return (dealer - 1) % n
            if first.kind is ActionKind.SKIP:
                return (dealer + 2) % n
            self._give_cards((dealer + 1) % n, 2)
            return (dealer + 2) % n
        return (dealer + 1) % n

    # -- queries -------------------------------------------------------

    @property
    def player_count(self) -> int:
        return len(self._players)

    @property
    def dealer(self) -> int:
        return self._dealer

    @property
    def current_color(self) -> Color:
        return self._color

    @property
    def current_direction(self) -> Direction:
        return self._direction

    def player(self, index: int) -> str:
        self._check_player(index)
        return self._players[index]

    def player_hand(self, index: int) -> tuple[Card, ...]:
        self._check_player(index)
        return tuple(self._hands[index])

    def draw_pile(self) -> Pile:
        return self._draw_pile.copy()

    def discard_pile(self) -> Pile:
        return self._discard_pile.copy()

    def top_card(self) -> Card:
        top = self._discard_pile.peek()
        if top is None:
            raise InvalidStateError("Discard pile is empty")
        return top

    def player_in_turn(self) -> Optional[int]:
        return self._turn

    def has_ended(self) -> bool:
        return self._turn is None

    def winner(self) -> Optional[int]:
        return self._winner

    def can_play(self, index: int) -> bool:
        """Whether the player in turn may play the card at `index` of their hand."""
        if self._turn is None:
            return False
        hand = self._hands[self._turn]
        if not 0 <= index < len(hand):
            return False
        return self._is_playable(hand, index)

    def can_play_any(self) -> bool:
        if self._turn is None:
            return False
        hand = self._hands[self._turn]
        return any(self._is_playable(hand, i) for i in range(len(hand)))

    def _is_playable(self, hand: List[Card], index: int) -> bool:
        card = hand[index]
        top = self.top_card()
        color = self._color
        if isinstance(card, WildCard):
            return True
        if isinstance(card, WildDrawFourCard):
            return not any(
                card_color(c) == color for i, c in enumerate(hand) if i != index
            )
        if is_wild(top):
            return card.color == color
        if isinstance(card, NumberedCard):
            if isinstance(top, NumberedCard):
                return card.color == color or card.number == top.number
            return card.color == color
        if isinstance(top, ActionCard) and top.kind is card.kind:
            return True
        return card.color == color

    def has_called_uno(self, player: int) -> bool:
        self._check_player(player)
        w = self._window
        return (w.open and w.target == player and w.said) or self._pre_announced[player]

    def is_accusation_window_open(self) -> bool:
        return self._window.open

    def accusation_target(self) -> Optional[int]:
        return self._window.target if self._window.open else None

    def score(self) -> Optional[int]:
        """Points for the winner: the value of every card left in the other hands."""
        if self._winner is None:
            return None
        return self._points_against(self._winner)

    def _points_against(self, winner: int) -> int:
        return sum(
            points_for(c)
            for i, hand in enumerate(self._hands)
            if i != winner
            for c in hand
        )

    # -- commands ------------------------------------------------------

    def play(self, index: int, color: Optional[Color] = None) -> RoundOutcome:
        """Play the card at `index` from the hand of the player in turn.

        Wild cards need `color`, every other card must be played without one.
        """
        player = self._require_turn()
        hand = self._hands[player]
        if not 0 <= index < len(hand):
            raise IllegalActionError(f"Card index {index} out of range")
        card = hand[index]
        if not self._is_playable(hand, index):
            raise IllegalActionError(
                f"{card} cannot be played on {self.top_card()} ({self._color.value})"
            )
        if is_wild(card):
            if color is None:
                raise IllegalActionError("A color must be chosen for a wild card")
            try:
                chosen = Color(color)
            except ValueError:
                raise IllegalActionError(f"Invalid color: {color!r}") from None
        elif color is not None:
            raise IllegalActionError(f"Cannot choose a color for {card}")
        else:
            chosen = card.color  # type: ignore[union-attr]

        penalty = 0
        if isinstance(card, WildDrawFourCard):
            penalty = 4
        elif isinstance(card, ActionCard) and card.kind is ActionKind.DRAW_TWO:
            penalty = 2
        if penalty:
            self._check_rebuild_possible(penalty, len(self._discard_pile) + 1)

        self._window.close()
        del hand[index]
        self._discard_pile.push(card)
        self._color = chosen
        if len(hand) == 1:
            self._window = AccusationWindow(
                open=True, target=player, said=self._pre_announced[player]
            )
            self._pre_announced[player] = False
        logger.debug("Player %d played %s (color %s)", player, card, chosen.value)

        self._turn = self._advance_after(player, card, penalty)

        if not hand:
            self._turn = None
            self._winner = player
            self._window.close()
            score = self._points_against(player)
            logger.info("Round won by %s with %d points", self._players[player], score)
            return RoundEnded(winner=player, score=score)
        return RoundContinues()

    def _advance_after(self, player: int, card: Card, penalty: int) -> int:
        n = len(self._players)
        if isinstance(card, ActionCard) and card.kind is ActionKind.SKIP:
            return self._next(player, 2)
        if isinstance(card, ActionCard) and card.kind is ActionKind.REVERSE:
            self._direction = self._direction.reversed()
            if n == 2:
                return player
            return self._next(player)
        if penalty:
            victim = self._next(player)
            self._give_cards(victim, penalty)
            return self._next(victim)
        return self._next(player)

    def draw(self) -> RoundOutcome:
        """Draw one card for the player in turn.

        The turn passes on unless the drawn card can be played right away.
        """
        player = self._require_turn()
        if not self._draw_pile and len(self._discard_pile) <= 1:
            raise IllegalActionError("No cards left to draw")
        self._check_rebuild_possible(2, len(self._discard_pile))

        self._window.close()
        self._pre_announced[player] = False
        if not self._draw_pile:
            self._rebuild_draw_pile()
        card = self._draw_pile.deal()
        if card is None:
            raise InvalidStateError("Draw pile is empty after rebuilding")
        hand = self._hands[player]
        hand.append(card)
        if not self._is_playable(hand, len(hand) - 1):
            self._turn = self._next(player)
        if not self._draw_pile:
            self._rebuild_draw_pile()
        logger.debug("Player %d drew %s", player, card)
        return RoundContinues()

    def say_uno(self, player: int) -> None:
        """Declare UNO, either ahead of the play to one card or inside the window."""
        self._check_player(player)
        self._require_turn()
        if self._window.open and self._window.target == player:
            self._window.said = True
            logger.debug("Player %d said UNO", player)
        elif player == self._turn:
            self._pre_announced[player] = True
            logger.debug("Player %d pre-announced UNO", player)
        else:
            logger.debug("Ignoring UNO call from player %d", player)

    def catch_uno_failure(self, accuser: int, accused: int) -> bool:
        """Penalize `accused` with four cards if they reached one card without saying UNO."""
        self._check_player(accuser)
        self._check_player(accused)
        w = self._window
        if not w.open or w.target != accused or w.said:
            return False
        self._check_rebuild_possible(UNO_PENALTY, len(self._discard_pile))
        self._give_cards(accused, UNO_PENALTY)
        w.close()
        logger.debug("Player %d caught player %d without UNO", accuser, accused)
        return True

    def to_snapshot(self) -> RoundSnapshot:
        w = self._window
        return RoundSnapshot(
            players=list(self._players),
            hands=[cards_to_records(h) for h in self._hands],
            draw_pile=self._draw_pile.to_snapshot(),
            discard_pile=self._discard_pile.to_snapshot(),
            current_color=self._color,
            current_direction=self._direction,
            dealer=self._dealer,
            player_in_turn=self._turn,
            accusation=AccusationRecord(target=w.target, said=w.said) if w.open else None,
            pre_announced=list(self._pre_announced),
        )

    # -- internals -----------------------------------------------------

    def _check_player(self, index: int) -> None:
        if not 0 <= index < len(self._players):
            raise IllegalActionError(f"Player index {index} out of range")

    def _require_turn(self) -> int:
        if self._turn is None:
            raise IllegalActionError("The round has ended")
        return self._turn

    def _next(self, index: int, steps: int = 1) -> int:
        return (index + steps * self._direction.step) % len(self._players)

    def _check_rebuild_possible(self, cards_needed: int, discard_size: int) -> None:
        if self._shuffler is None and len(self._draw_pile) < cards_needed and discard_size > 1:
            raise ConfigurationError(
                "The draw pile must be rebuilt from the discard pile but no shuffler was supplied"
            )

    def _rebuild_draw_pile(self) -> None:
        if len(self._discard_pile) <= 1:
            return
        if self._shuffler is None:
            raise ConfigurationError("Cannot rebuild the draw pile without a shuffler")
        rest = self._discard_pile.take_below_top()
        self._shuffler(rest)
        self._draw_pile = Pile(rest)
        logger.debug("Rebuilt draw pile with %d cards", len(rest))

    def _give_cards(self, player: int, count: int) -> int:
        given = 0
        for _ in range(count):
            if not self._draw_pile:
                self._rebuild_draw_pile()
            card = self._draw_pile.deal()
            if card is None:
                break
            self._hands[player].append(card)
            given += 1
        return given
