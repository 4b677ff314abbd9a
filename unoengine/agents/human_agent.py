"""Human agent - reads actions from terminal."""

from unoengine.engine import Action, PlayerView
from unoengine.engine.actions import DrawCard


class HumanAgent:
    """Agent that prompts the human for input via terminal."""

    def __init__(self, name: str = "human"):
        self._name = name

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

        print("\n--- Your turn ---")
        print("Your hand:", " ".join(f"[{i}]{c}" for i, c in enumerate(player_view.my_hand)))
        print("Top discard:", player_view.top_discard, f"(color: {player_view.current_color.value})")
        for seat, count in player_view.num_cards_per_player.items():
            if seat != player:
                print(f"  {player_view.players[seat]}: {count} cards")
        print("\nLegal actions:")
        for i, a in enumerate(legal_actions):
            if isinstance(a, DrawCard):
                print(f"  {i}: DRAW")
            else:
                card = player_view.my_hand[a.index]
                extra = f" (choose color: {a.chosen_color.value})" if a.chosen_color else ""
                print(f"  {i}: PLAY {card}{extra}")

        while True:
            try:
                raw = input("Enter number: ").strip()
                idx = int(raw)
                if 0 <= idx < len(legal_actions):
                    return legal_actions[idx]
            except (ValueError, EOFError):
                pass
            print("Invalid. Try again.")

    def wants_to_say_uno(self, player_view: PlayerView, player: int) -> bool:
        if len(player_view.my_hand) > 2:
            return False
        raw = input("Say UNO? [y/N] ").strip().lower()
        return raw in ("y", "yes")

    def wants_to_accuse(self, player_view: PlayerView, player: int, target: int) -> bool:
        name = player_view.players[target]
        raw = input(f"{name} has one card left. Accuse them of not saying UNO? [y/N] ").strip().lower()
        return raw in ("y", "yes")
