"""Agent protocol - interface that bots and human players implement."""

from typing import Protocol

from unoengine.engine import Action, PlayerView


class AgentProtocol(Protocol):
    """Interface for UNO-playing agents."""

    @property
    def name(self) -> str:
        """Display name for the agent."""
        ...

    def get_action(
        self,
        player_view: PlayerView,
        legal_actions: list[Action],
        player: int,
    ) -> Action | None:
        """Choose an action given the player view and legal actions.

        Args:
            player_view: Filtered view with only this player's hand and public info.
            legal_actions: List of valid actions to choose from.
            player: This agent's seat index.

        Returns:
            One of the legal actions, or None to draw (when DrawCard is legal).
        """
        ...

    def wants_to_say_uno(self, player_view: PlayerView, player: int) -> bool:
        """Whether to declare UNO now (on your own turn, or while you are the accusation target)."""
        ...

    def wants_to_accuse(self, player_view: PlayerView, player: int, target: int) -> bool:
        """Whether to accuse `target` of reaching one card without saying UNO."""
        ...
