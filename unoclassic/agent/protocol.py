"""Decision source protocol - interface that human, LLM and scripted players implement."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from unoclassic.engine import Card, Color, Move, Player, PlayerView


class DecisionSource(Protocol):
    """Answers the engine's questions for players that are not automated."""

    def request_move(
        self,
        player: Player,
        legal_moves: list[int],
        top_card: Card,
        view: PlayerView,
    ) -> Move:
        """Choose a move for the player.

        Args:
            player: The player whose turn it is.
            legal_moves: Hand indices that may be played on top_card.
            top_card: The active card.
            view: Snapshot of the public game state and this player's hand.

        Returns:
            PlayCard(index) with an index from legal_moves, or DrawCard().
            Anything else is rejected by the engine and requested again.
        """
        ...

    def request_wild_color(self, player: Player) -> Color:
        """Declare a color (red, blue, green or yellow) for a wild card just played."""
        ...

    def request_play_drawn_card(self, player: Player, drawn_card: Card) -> bool:
        """Decide whether to play a just-drawn card that is playable."""
        ...
