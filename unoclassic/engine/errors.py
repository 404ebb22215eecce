"""Exceptions raised by the UNO engine."""

from typing import Any


class UnoError(Exception):
    """Base exception for UNO engine errors."""

    pass


class DeckExhaustedError(UnoError):
    """Raised when a card is requested but neither pile can supply one."""

    def __init__(self, draw_count: int = 0, discard_count: int = 0):
        self.draw_count = draw_count
        self.discard_count = discard_count
        super().__init__(
            f"No card available: draw pile has {draw_count}, discard pile has {discard_count}"
        )


class InvalidMoveError(UnoError):
    """Raised when a player selects a card index that cannot be played."""

    def __init__(self, player_name: str, index: Any, reason: str):
        self.player_name = player_name
        self.index = index
        self.reason = reason
        super().__init__(f"{player_name} cannot play index {index!r}: {reason}")


class InvalidColorError(UnoError):
    """Raised when a wild card is declared as something other than red/blue/green/yellow."""

    def __init__(self, color: Any):
        self.color = color
        super().__init__(f"Invalid wild color: {color!r}")


class CardCountError(UnoError):
    """Raised when a deck does not hold the expected number of cards."""

    pass


class GameStateError(UnoError):
    """Raised when an operation is not valid in the current game state."""

    pass
