"""UNO rules: moves, turn direction and card effects."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union

from unoclassic.engine.card import Kind


@dataclass(frozen=True)
class PlayCard:
    """Move: play the card at this hand index."""

    index: int


@dataclass(frozen=True)
class DrawCard:
    """Move: draw a card (when no legal play or player chooses to draw)."""

    pass


Move = Union[PlayCard, DrawCard]


class Direction(int, Enum):
    """Turn order direction; the value is the step added to the player index."""

    CLOCKWISE = 1
    COUNTER_CLOCKWISE = -1

    def flipped(self) -> "Direction":
        if self is Direction.CLOCKWISE:
            return Direction.COUNTER_CLOCKWISE
        return Direction.CLOCKWISE

    def __str__(self) -> str:
        return "clockwise" if self is Direction.CLOCKWISE else "counter-clockwise"


# Cards the next player is forced to draw before being skipped.
PENALTY_DRAWS: Dict[Kind, int] = {
    Kind.DRAW_TWO: 2,
    Kind.WILD_DRAW_FOUR: 4,
}


def next_index(index: int, direction: Direction, num_players: int) -> int:
    """Index of the player after `index` in the given direction."""
    return (index + direction.value) % num_players
