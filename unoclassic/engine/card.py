"""Card, Color and Kind types for UNO."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from unoclassic.engine.errors import InvalidColorError


class Color(str, Enum):
    """Card colors. WILD marks a wild card whose color is not declared yet."""

    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    WILD = "wild"


# Colors a wild card can be declared as, in tie-break order.
PLAYABLE_COLORS = (Color.RED, Color.BLUE, Color.GREEN, Color.YELLOW)


class Kind(str, Enum):
    """Card kinds."""

    NUMBER = "number"
    SKIP = "skip"
    REVERSE = "reverse"
    DRAW_TWO = "draw_two"
    WILD = "wild"
    WILD_DRAW_FOUR = "wild_draw_four"


WILD_KINDS = (Kind.WILD, Kind.WILD_DRAW_FOUR)
ACTION_KINDS = (Kind.SKIP, Kind.REVERSE, Kind.DRAW_TWO)


@dataclass(frozen=True)
class Card:
    """A UNO card.

    Number cards carry a number 0-9; every other kind has number=None.
    Wild cards start with color=WILD and are converted into a colored copy
    by assign_color() when played.
    """

    color: Color
    kind: Kind
    number: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind == Kind.NUMBER:
            if self.number is None or not 0 <= self.number <= 9:
                raise ValueError(f"Number cards need a number in 0-9, got {self.number}")
        elif self.number is not None:
            raise ValueError(f"{self.kind.value} cards carry no number")
        if self.kind not in WILD_KINDS and self.color == Color.WILD:
            raise ValueError("Only wild cards can have color=WILD")

    @property
    def is_wild(self) -> bool:
        """True for Wild and Wild Draw Four, colored or not."""
        return self.kind in WILD_KINDS

    def can_play_on(self, other: "Card") -> bool:
        """Check if this card can be played on top of `other`."""
        if self.color == Color.WILD:
            return True
        if self.color == other.color:
            return True
        if self.kind == other.kind and self.kind != Kind.NUMBER:
            return True
        if self.kind == Kind.NUMBER and other.kind == Kind.NUMBER:
            return self.number == other.number
        return False

    def assign_color(self, color: Color) -> "Card":
        """Return the colored version of an undeclared wild card.

        Cards that already have a color are returned unchanged.
        """
        if self.color != Color.WILD:
            return self
        try:
            color = Color(color)
        except ValueError:
            raise InvalidColorError(color) from None
        if color not in PLAYABLE_COLORS:
            raise InvalidColorError(color)
        return replace(self, color=color)

    def uncolored(self) -> "Card":
        """Return a wild card to its undeclared state (used on reshuffle)."""
        if self.is_wild and self.color != Color.WILD:
            return replace(self, color=Color.WILD)
        return self

    @classmethod
    def parse(cls, text: str) -> "Card":
        """Parse the str() form back into a card, e.g. "red_5", "blue_skip", "wild"."""
        text = text.strip().lower()
        for kind in WILD_KINDS:
            if text == kind.value:
                return cls(color=Color.WILD, kind=kind)
            if text.startswith(f"{kind.value}[") and text.endswith("]"):
                return cls(color=Color(text[len(kind.value) + 1:-1]), kind=kind)
        color_name, _, rest = text.partition("_")
        try:
            color = Color(color_name)
        except ValueError:
            raise ValueError(f"Unknown card: {text!r}") from None
        if rest.isdigit():
            return cls(color=color, kind=Kind.NUMBER, number=int(rest))
        try:
            return cls(color=color, kind=Kind(rest))
        except ValueError:
            raise ValueError(f"Unknown card: {text!r}") from None

    def __str__(self) -> str:
        if self.is_wild:
            if self.color == Color.WILD:
                return self.kind.value
            return f"{self.kind.value}[{self.color.value}]"
        if self.kind == Kind.NUMBER:
            return f"{self.color.value}_{self.number}"
        return f"{self.color.value}_{self.kind.value}"
