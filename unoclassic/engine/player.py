"""Player hand and the automated player heuristic."""

import random
from dataclasses import dataclass, field
from typing import Iterable, List

from unoclassic.engine.card import PLAYABLE_COLORS, Card, Color, Kind
from unoclassic.engine.errors import InvalidMoveError
from unoclassic.engine.rules import DrawCard, Move, PlayCard


@dataclass
class Player:
    """A seat at the table and the cards held there."""

    name: str
    is_automated: bool = False
    hand: List[Card] = field(default_factory=list)

    def add_card(self, card: Card) -> None:
        self.hand.append(card)

    def add_cards(self, cards: Iterable[Card]) -> None:
        self.hand.extend(cards)

    def legal_moves(self, top_card: Card) -> List[int]:
        """Hand indices of the cards that can be played on `top_card`, in hand order."""
        return [i for i, card in enumerate(self.hand) if card.can_play_on(top_card)]

    def choose_move(self, top_card: Card, rng: random.Random) -> Move:
        """Automated heuristic: first action or wild card, else a random legal card."""
        playable = self.legal_moves(top_card)
        if not playable:
            return DrawCard()
        for index in playable:
            if self.hand[index].kind != Kind.NUMBER:
                return PlayCard(index)
        return PlayCard(rng.choice(playable))

    def choose_wild_color(self) -> Color:
        """Most common color in hand; earlier colors win ties, red if none."""
        counts = {color: 0 for color in PLAYABLE_COLORS}
        for card in self.hand:
            if card.color in counts:
                counts[card.color] += 1
        best = max(PLAYABLE_COLORS, key=lambda color: counts[color])
        return best if counts[best] > 0 else Color.RED

    def play_card_at(self, index: int) -> Card:
        """Remove and return the card at `index`."""
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(self.hand):
            raise InvalidMoveError(self.name, index, f"hand has {len(self.hand)} cards")
        return self.hand.pop(index)

    def has_one_card_left(self) -> bool:
        return len(self.hand) == 1

    def has_empty_hand(self) -> bool:
        return not self.hand

    def __str__(self) -> str:
        return f"{self.name} ({len(self.hand)} cards)"
