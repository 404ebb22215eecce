"""Deck creation, drawing and discard pile recycling."""

import logging
import random
from typing import Iterable, List, Optional

from unoclassic.engine.card import ACTION_KINDS, PLAYABLE_COLORS, Card, Color, Kind
from unoclassic.engine.errors import CardCountError, DeckExhaustedError, GameStateError

logger = logging.getLogger(__name__)

TOTAL_CARDS = 108


def create_deck(rng: Optional[random.Random] = None) -> List[Card]:
    """Create a shuffled standard 108-card UNO deck.

    - 4 colors x (one 0, two each of 1-9): 76 cards
    - 4 colors x two each of Skip, Reverse, Draw Two: 24 cards
    - 4 Wild, 4 Wild Draw Four: 8 cards
    """
    cards: List[Card] = []

    for color in PLAYABLE_COLORS:
        cards.append(Card(color=color, kind=Kind.NUMBER, number=0))
        for number in range(1, 10):
            cards.append(Card(color=color, kind=Kind.NUMBER, number=number))
            cards.append(Card(color=color, kind=Kind.NUMBER, number=number))
        for _ in range(2):
            for kind in ACTION_KINDS:
                cards.append(Card(color=color, kind=kind))

    for _ in range(4):
        cards.append(Card(color=Color.WILD, kind=Kind.WILD))
        cards.append(Card(color=Color.WILD, kind=Kind.WILD_DRAW_FOUR))

    if len(cards) != TOTAL_CARDS:
        raise CardCountError(f"Built {len(cards)} cards, expected {TOTAL_CARDS}")

    (rng or random).shuffle(cards)
    return cards


class Deck:
    """Draw pile and discard pile. The top of each pile is the end of its list."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        cards: Optional[Iterable[Card]] = None,
    ):
        self._rng = rng or random.Random()
        # A pre-arranged pile is used as-is (top = last); otherwise build and shuffle.
        self.draw_pile: List[Card] = list(cards) if cards is not None else create_deck(self._rng)
        self.discard_pile: List[Card] = []

    def __len__(self) -> int:
        return len(self.draw_pile) + len(self.discard_pile)

    @property
    def remaining(self) -> int:
        """Number of cards left in the draw pile."""
        return len(self.draw_pile)

    def shuffle(self) -> None:
        self._rng.shuffle(self.draw_pile)

    def draw_card(self) -> Card:
        """Remove and return the top card of the draw pile, recycling if needed."""
        if not self.draw_pile:
            self.recycle_discard()
        if not self.draw_pile:
            raise DeckExhaustedError(len(self.draw_pile), len(self.discard_pile))
        return self.draw_pile.pop()

    def draw_cards(self, count: int) -> List[Card]:
        """Draw up to `count` cards, stopping early if the supply runs out."""
        drawn: List[Card] = []
        for _ in range(count):
            try:
                drawn.append(self.draw_card())
            except DeckExhaustedError:
                logger.warning("Supply exhausted after drawing %d of %d cards", len(drawn), count)
                break
        return drawn

    def recycle_discard(self) -> None:
        """Shuffle all but the active card back into the draw pile."""
        if len(self.discard_pile) <= 1:
            return
        top = self.discard_pile.pop()
        self.draw_pile.extend(card.uncolored() for card in self.discard_pile)
        self.discard_pile = [top]
        self.shuffle()
        logger.info("Reshuffled %d discarded cards into the draw pile", len(self.draw_pile))

    def discard(self, card: Card) -> None:
        """Put a card on the discard pile; it becomes the active card."""
        self.discard_pile.append(card)

    def top_discard(self) -> Card:
        """Return the active card without removing it."""
        if not self.discard_pile:
            raise GameStateError("Discard pile is empty")
        return self.discard_pile[-1]

    def flip_starting_card(self) -> Card:
        """Turn over the first Number card from the draw pile as the starting card.

        Non-Number cards turned over on the way go back under the draw pile.
        """
        rejected: List[Card] = []
        while self.draw_pile:
            card = self.draw_pile.pop()
            if card.kind == Kind.NUMBER:
                self.draw_pile[:0] = rejected
                self.discard(card)
                return card
            rejected.append(card)
        self.draw_pile[:0] = rejected
        raise DeckExhaustedError(len(self.draw_pile), len(self.discard_pile))
