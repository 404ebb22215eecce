"""UNO turn state machine."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, List, Optional, Sequence

from unoclassic.config import GameSettings
from unoclassic.engine.card import Card, Color, Kind
from unoclassic.engine.deck import TOTAL_CARDS, Deck
from unoclassic.engine.errors import (
    CardCountError,
    DeckExhaustedError,
    GameStateError,
    InvalidColorError,
    InvalidMoveError,
)
from unoclassic.engine.game_state import PlayerView, TurnPhase
from unoclassic.engine.player import Player
from unoclassic.engine.rules import PENALTY_DRAWS, Direction, DrawCard, Move, PlayCard, next_index

if TYPE_CHECKING:
    from unoclassic.agent.protocol import DecisionSource

logger = logging.getLogger(__name__)

MAX_PLAYERS = 4


class GameEngine:
    """Owns the deck and the players and drives one turn at a time.

    Automated players are answered by their built-in heuristic; every other
    player is answered by the injected decision source.
    """

    def __init__(
        self,
        players: Sequence[Player],
        deck: Deck,
        decisions: Optional[DecisionSource] = None,
        rng: Optional[random.Random] = None,
        settings: Optional[GameSettings] = None,
        current_index: int = 0,
        direction: Direction = Direction.CLOCKWISE,
    ):
        if not players:
            raise GameStateError("A game needs at least one player")
        if not 0 <= current_index < len(players):
            raise GameStateError(f"No player at index {current_index}")
        names = [p.name for p in players]
        if len(set(names)) != len(names):
            raise GameStateError(f"Player names must be unique, got {names}")
        self.players: List[Player] = list(players)
        self.deck = deck
        self.decisions = decisions
        self.rng = rng or random.Random()
        self.settings = settings or GameSettings()
        self.current_index = current_index
        self.direction = direction
        self.phase = TurnPhase.AWAITING_MOVE
        self.winner: Optional[Player] = None
        self.history: List[str] = []

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def current_player(self) -> Player:
        return self.players[self.current_index]

    @property
    def active_card(self) -> Card:
        return self.deck.top_discard()

    @property
    def is_over(self) -> bool:
        return self.phase == TurnPhase.GAME_OVER

    def player(self, name: str) -> Player:
        for p in self.players:
            if p.name == name:
                return p
        raise KeyError(name)

    def legal_moves(self) -> List[int]:
        """Legal hand indices for the current player."""
        return self.current_player.legal_moves(self.active_card)

    def card_count(self) -> int:
        """Cards in both piles plus every hand; 108 for a standard game."""
        return len(self.deck) + sum(len(p.hand) for p in self.players)

    def view_for(self, name: str) -> PlayerView:
        return PlayerView.from_engine(self, name)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate_move(self, player: Player, move: Move) -> Move:
        """Check a requested move against the player's hand and the active card."""
        if isinstance(move, DrawCard):
            return move
        if not isinstance(move, PlayCard):
            raise InvalidMoveError(player.name, move, "not a move")
        index = move.index
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(player.hand):
            raise InvalidMoveError(player.name, index, f"hand has {len(player.hand)} cards")
        if not player.hand[index].can_play_on(self.active_card):
            raise InvalidMoveError(
                player.name, index, f"{player.hand[index]} cannot be played on {self.active_card}"
            )
        return move

    # ------------------------------------------------------------------
    # Turn loop
    # ------------------------------------------------------------------

    def play_turn(self) -> None:
        """Run one full turn for the current player."""
        if self.is_over:
            raise GameStateError("The game is already over")

        self.phase = TurnPhase.AWAITING_MOVE
        player = self.current_player
        top = self.active_card
        legal = player.legal_moves(top)
        logger.debug("%s to play on %s, legal moves %s", player, top, legal)

        move = self._request_move(player, legal, top)
        played: Optional[Card] = None
        if isinstance(move, DrawCard):
            drawn = self._draw_one(player)
            if drawn is not None and drawn.can_play_on(top):
                if self._request_play_drawn_card(player, drawn):
                    played = self._play_from_hand(player, len(player.hand) - 1)
        else:
            played = self._play_from_hand(player, move.index)

        if played is not None:
            self.phase = TurnPhase.RESOLVING_EFFECT
            self._resolve_effect(played)

        if player.has_empty_hand():
            self.winner = player
            self.phase = TurnPhase.GAME_OVER
            self.history.append(f"{player.name} WON!")
            logger.info("%s won the game", player.name)
            return
        # A turn that ends on one card always played one: draws only grow the hand
        if played is not None and player.has_one_card_left():
            self.history.append(f"{player.name} has UNO!")
            logger.info("UNO! %s has one card left", player.name)

        self.phase = TurnPhase.ADVANCING_TURN
        self._advance()
        self.phase = TurnPhase.AWAITING_MOVE

    def _advance(self) -> None:
        self.current_index = next_index(self.current_index, self.direction, len(self.players))

    def _play_from_hand(self, player: Player, index: int) -> Card:
        card = player.play_card_at(index)
        if card.color == Color.WILD:
            color = self._request_wild_color(player)
            card = card.assign_color(color)
            self.history.append(f"{player.name} played {card.kind.value} (chose {color.value})")
        else:
            self.history.append(f"{player.name} played {card}")
        self.deck.discard(card)
        logger.debug("%s played %s", player.name, card)
        return card

    def _draw_one(self, player: Player) -> Optional[Card]:
        try:
            card = self.deck.draw_card()
        except DeckExhaustedError as e:
            logger.warning("%s cannot draw: %s", player.name, e)
            self.history.append(f"{player.name} could not draw (no cards left)")
            return None
        player.add_card(card)
        self.history.append(f"{player.name} drew a card")
        return card

    def _resolve_effect(self, card: Card) -> None:
        if card.kind == Kind.SKIP:
            self._advance()
            self.history.append(f"{self.current_player.name} is skipped")
        elif card.kind == Kind.REVERSE:
            self.direction = self.direction.flipped()
            self.history.append(f"Direction is now {self.direction!s}")
        elif card.kind in PENALTY_DRAWS:
            self._advance()
            target = self.current_player
            drawn = self.deck.draw_cards(PENALTY_DRAWS[card.kind])
            target.add_cards(drawn)
            self.history.append(f"{target.name} drew {len(drawn)} cards (penalty)")

    # ------------------------------------------------------------------
    # Decisions
    # ------------------------------------------------------------------

    def _require_decisions(self) -> DecisionSource:
        if self.decisions is None:
            raise GameStateError("No decision source for non-automated players")
        return self.decisions

    def _request_move(self, player: Player, legal: List[int], top: Card) -> Move:
        if player.is_automated:
            return player.choose_move(top, self.rng)
        decisions = self._require_decisions()
        for attempt in range(1, self.settings.max_decision_retries + 1):
            move = decisions.request_move(player, list(legal), top, self.view_for(player.name))
            try:
                return self.validate_move(player, move)
            except InvalidMoveError as e:
                logger.warning("Rejected move (attempt %d): %s", attempt, e)
        logger.warning("%s gave no valid move, drawing instead", player.name)
        return DrawCard()

    def _request_wild_color(self, player: Player) -> Color:
        if player.is_automated:
            return player.choose_wild_color()
        decisions = self._require_decisions()
        for attempt in range(1, self.settings.max_decision_retries + 1):
            choice = decisions.request_wild_color(player)
            try:
                # assign_color on a throwaway wild validates the choice
                return Card(Color.WILD, Kind.WILD).assign_color(choice).color
            except InvalidColorError as e:
                logger.warning("Rejected color (attempt %d): %s", attempt, e)
        logger.warning("%s gave no valid color, defaulting to red", player.name)
        return Color.RED

    def _request_play_drawn_card(self, player: Player, card: Card) -> bool:
        if player.is_automated:
            return True
        return bool(self._require_decisions().request_play_drawn_card(player, card))


def init_game(
    players: Sequence[Player],
    decisions: Optional[DecisionSource] = None,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    settings: Optional[GameSettings] = None,
    first_player: Optional[int] = None,
) -> GameEngine:
    """Create a ready-to-play game: shuffle, deal, flip the starting card, pick who starts."""
    if not 1 <= len(players) <= MAX_PLAYERS:
        raise GameStateError(f"UNO needs 1-{MAX_PLAYERS} players, got {len(players)}")
    names = [p.name for p in players]
    if len(set(names)) != len(names):
        raise GameStateError(f"Player names must be unique, got {names}")
    settings = settings or GameSettings()
    # one card must be left over for the starting discard
    if settings.hand_size * len(players) >= TOTAL_CARDS:
        raise GameStateError(
            f"Cannot deal {settings.hand_size} cards to {len(players)} players from {TOTAL_CARDS}"
        )
    rng = rng or random.Random(seed)

    deck = Deck(rng=rng)
    for player in players:
        player.hand.clear()
    for _ in range(settings.hand_size):
        for player in players:
            player.add_card(deck.draw_card())
    try:
        start = deck.flip_starting_card()
    except DeckExhaustedError as e:
        raise GameStateError(
            f"No Number card left to start on after dealing {settings.hand_size} each"
        ) from e

    if first_player is None:
        first_player = rng.randrange(len(players))
    engine = GameEngine(
        players,
        deck,
        decisions=decisions,
        rng=rng,
        settings=settings,
        current_index=first_player,
    )
    if engine.card_count() != TOTAL_CARDS:
        raise CardCountError(f"Game holds {engine.card_count()} cards, expected {TOTAL_CARDS}")
    engine.history.append(f"Starting card is {start}")
    logger.info("Starting card %s, %s goes first", start, engine.current_player.name)
    return engine
