"""Game engine for UNO."""

from unoclassic.engine.card import PLAYABLE_COLORS, Card, Color, Kind
from unoclassic.engine.deck import TOTAL_CARDS, Deck, create_deck
from unoclassic.engine.errors import (
    CardCountError,
    DeckExhaustedError,
    GameStateError,
    InvalidColorError,
    InvalidMoveError,
    UnoError,
)
from unoclassic.engine.game import GameEngine, init_game
from unoclassic.engine.game_state import PlayerView, TurnPhase
from unoclassic.engine.player import Player
from unoclassic.engine.rules import (
    Direction,
    DrawCard,
    Move,
    PlayCard,
    next_index,
)

__all__ = [
    "Card",
    "Color",
    "Kind",
    "PLAYABLE_COLORS",
    "create_deck",
    "Deck",
    "TOTAL_CARDS",
    "Player",
    "GameEngine",
    "init_game",
    "PlayerView",
    "TurnPhase",
    "Direction",
    "Move",
    "PlayCard",
    "DrawCard",
    "next_index",
    "UnoError",
    "DeckExhaustedError",
    "InvalidMoveError",
    "InvalidColorError",
    "CardCountError",
    "GameStateError",
]
