"""Turn phases and the read-only view handed to decision sources."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional

from unoclassic.engine.card import Card
from unoclassic.engine.rules import Direction

if TYPE_CHECKING:
    from unoclassic.engine.game import GameEngine


class TurnPhase(str, Enum):
    """States of the turn state machine."""

    AWAITING_MOVE = "awaiting_move"
    RESOLVING_EFFECT = "resolving_effect"
    ADVANCING_TURN = "advancing_turn"
    GAME_OVER = "game_over"


@dataclass
class PlayerView:
    """Snapshot of the game as seen by a single player.

    Contains only that player's hand and public info.
    """

    player_name: str
    my_hand: List[Card]
    legal_moves: List[int]
    top_discard: Card
    current_player: str
    direction: Direction
    draw_pile_count: int
    winner: Optional[str]
    player_order: tuple[str, ...]
    automated: Dict[str, bool]
    num_cards_per_player: Dict[str, int]
    history: List[str]  # Recent game events

    @classmethod
    def from_engine(cls, engine: GameEngine, player_name: str) -> "PlayerView":
        """Create a view of the engine's current state, hiding other players' hands."""
        player = engine.player(player_name)
        top = engine.active_card
        return cls(
            player_name=player.name,
            my_hand=list(player.hand),
            legal_moves=player.legal_moves(top),
            top_discard=top,
            current_player=engine.current_player.name,
            direction=engine.direction,
            draw_pile_count=engine.deck.remaining,
            winner=engine.winner.name if engine.winner else None,
            player_order=tuple(p.name for p in engine.players),
            automated={p.name: p.is_automated for p in engine.players},
            num_cards_per_player={p.name: len(p.hand) for p in engine.players},
            history=list(engine.history[-10:]),  # Last 10 events
        )
