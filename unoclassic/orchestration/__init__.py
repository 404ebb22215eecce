"""Game orchestration."""

from unoclassic.orchestration.game_runner import (
    GameResult,
    GameRunner,
    Seat,
    SeatRouter,
    TimedDecisions,
    fill_seats,
)
from unoclassic.orchestration.tournament import run_tournament

__all__ = [
    "GameRunner",
    "GameResult",
    "Seat",
    "SeatRouter",
    "TimedDecisions",
    "fill_seats",
    "run_tournament",
]
