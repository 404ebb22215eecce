"""Tournament - run many games and tally wins."""

import random
from collections import defaultdict
from typing import Optional, Sequence

from unoclassic.config import GameSettings
from unoclassic.orchestration.game_runner import GameRunner, Seat


def run_tournament(
    seats: Sequence[Seat],
    num_games: int = 100,
    seed: int | None = None,
    settings: Optional[GameSettings] = None,
) -> dict[str, int]:
    """Play num_games games with the same seats.

    Seat order is reversed every other game so nobody always sits first.

    Returns:
        Dict mapping player name to number of wins.
    """
    wins: dict[str, int] = defaultdict(int)

    rng = random.Random(seed)
    for g in range(num_games):
        order = list(seats) if g % 2 == 0 else list(reversed(seats))
        runner = GameRunner(order, seed=rng.randint(0, 2**31 - 1), settings=settings)
        result = runner.run()
        if result.winner:
            wins[result.winner] += 1

    return dict(wins)
