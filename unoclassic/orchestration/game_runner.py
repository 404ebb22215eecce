"""Single game runner."""

from __future__ import annotations

import concurrent.futures
import logging
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence

from unoclassic.config import GameSettings
from unoclassic.engine import (
    Card,
    Color,
    DrawCard,
    GameEngine,
    GameStateError,
    Move,
    Player,
    PlayerView,
    init_game,
)
from unoclassic.engine.game import MAX_PLAYERS

if TYPE_CHECKING:
    from unoclassic.agent.protocol import DecisionSource

logger = logging.getLogger(__name__)


@dataclass
class Seat:
    """A named seat; agent=None means the built-in automated heuristic plays it."""

    name: str
    agent: Optional["DecisionSource"] = None


@dataclass
class GameResult:
    """Result of a completed game."""

    winner: Optional[str]
    num_turns: int
    player_names: tuple[str, ...]


def fill_seats(seats: Sequence[Seat]) -> list[Seat]:
    """Pad the table with automated players up to four seats."""
    if len(seats) > MAX_PLAYERS:
        raise GameStateError(f"At most {MAX_PLAYERS} players, got {len(seats)}")
    names = {seat.name for seat in seats}
    if len(names) != len(seats):
        raise GameStateError("Player names must be unique")
    filled = list(seats)
    n = 1
    while len(filled) < MAX_PLAYERS:
        name = f"Computer {n}"
        n += 1
        if name not in names:
            filled.append(Seat(name))
    return filled


class SeatRouter:
    """Routes each decision request to the agent sitting in that player's seat."""

    def __init__(self, seats: Sequence[Seat]):
        names = [seat.name for seat in seats]
        if len(set(names)) != len(names):
            raise GameStateError("Player names must be unique")
        self._agents = {seat.name: seat.agent for seat in seats if seat.agent is not None}

    def _agent(self, player: Player) -> "DecisionSource":
        try:
            return self._agents[player.name]
        except KeyError:
            raise GameStateError(f"No agent seated for {player.name}") from None

    def request_move(self, player: Player, legal_moves: list[int], top_card: Card, view: PlayerView) -> Move:
        return self._agent(player).request_move(player, legal_moves, top_card, view)

    def request_wild_color(self, player: Player) -> Color:
        return self._agent(player).request_wild_color(player)

    def request_play_drawn_card(self, player: Player, drawn_card: Card) -> bool:
        return self._agent(player).request_play_drawn_card(player, drawn_card)


class TimedDecisions:
    """Gives up on a decision source that does not answer within `timeout` seconds.

    A late move becomes a draw, a late color becomes red, and a late answer
    about the drawn card becomes "keep it".
    """

    def __init__(self, inner: "DecisionSource", timeout: float):
        self._inner = inner
        self._timeout = timeout
        self._executor = self._new_executor()

    @staticmethod
    def _new_executor() -> concurrent.futures.ThreadPoolExecutor:
        return concurrent.futures.ThreadPoolExecutor(max_workers=1, thread_name_prefix="uno-decision")

    def _call(self, what: str, fn: Callable[..., Any], fallback: Any, *args: Any) -> Any:
        future = self._executor.submit(fn, *args)
        try:
            return future.result(timeout=self._timeout)
        except concurrent.futures.TimeoutError:
            # The late call still holds the worker; later decisions get a fresh one
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = self._new_executor()
            logger.warning("No %s within %.1fs, using %r", what, self._timeout, fallback)
            return fallback

    def request_move(self, player: Player, legal_moves: list[int], top_card: Card, view: PlayerView) -> Move:
        return self._call("move", self._inner.request_move, DrawCard(), player, legal_moves, top_card, view)

    def request_wild_color(self, player: Player) -> Color:
        return self._call("color", self._inner.request_wild_color, Color.RED, player)

    def request_play_drawn_card(self, player: Player, drawn_card: Card) -> bool:
        return self._call("answer", self._inner.request_play_drawn_card, False, player, drawn_card)

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)


class GameRunner:
    """Runs a single UNO game to completion."""

    def __init__(
        self,
        seats: Sequence[Seat],
        seed: Optional[int] = None,
        settings: Optional[GameSettings] = None,
        first_player: Optional[int] = None,
    ):
        self._seats = list(seats)
        self._seed = seed
        self._settings = settings or GameSettings()
        self._first_player = first_player
        self.engine: Optional[GameEngine] = None

    def run(self) -> GameResult:
        """Run the game and return the result."""
        players = [Player(seat.name, is_automated=seat.agent is None) for seat in self._seats]
        decisions: Any = SeatRouter(self._seats)
        timed: Optional[TimedDecisions] = None
        if self._settings.decision_timeout is not None:
            timed = decisions = TimedDecisions(decisions, self._settings.decision_timeout)

        num_turns = 0
        try:
            engine = init_game(
                players,
                decisions=decisions,
                rng=random.Random(self._seed),
                settings=self._settings,
                first_player=self._first_player,
            )
            self.engine = engine
            while not engine.is_over and num_turns < self._settings.max_turns:
                engine.play_turn()
                num_turns += 1
        finally:
            if timed is not None:
                timed.close()

        if not engine.is_over:
            logger.warning("Stopped after %d turns without a winner", num_turns)
        return GameResult(
            winner=engine.winner.name if engine.winner else None,
            num_turns=num_turns,
            player_names=tuple(p.name for p in players),
        )
