"""Shared fixtures: a scripted decision source and an engine built from card names."""

import random

import pytest

from unoclassic.config import GameSettings
from unoclassic.engine import Card, Color, Deck, Direction, DrawCard, GameEngine, Player


class ScriptedDecisions:
    """Decision source that replays prepared answers and records every request."""

    def __init__(self, moves=(), colors=(), play_drawn=()):
        self.moves = list(moves)
        self.colors = list(colors)
        self.play_drawn = list(play_drawn)
        self.move_requests = []
        self.color_requests = []
        self.drawn_requests = []

    def request_move(self, player, legal_moves, top_card, view):
        self.move_requests.append((player.name, list(legal_moves), top_card))
        return self.moves.pop(0) if self.moves else DrawCard()

    def request_wild_color(self, player):
        self.color_requests.append(player.name)
        return self.colors.pop(0) if self.colors else Color.RED

    def request_play_drawn_card(self, player, drawn_card):
        self.drawn_requests.append((player.name, drawn_card))
        return self.play_drawn.pop(0) if self.play_drawn else False


def cards(*names):
    return [Card.parse(n) for n in names]


@pytest.fixture
def scripted():
    return ScriptedDecisions


@pytest.fixture
def make_engine():
    """Build an engine with fixed hands, active card and draw pile (top of pile = last)."""

    def _make(
        hands,
        top,
        draw=(),
        decisions=None,
        automated=False,
        current=0,
        direction=Direction.CLOCKWISE,
        settings=None,
    ):
        players = [
            Player(f"p{i}", is_automated=automated, hand=cards(*hand))
            for i, hand in enumerate(hands)
        ]
        deck = Deck(rng=random.Random(0), cards=cards(*draw))
        deck.discard(Card.parse(top))
        return GameEngine(
            players,
            deck,
            decisions=decisions,
            rng=random.Random(0),
            settings=settings or GameSettings(),
            current_index=current,
            direction=direction,
        )

    return _make
