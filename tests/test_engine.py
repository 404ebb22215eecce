"""Unit tests for the turn state machine."""

import random

import pytest

from unoclassic.config import GameSettings
from unoclassic.engine import (
    Card,
    Color,
    Direction,
    DrawCard,
    GameEngine,
    GameStateError,
    InvalidMoveError,
    Kind,
    PlayCard,
    Player,
    TurnPhase,
    init_game,
    next_index,
)


def players(n, automated=True):
    return [Player(f"p{i}", is_automated=automated) for i in range(n)]


# ============================================================================
# Setup
# ============================================================================


def test_init_game() -> None:
    engine = init_game(players(3), seed=1)
    for p in engine.players:
        assert len(p.hand) == 7
    assert len(engine.deck.discard_pile) == 1
    assert engine.active_card.kind == Kind.NUMBER
    assert engine.deck.remaining == 108 - 7 * 3 - 1
    assert engine.card_count() == 108
    assert engine.winner is None
    assert engine.phase == TurnPhase.AWAITING_MOVE
    assert engine.direction == Direction.CLOCKWISE
    assert 0 <= engine.current_index < 3


def test_init_game_reproducible() -> None:
    e1 = init_game(players(4), seed=7)
    e2 = init_game(players(4), seed=7)
    assert [str(c) for c in e1.players[2].hand] == [str(c) for c in e2.players[2].hand]
    assert e1.current_index == e2.current_index
    assert e1.active_card == e2.active_card


def test_init_game_first_player_and_hand_size() -> None:
    engine = init_game(players(2), seed=3, settings=GameSettings(hand_size=5), first_player=1)
    assert engine.current_index == 1
    assert [len(p.hand) for p in engine.players] == [5, 5]
    assert engine.card_count() == 108


@pytest.mark.parametrize("count", [0, 5])
def test_init_game_player_count(count) -> None:
    with pytest.raises(GameStateError):
        init_game(players(count), seed=1)


def test_init_game_rejects_duplicate_names() -> None:
    with pytest.raises(GameStateError):
        init_game([Player("x"), Player("x")], seed=1, first_player=1)


def test_engine_rejects_duplicate_names(make_engine) -> None:
    engine = make_engine([["red_1"], ["red_2"]], "red_3")
    with pytest.raises(GameStateError):
        GameEngine([Player("x"), Player("x")], engine.deck)


@pytest.mark.parametrize("count, hand_size", [(4, 27), (2, 54), (1, 108)])
def test_init_game_rejects_oversized_deal(count, hand_size) -> None:
    with pytest.raises(GameStateError):
        init_game(players(count), seed=1, settings=GameSettings(hand_size=hand_size))


def test_single_player_game() -> None:
    engine = init_game(players(1), seed=2)
    for _ in range(500):
        if engine.is_over:
            break
        engine.play_turn()
        assert engine.current_index == 0
    assert engine.winner is engine.players[0]


def test_next_index() -> None:
    assert next_index(0, Direction.CLOCKWISE, 4) == 1
    assert next_index(3, Direction.CLOCKWISE, 4) == 0
    assert next_index(0, Direction.COUNTER_CLOCKWISE, 4) == 3
    assert next_index(2, Direction.COUNTER_CLOCKWISE, 4) == 1


# ============================================================================
# Effects
# ============================================================================


def test_number_card_passes_turn(make_engine, scripted) -> None:
    decisions = scripted(moves=[PlayCard(0)])
    engine = make_engine([["red_5", "blue_1"], ["green_1"], ["green_2"]], "red_3", decisions=decisions)
    engine.play_turn()
    assert engine.active_card == Card.parse("red_5")
    assert engine.current_index == 1
    assert engine.players[0].hand == [Card.parse("blue_1")]


def test_draw_two_skips_next_player(make_engine, scripted) -> None:
    decisions = scripted(moves=[PlayCard(0)])
    engine = make_engine(
        [["red_draw_two", "blue_1"], ["green_1"], ["green_2"]],
        "red_3",
        draw=["yellow_1", "yellow_2", "yellow_3"],
        decisions=decisions,
    )
    engine.play_turn()
    assert len(engine.players[1].hand) == 3
    assert engine.current_index == 2
    assert engine.deck.remaining == 1


def test_skip(make_engine, scripted) -> None:
    decisions = scripted(moves=[PlayCard(0)])
    engine = make_engine([["red_skip", "blue_1"], ["green_1"], ["green_2"]], "red_3", decisions=decisions)
    engine.play_turn()
    assert engine.current_index == 2
    assert len(engine.players[1].hand) == 1


def test_skip_counter_clockwise(make_engine, scripted) -> None:
    decisions = scripted(moves=[PlayCard(0)])
    engine = make_engine(
        [["red_skip", "blue_1"], ["green_1"], ["green_2"], ["green_3"]],
        "red_3",
        decisions=decisions,
        direction=Direction.COUNTER_CLOCKWISE,
    )
    engine.play_turn()
    assert engine.current_index == 2


def test_reverse_two_players(make_engine, scripted) -> None:
    decisions = scripted(moves=[PlayCard(0), PlayCard(0)])
    engine = make_engine([["red_reverse", "blue_1"], ["red_4", "green_1"]], "red_3", decisions=decisions)
    engine.play_turn()
    assert engine.direction == Direction.COUNTER_CLOCKWISE
    assert engine.current_index == 1
    engine.play_turn()
    assert engine.current_index == 0


def test_reverse_three_players(make_engine, scripted) -> None:
    decisions = scripted(moves=[PlayCard(0)])
    engine = make_engine([["red_reverse", "blue_1"], ["green_1"], ["green_2"]], "red_3", decisions=decisions)
    engine.play_turn()
    assert engine.direction == Direction.COUNTER_CLOCKWISE
    assert engine.current_index == 2


def test_wild_draw_four(make_engine, scripted) -> None:
    decisions = scripted(moves=[PlayCard(1)], colors=[Color.BLUE])
    engine = make_engine(
        [["red_1", "wild_draw_four"], ["green_1"], ["green_2"]],
        "green_3",
        draw=["yellow_1", "yellow_2", "yellow_3", "yellow_4"],
        decisions=decisions,
    )
    engine.play_turn()
    assert engine.active_card.kind == Kind.WILD_DRAW_FOUR
    assert engine.active_card.color == Color.BLUE
    assert len(engine.players[1].hand) == 5
    assert engine.current_index == 2
    assert decisions.color_requests == ["p0"]


def test_wild_has_no_other_effect(make_engine, scripted) -> None:
    decisions = scripted(moves=[PlayCard(0)], colors=[Color.YELLOW])
    engine = make_engine([["wild", "red_1"], ["green_1"], ["green_2"]], "green_3", decisions=decisions)
    engine.play_turn()
    assert engine.active_card == Card.parse("wild").assign_color(Color.YELLOW)
    assert engine.current_index == 1
    assert engine.direction == Direction.CLOCKWISE


def test_penalty_draw_recycles_discard(make_engine, scripted) -> None:
    decisions = scripted(moves=[PlayCard(0)])
    engine = make_engine([["red_draw_two", "blue_1"], ["green_1"]], "red_3", draw=["yellow_1"], decisions=decisions)
    engine.deck.discard_pile.insert(0, Card.parse("blue_8"))
    engine.play_turn()
    # yellow_1 from the pile, then red_3 and blue_8 recycled: one of them drawn
    assert len(engine.players[1].hand) == 3
    assert engine.deck.discard_pile == [Card.parse("red_draw_two")]


def test_automated_player_colors_wild(make_engine) -> None:
    engine = make_engine([["wild", "green_1", "green_5"], ["red_1"]], "red_3", automated=True)
    engine.play_turn()
    assert engine.active_card.color == Color.GREEN


# ============================================================================
# Drawing
# ============================================================================


def test_must_draw_then_play_drawn_card(make_engine, scripted) -> None:
    decisions = scripted(moves=[DrawCard()], play_drawn=[True])
    engine = make_engine([["blue_1", "blue_2"], ["green_1"]], "red_3", draw=["red_9"], decisions=decisions)
    engine.play_turn()
    assert engine.active_card == Card.parse("red_9")
    assert len(engine.players[0].hand) == 2
    assert decisions.drawn_requests == [("p0", Card.parse("red_9"))]
    assert engine.current_index == 1


def test_keep_drawn_card(make_engine, scripted) -> None:
    decisions = scripted(moves=[DrawCard()], play_drawn=[False])
    engine = make_engine([["blue_1"], ["green_1"]], "red_3", draw=["red_9"], decisions=decisions)
    engine.play_turn()
    assert engine.active_card == Card.parse("red_3")
    assert engine.players[0].hand[-1] == Card.parse("red_9")
    assert engine.current_index == 1


def test_unplayable_drawn_card_not_offered(make_engine, scripted) -> None:
    decisions = scripted(moves=[DrawCard()])
    engine = make_engine([["blue_1"], ["green_1"]], "red_3", draw=["green_9"], decisions=decisions)
    engine.play_turn()
    assert decisions.drawn_requests == []
    assert len(engine.players[0].hand) == 2


def test_voluntary_draw_with_legal_moves(make_engine, scripted) -> None:
    decisions = scripted(moves=[DrawCard()], play_drawn=[False])
    engine = make_engine([["red_1"], ["green_1"]], "red_3", draw=["blue_3"], decisions=decisions)
    engine.play_turn()
    assert decisions.move_requests == [("p0", [0], Card.parse("red_3"))]
    assert len(engine.players[0].hand) == 2
    assert decisions.drawn_requests == [("p0", Card.parse("blue_3"))]


def test_automated_player_plays_drawn_card(make_engine) -> None:
    engine = make_engine([["blue_1", "blue_2"], ["green_1"]], "red_3", draw=["red_skip"], automated=True)
    engine.play_turn()
    assert engine.active_card == Card.parse("red_skip")
    # skip with two players comes back around
    assert engine.current_index == 0


def test_exhausted_supply_ends_turn(make_engine, scripted) -> None:
    decisions = scripted(moves=[DrawCard()])
    engine = make_engine([["blue_1"], ["green_1"]], "red_3", decisions=decisions)
    engine.play_turn()
    assert engine.players[0].hand == [Card.parse("blue_1")]
    assert engine.current_index == 1
    assert "could not draw" in engine.history[-1]


# ============================================================================
# Invalid decisions
# ============================================================================


def test_invalid_move_is_requested_again(make_engine, scripted) -> None:
    decisions = scripted(moves=[PlayCard(5), PlayCard(1), PlayCard(0)])
    engine = make_engine([["red_1", "blue_2"], ["green_1"]], "red_3", decisions=decisions)
    engine.play_turn()
    assert len(decisions.move_requests) == 3
    assert engine.active_card == Card.parse("red_1")


def test_invalid_moves_fall_back_to_draw(make_engine, scripted) -> None:
    decisions = scripted(moves=[PlayCard(1), PlayCard(1), PlayCard(1)], play_drawn=[False])
    engine = make_engine([["red_1", "blue_2"], ["green_1"]], "red_3", draw=["yellow_7"], decisions=decisions)
    engine.play_turn()
    assert len(decisions.move_requests) == 3
    assert engine.active_card == Card.parse("red_3")
    assert len(engine.players[0].hand) == 3


def test_validate_move_leaves_state_alone(make_engine) -> None:
    engine = make_engine([["red_1", "blue_2"], ["green_1"]], "red_3")
    player = engine.current_player
    with pytest.raises(InvalidMoveError):
        engine.validate_move(player, PlayCard(1))
    with pytest.raises(InvalidMoveError):
        engine.validate_move(player, PlayCard(-1))
    with pytest.raises(InvalidMoveError):
        engine.validate_move(player, "play")
    assert engine.validate_move(player, DrawCard()) == DrawCard()
    assert len(player.hand) == 2
    assert engine.active_card == Card.parse("red_3")


def test_invalid_color_is_requested_again(make_engine, scripted) -> None:
    decisions = scripted(moves=[PlayCard(0)], colors=["purple", Color.WILD, "green"])
    engine = make_engine([["wild", "red_1"], ["green_1"]], "red_3", decisions=decisions)
    engine.play_turn()
    assert engine.active_card.color == Color.GREEN
    assert len(decisions.color_requests) == 3


def test_invalid_colors_default_to_red(make_engine, scripted) -> None:
    decisions = scripted(moves=[PlayCard(0)], colors=["purple", "pink", Color.WILD, Color.BLUE])
    engine = make_engine(
        [["wild", "blue_1"], ["green_1"]],
        "green_3",
        decisions=decisions,
        settings=GameSettings(max_decision_retries=3),
    )
    engine.play_turn()
    assert engine.active_card.color == Color.RED
    assert decisions.colors == [Color.BLUE]


def test_missing_decision_source(make_engine) -> None:
    engine = make_engine([["red_1"], ["green_1"]], "red_3")
    with pytest.raises(GameStateError):
        engine.play_turn()


# ============================================================================
# Winning
# ============================================================================


def test_win_with_last_card(make_engine, scripted) -> None:
    decisions = scripted(moves=[PlayCard(0)])
    engine = make_engine([["red_1"], ["green_1"], ["green_2"]], "red_3", decisions=decisions)
    engine.play_turn()
    assert engine.is_over
    assert engine.phase == TurnPhase.GAME_OVER
    assert engine.winner is engine.players[0]
    assert engine.current_index == 0
    with pytest.raises(GameStateError):
        engine.play_turn()


def test_last_card_effect_still_applies(make_engine, scripted) -> None:
    decisions = scripted(moves=[PlayCard(0)])
    engine = make_engine(
        [["red_draw_two"], ["green_1"], ["green_2"]],
        "red_3",
        draw=["yellow_1", "yellow_2"],
        decisions=decisions,
    )
    engine.play_turn()
    assert engine.winner is engine.players[0]
    assert len(engine.players[1].hand) == 3
    assert engine.current_index == 1


def test_winning_with_drawn_card(make_engine, scripted) -> None:
    decisions = scripted(moves=[DrawCard()], play_drawn=[True])
    engine = make_engine([[], ["green_1"]], "red_3", draw=["red_4"], decisions=decisions)
    engine.play_turn()
    assert engine.winner is engine.players[0]


def test_automated_game_keeps_card_count() -> None:
    engine = init_game(players(4), rng=random.Random(11))
    for _ in range(3000):
        if engine.is_over:
            break
        engine.play_turn()
        assert engine.card_count() == 108
        assert 0 <= engine.current_index < 4
    assert engine.is_over
    assert engine.winner.has_empty_hand()


def test_player_view(make_engine) -> None:
    engine = make_engine([["red_1", "blue_2"], ["green_1"]], "red_3", draw=["yellow_1"])
    view = engine.view_for("p0")
    assert view.my_hand == [Card.parse("red_1"), Card.parse("blue_2")]
    assert view.legal_moves == [0]
    assert view.top_discard == Card.parse("red_3")
    assert view.current_player == "p0"
    assert view.draw_pile_count == 1
    assert view.num_cards_per_player == {"p0": 2, "p1": 1}
    assert view.player_order == ("p0", "p1")
    assert view.automated == {"p0": False, "p1": False}
    assert view.winner is None


def test_uno_announced_only_after_a_play(make_engine, scripted) -> None:
    decisions = scripted(moves=[DrawCard(), PlayCard(0)])
    engine = make_engine(
        [["blue_1", "green_4"], ["red_5", "green_6"]], "red_3", draw=["blue_9"], decisions=decisions
    )
    engine.play_turn()
    assert not any("UNO" in event for event in engine.history)
    engine.play_turn()
    assert engine.history[-1] == "p1 has UNO!"
