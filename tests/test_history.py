"""Unit tests for game history logging."""

from unoclassic.engine import Color, DrawCard, PlayCard, Player, init_game


def test_history_initialization():
    engine = init_game([Player("p1", True), Player("p2", True)], seed=42)
    assert len(engine.history) == 1
    assert engine.history[0].startswith("Starting card is ")


def test_history_records_play(make_engine, scripted):
    decisions = scripted(moves=[PlayCard(0)])
    engine = make_engine([["red_5", "blue_1", "blue_2"], ["green_1"]], "red_3", decisions=decisions)
    engine.play_turn()
    assert engine.history == ["p0 played red_5"]


def test_history_records_wild_color(make_engine, scripted):
    decisions = scripted(moves=[PlayCard(0)], colors=[Color.BLUE])
    engine = make_engine([["wild", "blue_1", "blue_2"], ["green_1"]], "red_3", decisions=decisions)
    engine.play_turn()
    assert engine.history == ["p0 played wild (chose blue)"]


def test_history_records_draw(make_engine, scripted):
    decisions = scripted(moves=[DrawCard()])
    engine = make_engine([["blue_1"], ["green_1"]], "red_3", draw=["green_9"], decisions=decisions)
    engine.play_turn()
    assert engine.history == ["p0 drew a card"]


def test_history_records_penalty_and_uno(make_engine, scripted):
    decisions = scripted(moves=[PlayCard(0)])
    engine = make_engine(
        [["red_draw_two", "blue_1"], ["green_1"], ["green_2"]],
        "red_3",
        draw=["yellow_1", "yellow_2"],
        decisions=decisions,
    )
    engine.play_turn()
    assert engine.history == [
        "p0 played red_draw_two",
        "p1 drew 2 cards (penalty)",
        "p0 has UNO!",
    ]


def test_history_records_skip_and_reverse(make_engine, scripted):
    decisions = scripted(moves=[PlayCard(0), PlayCard(0)])
    engine = make_engine(
        [["red_skip", "blue_1"], ["green_1"], ["red_reverse", "blue_2"]],
        "red_3",
        decisions=decisions,
    )
    engine.play_turn()
    engine.play_turn()
    assert engine.history[:2] == ["p0 played red_skip", "p1 is skipped"]
    assert "Direction is now counter-clockwise" in engine.history


def test_history_records_win(make_engine, scripted):
    decisions = scripted(moves=[PlayCard(0)])
    engine = make_engine([["red_5"], ["green_1"]], "red_3", decisions=decisions)
    engine.play_turn()
    assert engine.history[-1] == "p0 WON!"


def test_view_shows_last_ten_events(make_engine):
    engine = make_engine([["red_1"], ["green_1"]], "red_3")
    engine.history.extend(f"event {i}" for i in range(15))
    view = engine.view_for("p1")
    assert view.history == [f"event {i}" for i in range(5, 15)]
