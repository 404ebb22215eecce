"""Simulate a game between four computer players and print the event log."""

import logging

from unoclassic.orchestration.game_runner import GameRunner, Seat


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    seats = [Seat("Bot1"), Seat("Bot2"), Seat("Bot3"), Seat("Bot4")]

    runner = GameRunner(seats, seed=42)
    result = runner.run()

    for event in runner.engine.history:
        print(f"> {event}")
    print(f"Game finished! Winner: {result.winner}")
    print(f"Turns: {result.num_turns}")
    print(f"Cards in play: {runner.engine.card_count()}")


if __name__ == "__main__":
    main()
