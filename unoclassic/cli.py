"""CLI entry point."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from dotenv import load_dotenv

from unoclassic.config import GameSettings

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(help="UNO game with human, LLM and computer players")
logger = logging.getLogger("unoclassic")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _parse_seats(
    agent_specs: str,
    names: str,
    llm_provider: str,
    llm_model: str,
) -> list["Seat"]:
    from unoclassic.agents.human_agent import HumanAgent
    from unoclassic.agents.llm_agent import LLMAgent
    from unoclassic.engine import GameStateError
    from unoclassic.orchestration.game_runner import Seat, fill_seats

    parts = [s.strip().lower() for s in agent_specs.split(",") if s.strip()]
    given_names = [n.strip() for n in names.split(",") if n.strip()]
    if not 1 <= len(parts) <= 4:
        raise typer.BadParameter("Between 1 and 4 seats are allowed.")

    seats: list[Seat] = []
    for i, part in enumerate(parts):
        if ":" in part:
            kind, model = part.split(":", 1)
        else:
            kind, model = part, llm_model
        default_name = f"Player {i + 1}"
        name = given_names[i] if i < len(given_names) else default_name

        if kind == "human":
            seats.append(Seat(name, HumanAgent()))
        elif kind == "llm":
            seats.append(Seat(name, LLMAgent(provider=llm_provider, model=model)))
        elif kind == "ai":
            seats.append(Seat(name))
        else:
            raise typer.BadParameter(f"Unknown agent type: {kind}. Use 'human', 'ai' or 'llm'.")
    try:
        return fill_seats(seats)
    except GameStateError as e:
        raise typer.BadParameter(str(e)) from e


def _settings(
    hand_size: Optional[int],
    timeout: Optional[float],
    max_turns: Optional[int],
) -> GameSettings:
    settings = GameSettings.from_env()
    if hand_size is not None:
        settings.hand_size = hand_size
    if timeout is not None:
        settings.decision_timeout = timeout
    if max_turns is not None:
        settings.max_turns = max_turns
    # re-run validation on the overridden values
    return GameSettings(**vars(settings))


@app.command()
def play(
    agents: str = typer.Option(
        "human,ai,ai,ai",
        "--agents",
        "-a",
        help="Comma-separated: human, ai, llm or llm:model_name. Empty seats up to 4 get computer players.",
    ),
    names: str = typer.Option("", "--names", "-n", help="Comma-separated player names, in seat order"),
    llm_provider: str = typer.Option(
        "openrouter",
        "--llm-provider",
        "-p",
        help="LLM provider: openrouter, groq, ollama or huggingface",
    ),
    llm_model: str = typer.Option(
        "openai/gpt-4o-mini",
        "--llm-model",
        "-m",
        help="Model name (e.g. openai/gpt-4o-mini, meta-llama/llama-3-8b-instruct)",
    ),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    hand_size: Optional[int] = typer.Option(None, "--hand-size", help="Cards dealt to each player"),
    timeout: Optional[float] = typer.Option(None, "--timeout", "-t", help="Seconds to wait for each decision"),
    max_turns: Optional[int] = typer.Option(None, "--max-turns", help="Stop after this many turns"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Run a single UNO game."""
    from unoclassic.engine import GameStateError
    from unoclassic.orchestration.game_runner import GameRunner

    _configure_logging(verbose)
    try:
        settings = _settings(hand_size, timeout, max_turns)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    seats = _parse_seats(agents, names, llm_provider, llm_model)
    runner = GameRunner(seats, seed=seed, settings=settings)
    try:
        result = runner.run()
    except GameStateError as e:
        raise typer.BadParameter(str(e)) from e
    except Exception:
        logger.exception("Game aborted")
        raise typer.Exit(code=1)
    if runner.engine is not None:
        for event in runner.engine.history[-5:]:
            typer.echo(f"> {event}")
    typer.echo(f"Winner: {result.winner or 'None (no winner)'}")
    typer.echo(f"Turns: {result.num_turns}")


@app.command()
def tournament(
    agents: str = typer.Option(
        "ai,ai,ai,ai",
        "--agents",
        "-a",
        help="Comma-separated agent types or llm:model_name (e.g. ai,llm:gpt-4o)",
    ),
    games: int = typer.Option(100, "--games", "-g", help="Number of games"),
    llm_provider: str = typer.Option(
        "openrouter",
        "--llm-provider",
        "-p",
        help="LLM provider: openrouter, groq, ollama or huggingface",
    ),
    llm_model: str = typer.Option(
        "openai/gpt-4o-mini",
        "--llm-model",
        "-m",
        help="Model name",
    ),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Run many games and report wins per player."""
    from unoclassic.engine import GameStateError
    from unoclassic.orchestration.tournament import run_tournament

    _configure_logging(verbose)
    try:
        settings = GameSettings.from_env()
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    seats = _parse_seats(agents, "", llm_provider, llm_model)
    try:
        wins = run_tournament(seats, num_games=games, seed=seed, settings=settings)
    except GameStateError as e:
        raise typer.BadParameter(str(e)) from e
    typer.echo("Tournament results:")
    for seat in sorted(seats, key=lambda s: -wins.get(s.name, 0)):
        typer.echo(f"  {seat.name}: {wins.get(seat.name, 0)} wins")


if __name__ == "__main__":
    app()
