"""Game settings, read from the environment (and a .env file loaded by the CLI)."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional


def _env_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None


def _env_float(env: Mapping[str, str], key: str) -> Optional[float]:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return None
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number of seconds, got {raw!r}") from None


@dataclass
class GameSettings:
    """Settings for a single game."""

    hand_size: int = 7
    max_decision_retries: int = 3
    decision_timeout: Optional[float] = None  # seconds; None waits forever
    max_turns: int = 1000

    def __post_init__(self) -> None:
        if self.hand_size < 1:
            raise ValueError("hand_size must be at least 1")
        if self.max_decision_retries < 1:
            raise ValueError("max_decision_retries must be at least 1")
        if self.decision_timeout is not None and self.decision_timeout <= 0:
            raise ValueError("decision_timeout must be positive")
        if self.max_turns < 1:
            raise ValueError("max_turns must be at least 1")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "GameSettings":
        """Build settings from UNO_* environment variables."""
        env = os.environ if env is None else env
        return cls(
            hand_size=_env_int(env, "UNO_HAND_SIZE", 7),
            max_decision_retries=_env_int(env, "UNO_MAX_RETRIES", 3),
            decision_timeout=_env_float(env, "UNO_DECISION_TIMEOUT"),
            max_turns=_env_int(env, "UNO_MAX_TURNS", 1000),
        )
