"""LLM agent using OpenAI library with OpenRouter, Groq, Ollama or HuggingFace."""

import json
import logging
import os
import re
import time
from typing import Any, Callable, Optional, TypeVar

from openai import OpenAI

from unoclassic.engine import PLAYABLE_COLORS, Card, Color, DrawCard, Move, PlayCard, Player, PlayerView

logger = logging.getLogger(__name__)

OPENROUTER_BASE = "https://openrouter.ai/api/v1"
GROQ_BASE = "https://api.groq.com/openai/v1"
OLLAMA_BASE = "http://localhost:11434/v1"
HUGGINGFACE_BASE = "https://router.huggingface.co/v1"

T = TypeVar("T")


def _format_player_view(pv: PlayerView) -> str:
    """Format player view as text for the LLM."""
    lines = [
        "=== Your hand ===",
        " ".join(f"{i}:{c}" for i, c in enumerate(pv.my_hand)),
        "",
        "=== Top card on discard ===",
        str(pv.top_discard),
        "",
        "=== Other players' card counts ===",
    ]
    for name, count in pv.num_cards_per_player.items():
        if name != pv.player_name:
            lines.append(f"  {name}: {count} cards")
    lines.extend([
        "",
        "=== Direction ===",
        str(pv.direction),
        "",
        "=== Cards left in draw pile ===",
        str(pv.draw_pile_count),
        "",
        "=== Game History (last 10 events) ===",
    ])
    if pv.history:
        lines.extend(f"- {h}" for h in pv.history)
    else:
        lines.append("No history yet.")
    return "\n".join(lines)


def _format_legal_moves(hand: list[Card], legal_moves: list[int]) -> str:
    """Format legal moves as text."""
    options = [f"{i}: PLAY {hand[i]}" for i in legal_moves]
    options.append("DRAW: draw a card instead")
    return "\n".join(options)


def _find_json(response: str) -> Optional[dict]:
    """Return the first JSON-like object in the response, tolerating single quotes."""
    match = re.search(r"(\{.*?\})", response, re.DOTALL)
    if not match:
        return None
    json_str = match.group(1)
    for candidate in (json_str, json_str.replace("'", '"')):
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            return data
    return None


def _parse_move_response(response: str, legal_moves: list[int]) -> Optional[Move]:
    """Parse LLM response into a move."""
    data = _find_json(response)
    if data is not None and "action_index" in data:
        idx = data["action_index"]
        if isinstance(idx, str) and idx.upper() == "DRAW":
            return DrawCard()
        if isinstance(idx, int) and idx in legal_moves:
            return PlayCard(idx)
        logger.debug("Index %r not among legal moves %s", idx, legal_moves)

    # "action_index": N with any quoting
    match = re.search(r'["\']?action_index["\']?\s*:\s*(\d+)', response, re.IGNORECASE)
    if match:
        idx = int(match.group(1))
        if idx in legal_moves:
            return PlayCard(idx)
        logger.debug("Index %d not among legal moves %s (regex)", idx, legal_moves)

    if "DRAW" in response.upper():
        return DrawCard()

    # Last resort: a standalone number
    cleaned = re.sub(r'[{}\[\]"\'.,:]', " ", response)
    for word in cleaned.split():
        if word.isdigit() and int(word) in legal_moves:
            return PlayCard(int(word))
    return None


def _parse_color_response(response: str) -> Optional[Color]:
    """Parse LLM response into a declared color."""
    data = _find_json(response)
    if data is not None and isinstance(data.get("color"), str):
        try:
            color = Color(data["color"].strip().lower())
        except ValueError:
            color = None
        if color in PLAYABLE_COLORS:
            return color
    lowered = response.lower()
    for color in PLAYABLE_COLORS:
        if re.search(rf"\b{color.value}\b", lowered):
            return color
    return None


def _parse_play_response(response: str) -> Optional[bool]:
    """Parse LLM response into a yes/no answer."""
    data = _find_json(response)
    if data is not None and isinstance(data.get("play"), bool):
        return data["play"]
    lowered = response.strip().lower()
    if re.search(r"\b(yes|true)\b", lowered):
        return True
    if re.search(r"\b(no|false)\b", lowered):
        return False
    return None


class LLMAgent:
    """Decision source that asks an LLM."""

    def __init__(
        self,
        provider: str = "openrouter",
        model: str = "openai/gpt-4o-mini",
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        rate_limit: Optional[float] = None,
        client: Optional[Any] = None,
    ):
        if client is None:
            client, base_url = self._make_client(provider, api_key)
        else:
            base_url = "custom"

        self._client = client
        self._model = model
        self._timeout = timeout
        self._provider = provider
        self._rate_limit = rate_limit  # Requests per minute
        self._request_history: list[float] = []

        logger.info(
            "[%s] Initialized with provider=%s, base_url=%s, timeout=%ss, rate_limit=%s rpm",
            self.name, provider, base_url, timeout, rate_limit or "None",
        )

    @staticmethod
    def _make_client(provider: str, api_key: Optional[str]) -> tuple[OpenAI, str]:
        if provider == "openrouter":
            base_url = OPENROUTER_BASE
            key = api_key or os.environ.get("OPENROUTER_API_KEY")
        elif provider == "groq":
            base_url = GROQ_BASE
            key = api_key or os.environ.get("GROQ_API_KEY")
        elif provider == "ollama":
            base_url = os.environ.get("OLLAMA_BASE_URL", OLLAMA_BASE)
            key = "ollama"
        elif provider == "huggingface":
            base_url = HUGGINGFACE_BASE
            key = api_key or os.environ.get("HUGGINGFACE_API_KEY")
        else:
            raise ValueError(f"Unknown provider: {provider}")

        if not key:
            raise ValueError(f"API key required for {provider}. Set {provider.upper()}_API_KEY or pass api_key.")
        return OpenAI(api_key=key, base_url=base_url), base_url

    @property
    def name(self) -> str:
        return f"llm-{self._model}"

    def _wait_for_rate_limit(self) -> None:
        """Block if rate limit is exceeded."""
        if not self._rate_limit:
            return

        now = time.time()
        self._request_history = [t for t in self._request_history if now - t < 60.0]

        if len(self._request_history) >= self._rate_limit:
            # Wait until the oldest request in the window expires
            wait_time = 60.0 - (now - self._request_history[0])
            if wait_time > 0:
                logger.info(
                    "[%s] Rate limit reached (%d/%s rpm). Waiting %.2fs...",
                    self.name, len(self._request_history), self._rate_limit, wait_time,
                )
                time.sleep(wait_time)

        self._request_history.append(time.time())

    def _ask(self, prompt: str, parse: Callable[[str], Optional[T]], fallback: T) -> T:
        """Send the prompt up to three times until the reply parses."""
        for attempt in range(1, 4):
            start_time = time.time()
            try:
                self._wait_for_rate_limit()

                kwargs: dict[str, Any] = {
                    "model": self._model,
                    "messages": [{"role": "user", "content": prompt}],
                    "timeout": self._timeout,
                }
                # Only some providers accept JSON mode
                if "gpt-4" in self._model or "gpt-3.5" in self._model or "groq" in self._provider:
                    kwargs["response_format"] = {"type": "json_object"}

                logger.debug("[%s] Attempt %d: sending request to %s", self.name, attempt, self._provider)
                resp = self._client.chat.completions.create(**kwargs)
                content = resp.choices[0].message.content or ""
                logger.debug("[%s] Received response in %.2fs", self.name, time.time() - start_time)

                result = parse(content)
                if result is not None:
                    return result
                logger.warning("[%s] Failed to parse response: %r", self.name, content)
            except Exception as e:
                logger.warning(
                    "[%s] Error on attempt %d after %.2fs: %s: %s",
                    self.name, attempt, time.time() - start_time, type(e).__name__, e,
                )

        logger.warning("[%s] All retries failed. Falling back to %r.", self.name, fallback)
        return fallback

    def request_move(
        self,
        player: Player,
        legal_moves: list[int],
        top_card: Card,
        view: PlayerView,
    ) -> Move:
        if not legal_moves:
            return DrawCard()

        prompt = f"""You are playing UNO as {player.name}.
Objective: Win by playing all your cards. Match the top discard card by color (red, blue, green, yellow), number, or action (skip, reverse, draw_two). Wild cards can be played on anything.

{_format_player_view(view)}

=== Legal moves ===
{_format_legal_moves(player.hand, legal_moves)}

INSTRUCTIONS:
Select the best move to win the game.
Respond with a JSON object containing the hand index of the card to play, or "DRAW".
Example: {{"action_index": 2}}
"""
        return self._ask(prompt, lambda text: _parse_move_response(text, legal_moves), DrawCard())

    def request_wild_color(self, player: Player) -> Color:
        prompt = f"""You are playing UNO as {player.name} and just played a wild card.
Your remaining hand: {" ".join(str(c) for c in player.hand) or "(empty)"}

Choose the color the next player must match: red, blue, green or yellow.
Respond with a JSON object. Example: {{"color": "blue"}}
"""
        return self._ask(prompt, _parse_color_response, Color.RED)

    def request_play_drawn_card(self, player: Player, drawn_card: Card) -> bool:
        prompt = f"""You are playing UNO as {player.name}. You drew {drawn_card} and it can be played now.
Your hand: {" ".join(str(c) for c in player.hand)}

Do you want to play it immediately?
Respond with a JSON object. Example: {{"play": true}}
"""
        return self._ask(prompt, _parse_play_response, True)
