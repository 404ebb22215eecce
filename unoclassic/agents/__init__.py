"""Built-in decision sources."""

from unoclassic.agents.human_agent import HumanAgent
from unoclassic.agents.llm_agent import LLMAgent

__all__ = ["LLMAgent", "HumanAgent"]
